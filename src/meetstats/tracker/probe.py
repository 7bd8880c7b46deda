"""Samples the signal: is at least one meeting tab open right now."""

import re
from collections.abc import Iterable
from typing import Any, Protocol

import requests
import structlog

from meetstats.errors import ProbeError

logger = structlog.get_logger(__name__)


class TabProbe(Protocol):
    def is_active(self) -> bool: ...


def count_matching(urls: Iterable[str], pattern: re.Pattern[str] | str) -> int:
    """Count URLs matched by pattern."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return sum(1 for url in urls if compiled.search(url))


class DevToolsTabProbe:
    """Reads open tabs from a Chromium browser's remote debugging endpoint.

    The browser must run with --remote-debugging-port. A refused connection
    means the browser is not running, which is reported as no tabs.
    """

    def __init__(self, devtools_url: str, url_pattern: str, timeout: float = 5.0, http: requests.Session | None = None) -> None:
        self._list_url = devtools_url.rstrip("/") + "/json/list"
        self._pattern = re.compile(url_pattern)
        self._timeout = timeout
        self._http = http or requests.Session()

    def list_tab_urls(self) -> list[str]:
        try:
            response = self._http.get(self._list_url, timeout=self._timeout)
            response.raise_for_status()
            targets: Any = response.json()
        except requests.Timeout as e:
            # ConnectTimeout is also a ConnectionError; a slow browser is not a closed one
            raise ProbeError(f"Browser tab listing timed out: {e}") from e
        except requests.ConnectionError:
            logger.debug("devtools_unreachable", url=self._list_url)
            return []
        except (requests.RequestException, ValueError) as e:
            raise ProbeError(f"Cannot list browser tabs: {e}") from e

        if not isinstance(targets, list) or not all(isinstance(target, dict) for target in targets):
            raise ProbeError(f"Unexpected tab listing: {targets!r}")
        return [str(target.get("url", "")) for target in targets if target.get("type") == "page"]

    def is_active(self) -> bool:
        count = count_matching(self.list_tab_urls(), self._pattern)
        logger.debug("meet_tabs_found", count=count)
        return count > 0
