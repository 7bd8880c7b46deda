"""HTTP client for the session API, used by the tracker."""

from datetime import datetime
from typing import Any
from uuid import UUID

import requests

from meetstats.errors import NetworkError


class SessionApiClient:
    """Thin wrapper over the REST endpoints. Every failure surfaces as NetworkError."""

    def __init__(self, base_url: str, timeout: float = 10.0, http: requests.Session | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http or requests.Session()

    def create_session(self, user_id: str, start_time: datetime, end_time: datetime) -> UUID:
        """Create a session and return its server-assigned id."""
        data = self._request(
            "POST",
            "/sessions",
            {"user_id": user_id, "start_time": start_time.isoformat(), "end_time": end_time.isoformat()},
        )
        try:
            return UUID(str(data["id"]))
        except (KeyError, ValueError) as e:
            raise NetworkError(f"Unexpected create response: {data!r}") from e

    def update_session(self, session_id: UUID, end_time: datetime) -> dict[str, Any]:
        """Move the end of a session forward."""
        return self._request("PUT", f"/sessions/{session_id}", {"end_time": end_time.isoformat()})

    def get_user_stats(self, user_id: str) -> dict[str, Any]:
        return self._request("GET", f"/sessions/user/{user_id}")

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        url = self._base_url + path
        try:
            response = self._http.request(method, url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        if not response.ok:
            raise NetworkError(f"{method} {path} failed: HTTP {response.status_code} {response.reason}", response.status_code)

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise NetworkError(f"{method} {path} returned invalid JSON", response.status_code) from e
        return data
