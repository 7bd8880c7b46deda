"""Session lifecycle: turns periodic tab samples into create/extend/close calls.

Two phases. Idle with tabs present creates a session; open with tabs present
extends it; open without tabs closes it with one last update. API failures are
logged and leave the state untouched, so the next tick is the only retry.
"""

import time
from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from uuid import UUID

import structlog
from pydantic import BaseModel

from meetstats.errors import NetworkError, ProbeError
from meetstats.tracker.probe import TabProbe
from meetstats.tracker.state import StateStore, TrackerState
from meetstats.utils import now

logger = structlog.get_logger(__name__)


class SessionApi(Protocol):
    def create_session(self, user_id: str, start_time: datetime, end_time: datetime) -> UUID: ...

    def update_session(self, session_id: UUID, end_time: datetime) -> object: ...


class TrackerStatus(BaseModel):
    user_id: str
    is_active: bool
    session_id: UUID | None = None
    started_at: datetime | None = None


class LifecycleManager:
    """Owns the tracker state; tick() is the only thing that changes it."""

    def __init__(
        self,
        api: SessionApi,
        probe: TabProbe,
        user_id: str,
        store: StateStore | None = None,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self._api = api
        self._probe = probe
        self._user_id = user_id
        self._store = store
        self._clock = clock
        self._state = store.load() if store is not None else TrackerState.idle()

    @property
    def state(self) -> TrackerState:
        return self._state

    def status(self) -> TrackerStatus:
        return TrackerStatus(
            user_id=self._user_id,
            is_active=self._state.is_open,
            session_id=self._state.session_id,
            started_at=self._state.started_at,
        )

    def tick(self) -> TrackerState:
        """Sample the signal once and apply exactly one transition."""
        try:
            present = self._probe.is_active()
        except ProbeError as e:
            logger.warning("tracker_probe_failed", error=str(e))
            return self._state

        timestamp = self._clock()
        try:
            if present and not self._state.is_open:
                self._open(timestamp)
            elif present:
                self._extend(timestamp)
            elif self._state.is_open:
                self._close(timestamp)
        except NetworkError as e:
            logger.error(  # noqa: TRY400
                "tracker_api_call_failed",
                phase=self._state.phase,
                session_id=str(self._state.session_id) if self._state.session_id else None,
                status_code=e.status_code,
                error=str(e),
            )
        return self._state

    def run_forever(self, interval: float, sleep: Callable[[float], None] = time.sleep, max_ticks: int | None = None) -> None:
        """Tick every interval seconds, first tick immediately. Ticks never overlap."""
        logger.info("tracker_started", user_id=self._user_id, interval=interval, phase=self._state.phase)
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            started = time.monotonic()
            try:
                self.tick()
            except Exception:
                # Keep sampling; the next tick is the only recovery path
                logger.exception("tracker_tick_failed", phase=self._state.phase)
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            sleep(max(0.0, interval - (time.monotonic() - started)))

    def _open(self, timestamp: datetime) -> None:
        session_id = self._api.create_session(self._user_id, timestamp, timestamp)
        self._set_state(TrackerState.opened(session_id, timestamp))
        logger.info("session_started", session_id=str(session_id))

    def _extend(self, timestamp: datetime) -> None:
        session_id = self._open_session_id()
        self._api.update_session(session_id, timestamp)
        logger.debug("session_extended", session_id=str(session_id), end_time=timestamp.isoformat())

    def _close(self, timestamp: datetime) -> None:
        session_id = self._open_session_id()
        self._api.update_session(session_id, timestamp)
        self._set_state(TrackerState.idle())
        logger.info("session_ended", session_id=str(session_id))

    def _open_session_id(self) -> UUID:
        if self._state.session_id is None:
            raise RuntimeError("No open session")
        return self._state.session_id

    def _set_state(self, state: TrackerState) -> None:
        self._state = state
        if self._store is not None:
            self._store.save(state)
