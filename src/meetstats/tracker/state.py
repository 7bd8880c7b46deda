"""Tracker state: which session, if any, is currently open."""

from datetime import datetime
from enum import StrEnum
from pathlib import Path
from uuid import UUID

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger(__name__)


class Phase(StrEnum):
    IDLE = "idle"
    OPEN = "open"


class TrackerState(BaseModel):
    """Either idle, or open with the id and start of the session being extended."""

    phase: Phase = Phase.IDLE
    session_id: UUID | None = None
    started_at: datetime | None = None

    @classmethod
    def idle(cls) -> "TrackerState":
        return cls()

    @classmethod
    def opened(cls, session_id: UUID, started_at: datetime) -> "TrackerState":
        return cls(phase=Phase.OPEN, session_id=session_id, started_at=started_at)

    @property
    def is_open(self) -> bool:
        return self.phase == Phase.OPEN and self.session_id is not None


class StateStore:
    """Keeps the open session on disk so a restarted tracker resumes extending it."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> TrackerState:
        if not self._path.exists():
            return TrackerState.idle()
        try:
            return TrackerState.model_validate_json(self._path.read_text(encoding="utf-8"))
        except PydanticValidationError:
            logger.warning("tracker_state_unreadable", path=str(self._path))
            return TrackerState.idle()

    def save(self, state: TrackerState) -> None:
        if not state.is_open:
            self.clear()
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(state.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
