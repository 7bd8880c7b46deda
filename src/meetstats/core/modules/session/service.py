from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from meetstats.core.modules.session.models import Session
from meetstats.core.modules.session.validators import parse_session_id, validate_time_range
from meetstats.core.service import Service
from meetstats.errors import NotFoundError
from meetstats.utils import to_utc

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Stores meeting sessions and enforces end_time >= start_time on every write."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])
        # Per-user listing ordered by start time
        await self._collection.create_index([("user_id", 1), ("start_time", 1)])

    async def create_session(self, user_id: str, start_time: datetime, end_time: datetime) -> Session:
        """Persist a new session with a server-generated id."""
        start_time, end_time = to_utc(start_time), to_utc(end_time)
        validate_time_range(start_time, end_time)

        session = Session(user_id=user_id, start_time=start_time, end_time=end_time)
        await self._collection.insert_one(session.to_mongo())
        logger.info("session_created", session_id=str(session.id), user_id=user_id)
        return session

    async def get_session(self, session_id: UUID | str) -> Session:
        """Get session by id. Ids that are not UUIDs can never exist and raise NotFoundError."""
        parsed_id = parse_session_id(session_id)
        if parsed_id is None:
            raise NotFoundError("Session not found")
        doc = await self._collection.find_one({"_id": parsed_id})
        if doc is None:
            raise NotFoundError("Session not found")
        return Session.model_validate(doc)

    async def update_session(self, session_id: UUID | str, end_time: datetime) -> Session:
        """Move end_time of an existing session (extend or close)."""
        session = await self.get_session(session_id)
        end_time = to_utc(end_time)
        validate_time_range(session.start_time, end_time)

        await self._collection.update_one({"_id": session.id}, {"$set": {"end_time": end_time}})
        logger.debug("session_updated", session_id=str(session.id), end_time=end_time.isoformat())
        return session.model_copy(update={"end_time": end_time})

    async def list_sessions_by_user(self, user_id: str) -> list[Session]:
        """All sessions of a user, oldest first. Unknown users yield an empty list."""
        cursor = self._collection.find({"user_id": user_id}).sort("start_time", 1)
        return await Session.list_cursor(cursor)
