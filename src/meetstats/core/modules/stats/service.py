from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from meetstats.core.modules.session.service import SessionService
from meetstats.core.modules.stats.aggregator import aggregate_sessions
from meetstats.core.modules.stats.models import UserStats
from meetstats.core.service import Service
from meetstats.utils import now

logger = structlog.get_logger(__name__)


class StatsService(Service):
    """Builds per-user statistics on request. Nothing is cached between calls."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], sessions: SessionService) -> None:
        super().__init__(database)
        self._sessions = sessions

    async def get_user_stats(self, user_id: str) -> UserStats:
        sessions = await self._sessions.list_sessions_by_user(user_id)
        stats = aggregate_sessions(sessions, now())
        logger.debug("user_stats_computed", user_id=user_id, total_sessions=stats.summary.total_sessions)
        return stats
