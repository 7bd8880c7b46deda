from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version

from meetstats.config import Config
from meetstats.core.core import Core
from meetstats.core.modules.session.models import Session
from meetstats.core.modules.session.validators import canonical_user_id
from meetstats.core.modules.stats.models import UserStats


class App:
    """Facade for all application operations, delegates to Core services."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def create_session(self, user_id: str, start_time: datetime, end_time: datetime) -> Session:
        """Start tracking a new session."""
        return await self._core.services.session.create_session(user_id, start_time, end_time)

    async def update_session(self, session_id: str, end_time: datetime) -> Session:
        """Extend or close an existing session."""
        return await self._core.services.session.update_session(session_id, end_time)

    async def get_user_stats(self, user_id: str) -> UserStats:
        """Aggregated statistics for all sessions of a user."""
        return await self._core.services.stats.get_user_stats(canonical_user_id(user_id))

    async def get_version(self) -> dict[str, str]:
        """Package version and build metadata."""
        try:
            package_version = version("meetstats")
        except PackageNotFoundError:
            package_version = "unknown"
        config = self._core.config
        return {
            "version": package_version,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }
