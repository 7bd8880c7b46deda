from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from meetstats.config import Config
from meetstats.core.modules.session.service import SessionService
from meetstats.core.modules.stats.service import StatsService
from meetstats.core.service import Service


class Services:
    """Service registry wired explicitly: session store first, then everything that reads it."""

    session: SessionService
    stats: StatsService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.session = SessionService(database)
        self.stats = StatsService(database, self.session)
        self._services: list[Service] = [self.session, self.stats]

    async def start_all(self) -> None:
        """Start services in registration order."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop services in reverse registration order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config) -> None:
        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or "meetstats")
        self.services = Services(self.database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
