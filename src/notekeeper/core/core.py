from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient

from notekeeper.config import Config
from notekeeper.core.pagination import PaginationDefaults

if TYPE_CHECKING:
    from notekeeper.core.modules.note.service import NoteService
    from notekeeper.core.modules.note.store import NoteStore

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services managed by Core."""

    def __init__(self) -> None:
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry, started and stopped in registration order."""

    note: NoteService

    def __init__(self, store: NoteStore, pagination: PaginationDefaults) -> None:
        from notekeeper.core.modules.note.service import NoteService  # noqa: PLC0415

        self.note = NoteService(store, pagination)
        self._services: list[Service] = [self.note]

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, storage, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    store: NoteStore
    services: Services

    def __init__(self, config: Config, store: NoteStore | None = None) -> None:
        """Initialize core with config and the configured note store, then register services."""
        from notekeeper.core.modules.note.store import MemoryNoteStore, MongoNoteStore  # noqa: PLC0415

        self.config = config
        self.mongo_client = None
        if store is not None:
            self.store = store
        elif config.store_backend == "memory":
            self.store = MemoryNoteStore()
        else:
            self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or "notekeeper")
            self.store = MongoNoteStore(database)

        pagination = PaginationDefaults(page=config.pagination_page, limit=config.pagination_limit)
        self.services = Services(self.store, pagination)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        logger.info("core_starting", store=type(self.store).__name__)
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
