"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business logic
here, only wiring of process-wide infrastructure (session store, notifier,
DB engine dispose).
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.services import build_notification_service
from app.infrastructure.sessions import InMemorySessionStore

logger = logging.getLogger(__name__)

# How often expired sessions are swept from the in-memory store.
SESSION_SWEEP_INTERVAL_SECONDS = 15 * 60


async def _sweep_sessions(store: InMemorySessionStore) -> None:
    while True:
        await asyncio.sleep(SESSION_SWEEP_INTERVAL_SECONDS)
        removed = await store.purge_expired()
        if removed:
            logger.info("Session sweep removed %d expired sessions", removed)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: session store and notifier on app.state (kept if already set,
    e.g. by tests), session sweeper task. Shutdown: sweeper cancel, SQL
    engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if getattr(app.state, "session_store", None) is None:
        app.state.session_store = InMemorySessionStore()
    if getattr(app.state, "notifier", None) is None:
        app.state.notifier = build_notification_service(settings)
    sweeper = asyncio.create_task(_sweep_sessions(app.state.session_store))
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)

    yield

    # ---- Shutdown ----
    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper

    from app.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
