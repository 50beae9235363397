"""In-process session store (single worker).

Sessions live in a dict keyed by an opaque id. Each entry keeps the expiry
fixed at creation; reads drop expired entries.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime

from app.application.dtos.session import SessionData
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """ISessionStore backed by a process-local dict.

    Not shared across workers; restarting the process signs everyone out.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._sessions: dict[str, SessionData] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    async def create(self, data: SessionData) -> str:
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = data
        return session_id

    async def get(self, session_id: str) -> SessionData | None:
        if not session_id:
            return None
        data = self._sessions.get(session_id)
        if data is None:
            return None
        if data.expires_at <= self._clock():
            self._sessions.pop(session_id, None)
            return None
        return data

    async def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def purge_expired(self) -> int:
        now = self._clock()
        expired = [sid for sid, data in self._sessions.items() if data.expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)
