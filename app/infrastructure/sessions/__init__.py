"""Server-side session storage."""

from app.infrastructure.sessions.store import InMemorySessionStore

__all__ = ["InMemorySessionStore"]
