"""Service interfaces (ports) for the application layer.

Protocols for notifier, session store, password hashing and the optional
test identity provider. Implementations live in app.infrastructure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.account import AccountResult
    from app.application.dtos.session import SessionData


# Notification service interface (password links)
class INotificationService(Protocol):
    """Protocol for sending notifications (e.g. email) to a list of recipients."""

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Send notification (e.g. email) to the given addresses. No-op or log if not configured."""


# Session store interface
class ISessionStore(Protocol):
    """Protocol for server-side session state keyed by an opaque id.

    The in-memory store is the default; a distributed cache can implement the
    same contract without touching the workflow.
    """

    async def create(self, data: SessionData) -> str:
        """Persist data under a new opaque session id and return the id."""

    async def get(self, session_id: str) -> SessionData | None:
        """Return session data, or None if unknown or expired."""

    async def destroy(self, session_id: str) -> None:
        """Remove the session. Unknown ids are ignored."""

    async def purge_expired(self) -> int:
        """Drop expired sessions; return how many were removed."""


# Password hashing interface
class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing (blocking; call via asyncio.to_thread)."""

    def hash(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True if password matches hashed_password."""


# Test identity provider interface (development bypass)
class IIdentityProvider(Protocol):
    """Protocol for identities that authenticate without touching the credential store."""

    def authenticate(
        self, email: str, password: str, *, admin: bool
    ) -> AccountResult | None:
        """Return the identity for matching credentials on the given login path, else None."""

    def resolve(self, account_id: str) -> AccountResult | None:
        """Return the identity for a session account id it issued, else None."""
