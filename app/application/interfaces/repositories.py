"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or record protocols only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.account import ParticipantProfile, SignupData
    from app.application.dtos.token import IssuedToken, TokenRecord
    from app.domain.enums import TokenPurpose


class AccountRecord(Protocol):
    """Attributes the workflow reads from a stored account (ORM Account satisfies this)."""

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    role: str
    hashed_password: str | None
    date_of_birth: date | None
    phone: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    school_or_employer: str | None
    field_of_interest: str | None
    photo_path: str | None
    is_deleted: bool


# Credential store interface
class IAccountRepository(Protocol):
    """Protocol for the credential store. Soft-deleted rows are invisible to every lookup."""

    async def get_active_by_email(self, email: str) -> AccountRecord | None:
        """Return the non-deleted account with this email (any role), or None."""

    async def get_active_by_id(self, account_id: str) -> AccountRecord | None:
        """Return the non-deleted account with this id, or None."""

    async def create_account(
        self,
        data: SignupData | ParticipantProfile,
        hashed_password: str | None,
        role: str,
    ) -> AccountRecord:
        """Insert a new account (hashed_password None for admin-created accounts)."""

    async def update_profile(
        self, account_id: str, values: dict[str, Any]
    ) -> AccountRecord | None:
        """Write the given columns; None if not found, deleted or a donor."""

    async def promote_donor(
        self, account_id: str, data: SignupData, hashed_password: str
    ) -> AccountRecord:
        """Turn a donor intake record into a participant with the given profile and password."""

    async def set_password_hash(
        self, account_id: str, hashed_password: str
    ) -> AccountRecord | None:
        """Store a new password hash; None if the account does not exist (or is deleted)."""

    async def list_participants(
        self, skip: int = 0, limit: int = 100
    ) -> list[AccountRecord]:
        """Return non-deleted, non-donor accounts ordered by last name."""

    async def count_participants(self) -> int:
        """Number of accounts list_participants can return across all pages."""

    async def toggle_admin(self, account_id: str) -> AccountRecord | None:
        """Flip role between participant and admin; None if not found or a donor."""

    async def soft_delete(self, account_id: str) -> AccountRecord | None:
        """Mark deleted and anonymize PII; None if not found."""


# Token store interface
class ITokenStore(Protocol):
    """Protocol for single-use, purpose-scoped, expiring password tokens."""

    async def issue(self, account_id: str, purpose: TokenPurpose) -> IssuedToken:
        """Create a token for account and purpose, durable before returning; return value and expiry."""

    async def find_valid(self, token: str, purpose: TokenPurpose) -> TokenRecord | None:
        """Return the token if unused, unexpired and for this purpose; else None."""

    async def mark_used(self, token_id: str) -> bool:
        """Atomically set used_at where still null and unexpired. False if another request won."""

    async def purge_expired(self) -> int:
        """Delete expired or used tokens; return the number removed."""
