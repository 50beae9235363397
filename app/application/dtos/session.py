"""Session DTO: server-held snapshot of an authenticated account."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.account import AccountResult
from app.domain.enums import AccountRole


@dataclass(frozen=True)
class SessionData:
    """Identity and role captured at login.

    A snapshot, not a live reference: name or role changes made after login
    are not reflected until the account signs in again.
    """

    account_id: str
    email: str | None
    role: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    @classmethod
    def for_account(
        cls, account: AccountResult, created_at: datetime, expires_at: datetime
    ) -> SessionData:
        return cls(
            account_id=account.id,
            email=account.email,
            role=account.role,
            first_name=account.first_name,
            last_name=account.last_name,
            created_at=created_at,
            expires_at=expires_at,
        )
