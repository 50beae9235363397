"""DTOs for password tokens."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class IssuedToken:
    """Raw token value (only ever sent in an email link) and its expiry."""

    value: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenRecord:
    """A token that passed validity checks: unused, unexpired, matching purpose."""

    id: str
    account_id: str
    purpose: str
    expires_at: datetime
