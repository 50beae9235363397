"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.account_repo import AccountRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.password_token_repo import (
    PasswordTokenStore,
)

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "PasswordTokenStore",
]
