"""Password token store (Postgres): create_password and reset_password links."""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.token import IssuedToken, TokenRecord
from app.domain.enums import TokenPurpose
from app.infrastructure.persistence.models.password_token import PasswordToken
from app.shared.utils.datetime import ensure_utc, utc_now

# Password links are valid for one hour.
DEFAULT_TOKEN_TTL_SECONDS = 3600


class PasswordTokenStore:
    """Issue, validate and redeem single-use, purpose-scoped password tokens.

    Only the SHA-256 of a token is stored; the raw value exists in the emailed
    link alone. Redemption is a conditional UPDATE so two concurrent requests
    cannot both consume the same token.
    """

    def __init__(
        self,
        session: AsyncSession,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session = session
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @staticmethod
    def _hash_token(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    async def issue(self, account_id: str, purpose: TokenPurpose) -> IssuedToken:
        """Create and commit a token for account and purpose; return (raw value, expires_at)."""
        raw = secrets.token_urlsafe(32)
        now = self._clock()
        expires_at = now + timedelta(seconds=self._ttl_seconds)
        row = PasswordToken(
            token_hash=self._hash_token(raw),
            account_id=account_id,
            purpose=purpose.value,
            created_at=now,
            expires_at=expires_at,
            used_at=None,
        )
        self._session.add(row)
        # Commit now: the link is mailed next and must resolve even when the
        # caller goes on to fail the request (login of a passwordless account).
        await self._session.commit()
        return IssuedToken(value=raw, expires_at=expires_at)

    async def find_valid(self, token: str, purpose: TokenPurpose) -> TokenRecord | None:
        """If token is unused, unexpired and for purpose, return it; else None."""
        if not token:
            return None
        now = self._clock()
        result = await self._session.execute(
            select(PasswordToken)
            .where(PasswordToken.token_hash == self._hash_token(token))
            .where(PasswordToken.purpose == purpose.value)
            .where(PasswordToken.used_at.is_(None))
            .where(PasswordToken.expires_at > now)
        )
        row = result.scalar_one_or_none()
        if not row:
            return None
        return TokenRecord(
            id=row.id,
            account_id=row.account_id,
            purpose=row.purpose,
            expires_at=ensure_utc(row.expires_at),
        )

    async def mark_used(self, token_id: str) -> bool:
        """Set used_at only if still null and unexpired. Returns False when the update matched nothing."""
        now = self._clock()
        result = await self._session.execute(
            update(PasswordToken)
            .where(PasswordToken.id == token_id)
            .where(PasswordToken.used_at.is_(None))
            .where(PasswordToken.expires_at > now)
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def purge_expired(self) -> int:
        """Delete tokens that are expired or already used. Returns rows removed."""
        now = self._clock()
        result = await self._session.execute(
            delete(PasswordToken)
            .where(
                or_(
                    PasswordToken.expires_at <= now,
                    PasswordToken.used_at.is_not(None),
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
