"""Account repository (credential store). Soft-deleted rows never come back from lookups."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.account import ParticipantProfile, SignupData
from app.domain.enums import AccountRole
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.account import (
    ANONYMIZATION_ALLOW_LIST,
    Account,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Columns nulled by soft delete (everything identifying that is not allow-listed).
_PII_COLUMNS = tuple(
    c
    for c in (
        "email",
        "first_name",
        "last_name",
        "hashed_password",
        "date_of_birth",
        "phone",
        "city",
        "state",
        "zip_code",
        "school_or_employer",
        "field_of_interest",
        "photo_path",
    )
    if c not in ANONYMIZATION_ALLOW_LIST
)


class AccountRepository(BaseRepository[Account]):
    """Account repository: lookups by email/id, inserts, profile and password writes, role toggle, soft delete."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utc_now
    ) -> None:
        super().__init__(db, Account)
        self._clock = clock

    async def get_active_by_email(self, email: str) -> Account | None:
        result = await self.db.execute(
            select(Account).where(
                Account.email == email,
                Account.is_deleted.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def get_active_by_id(self, account_id: str) -> Account | None:
        result = await self.db.execute(
            select(Account).where(
                Account.id == account_id,
                Account.is_deleted.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def create_account(
        self,
        data: SignupData | ParticipantProfile,
        hashed_password: str | None,
        role: str,
    ) -> Account:
        """Insert account; a concurrent signup with the same email surfaces as a conflict."""
        account = Account(
            **data.profile_fields(),
            hashed_password=hashed_password,
            role=role,
            is_deleted=False,
        )
        try:
            return await self.create(account)
        except IntegrityError:
            raise ConflictException(ConflictException.EMAIL_EXISTS_WITH_PASSWORD) from None

    async def update_profile(
        self, account_id: str, values: dict[str, Any]
    ) -> Account | None:
        account = await self.get_active_by_id(account_id)
        if not account or account.role == AccountRole.DONOR.value:
            return None
        for column, value in values.items():
            setattr(account, column, value)
        return await self.update(account)

    async def promote_donor(
        self, account_id: str, data: SignupData, hashed_password: str
    ) -> Account:
        account = await self.get_active_by_id(account_id)
        if account is None:
            return await self.create_account(
                data, hashed_password, AccountRole.PARTICIPANT.value
            )
        for column, value in data.profile_fields().items():
            if value is not None:
                setattr(account, column, value)
        account.hashed_password = hashed_password
        account.role = AccountRole.PARTICIPANT.value
        return await self.update(account)

    async def set_password_hash(
        self, account_id: str, hashed_password: str
    ) -> Account | None:
        account = await self.get_active_by_id(account_id)
        if not account:
            return None
        account.hashed_password = hashed_password
        return await self.update(account)

    async def list_participants(self, skip: int = 0, limit: int = 100) -> list[Account]:
        result = await self.db.execute(
            select(Account)
            .where(
                Account.is_deleted.is_(False),
                Account.role != AccountRole.DONOR.value,
            )
            .order_by(Account.last_name.asc(), Account.first_name.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_participants(self) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Account)
            .where(
                Account.is_deleted.is_(False),
                Account.role != AccountRole.DONOR.value,
            )
        )
        return result.scalar_one()

    async def toggle_admin(self, account_id: str) -> Account | None:
        account = await self.get_active_by_id(account_id)
        if not account or account.role == AccountRole.DONOR.value:
            return None
        account.role = (
            AccountRole.PARTICIPANT.value
            if account.role == AccountRole.ADMIN.value
            else AccountRole.ADMIN.value
        )
        updated = await self.update(account)
        logger.info("Account %s role changed to %s", account_id, updated.role)
        return updated

    async def soft_delete(self, account_id: str) -> Account | None:
        account = await self.get_active_by_id(account_id)
        if not account:
            return None
        for column in _PII_COLUMNS:
            setattr(account, column, None)
        account.is_deleted = True
        account.deleted_at = self._clock()
        updated = await self.update(account)
        logger.info("Account %s soft-deleted and anonymized", account_id)
        return updated
