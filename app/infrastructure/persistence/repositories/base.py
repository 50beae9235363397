"""Base repository: insert and flush helpers shared by the ORM repositories."""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Holds the session and model; subclasses add their own queries.

    Rows are never hard-deleted, so there is no delete here. Writes are
    flushed, not committed: the request transaction (get_db_transactional)
    or the caller decides when to commit.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def create(self, obj: ModelType) -> ModelType:
        """Add obj, flush, and reload server defaults (created_at, updated_at)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on a row loaded through this repository's session."""
        if object_session(obj) is not self.db.sync_session:
            raise ValueError(
                f"{self.model.__name__} instance is not attached to this repository's session"
            )
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
