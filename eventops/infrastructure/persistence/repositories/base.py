"""Base repository: generic CRUD on one ORM model within the request session."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """get_by_id, create, save and delete for a single model.

    Writes flush but never commit; the transactional session dependency
    owns the commit.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_owned(self, entity_id: str, tenant_id: str) -> ModelType | None:
        """Return the record only if it belongs to tenant."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and refresh server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush changes to an attached record and refresh it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply_fields(
        self, obj: ModelType, fields: dict[str, Any]
    ) -> ModelType:
        """Set the given column values (unknown keys are ignored) and save."""
        for key, value in fields.items():
            if hasattr(obj, key) and key not in ("id", "tenant_id"):
                setattr(obj, key, value)
        return await self.save(obj)

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
