"""Event type, task template and design item type repositories (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.infrastructure.persistence.database import get_db, get_db_transactional
from eventops.infrastructure.persistence.repositories import (
    DesignItemRepository,
    DesignItemTypeRepository,
    EventTypeRepository,
    TaskRepository,
    TaskTemplateRepository,
)


async def get_event_type_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventTypeRepository:
    return EventTypeRepository(db)


async def get_event_type_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EventTypeRepository:
    return EventTypeRepository(db)


async def get_task_template_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskTemplateRepository:
    return TaskTemplateRepository(db)


async def get_task_template_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskTemplateRepository:
    return TaskTemplateRepository(db)


async def get_design_item_type_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DesignItemTypeRepository:
    return DesignItemTypeRepository(db)


async def get_design_item_type_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DesignItemTypeRepository:
    return DesignItemTypeRepository(db)


async def get_task_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    """Task repository for read operations (tasks of an event)."""
    return TaskRepository(db)


async def get_design_item_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DesignItemRepository:
    """Design item repository for read operations (items of an event)."""
    return DesignItemRepository(db)
