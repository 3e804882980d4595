"""Workflow, engine and event-creation dependencies (composition root).

Write paths build every repository on the same transactional session so an
event insert and the workflow runs it triggers commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.services.workflow_validator import WorkflowValidator
from eventops.application.use_cases.events import EventService
from eventops.application.use_cases.workflows import (
    ApplyWorkflowToExistingUseCase,
    WorkflowService,
)
from eventops.core.config import get_settings
from eventops.infrastructure.persistence.database import get_db, get_db_transactional
from eventops.infrastructure.persistence.repositories import (
    DesignItemRepository,
    DesignItemTypeRepository,
    EventRepository,
    EventTypeRepository,
    TaskRepository,
    TaskTemplateRepository,
    UserRepository,
    WorkflowExecutionRepository,
    WorkflowRepository,
)
from eventops.infrastructure.services import WorkflowActionExecutor, WorkflowEngine


def build_workflow_engine(db: AsyncSession) -> WorkflowEngine:
    """Engine and action executors bound to one session."""
    task_repo = TaskRepository(db)
    design_item_repo = DesignItemRepository(db)
    return WorkflowEngine(
        workflow_repo=WorkflowRepository(db),
        execution_repo=WorkflowExecutionRepository(db),
        event_repo=EventRepository(db),
        action_executor=WorkflowActionExecutor(
            db,
            task_template_repo=TaskTemplateRepository(db),
            task_repo=task_repo,
            design_item_type_repo=DesignItemTypeRepository(db),
            design_item_repo=design_item_repo,
        ),
        task_repo=task_repo,
        design_item_repo=design_item_repo,
        db=db,
    )


def build_workflow_service(db: AsyncSession) -> WorkflowService:
    return WorkflowService(
        workflow_repo=WorkflowRepository(db),
        execution_repo=WorkflowExecutionRepository(db),
        validator=WorkflowValidator(
            event_type_repo=EventTypeRepository(db),
            task_template_repo=TaskTemplateRepository(db),
            design_item_type_repo=DesignItemTypeRepository(db),
            user_repo=UserRepository(db),
        ),
    )


async def get_workflow_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowService:
    """Workflow service for reads (get, list, validate, executions)."""
    return build_workflow_service(db)


async def get_workflow_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WorkflowService:
    """Workflow service for create/update/delete (transactional)."""
    return build_workflow_service(db)


async def get_workflow_execution_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowExecutionRepository:
    """Workflow execution repository for read (executions of an event)."""
    return WorkflowExecutionRepository(db)


def _build_apply_use_case(db: AsyncSession) -> ApplyWorkflowToExistingUseCase:
    return ApplyWorkflowToExistingUseCase(
        workflow_repo=WorkflowRepository(db),
        event_repo=EventRepository(db),
        event_type_repo=EventTypeRepository(db),
        execution_repo=WorkflowExecutionRepository(db),
        workflow_engine=build_workflow_engine(db),
        preview_limit=get_settings().apply_preview_event_limit,
    )


async def get_apply_preview_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApplyWorkflowToExistingUseCase:
    """Apply-to-existing for the read-only preview."""
    return _build_apply_use_case(db)


async def get_apply_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ApplyWorkflowToExistingUseCase:
    """Apply-to-existing for the backfill run (transactional)."""
    return _build_apply_use_case(db)


async def get_event_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventRepository:
    """Event repository for read operations (list, get by id)."""
    return EventRepository(db)


async def get_event_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EventService:
    """Event creation with workflow triggers on the same transaction."""
    engine = build_workflow_engine(db)
    return EventService(
        event_repo=EventRepository(db),
        event_type_repo=EventTypeRepository(db),
        workflow_engine_provider=lambda: engine,
    )
