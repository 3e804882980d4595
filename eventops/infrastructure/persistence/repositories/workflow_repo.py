"""Workflow definition and execution repositories. Return application DTOs."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.workflow import (
    WorkflowActionCreate,
    WorkflowActionResult,
    WorkflowCreate,
    WorkflowExecutionResult,
    WorkflowResult,
    WorkflowStats,
    WorkflowUpdate,
)
from eventops.infrastructure.persistence.models.task import Task
from eventops.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowAction,
    WorkflowEventType,
    WorkflowExecution,
)
from eventops.infrastructure.persistence.repositories.base import BaseRepository
from eventops.shared.enums import WorkflowExecutionStatus, WorkflowTriggerType
from eventops.shared.utils.datetime import utc_now


def _action_to_result(a: WorkflowAction) -> WorkflowActionResult:
    return WorkflowActionResult(
        id=a.id,
        workflow_id=a.workflow_id,
        action_type=a.action_type,
        execution_order=a.execution_order,
        task_template_id=a.task_template_id,
        design_item_type_id=a.design_item_type_id,
        assigned_to_user_id=a.assigned_to_user_id,
        config=dict(a.config or {}),
    )


def _workflow_to_result(w: Workflow) -> WorkflowResult:
    return WorkflowResult(
        id=w.id,
        tenant_id=w.tenant_id,
        name=w.name,
        description=w.description,
        is_active=w.is_active,
        trigger_type=w.trigger_type,
        event_type_ids=w.event_type_ids,
        conditions=list(w.conditions or []),
        created_by=w.created_by,
        created_at=w.created_at,
        updated_at=w.updated_at,
        actions=[
            _action_to_result(a)
            for a in sorted(w.actions, key=lambda a: a.execution_order)
        ],
    )


def _execution_to_result(e: WorkflowExecution) -> WorkflowExecutionResult:
    return WorkflowExecutionResult(
        id=e.id,
        tenant_id=e.tenant_id,
        workflow_id=e.workflow_id,
        trigger_type=e.trigger_type,
        trigger_entity_type=e.trigger_entity_type,
        trigger_entity_id=e.trigger_entity_id,
        status=e.status,
        started_at=e.started_at,
        completed_at=e.completed_at,
        actions_executed=e.actions_executed or 0,
        actions_successful=e.actions_successful or 0,
        actions_failed=e.actions_failed or 0,
        error_message=e.error_message,
        error_details=e.error_details,
        created_task_ids=list(e.created_task_ids or []),
        created_design_item_ids=list(e.created_design_item_ids or []),
        conditions_evaluated=bool(e.conditions_evaluated),
        conditions_passed=e.conditions_passed,
        condition_results=e.condition_results,
        executed_by=e.executed_by,
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow definitions with their applicability set and ordered actions."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def _load(self, workflow_id: str, tenant_id: str) -> Workflow | None:
        # populate_existing: actions and links are rewritten with bulk statements.
        result = await self.db.execute(
            select(Workflow)
            .where(Workflow.id == workflow_id, Workflow.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, workflow_id: str, tenant_id: str
    ) -> WorkflowResult | None:
        row = await self._load(workflow_id, tenant_id)
        return _workflow_to_result(row) if row else None

    async def get_by_name(self, tenant_id: str, name: str) -> WorkflowResult | None:
        result = await self.db.execute(
            select(Workflow).where(Workflow.tenant_id == tenant_id, Workflow.name == name)
        )
        row = result.scalar_one_or_none()
        return _workflow_to_result(row) if row else None

    async def list_by_tenant(
        self,
        tenant_id: str,
        is_active: bool | None = None,
        event_type_id: str | None = None,
    ) -> list[WorkflowResult]:
        q = select(Workflow).where(Workflow.tenant_id == tenant_id)
        if is_active is not None:
            q = q.where(Workflow.is_active.is_(is_active))
        if event_type_id:
            q = q.where(
                Workflow.id.in_(
                    select(WorkflowEventType.workflow_id).where(
                        WorkflowEventType.event_type_id == event_type_id
                    )
                )
            )
        q = q.order_by(desc(Workflow.created_at), desc(Workflow.id)).execution_options(
            populate_existing=True
        )
        result = await self.db.execute(q)
        return [_workflow_to_result(w) for w in result.scalars().all()]

    async def get_matching(
        self, tenant_id: str, event_type_id: str
    ) -> list[WorkflowResult]:
        result = await self.db.execute(
            select(Workflow)
            .join(WorkflowEventType, WorkflowEventType.workflow_id == Workflow.id)
            .where(
                Workflow.tenant_id == tenant_id,
                Workflow.is_active.is_(True),
                Workflow.trigger_type == WorkflowTriggerType.EVENT_CREATED.value,
                WorkflowEventType.event_type_id == event_type_id,
            )
            .order_by(Workflow.created_at.asc(), Workflow.id.asc())
            .execution_options(populate_existing=True)
        )
        return [_workflow_to_result(w) for w in result.scalars().unique().all()]

    async def create_workflow(
        self, tenant_id: str, data: WorkflowCreate, created_by: str | None
    ) -> WorkflowResult:
        workflow = Workflow(
            tenant_id=tenant_id,
            name=data.name,
            description=data.description,
            is_active=data.is_active,
            trigger_type=data.trigger_type,
            conditions=list(data.conditions),
            created_by=created_by,
            event_types=[
                WorkflowEventType(event_type_id=et_id)
                for et_id in dict.fromkeys(data.event_type_ids)
            ],
        )
        created = await self.create(workflow)
        return _workflow_to_result(created)

    async def add_actions(
        self, workflow_id: str, actions: list[WorkflowActionCreate]
    ) -> list[WorkflowActionResult]:
        rows = [
            WorkflowAction(
                workflow_id=workflow_id,
                action_type=a.action_type,
                execution_order=a.execution_order if a.execution_order is not None else index,
                task_template_id=a.task_template_id,
                design_item_type_id=a.design_item_type_id,
                assigned_to_user_id=a.assigned_to_user_id,
                config=dict(a.config),
            )
            for index, a in enumerate(actions)
        ]
        async with self.db.begin_nested():
            self.db.add_all(rows)
            await self.db.flush()
        return sorted(
            (_action_to_result(r) for r in rows), key=lambda a: a.execution_order
        )

    async def replace_actions(
        self, workflow_id: str, actions: list[WorkflowActionCreate]
    ) -> list[WorkflowActionResult]:
        await self.db.execute(
            delete(WorkflowAction).where(WorkflowAction.workflow_id == workflow_id)
        )
        return await self.add_actions(workflow_id, actions)

    async def update_workflow(
        self, workflow_id: str, tenant_id: str, patch: WorkflowUpdate
    ) -> WorkflowResult | None:
        workflow = await self._load(workflow_id, tenant_id)
        if workflow is None:
            return None
        for name in ("name", "description", "is_active", "conditions"):
            value = getattr(patch, name)
            if value is not None:
                setattr(workflow, name, value)
        if patch.event_type_ids is not None:
            await self.db.execute(
                delete(WorkflowEventType).where(WorkflowEventType.workflow_id == workflow_id)
            )
            self.db.add_all(
                WorkflowEventType(workflow_id=workflow_id, event_type_id=et_id)
                for et_id in dict.fromkeys(patch.event_type_ids)
            )
        await self.db.flush()
        reloaded = await self._load(workflow_id, tenant_id)
        return _workflow_to_result(reloaded) if reloaded else None

    async def delete_workflow(self, workflow_id: str, tenant_id: str) -> bool:
        result = await self.db.execute(
            delete(Workflow).where(Workflow.id == workflow_id, Workflow.tenant_id == tenant_id)
        )
        return bool(result.rowcount)


class WorkflowExecutionRepository(BaseRepository[WorkflowExecution]):
    """Execution records: the per-(workflow, event) idempotency marker."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowExecution)

    async def get_by_id_and_tenant(
        self, execution_id: str, tenant_id: str
    ) -> WorkflowExecutionResult | None:
        row = await self.get_owned(execution_id, tenant_id)
        return _execution_to_result(row) if row else None

    async def get_for_entity(
        self, tenant_id: str, entity_id: str
    ) -> list[WorkflowExecutionResult]:
        result = await self.db.execute(
            select(WorkflowExecution)
            .where(
                WorkflowExecution.tenant_id == tenant_id,
                WorkflowExecution.trigger_entity_id == entity_id,
            )
            .order_by(desc(WorkflowExecution.started_at))
        )
        return [_execution_to_result(e) for e in result.scalars().all()]

    async def get_entity_ids_with_status(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_ids: Collection[str],
        statuses: Collection[str],
    ) -> set[str]:
        if not entity_ids or not statuses:
            return set()
        result = await self.db.execute(
            select(WorkflowExecution.trigger_entity_id).where(
                WorkflowExecution.tenant_id == tenant_id,
                WorkflowExecution.workflow_id == workflow_id,
                WorkflowExecution.trigger_entity_id.in_(list(entity_ids)),
                WorkflowExecution.status.in_(list(statuses)),
            )
        )
        return set(result.scalars().all())

    def _new_record(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        executed_by: str | None,
        condition_results: list[dict[str, Any]] | None,
    ) -> WorkflowExecution:
        return WorkflowExecution(
            tenant_id=tenant_id,
            workflow_id=workflow_id,
            trigger_type=WorkflowTriggerType.EVENT_CREATED.value,
            trigger_entity_type="event",
            trigger_entity_id=entity_id,
            started_at=utc_now(),
            executed_by=executed_by,
            conditions_evaluated=condition_results is not None,
            condition_results=condition_results,
            created_task_ids=[],
            created_design_item_ids=[],
        )

    async def start_execution(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        condition_results: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult:
        row = self._new_record(
            tenant_id, workflow_id, entity_id, executed_by, condition_results
        )
        row.status = WorkflowExecutionStatus.RUNNING.value
        row.conditions_passed = True if condition_results is not None else None
        return _execution_to_result(await self.create(row))

    async def record_skipped(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        condition_results: list[dict[str, Any]],
    ) -> WorkflowExecutionResult:
        row = self._new_record(
            tenant_id, workflow_id, entity_id, executed_by, condition_results
        )
        row.status = WorkflowExecutionStatus.SKIPPED.value
        row.conditions_passed = False
        row.completed_at = row.started_at
        return _execution_to_result(await self.create(row))

    async def record_failed(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_id: str,
        *,
        executed_by: str | None,
        error_message: str,
        condition_results: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult:
        row = self._new_record(
            tenant_id, workflow_id, entity_id, executed_by, condition_results
        )
        row.status = WorkflowExecutionStatus.FAILED.value
        row.conditions_passed = True if condition_results is not None else None
        row.completed_at = row.started_at
        row.error_message = error_message
        return _execution_to_result(await self.create(row))

    async def finish_execution(
        self,
        execution_id: str,
        *,
        status: str,
        actions_executed: int = 0,
        actions_successful: int = 0,
        actions_failed: int = 0,
        created_task_ids: list[str] | None = None,
        created_design_item_ids: list[str] | None = None,
        error_message: str | None = None,
        error_details: list[dict[str, Any]] | None = None,
    ) -> WorkflowExecutionResult | None:
        row = await self.get_by_id(execution_id)
        if row is None:
            return None
        row.status = status
        row.completed_at = utc_now()
        row.actions_executed = actions_executed
        row.actions_successful = actions_successful
        row.actions_failed = actions_failed
        row.created_task_ids = list(created_task_ids or [])
        row.created_design_item_ids = list(created_design_item_ids or [])
        row.error_message = error_message
        row.error_details = error_details or None
        return _execution_to_result(await self.save(row))

    async def list_by_workflow(
        self, tenant_id: str, workflow_id: str, skip: int = 0, limit: int = 50
    ) -> list[WorkflowExecutionResult]:
        result = await self.db.execute(
            select(WorkflowExecution)
            .where(
                WorkflowExecution.tenant_id == tenant_id,
                WorkflowExecution.workflow_id == workflow_id,
            )
            .order_by(desc(WorkflowExecution.started_at), desc(WorkflowExecution.id))
            .offset(skip)
            .limit(limit)
        )
        return [_execution_to_result(e) for e in result.scalars().all()]

    async def get_stats(self, tenant_id: str, workflow_id: str) -> WorkflowStats:
        result = await self.db.execute(
            select(
                func.count(WorkflowExecution.id),
                func.count(WorkflowExecution.id).filter(
                    WorkflowExecution.status == WorkflowExecutionStatus.COMPLETED.value
                ),
                func.count(WorkflowExecution.id).filter(
                    WorkflowExecution.status == WorkflowExecutionStatus.FAILED.value
                ),
                func.max(WorkflowExecution.started_at),
            ).where(
                WorkflowExecution.tenant_id == tenant_id,
                WorkflowExecution.workflow_id == workflow_id,
            )
        )
        total, successful, failed, last_executed_at = result.one()
        tasks = await self.db.execute(
            select(func.count(Task.id)).where(
                Task.tenant_id == tenant_id, Task.workflow_id == workflow_id
            )
        )
        return WorkflowStats(
            total_executions=total or 0,
            successful_executions=successful or 0,
            failed_executions=failed or 0,
            last_executed_at=last_executed_at,
            total_tasks_created=tasks.scalar_one() or 0,
        )
