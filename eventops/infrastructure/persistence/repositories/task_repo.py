"""Task template and task repositories."""

from collections.abc import Collection
from datetime import date
from typing import Any

from sqlalchemy import asc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.task import TaskResult, TaskTemplateResult
from eventops.infrastructure.persistence.models.task import Task, TaskTemplate
from eventops.infrastructure.persistence.repositories.base import BaseRepository


def _template_to_result(t: TaskTemplate) -> TaskTemplateResult:
    return TaskTemplateResult(
        id=t.id,
        tenant_id=t.tenant_id,
        name=t.name,
        default_title=t.default_title,
        default_description=t.default_description,
        default_priority=t.default_priority,
        default_due_in_days=t.default_due_in_days,
        department=t.department,
        task_type=t.task_type,
        enabled=t.enabled,
    )


def _task_to_result(t: Task) -> TaskResult:
    return TaskResult(
        id=t.id,
        tenant_id=t.tenant_id,
        title=t.title,
        description=t.description,
        priority=t.priority,
        status=t.status,
        due_date=t.due_date,
        entity_type=t.entity_type,
        entity_id=t.entity_id,
        assigned_to=t.assigned_to,
        department=t.department,
        task_type=t.task_type,
        auto_created=t.auto_created,
        workflow_id=t.workflow_id,
        workflow_execution_id=t.workflow_execution_id,
        created_by=t.created_by,
        created_at=t.created_at,
    )


class TaskTemplateRepository(BaseRepository[TaskTemplate]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskTemplate)

    async def get_by_id_and_tenant(
        self, template_id: str, tenant_id: str
    ) -> TaskTemplateResult | None:
        row = await self.get_owned(template_id, tenant_id)
        return _template_to_result(row) if row else None

    async def list_by_tenant(
        self, tenant_id: str, enabled_only: bool = False
    ) -> list[TaskTemplateResult]:
        q = select(TaskTemplate).where(TaskTemplate.tenant_id == tenant_id)
        if enabled_only:
            q = q.where(TaskTemplate.enabled.is_(True))
        result = await self.db.execute(q.order_by(TaskTemplate.name))
        return [_template_to_result(t) for t in result.scalars().all()]

    async def create_template(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> TaskTemplateResult:
        created = await self.create(TaskTemplate(tenant_id=tenant_id, **fields))
        return _template_to_result(created)

    async def update_template(
        self, template_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> TaskTemplateResult | None:
        row = await self.get_owned(template_id, tenant_id)
        if row is None:
            return None
        return _template_to_result(await self.apply_fields(row, fields))


class TaskRepository(BaseRepository[Task]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def create_task(
        self,
        tenant_id: str,
        *,
        title: str,
        description: str | None,
        priority: str,
        status: str,
        due_date: date | None,
        entity_type: str,
        entity_id: str,
        assigned_to: str | None,
        department: str | None,
        task_type: str | None,
        auto_created: bool,
        workflow_id: str | None,
        created_by: str | None,
    ) -> TaskResult:
        task = Task(
            tenant_id=tenant_id,
            title=title,
            description=description,
            priority=priority,
            status=status,
            due_date=due_date,
            entity_type=entity_type,
            entity_id=entity_id,
            assigned_to=assigned_to,
            department=department,
            task_type=task_type,
            auto_created=auto_created,
            workflow_id=workflow_id,
            created_by=created_by,
        )
        return _task_to_result(await self.create(task))

    async def link_execution(self, task_ids: Collection[str], execution_id: str) -> None:
        if not task_ids:
            return
        await self.db.execute(
            update(Task)
            .where(Task.id.in_(list(task_ids)))
            .values(workflow_execution_id=execution_id)
        )

    async def list_for_entity(
        self, tenant_id: str, entity_type: str, entity_id: str
    ) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task)
            .where(
                Task.tenant_id == tenant_id,
                Task.entity_type == entity_type,
                Task.entity_id == entity_id,
            )
            .order_by(asc(Task.due_date).nulls_last(), asc(Task.created_at))
            .execution_options(populate_existing=True)
        )
        return [_task_to_result(t) for t in result.scalars().all()]
