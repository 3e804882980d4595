"""DTOs for task templates and tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class TaskTemplateResult:
    """Reusable task blueprint referenced by create_task actions."""

    id: str
    tenant_id: str
    name: str
    default_title: str | None
    default_description: str | None
    default_priority: str
    default_due_in_days: int | None
    department: str | None
    task_type: str | None
    enabled: bool


@dataclass(frozen=True)
class TaskResult:
    """Task attached to an entity (usually an event); may be workflow-created."""

    id: str
    tenant_id: str
    title: str
    description: str | None
    priority: str
    status: str
    due_date: date | None
    entity_type: str | None
    entity_id: str | None
    assigned_to: str | None
    department: str | None
    task_type: str | None
    auto_created: bool
    workflow_id: str | None
    workflow_execution_id: str | None
    created_by: str | None
    created_at: datetime | None = None
