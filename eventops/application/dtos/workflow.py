"""DTOs for workflow definitions, executions and apply-to-existing runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from eventops.domain.entities.workflow import WorkflowEntity
from eventops.shared.enums import WorkflowTriggerType


@dataclass(frozen=True)
class WorkflowActionCreate:
    """One action in a create/replace request. execution_order defaults to list index."""

    action_type: str
    execution_order: int | None = None
    task_template_id: str | None = None
    design_item_type_id: str | None = None
    assigned_to_user_id: str | None = None
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkflowCreate:
    name: str
    event_type_ids: list[str]
    description: str | None = None
    is_active: bool = True
    trigger_type: str = WorkflowTriggerType.EVENT_CREATED.value
    conditions: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class WorkflowUpdate:
    """Partial update; None means "leave unchanged"."""

    name: str | None = None
    description: str | None = None
    is_active: bool | None = None
    event_type_ids: list[str] | None = None
    conditions: list[dict[str, Any]] | None = None


@dataclass(frozen=True)
class WorkflowActionResult:
    id: str
    workflow_id: str
    action_type: str
    execution_order: int
    task_template_id: str | None
    design_item_type_id: str | None
    assigned_to_user_id: str | None
    config: dict[str, Any]


@dataclass(frozen=True)
class WorkflowStats:
    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    last_executed_at: datetime | None = None
    total_tasks_created: int = 0


@dataclass(frozen=True)
class WorkflowResult:
    """Workflow read-model with its actions ordered by execution_order."""

    id: str
    tenant_id: str
    name: str
    description: str | None
    is_active: bool
    trigger_type: str
    event_type_ids: list[str]
    conditions: list[dict[str, Any]]
    created_by: str | None
    created_at: datetime | None
    updated_at: datetime | None
    actions: list[WorkflowActionResult] = field(default_factory=list)
    stats: WorkflowStats | None = None

    def to_entity(self) -> WorkflowEntity:
        return WorkflowEntity(
            id=self.id,
            tenant_id=self.tenant_id,
            name=self.name,
            is_active=self.is_active,
            trigger_type=self.trigger_type,
            event_type_ids=list(self.event_type_ids),
            conditions=list(self.conditions),
        )


@dataclass(frozen=True)
class WorkflowExecutionResult:
    """Execution record keyed by (workflow_id, trigger_entity_id)."""

    id: str
    tenant_id: str
    workflow_id: str
    trigger_type: str
    trigger_entity_type: str
    trigger_entity_id: str
    status: str
    started_at: datetime | None
    completed_at: datetime | None
    actions_executed: int
    actions_successful: int
    actions_failed: int
    error_message: str | None
    error_details: list[dict[str, Any]] | None
    created_task_ids: list[str]
    created_design_item_ids: list[str]
    conditions_evaluated: bool
    conditions_passed: bool | None
    condition_results: list[dict[str, Any]] | None
    executed_by: str | None


@dataclass(frozen=True)
class WorkflowValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ActionOutcome:
    """Result of one action; failures carry an error message instead of raising."""

    action_id: str
    action_type: str
    success: bool
    created_task_id: str | None = None
    created_design_item_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class WorkflowRunResult:
    """Summary of one workflow run against one event."""

    workflow_id: str
    workflow_name: str
    execution_id: str | None
    status: str
    actions_executed: int = 0
    actions_successful: int = 0
    actions_failed: int = 0
    created_task_ids: list[str] = field(default_factory=list)
    created_design_item_ids: list[str] = field(default_factory=list)
    error_message: str | None = None


@dataclass(frozen=True)
class ApplyPreviewEvent:
    id: str
    client_name: str
    event_date: date | None


@dataclass(frozen=True)
class ApplyPreview:
    """How many future events an apply-to-existing call would touch."""

    count: int
    total_events: int
    already_executed: int
    event_type_name: str
    events: list[ApplyPreviewEvent] = field(default_factory=list)
    message: str | None = None


@dataclass(frozen=True)
class ApplyEventResult:
    event_id: str
    client_name: str
    event_date: date | None
    success: bool
    tasks_created: int = 0
    design_items_created: int = 0
    error: str | None = None


@dataclass(frozen=True)
class ApplyOutcome:
    success: bool
    processed: int
    failed: int
    skipped: int = 0
    total_events: int = 0
    results: list[ApplyEventResult] = field(default_factory=list)
    message: str | None = None
