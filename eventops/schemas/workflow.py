"""Workflow API schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from eventops.shared.enums import WorkflowTriggerType


class WorkflowActionRequest(BaseModel):
    """Single action; references are checked by workflow validation, not here."""

    action_type: str = Field(..., min_length=1, max_length=32)
    execution_order: int | None = Field(default=None, ge=0)
    task_template_id: str | None = None
    design_item_type_id: str | None = None
    assigned_to_user_id: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)


class WorkflowCreateRequest(BaseModel):
    """Request body for creating (or dry-run validating) a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = True
    trigger_type: WorkflowTriggerType = WorkflowTriggerType.EVENT_CREATED
    event_type_ids: list[str] = Field(default_factory=list)
    conditions: list[dict[str, Any]] = Field(default_factory=list)
    actions: list[WorkflowActionRequest] = Field(default_factory=list)


class WorkflowUpdateRequest(BaseModel):
    """Partial update. A given actions list replaces all existing actions."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None
    event_type_ids: list[str] | None = None
    conditions: list[dict[str, Any]] | None = None
    actions: list[WorkflowActionRequest] | None = None


class WorkflowValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class WorkflowActionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    workflow_id: str
    action_type: str
    execution_order: int
    task_template_id: str | None
    design_item_type_id: str | None
    assigned_to_user_id: str | None
    config: dict[str, Any]


class WorkflowStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_executions: int
    successful_executions: int
    failed_executions: int
    last_executed_at: datetime | None
    total_tasks_created: int


class WorkflowResponse(BaseModel):
    """Workflow with actions ordered by execution_order."""

    model_config = ConfigDict(from_attributes=True)

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
    actions: list[WorkflowActionResponse]
    stats: WorkflowStatsResponse | None = None


class WorkflowExecutionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class WorkflowRunResponse(BaseModel):
    """Summary of one workflow run against one event."""

    model_config = ConfigDict(from_attributes=True)

    workflow_id: str
    workflow_name: str
    execution_id: str | None
    status: str
    actions_executed: int
    actions_successful: int
    actions_failed: int
    created_task_ids: list[str]
    created_design_item_ids: list[str]
    error_message: str | None


class ApplyToExistingRequest(BaseModel):
    force: bool = Field(
        default=False, description="Re-run for events that already completed this workflow"
    )


class ApplyPreviewEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_name: str
    event_date: date | None


class ApplyPreviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int
    total_events: int
    already_executed: int
    event_type_name: str
    events: list[ApplyPreviewEventResponse]
    message: str | None = None


class ApplyEventResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: str
    client_name: str
    event_date: date | None
    success: bool
    tasks_created: int
    design_items_created: int
    error: str | None


class ApplyToExistingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    processed: int
    failed: int
    skipped: int
    total_events: int
    results: list[ApplyEventResultResponse]
    message: str | None = None
