"""Application DTOs (no ORM dependency)."""

from eventops.application.dtos.design_item import DesignItemResult, DesignItemTypeResult
from eventops.application.dtos.event import EventCreate, EventResult, EventTypeResult
from eventops.application.dtos.task import TaskResult, TaskTemplateResult
from eventops.application.dtos.user import TenantResult, UserResult
from eventops.application.dtos.workflow import (
    ActionOutcome,
    ApplyEventResult,
    ApplyOutcome,
    ApplyPreview,
    ApplyPreviewEvent,
    WorkflowActionCreate,
    WorkflowActionResult,
    WorkflowCreate,
    WorkflowExecutionResult,
    WorkflowResult,
    WorkflowRunResult,
    WorkflowStats,
    WorkflowUpdate,
    WorkflowValidationResult,
)

__all__ = [
    "ActionOutcome",
    "ApplyEventResult",
    "ApplyOutcome",
    "ApplyPreview",
    "ApplyPreviewEvent",
    "DesignItemResult",
    "DesignItemTypeResult",
    "EventCreate",
    "EventResult",
    "EventTypeResult",
    "TaskResult",
    "TaskTemplateResult",
    "TenantResult",
    "UserResult",
    "WorkflowActionCreate",
    "WorkflowActionResult",
    "WorkflowCreate",
    "WorkflowExecutionResult",
    "WorkflowResult",
    "WorkflowRunResult",
    "WorkflowStats",
    "WorkflowUpdate",
    "WorkflowValidationResult",
]
