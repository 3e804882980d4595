"""Pydantic request/response schemas for the API."""

from eventops.schemas.auth import LoginRequest, TokenResponse
from eventops.schemas.design_item import (
    DesignItemResponse,
    DesignItemTypeCreateRequest,
    DesignItemTypeResponse,
    DesignItemTypeUpdateRequest,
)
from eventops.schemas.event import (
    EventCreateRequest,
    EventCreateResponse,
    EventResponse,
    EventTypeCreateRequest,
    EventTypeResponse,
)
from eventops.schemas.health import HealthResponse, ReadinessResponse
from eventops.schemas.task import (
    TaskResponse,
    TaskTemplateCreateRequest,
    TaskTemplateResponse,
    TaskTemplateUpdateRequest,
)
from eventops.schemas.workflow import (
    ApplyPreviewResponse,
    ApplyToExistingRequest,
    ApplyToExistingResponse,
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowRunResponse,
    WorkflowUpdateRequest,
    WorkflowValidationResponse,
)

__all__ = [
    "ApplyPreviewResponse",
    "ApplyToExistingRequest",
    "ApplyToExistingResponse",
    "DesignItemResponse",
    "DesignItemTypeCreateRequest",
    "DesignItemTypeResponse",
    "DesignItemTypeUpdateRequest",
    "EventCreateRequest",
    "EventCreateResponse",
    "EventResponse",
    "EventTypeCreateRequest",
    "EventTypeResponse",
    "HealthResponse",
    "LoginRequest",
    "ReadinessResponse",
    "TaskResponse",
    "TaskTemplateCreateRequest",
    "TaskTemplateResponse",
    "TaskTemplateUpdateRequest",
    "TokenResponse",
    "WorkflowCreateRequest",
    "WorkflowExecutionResponse",
    "WorkflowResponse",
    "WorkflowRunResponse",
    "WorkflowUpdateRequest",
    "WorkflowValidationResponse",
]
