"""Event and event type API schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eventops.schemas.workflow import WorkflowRunResponse


class EventTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = True


class EventTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    is_active: bool


class EventCreateRequest(BaseModel):
    """Payload for creating an event. Creating an event runs matching workflows."""

    event_type_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=500)
    start_date: date | None = None
    end_date: date | None = None
    status: str = Field(default="scheduled", min_length=1, max_length=32)
    account_id: str | None = None
    contact_id: str | None = None
    location: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def end_not_before_start(self) -> "EventCreateRequest":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventResponse(BaseModel):
    """Event detail (get endpoint) and list item."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    event_type_id: str
    title: str
    status: str
    start_date: date | None
    end_date: date | None
    account_id: str | None
    contact_id: str | None
    location: str | None
    details: dict[str, Any]
    created_by: str | None
    created_at: datetime | None = None


class EventCreateResponse(EventResponse):
    """Create response: the event plus the workflows that ran for it."""

    workflow_runs: list[WorkflowRunResponse] = Field(default_factory=list)
