"""Task template and task API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from eventops.shared.enums import TaskPriority


class TaskTemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    default_title: str | None = Field(default=None, max_length=500)
    default_description: str | None = None
    default_priority: TaskPriority = TaskPriority.MEDIUM
    default_due_in_days: int | None = Field(default=None, ge=0)
    department: str | None = None
    task_type: str | None = None
    enabled: bool = True


class TaskTemplateUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    default_title: str | None = Field(default=None, max_length=500)
    default_description: str | None = None
    default_priority: TaskPriority | None = None
    default_due_in_days: int | None = Field(default=None, ge=0)
    department: str | None = None
    task_type: str | None = None
    enabled: bool | None = None


class TaskTemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
