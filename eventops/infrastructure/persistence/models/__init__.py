"""Persistence models: ORM entities and mixins."""

from eventops.infrastructure.persistence.models.design_item import (
    DesignItem,
    DesignItemType,
)
from eventops.infrastructure.persistence.models.event import Event, EventType
from eventops.infrastructure.persistence.models.mixins import (
    AuditedMultiTenantModel,
    CreatedByMixin,
    CuidMixin,
    MultiTenantModel,
    TenantMixin,
    TimestampMixin,
)
from eventops.infrastructure.persistence.models.task import Task, TaskTemplate
from eventops.infrastructure.persistence.models.tenant import Tenant
from eventops.infrastructure.persistence.models.user import User
from eventops.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowAction,
    WorkflowEventType,
    WorkflowExecution,
)

__all__ = [
    "Tenant",
    "User",
    "EventType",
    "Event",
    "Workflow",
    "WorkflowEventType",
    "WorkflowAction",
    "WorkflowExecution",
    "TaskTemplate",
    "Task",
    "DesignItemType",
    "DesignItem",
    "CuidMixin",
    "TenantMixin",
    "TimestampMixin",
    "CreatedByMixin",
    "MultiTenantModel",
    "AuditedMultiTenantModel",
]
