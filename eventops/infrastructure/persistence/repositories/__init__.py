"""Repositories: ORM access returning application DTOs."""

from eventops.infrastructure.persistence.repositories.base import BaseRepository
from eventops.infrastructure.persistence.repositories.design_item_repo import (
    DesignItemRepository,
    DesignItemTypeRepository,
)
from eventops.infrastructure.persistence.repositories.event_repo import EventRepository
from eventops.infrastructure.persistence.repositories.event_type_repo import (
    EventTypeRepository,
)
from eventops.infrastructure.persistence.repositories.task_repo import (
    TaskRepository,
    TaskTemplateRepository,
)
from eventops.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from eventops.infrastructure.persistence.repositories.user_repo import UserRepository
from eventops.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowExecutionRepository,
    WorkflowRepository,
)

__all__ = [
    "BaseRepository",
    "DesignItemRepository",
    "DesignItemTypeRepository",
    "EventRepository",
    "EventTypeRepository",
    "TaskRepository",
    "TaskTemplateRepository",
    "TenantRepository",
    "UserRepository",
    "WorkflowExecutionRepository",
    "WorkflowRepository",
]
