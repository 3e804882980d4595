"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from eventops.infrastructure or eventops.api.
"""

from eventops.application.interfaces.repositories import (
    IDesignItemRepository,
    IDesignItemTypeRepository,
    IEventRepository,
    IEventTypeRepository,
    ITaskRepository,
    ITaskTemplateRepository,
    ITenantRepository,
    IUserRepository,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from eventops.application.interfaces.services import (
    IAuthorizationService,
    IEventService,
    IWorkflowEngine,
)

__all__ = [
    "IAuthorizationService",
    "IDesignItemRepository",
    "IDesignItemTypeRepository",
    "IEventRepository",
    "IEventService",
    "IEventTypeRepository",
    "ITaskRepository",
    "ITaskTemplateRepository",
    "ITenantRepository",
    "IUserRepository",
    "IWorkflowEngine",
    "IWorkflowExecutionRepository",
    "IWorkflowRepository",
]
