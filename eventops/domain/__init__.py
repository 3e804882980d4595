"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from eventops.domain.entities import (
    DesignSchedule,
    WorkflowEntity,
    final_execution_status,
)
from eventops.domain.enums import ROLE_PERMISSIONS, TenantStatus, UserRole
from eventops.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    EventOpsException,
    ResourceConflictException,
    ResourceNotFoundException,
    TenantNotFoundException,
    ValidationException,
    WorkflowInactiveException,
    WorkflowValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "DesignSchedule",
    "DuplicateResourceException",
    "EventOpsException",
    "ROLE_PERMISSIONS",
    "ResourceConflictException",
    "ResourceNotFoundException",
    "TenantNotFoundException",
    "TenantStatus",
    "UserRole",
    "ValidationException",
    "WorkflowEntity",
    "WorkflowInactiveException",
    "WorkflowValidationException",
    "final_execution_status",
]
