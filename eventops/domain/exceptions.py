"""Domain exceptions for the eventops application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The
presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EventOpsException(Exception):
    """Base exception for all eventops application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API error responses."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(EventOpsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EventOpsException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(EventOpsException):
    """Raised when the user lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'workflow', 'event').
            action: Optional action that was attempted (e.g. 'create', 'read').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class TenantNotFoundException(EventOpsException):
    """Raised when a requested tenant is not found."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(
            f"Tenant not found: {tenant_id}",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class ResourceNotFoundException(EventOpsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'event').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateResourceException(EventOpsException):
    """Raised when a unique name is already taken within the tenant."""

    def __init__(self, resource_type: str, name: str) -> None:
        super().__init__(
            f"{resource_type} named '{name}' already exists",
            "RESOURCE_CONFLICT",
            {"resource_type": resource_type, "name": name},
        )


class ResourceConflictException(EventOpsException):
    """Raised when a write collides with a uniqueness constraint."""

    def __init__(self, resource_type: str, message: str) -> None:
        super().__init__(message, "RESOURCE_CONFLICT", {"resource_type": resource_type})


class WorkflowInactiveException(EventOpsException):
    """Raised when an inactive workflow is applied to existing events."""

    def __init__(self, workflow_id: str) -> None:
        super().__init__(
            "Cannot apply inactive workflow",
            "WORKFLOW_INACTIVE",
            {"workflow_id": workflow_id},
        )


class WorkflowValidationException(EventOpsException):
    """Raised when a workflow definition references missing or invalid data."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None) -> None:
        """Initialize with validation errors (and non-blocking warnings).

        Args:
            errors: Blocking problems; the first one becomes the message.
            warnings: Non-blocking notes (e.g. disabled template).
        """
        super().__init__(
            errors[0] if errors else "Workflow validation failed",
            "WORKFLOW_VALIDATION_ERROR",
            {"errors": errors, "warnings": warnings or []},
        )
        self.errors = errors
        self.warnings = warnings or []


class WorkflowActionError(EventOpsException):
    """Raised inside an action executor; recorded on the execution, never surfaced."""

    def __init__(self, action_type: str, message: str) -> None:
        super().__init__(message, "WORKFLOW_ACTION_ERROR", {"action_type": action_type})


class SqlNotConfiguredException(EventOpsException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


# Errors that indicate a bug rather than a failed run; never converted to a
# failed outcome.
PROGRAMMING_ERRORS: tuple[type[BaseException], ...] = (
    AssertionError,
    AttributeError,
    IndexError,
    KeyError,
    NameError,
    TypeError,
)
