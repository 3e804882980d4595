"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from eventops.application.dtos.event import EventCreate, EventResult
    from eventops.application.dtos.workflow import WorkflowResult, WorkflowRunResult


# Workflow engine interface
class IWorkflowEngine(Protocol):
    """Protocol for running workflows against an event."""

    async def execute_workflows_for_event(
        self, tenant_id: str, event_id: str, user_id: str | None = None
    ) -> list[WorkflowRunResult]:
        """Run every matching workflow not yet executed for the event."""

    async def execute_workflow(
        self,
        workflow: WorkflowResult,
        event: EventResult,
        user_id: str | None = None,
    ) -> WorkflowRunResult:
        """Run one workflow against one event without the executed check."""


# Event service interface
class IEventService(Protocol):
    """Protocol for event creation use case."""

    async def create_event(
        self,
        tenant_id: str,
        data: EventCreate,
        *,
        user_id: str | None = None,
        trigger_workflows: bool = True,
    ) -> tuple[EventResult, list[WorkflowRunResult]]:
        """Create an event and (optionally) run matching workflows."""


# Authorization service interface
class IAuthorizationService(Protocol):
    def has_permission(self, role: str, resource: str, action: str) -> bool:
        """Return whether the role grants action on resource."""

    def require_permission(self, role: str, resource: str, action: str) -> None:
        """Raise AuthorizationException unless the role grants action on resource."""
