"""Event creation use case: insert the event, then run matching workflows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from eventops.application.dtos.event import EventCreate, EventResult
from eventops.application.interfaces.repositories import (
    IEventRepository,
    IEventTypeRepository,
)
from eventops.domain.exceptions import (
    PROGRAMMING_ERRORS,
    ResourceNotFoundException,
    ValidationException,
)
from eventops.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from eventops.application.dtos.workflow import WorkflowRunResult
    from eventops.application.interfaces.services import IWorkflowEngine

logger = get_logger(__name__)


class EventService:
    """Creates events and triggers workflow automation (IEventService)."""

    def __init__(
        self,
        event_repo: IEventRepository,
        event_type_repo: IEventTypeRepository,
        workflow_engine_provider: Callable[[], "IWorkflowEngine | None"] | None = None,
    ) -> None:
        self.event_repo = event_repo
        self.event_type_repo = event_type_repo
        self._workflow_engine_provider = workflow_engine_provider

    @property
    def workflow_engine(self) -> "IWorkflowEngine | None":
        """Resolve workflow engine lazily to avoid circular init."""
        if self._workflow_engine_provider is None:
            return None
        return self._workflow_engine_provider()

    async def create_event(
        self,
        tenant_id: str,
        data: EventCreate,
        *,
        user_id: str | None = None,
        trigger_workflows: bool = True,
    ) -> tuple[EventResult, list[WorkflowRunResult]]:
        """Create one event; validate its type and dates, optionally run workflows."""
        event_type = await self.event_type_repo.get_by_id_and_tenant(
            data.event_type_id, tenant_id
        )
        if not event_type:
            raise ResourceNotFoundException("event_type", data.event_type_id)
        if data.start_date and data.end_date and data.end_date < data.start_date:
            raise ValidationException("end_date must not be before start_date", "end_date")

        created = await self.event_repo.create_event(tenant_id, data, user_id)

        runs: list[WorkflowRunResult] = []
        if trigger_workflows and self.workflow_engine:
            runs = await self._trigger_workflows(created, tenant_id, user_id)
        return created, runs

    async def _trigger_workflows(
        self, event: EventResult, tenant_id: str, user_id: str | None
    ) -> list[WorkflowRunResult]:
        if not self.workflow_engine:
            return []
        try:
            result = await self.workflow_engine.execute_workflows_for_event(
                tenant_id, event.id, user_id
            )
            return result or []
        except PROGRAMMING_ERRORS:
            # Programming errors: do not mask.
            raise
        except Exception:
            # Workflow failures never fail event creation.
            logger.exception(
                "Workflow trigger failed for event %s (type: %s)",
                event.id,
                event.event_type_id,
            )
            return []
