"""Apply a workflow to existing future events (preview and run).

Only events starting today (UTC) or later are considered. Events that
already have a completed execution for the workflow are skipped unless
``force`` is set. The check is query-then-insert, so two concurrent
applies can both run for the same event.
"""

from __future__ import annotations

from eventops.application.dtos.event import EventResult
from eventops.application.dtos.workflow import (
    ApplyEventResult,
    ApplyOutcome,
    ApplyPreview,
    ApplyPreviewEvent,
    WorkflowResult,
)
from eventops.application.interfaces.repositories import (
    IEventRepository,
    IEventTypeRepository,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from eventops.application.interfaces.services import IWorkflowEngine
from eventops.domain.exceptions import (
    PROGRAMMING_ERRORS,
    ResourceNotFoundException,
    WorkflowInactiveException,
)
from eventops.shared.enums import WorkflowExecutionStatus
from eventops.shared.telemetry.logging import get_logger
from eventops.shared.telemetry.tracing import add_span_attributes, traced
from eventops.shared.utils.datetime import utc_today

logger = get_logger(__name__)

NO_EVENT_TYPES_MESSAGE = "Workflow has no event types configured"
NO_FUTURE_EVENTS_MESSAGE = "No future events found matching this workflow"


class ApplyWorkflowToExistingUseCase:
    """Backfills a workflow's tasks and design items onto upcoming events."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        event_repo: IEventRepository,
        event_type_repo: IEventTypeRepository,
        execution_repo: IWorkflowExecutionRepository,
        workflow_engine: IWorkflowEngine,
        preview_limit: int = 10,
    ) -> None:
        self.workflow_repo = workflow_repo
        self.event_repo = event_repo
        self.event_type_repo = event_type_repo
        self.execution_repo = execution_repo
        self.workflow_engine = workflow_engine
        self.preview_limit = preview_limit

    async def _get_workflow(self, tenant_id: str, workflow_id: str) -> WorkflowResult:
        workflow = await self.workflow_repo.get_by_id_and_tenant(workflow_id, tenant_id)
        if not workflow:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def _future_events(
        self, tenant_id: str, workflow: WorkflowResult
    ) -> list[EventResult]:
        return await self.event_repo.get_upcoming_by_types(
            tenant_id, workflow.event_type_ids, utc_today()
        )

    async def _completed_event_ids(
        self, tenant_id: str, workflow_id: str, events: list[EventResult]
    ) -> set[str]:
        if not events:
            return set()
        return await self.execution_repo.get_entity_ids_with_status(
            tenant_id,
            workflow_id,
            [e.id for e in events],
            [WorkflowExecutionStatus.COMPLETED.value],
        )

    async def preview(self, tenant_id: str, workflow_id: str) -> ApplyPreview:
        """Count future matching events that have not completed this workflow yet."""
        workflow = await self._get_workflow(tenant_id, workflow_id)
        if not workflow.event_type_ids:
            return ApplyPreview(
                count=0,
                total_events=0,
                already_executed=0,
                event_type_name="",
                message=NO_EVENT_TYPES_MESSAGE,
            )

        event_types = await self.event_type_repo.get_by_ids(
            tenant_id, workflow.event_type_ids
        )
        type_names = ", ".join(et.name for et in event_types) or "Unknown"

        events = await self._future_events(tenant_id, workflow)
        if not events:
            return ApplyPreview(
                count=0,
                total_events=0,
                already_executed=0,
                event_type_name=type_names,
                message=NO_FUTURE_EVENTS_MESSAGE,
            )

        executed = await self._completed_event_ids(tenant_id, workflow_id, events)
        eligible = [e for e in events if e.id not in executed]
        return ApplyPreview(
            count=len(eligible),
            total_events=len(events),
            already_executed=len(executed),
            event_type_name=type_names,
            events=[
                ApplyPreviewEvent(id=e.id, client_name=e.title, event_date=e.start_date)
                for e in eligible[: self.preview_limit]
            ],
        )

    @traced("workflow.apply_to_existing")
    async def apply(
        self,
        tenant_id: str,
        workflow_id: str,
        *,
        force: bool = False,
        user_id: str | None = None,
    ) -> ApplyOutcome:
        """Run the workflow for every eligible future event, one at a time."""
        workflow = await self._get_workflow(tenant_id, workflow_id)
        if not workflow.is_active:
            raise WorkflowInactiveException(workflow_id)
        if not workflow.event_type_ids:
            return ApplyOutcome(
                success=False, processed=0, failed=0, message=NO_EVENT_TYPES_MESSAGE
            )

        events = await self._future_events(tenant_id, workflow)
        if not events:
            return ApplyOutcome(
                success=True,
                processed=0,
                failed=0,
                message="No future events to process",
            )

        executed: set[str] = set()
        if not force:
            executed = await self._completed_event_ids(tenant_id, workflow_id, events)
        eligible = [e for e in events if e.id not in executed]
        logger.info(
            "Applying workflow %s to %d event(s) (%d already executed, force=%s)",
            workflow_id,
            len(eligible),
            len(executed),
            force,
        )
        add_span_attributes(eligible_events=len(eligible), skipped_events=len(executed))

        processed = 0
        failed = 0
        results: list[ApplyEventResult] = []
        for event in eligible:
            try:
                run = await self.workflow_engine.execute_workflow(workflow, event, user_id)
            except PROGRAMMING_ERRORS:
                raise
            except Exception as e:
                logger.exception(
                    "Applying workflow %s to event %s failed", workflow_id, event.id
                )
                failed += 1
                results.append(
                    ApplyEventResult(
                        event_id=event.id,
                        client_name=event.title,
                        event_date=event.start_date,
                        success=False,
                        error=str(e),
                    )
                )
                continue

            if run.status in {s.value for s in WorkflowExecutionStatus.executed()}:
                processed += 1
                results.append(
                    ApplyEventResult(
                        event_id=event.id,
                        client_name=event.title,
                        event_date=event.start_date,
                        success=True,
                        tasks_created=len(run.created_task_ids),
                        design_items_created=len(run.created_design_item_ids),
                    )
                )
            else:
                failed += 1
                results.append(
                    ApplyEventResult(
                        event_id=event.id,
                        client_name=event.title,
                        event_date=event.start_date,
                        success=False,
                        error=run.error_message or "Unknown error",
                    )
                )

        logger.info(
            "Applied workflow %s: processed=%d failed=%d", workflow_id, processed, failed
        )
        return ApplyOutcome(
            success=True,
            processed=processed,
            failed=failed,
            skipped=len(executed),
            total_events=len(events),
            results=results,
            message=None if eligible else "All matching events already have this workflow applied",
        )
