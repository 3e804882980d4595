"""Workflow engine: run matching workflows for an event (implements IWorkflowEngine).

Each workflow run gets its own savepoint when a session is given. A run that
errors is rolled back and replaced by a failed execution record, so the next
workflow (and the caller's transaction) stays usable.
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.event import EventResult
from eventops.application.dtos.workflow import (
    ActionOutcome,
    WorkflowResult,
    WorkflowRunResult,
)
from eventops.application.interfaces.repositories import (
    IDesignItemRepository,
    IEventRepository,
    ITaskRepository,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from eventops.application.services.condition_evaluator import (
    ConditionsEvaluation,
    evaluate_conditions,
)
from eventops.domain.entities.workflow import final_execution_status
from eventops.domain.exceptions import PROGRAMMING_ERRORS, ResourceNotFoundException
from eventops.infrastructure.services.workflow_actions import (
    ActionContext,
    WorkflowActionExecutor,
)
from eventops.shared.enums import WorkflowExecutionStatus
from eventops.shared.telemetry.logging import get_logger
from eventops.shared.telemetry.tracing import TracedOperation

logger = get_logger(__name__)

CONDITIONS_NOT_MET = "Conditions not met"


def _evaluate(
    workflow: WorkflowResult, event: EventResult
) -> tuple[ConditionsEvaluation, list[dict[str, Any]] | None]:
    evaluation = evaluate_conditions(workflow.conditions, event.to_condition_context())
    return evaluation, evaluation.to_dicts() if workflow.conditions else None


class WorkflowEngine:
    """Finds workflows for an event and runs their actions in order."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        execution_repo: IWorkflowExecutionRepository,
        event_repo: IEventRepository,
        action_executor: WorkflowActionExecutor,
        task_repo: ITaskRepository,
        design_item_repo: IDesignItemRepository,
        db: AsyncSession | None = None,
    ) -> None:
        self.workflow_repo = workflow_repo
        self.execution_repo = execution_repo
        self.event_repo = event_repo
        self.action_executor = action_executor
        self.task_repo = task_repo
        self.design_item_repo = design_item_repo
        self.db = db

    def _savepoint(self) -> Any:
        if self.db is None:
            return nullcontext()
        return self.db.begin_nested()

    async def execute_workflows_for_event(
        self, tenant_id: str, event_id: str, user_id: str | None = None
    ) -> list[WorkflowRunResult]:
        """Run each matching workflow that has not completed for this event yet.

        Everything happens inside one savepoint, so an error that escapes
        leaves the caller's transaction clean.
        """
        async with self._savepoint():
            return await self._execute_for_event(tenant_id, event_id, user_id)

    async def _execute_for_event(
        self, tenant_id: str, event_id: str, user_id: str | None
    ) -> list[WorkflowRunResult]:
        executed_statuses = {s.value for s in WorkflowExecutionStatus.executed()}
        existing = await self.execution_repo.get_for_entity(tenant_id, event_id)
        already_executed = {
            e.workflow_id for e in existing if e.status in executed_statuses
        }

        event = await self.event_repo.get_by_id_and_tenant(event_id, tenant_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)

        workflows = await self.workflow_repo.get_matching(tenant_id, event.event_type_id)
        runs: list[WorkflowRunResult] = []
        for workflow in workflows:
            if not workflow.to_entity().can_trigger_on(event.event_type_id):
                continue
            if workflow.id in already_executed:
                logger.debug(
                    "Workflow %s already executed for event %s; skipping",
                    workflow.id,
                    event.id,
                )
                continue
            runs.append(await self.execute_workflow(workflow, event, user_id))
        return runs

    async def execute_workflow(
        self,
        workflow: WorkflowResult,
        event: EventResult,
        user_id: str | None = None,
    ) -> WorkflowRunResult:
        """Evaluate conditions, then run the workflow's actions against the event.

        Does not check for earlier executions; callers decide idempotency.
        Unexpected errors come back as a failed run; programming errors raise.
        """
        attributes = {
            "workflow.id": workflow.id,
            "event.id": event.id,
            "tenant.id": workflow.tenant_id,
        }
        async with TracedOperation("workflow.execute", attributes) as op:
            try:
                async with self._savepoint():
                    run = await self._execute(workflow, event, user_id)
            except PROGRAMMING_ERRORS:
                raise
            except Exception as e:
                logger.exception(
                    "Workflow %s execution failed (tenant_id=%s, event_id=%s)",
                    workflow.id,
                    workflow.tenant_id,
                    event.id,
                )
                run = await self._record_failure(workflow, event, user_id, e)
            if op.span is not None:
                op.span.set_attribute("workflow.status", run.status)
            return run

    async def _record_failure(
        self,
        workflow: WorkflowResult,
        event: EventResult,
        user_id: str | None,
        error: Exception,
    ) -> WorkflowRunResult:
        message = str(error) or type(error).__name__
        _, condition_results = _evaluate(workflow, event)
        execution_id: str | None = None
        try:
            async with self._savepoint():
                record = await self.execution_repo.record_failed(
                    workflow.tenant_id,
                    workflow.id,
                    event.id,
                    executed_by=user_id,
                    error_message=message,
                    condition_results=condition_results,
                )
            execution_id = record.id
        except SQLAlchemyError:
            logger.exception(
                "Could not record failed execution for workflow %s (event_id=%s)",
                workflow.id,
                event.id,
            )
        return WorkflowRunResult(
            workflow_id=workflow.id,
            workflow_name=workflow.name,
            execution_id=execution_id,
            status=WorkflowExecutionStatus.FAILED.value,
            error_message=message,
        )

    async def _execute(
        self,
        workflow: WorkflowResult,
        event: EventResult,
        user_id: str | None,
    ) -> WorkflowRunResult:
        tenant_id = workflow.tenant_id
        evaluation, condition_results = _evaluate(workflow, event)

        if not evaluation.passed:
            record = await self.execution_repo.record_skipped(
                tenant_id,
                workflow.id,
                event.id,
                executed_by=user_id,
                condition_results=condition_results or [],
            )
            logger.info(
                "Workflow %s skipped for event %s: conditions not met",
                workflow.id,
                event.id,
            )
            return WorkflowRunResult(
                workflow_id=workflow.id,
                workflow_name=workflow.name,
                execution_id=record.id,
                status=WorkflowExecutionStatus.SKIPPED.value,
                error_message=CONDITIONS_NOT_MET,
            )

        execution = await self.execution_repo.start_execution(
            tenant_id,
            workflow.id,
            event.id,
            executed_by=user_id,
            condition_results=condition_results,
        )

        outcomes = await self._run_actions(workflow, event, user_id)
        task_ids = [o.created_task_id for o in outcomes if o.created_task_id]
        design_item_ids = [
            o.created_design_item_id for o in outcomes if o.created_design_item_id
        ]
        await self.task_repo.link_execution(task_ids, execution.id)
        await self.design_item_repo.link_execution(design_item_ids, execution.id)

        successful = sum(1 for o in outcomes if o.success)
        failed = len(outcomes) - successful
        status = final_execution_status(successful, failed).value
        error_details: list[dict[str, Any]] = [
            {"action_id": o.action_id, "action_type": o.action_type, "error": o.error}
            for o in outcomes
            if not o.success
        ]
        error_message = error_details[0]["error"] if error_details else None
        if not outcomes:
            error_message = "Workflow has no actions"

        await self.execution_repo.finish_execution(
            execution.id,
            status=status,
            actions_executed=len(outcomes),
            actions_successful=successful,
            actions_failed=failed,
            created_task_ids=task_ids,
            created_design_item_ids=design_item_ids,
            error_message=error_message,
            error_details=error_details,
        )
        logger.info(
            "Workflow %s ran for event %s: status=%s, successful=%d, failed=%d",
            workflow.id,
            event.id,
            status,
            successful,
            failed,
        )
        return WorkflowRunResult(
            workflow_id=workflow.id,
            workflow_name=workflow.name,
            execution_id=execution.id,
            status=status,
            actions_executed=len(outcomes),
            actions_successful=successful,
            actions_failed=failed,
            created_task_ids=task_ids,
            created_design_item_ids=design_item_ids,
            error_message=error_message,
        )

    async def _run_actions(
        self,
        workflow: WorkflowResult,
        event: EventResult,
        user_id: str | None,
    ) -> list[ActionOutcome]:
        ctx = ActionContext(
            tenant_id=workflow.tenant_id, workflow=workflow, event=event, user_id=user_id
        )
        outcomes: list[ActionOutcome] = []
        for action in sorted(workflow.actions, key=lambda a: a.execution_order):
            outcomes.append(await self.action_executor.execute(action, ctx))
        return outcomes
