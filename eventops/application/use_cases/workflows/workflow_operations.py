"""Workflow definition operations: create, get, list, update, delete, toggle, validate."""

from __future__ import annotations

from dataclasses import replace

from eventops.application.dtos.workflow import (
    WorkflowActionCreate,
    WorkflowCreate,
    WorkflowExecutionResult,
    WorkflowResult,
    WorkflowUpdate,
    WorkflowValidationResult,
)
from eventops.application.interfaces.repositories import (
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from eventops.application.services.workflow_validator import (
    WorkflowValidator,
    resolve_execution_order,
)
from eventops.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
    WorkflowValidationException,
)
from eventops.shared.enums import WorkflowTriggerType
from eventops.shared.telemetry.logging import get_logger
from eventops.shared.telemetry.tracing import traced

logger = get_logger(__name__)


class WorkflowService:
    """Manages workflow definitions (tenant-scoped). Validates references before writing."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        execution_repo: IWorkflowExecutionRepository,
        validator: WorkflowValidator,
    ) -> None:
        self.workflow_repo = workflow_repo
        self.execution_repo = execution_repo
        self.validator = validator

    async def validate_workflow(
        self,
        tenant_id: str,
        data: WorkflowCreate,
        actions: list[WorkflowActionCreate],
    ) -> WorkflowValidationResult:
        """Dry-run validation; never raises for invalid input."""
        return await self.validator.validate(
            tenant_id, data.event_type_ids, actions, data.conditions
        )

    @traced("workflow.create")
    async def create_workflow(
        self,
        tenant_id: str,
        data: WorkflowCreate,
        actions: list[WorkflowActionCreate],
        user_id: str | None = None,
    ) -> WorkflowResult:
        """Validate, insert the workflow, then its actions.

        If inserting actions fails, the workflow row is deleted again and the
        original error propagates.
        """
        if not data.name or not data.name.strip():
            raise ValidationException("Workflow name is required", "name")
        if data.trigger_type != WorkflowTriggerType.EVENT_CREATED.value:
            raise ValidationException(
                f"Unsupported trigger type: {data.trigger_type}", "trigger_type"
            )
        actions = resolve_execution_order(actions)
        validation = await self.validate_workflow(tenant_id, data, actions)
        if not validation.valid:
            raise WorkflowValidationException(validation.errors, validation.warnings)
        if await self.workflow_repo.get_by_name(tenant_id, data.name.strip()):
            raise DuplicateResourceException("workflow", data.name.strip())

        workflow = await self.workflow_repo.create_workflow(
            tenant_id, replace(data, name=data.name.strip()), user_id
        )
        try:
            created_actions = await self.workflow_repo.add_actions(workflow.id, actions)
        except Exception:
            logger.exception(
                "Failed to create actions for workflow %s; removing workflow",
                workflow.id,
            )
            try:
                await self.workflow_repo.delete_workflow(workflow.id, tenant_id)
            except Exception:
                logger.exception("Could not remove workflow %s", workflow.id)
            raise
        logger.info(
            "Created workflow %s (%s) with %d action(s)",
            workflow.id,
            workflow.name,
            len(created_actions),
        )
        return replace(workflow, actions=created_actions)

    async def get_workflow(
        self, tenant_id: str, workflow_id: str, include_stats: bool = False
    ) -> WorkflowResult:
        """Return workflow with actions; raise ResourceNotFoundException if missing."""
        workflow = await self.workflow_repo.get_by_id_and_tenant(workflow_id, tenant_id)
        if not workflow:
            raise ResourceNotFoundException("workflow", workflow_id)
        if include_stats:
            stats = await self.execution_repo.get_stats(tenant_id, workflow_id)
            workflow = replace(workflow, stats=stats)
        return workflow

    async def list_workflows(
        self,
        tenant_id: str,
        is_active: bool | None = None,
        event_type_id: str | None = None,
    ) -> list[WorkflowResult]:
        return await self.workflow_repo.list_by_tenant(
            tenant_id, is_active=is_active, event_type_id=event_type_id
        )

    @traced("workflow.update")
    async def update_workflow(
        self,
        tenant_id: str,
        workflow_id: str,
        patch: WorkflowUpdate,
        actions: list[WorkflowActionCreate] | None = None,
    ) -> WorkflowResult:
        """Partial update; a given actions list replaces the existing actions."""
        current = await self.get_workflow(tenant_id, workflow_id)
        if actions is not None:
            actions = resolve_execution_order(actions)

        if patch.name is not None:
            name = patch.name.strip()
            if not name:
                raise ValidationException("Workflow name is required", "name")
            if name != current.name:
                existing = await self.workflow_repo.get_by_name(tenant_id, name)
                if existing and existing.id != workflow_id:
                    raise DuplicateResourceException("workflow", name)
            patch = replace(patch, name=name)

        touches_definition = (
            patch.event_type_ids is not None
            or patch.conditions is not None
            or actions is not None
        )
        if touches_definition:
            effective_actions = (
                actions
                if actions is not None
                else [
                    WorkflowActionCreate(
                        action_type=a.action_type,
                        execution_order=a.execution_order,
                        task_template_id=a.task_template_id,
                        design_item_type_id=a.design_item_type_id,
                        assigned_to_user_id=a.assigned_to_user_id,
                        config=a.config,
                    )
                    for a in current.actions
                ]
            )
            validation = await self.validator.validate(
                tenant_id,
                patch.event_type_ids
                if patch.event_type_ids is not None
                else current.event_type_ids,
                effective_actions,
                patch.conditions if patch.conditions is not None else current.conditions,
            )
            if not validation.valid:
                raise WorkflowValidationException(validation.errors, validation.warnings)

        updated = await self.workflow_repo.update_workflow(workflow_id, tenant_id, patch)
        if not updated:
            raise ResourceNotFoundException("workflow", workflow_id)
        if actions is not None:
            new_actions = await self.workflow_repo.replace_actions(workflow_id, actions)
            updated = replace(updated, actions=new_actions)
        return updated

    async def set_active(
        self, tenant_id: str, workflow_id: str, is_active: bool
    ) -> WorkflowResult:
        """Toggle a workflow on or off."""
        updated = await self.workflow_repo.update_workflow(
            workflow_id, tenant_id, WorkflowUpdate(is_active=is_active)
        )
        if not updated:
            raise ResourceNotFoundException("workflow", workflow_id)
        logger.info("Workflow %s is_active=%s", workflow_id, is_active)
        return updated

    async def delete_workflow(self, tenant_id: str, workflow_id: str) -> None:
        """Hard delete; actions and execution records go with it."""
        deleted = await self.workflow_repo.delete_workflow(workflow_id, tenant_id)
        if not deleted:
            raise ResourceNotFoundException("workflow", workflow_id)

    async def list_executions(
        self, tenant_id: str, workflow_id: str, skip: int = 0, limit: int = 50
    ) -> list[WorkflowExecutionResult]:
        await self.get_workflow(tenant_id, workflow_id)
        return await self.execution_repo.list_by_workflow(
            tenant_id, workflow_id, skip=skip, limit=limit
        )
