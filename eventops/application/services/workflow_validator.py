"""Workflow definition validation against tenant data.

Errors block create/update; warnings (disabled template, inactive design
item type) are returned to the caller but do not block.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from eventops.application.dtos.workflow import (
    WorkflowActionCreate,
    WorkflowValidationResult,
)
from eventops.application.interfaces.repositories import (
    IDesignItemTypeRepository,
    IEventTypeRepository,
    ITaskTemplateRepository,
    IUserRepository,
)
from eventops.application.services.condition_evaluator import validate_conditions
from eventops.shared.enums import WorkflowActionType


def resolve_execution_order(
    actions: Sequence[WorkflowActionCreate],
) -> list[WorkflowActionCreate]:
    """Fill a missing execution_order with the action's list index."""
    return [
        a if a.execution_order is not None else replace(a, execution_order=index)
        for index, a in enumerate(actions)
    ]


class WorkflowValidator:
    """Checks that event types, templates, design item types and assignees exist in the tenant."""

    def __init__(
        self,
        event_type_repo: IEventTypeRepository,
        task_template_repo: ITaskTemplateRepository,
        design_item_type_repo: IDesignItemTypeRepository,
        user_repo: IUserRepository,
    ) -> None:
        self.event_type_repo = event_type_repo
        self.task_template_repo = task_template_repo
        self.design_item_type_repo = design_item_type_repo
        self.user_repo = user_repo

    async def validate(
        self,
        tenant_id: str,
        event_type_ids: Sequence[str],
        actions: Sequence[WorkflowActionCreate],
        conditions: list | None = None,
    ) -> WorkflowValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        if not event_type_ids:
            errors.append("At least one event type is required")
        else:
            found = await self.event_type_repo.get_by_ids(tenant_id, set(event_type_ids))
            found_ids = {et.id for et in found}
            for event_type_id in event_type_ids:
                if event_type_id not in found_ids:
                    errors.append(f"Event type not found: {event_type_id}")

        errors.extend(validate_conditions(conditions))

        if not actions:
            errors.append("At least one action is required")

        for index, action in enumerate(actions):
            label = f"Action {index + 1}"
            if action.action_type == WorkflowActionType.CREATE_TASK.value:
                await self._check_task_action(tenant_id, label, action, errors, warnings)
            elif action.action_type == WorkflowActionType.CREATE_DESIGN_ITEM.value:
                await self._check_design_item_action(tenant_id, label, action, errors, warnings)
            else:
                errors.append(f"{label}: unknown action type '{action.action_type}'")

        orders = [a.execution_order for a in resolve_execution_order(actions)]
        if len(orders) != len(set(orders)):
            errors.append("Action execution_order values must be unique")

        return WorkflowValidationResult(errors=errors, warnings=warnings)

    async def _check_task_action(
        self,
        tenant_id: str,
        label: str,
        action: WorkflowActionCreate,
        errors: list[str],
        warnings: list[str],
    ) -> None:
        if not action.task_template_id:
            errors.append(f"{label}: task template is required")
        else:
            template = await self.task_template_repo.get_by_id_and_tenant(
                action.task_template_id, tenant_id
            )
            if template is None:
                errors.append(f"{label}: task template not found")
            elif not template.enabled:
                warnings.append(f"{label}: task template '{template.name}' is disabled")

        if not action.assigned_to_user_id:
            errors.append(f"{label}: assigned user is required")
        elif not await self.user_repo.get_by_id_and_tenant(
            action.assigned_to_user_id, tenant_id
        ):
            errors.append(f"{label}: assigned user not found")

    async def _check_design_item_action(
        self,
        tenant_id: str,
        label: str,
        action: WorkflowActionCreate,
        errors: list[str],
        warnings: list[str],
    ) -> None:
        if not action.design_item_type_id:
            errors.append(f"{label}: design item type is required")
        else:
            item_type = await self.design_item_type_repo.get_by_id_and_tenant(
                action.design_item_type_id, tenant_id
            )
            if item_type is None:
                errors.append(f"{label}: design item type not found")
            elif not item_type.is_active:
                warnings.append(f"{label}: design item type '{item_type.name}' is inactive")

        if action.assigned_to_user_id and not await self.user_repo.get_by_id_and_tenant(
            action.assigned_to_user_id, tenant_id
        ):
            errors.append(f"{label}: assigned designer not found")
