"""Workflow action executors: one handler per action type.

Each action runs inside a savepoint so a failing insert rolls back only that
action; the failure is reported as an ActionOutcome and the run continues.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.event import EventResult
from eventops.application.dtos.workflow import (
    ActionOutcome,
    WorkflowActionResult,
    WorkflowResult,
)
from eventops.application.interfaces.repositories import (
    IDesignItemRepository,
    IDesignItemTypeRepository,
    ITaskRepository,
    ITaskTemplateRepository,
)
from eventops.domain.entities.design_item import DesignSchedule
from eventops.domain.exceptions import WorkflowActionError
from eventops.shared.enums import (
    DesignItemStatus,
    TaskStatus,
    WorkflowActionType,
)
from eventops.shared.telemetry.logging import get_logger
from eventops.shared.utils.datetime import utc_today

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionContext:
    """What an action handler needs besides the action row itself."""

    tenant_id: str
    workflow: WorkflowResult
    event: EventResult
    user_id: str | None = None


ActionHandler = Callable[[WorkflowActionResult, ActionContext], Awaitable[ActionOutcome]]


def _config_days(config: dict[str, Any], key: str, default: int | None) -> int | None:
    """Day offset from action config, falling back to the catalog default."""
    if key not in config or config[key] is None:
        return default
    try:
        return int(config[key])
    except (TypeError, ValueError):
        raise WorkflowActionError("config", f"config.{key} must be an integer") from None


class WorkflowActionExecutor:
    """Registry of action handlers keyed by action_type."""

    def __init__(
        self,
        db: AsyncSession | None,
        task_template_repo: ITaskTemplateRepository,
        task_repo: ITaskRepository,
        design_item_type_repo: IDesignItemTypeRepository,
        design_item_repo: IDesignItemRepository,
    ) -> None:
        self.db = db
        self.task_template_repo = task_template_repo
        self.task_repo = task_repo
        self.design_item_type_repo = design_item_type_repo
        self.design_item_repo = design_item_repo
        self._handlers: dict[str, ActionHandler] = {
            WorkflowActionType.CREATE_TASK.value: self._create_task,
            WorkflowActionType.CREATE_DESIGN_ITEM.value: self._create_design_item,
        }

    def register(self, action_type: str, handler: ActionHandler) -> None:
        self._handlers[action_type] = handler

    def supports(self, action_type: str) -> bool:
        return action_type in self._handlers

    def _savepoint(self) -> Any:
        if self.db is None:
            return nullcontext()
        return self.db.begin_nested()

    async def execute(
        self, action: WorkflowActionResult, ctx: ActionContext
    ) -> ActionOutcome:
        """Run one action. Never raises; failures become a failed outcome."""
        handler = self._handlers.get(action.action_type)
        if handler is None:
            logger.warning(
                "Unknown workflow action type '%s' (workflow_id=%s, action_id=%s)",
                action.action_type,
                ctx.workflow.id,
                action.id,
            )
            return ActionOutcome(
                action_id=action.id,
                action_type=action.action_type,
                success=False,
                error=f"Unknown action type: {action.action_type}",
            )
        try:
            async with self._savepoint():
                return await handler(action, ctx)
        except WorkflowActionError as e:
            logger.info(
                "Workflow action %s failed (workflow_id=%s, event_id=%s): %s",
                action.action_type,
                ctx.workflow.id,
                ctx.event.id,
                e.message,
            )
            return ActionOutcome(
                action_id=action.id,
                action_type=action.action_type,
                success=False,
                error=e.message,
            )
        except Exception as e:
            logger.exception(
                "Workflow action %s raised (workflow_id=%s, action_id=%s, event_id=%s)",
                action.action_type,
                ctx.workflow.id,
                action.id,
                ctx.event.id,
            )
            return ActionOutcome(
                action_id=action.id,
                action_type=action.action_type,
                success=False,
                error=str(e) or e.__class__.__name__,
            )

    async def _create_task(
        self, action: WorkflowActionResult, ctx: ActionContext
    ) -> ActionOutcome:
        action_type = WorkflowActionType.CREATE_TASK.value
        if not action.task_template_id:
            raise WorkflowActionError(action_type, "Task template is required")
        if not action.assigned_to_user_id:
            raise WorkflowActionError(action_type, "Assigned user is required")

        template = await self.task_template_repo.get_by_id_and_tenant(
            action.task_template_id, ctx.tenant_id
        )
        if template is None:
            raise WorkflowActionError(
                action_type, f"Task template not found: {action.task_template_id}"
            )

        due_in_days = _config_days(
            action.config, "due_in_days", template.default_due_in_days
        )
        due_date = utc_today() + timedelta(days=due_in_days) if due_in_days is not None else None

        task = await self.task_repo.create_task(
            ctx.tenant_id,
            title=template.default_title or template.name,
            description=template.default_description,
            priority=template.default_priority,
            status=TaskStatus.PENDING.value,
            due_date=due_date,
            entity_type="event",
            entity_id=ctx.event.id,
            assigned_to=action.assigned_to_user_id,
            department=template.department,
            task_type=template.task_type,
            auto_created=True,
            workflow_id=ctx.workflow.id,
            created_by=ctx.user_id or action.assigned_to_user_id,
        )
        return ActionOutcome(
            action_id=action.id,
            action_type=action_type,
            success=True,
            created_task_id=task.id,
        )

    async def _create_design_item(
        self, action: WorkflowActionResult, ctx: ActionContext
    ) -> ActionOutcome:
        action_type = WorkflowActionType.CREATE_DESIGN_ITEM.value
        if not action.design_item_type_id:
            raise WorkflowActionError(action_type, "Design item type is required")
        if ctx.event.start_date is None:
            raise WorkflowActionError(
                action_type, "Event has no start date to schedule design items against"
            )

        item_type = await self.design_item_type_repo.get_by_id_and_tenant(
            action.design_item_type_id, ctx.tenant_id
        )
        if item_type is None:
            raise WorkflowActionError(
                action_type, f"Design item type not found: {action.design_item_type_id}"
            )

        config = action.config
        schedule = DesignSchedule.for_event(
            ctx.event.start_date,
            item_type.type,
            design_days=_config_days(config, "design_days", item_type.default_design_days) or 0,
            production_days=_config_days(
                config, "production_days", item_type.default_production_days
            ) or 0,
            shipping_days=_config_days(
                config, "shipping_days", item_type.default_shipping_days
            ) or 0,
            approval_buffer_days=_config_days(
                config, "approval_buffer_days", item_type.client_approval_buffer_days
            ) or 0,
        )
        item = await self.design_item_repo.create_design_item(
            ctx.tenant_id,
            event_id=ctx.event.id,
            design_item_type_id=item_type.id,
            item_name=item_type.name,
            description=f"Auto-created from workflow: {ctx.workflow.name}",
            quantity=1,
            status=DesignItemStatus.PENDING.value,
            assigned_designer_id=action.assigned_to_user_id,
            schedule=schedule,
            auto_created=True,
            workflow_id=ctx.workflow.id,
        )
        return ActionOutcome(
            action_id=action.id,
            action_type=action_type,
            success=True,
            created_design_item_id=item.id,
        )
