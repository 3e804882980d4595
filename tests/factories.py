"""Builders for application DTOs used across unit and API tests."""

from datetime import date, datetime, timezone
from typing import Any

from eventops.application.dtos.design_item import DesignItemResult, DesignItemTypeResult
from eventops.application.dtos.event import EventResult, EventTypeResult
from eventops.application.dtos.task import TaskResult, TaskTemplateResult
from eventops.application.dtos.user import UserResult
from eventops.application.dtos.workflow import (
    WorkflowActionResult,
    WorkflowExecutionResult,
    WorkflowResult,
)

TENANT = "t1"
CREATED_AT = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def event_result(
    event_id: str = "ev1",
    event_type_id: str = "et1",
    start_date: date | None = date(2030, 6, 1),
    status: str = "scheduled",
    title: str = "Smith Wedding",
    details: dict[str, Any] | None = None,
) -> EventResult:
    return EventResult(
        id=event_id,
        tenant_id=TENANT,
        event_type_id=event_type_id,
        title=title,
        status=status,
        start_date=start_date,
        end_date=None,
        account_id=None,
        contact_id=None,
        location="Hall A",
        details=details or {},
        created_by="u1",
        created_at=CREATED_AT,
    )


def event_type_result(event_type_id: str = "et1", name: str = "Wedding") -> EventTypeResult:
    return EventTypeResult(
        id=event_type_id, tenant_id=TENANT, name=name, description=None, is_active=True
    )


def action_result(
    action_id: str = "a1",
    action_type: str = "create_task",
    execution_order: int = 0,
    task_template_id: str | None = "tpl1",
    design_item_type_id: str | None = None,
    assigned_to_user_id: str | None = "u2",
    config: dict[str, Any] | None = None,
    workflow_id: str = "wf1",
) -> WorkflowActionResult:
    return WorkflowActionResult(
        id=action_id,
        workflow_id=workflow_id,
        action_type=action_type,
        execution_order=execution_order,
        task_template_id=task_template_id,
        design_item_type_id=design_item_type_id,
        assigned_to_user_id=assigned_to_user_id,
        config=config or {},
    )


def workflow_result(
    workflow_id: str = "wf1",
    name: str = "Wedding kickoff",
    is_active: bool = True,
    event_type_ids: list[str] | None = None,
    conditions: list[dict[str, Any]] | None = None,
    actions: list[WorkflowActionResult] | None = None,
) -> WorkflowResult:
    return WorkflowResult(
        id=workflow_id,
        tenant_id=TENANT,
        name=name,
        description=None,
        is_active=is_active,
        trigger_type="event_created",
        event_type_ids=["et1"] if event_type_ids is None else event_type_ids,
        conditions=conditions or [],
        created_by="u1",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
        actions=[action_result()] if actions is None else actions,
    )


def execution_result(
    execution_id: str = "ex1",
    workflow_id: str = "wf1",
    event_id: str = "ev1",
    status: str = "completed",
) -> WorkflowExecutionResult:
    return WorkflowExecutionResult(
        id=execution_id,
        tenant_id=TENANT,
        workflow_id=workflow_id,
        trigger_type="event_created",
        trigger_entity_type="event",
        trigger_entity_id=event_id,
        status=status,
        started_at=CREATED_AT,
        completed_at=CREATED_AT,
        actions_executed=1,
        actions_successful=1,
        actions_failed=0,
        error_message=None,
        error_details=None,
        created_task_ids=[],
        created_design_item_ids=[],
        conditions_evaluated=False,
        conditions_passed=None,
        condition_results=None,
        executed_by=None,
    )


def task_template_result(
    template_id: str = "tpl1",
    name: str = "Call client",
    default_title: str | None = "Kickoff call",
    default_due_in_days: int | None = 3,
    enabled: bool = True,
) -> TaskTemplateResult:
    return TaskTemplateResult(
        id=template_id,
        tenant_id=TENANT,
        name=name,
        default_title=default_title,
        default_description="Discuss the plan",
        default_priority="high",
        default_due_in_days=default_due_in_days,
        department="sales",
        task_type="call",
        enabled=enabled,
    )


def task_result(task_id: str = "task1", entity_id: str = "ev1") -> TaskResult:
    return TaskResult(
        id=task_id,
        tenant_id=TENANT,
        title="Kickoff call",
        description=None,
        priority="high",
        status="pending",
        due_date=None,
        entity_type="event",
        entity_id=entity_id,
        assigned_to="u2",
        department="sales",
        task_type="call",
        auto_created=True,
        workflow_id="wf1",
        workflow_execution_id=None,
        created_by="u1",
        created_at=CREATED_AT,
    )


def design_item_type_result(
    type_id: str = "dit1",
    name: str = "Invitations",
    kind: str = "physical",
    is_active: bool = True,
) -> DesignItemTypeResult:
    return DesignItemTypeResult(
        id=type_id,
        tenant_id=TENANT,
        name=name,
        description=None,
        type=kind,
        category="print",
        default_design_days=5,
        default_production_days=7,
        default_shipping_days=3,
        client_approval_buffer_days=2,
        requires_approval=True,
        is_active=is_active,
        display_order=0,
    )


def design_item_result(item_id: str = "di1", event_id: str = "ev1") -> DesignItemResult:
    return DesignItemResult(
        id=item_id,
        tenant_id=TENANT,
        event_id=event_id,
        design_item_type_id="dit1",
        item_name="Invitations",
        description=None,
        quantity=1,
        status="pending",
        assigned_designer_id=None,
        design_start_date=None,
        design_deadline=None,
        production_start_date=None,
        shipping_start_date=None,
        shipping_deadline=None,
        auto_created=True,
        workflow_id="wf1",
        workflow_execution_id=None,
        created_at=CREATED_AT,
    )


TEST_TENANT_ID = "tenant-test-1"


def make_user(role: str = "admin", tenant_id: str = TEST_TENANT_ID) -> UserResult:
    return UserResult(
        id="user-1",
        tenant_id=tenant_id,
        username="tester",
        email="tester@example.com",
        role=role,
        is_active=True,
    )
