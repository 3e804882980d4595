"""WorkflowActionExecutor with mocked repositories (no database session)."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest
from factories import (
    action_result,
    design_item_result,
    design_item_type_result,
    event_result,
    task_result,
    task_template_result,
    workflow_result,
)

from eventops.application.dtos.workflow import ActionOutcome
from eventops.infrastructure.services.workflow_actions import (
    ActionContext,
    WorkflowActionExecutor,
)
from eventops.shared.utils.datetime import utc_today


@pytest.fixture
def repos():
    task_template_repo = AsyncMock()
    task_template_repo.get_by_id_and_tenant = AsyncMock(return_value=task_template_result())
    task_repo = AsyncMock()
    task_repo.create_task = AsyncMock(return_value=task_result())
    design_item_type_repo = AsyncMock()
    design_item_type_repo.get_by_id_and_tenant = AsyncMock(
        return_value=design_item_type_result()
    )
    design_item_repo = AsyncMock()
    design_item_repo.create_design_item = AsyncMock(return_value=design_item_result())
    return task_template_repo, task_repo, design_item_type_repo, design_item_repo


@pytest.fixture
def executor(repos) -> WorkflowActionExecutor:
    task_template_repo, task_repo, design_item_type_repo, design_item_repo = repos
    return WorkflowActionExecutor(
        None,
        task_template_repo=task_template_repo,
        task_repo=task_repo,
        design_item_type_repo=design_item_type_repo,
        design_item_repo=design_item_repo,
    )


def _ctx(event=None, user_id: str | None = "u1") -> ActionContext:
    return ActionContext(
        tenant_id="t1",
        workflow=workflow_result(),
        event=event or event_result(),
        user_id=user_id,
    )


async def test_create_task_uses_template_defaults(executor, repos) -> None:
    _, task_repo, _, _ = repos

    outcome = await executor.execute(action_result(), _ctx())

    assert outcome.success is True
    assert outcome.created_task_id == "task1"
    kwargs = task_repo.create_task.call_args.kwargs
    assert kwargs["title"] == "Kickoff call"
    assert kwargs["priority"] == "high"
    assert kwargs["due_date"] == utc_today() + timedelta(days=3)
    assert kwargs["entity_type"] == "event"
    assert kwargs["entity_id"] == "ev1"
    assert kwargs["assigned_to"] == "u2"
    assert kwargs["auto_created"] is True
    assert kwargs["workflow_id"] == "wf1"
    assert kwargs["created_by"] == "u1"


async def test_create_task_config_overrides_due_days(executor, repos) -> None:
    _, task_repo, _, _ = repos

    await executor.execute(action_result(config={"due_in_days": "10"}), _ctx())

    assert task_repo.create_task.call_args.kwargs["due_date"] == utc_today() + timedelta(days=10)


async def test_create_task_title_falls_back_to_template_name(executor, repos) -> None:
    template_repo, task_repo, _, _ = repos
    template_repo.get_by_id_and_tenant = AsyncMock(
        return_value=task_template_result(default_title=None, default_due_in_days=None)
    )

    await executor.execute(action_result(), _ctx(user_id=None))

    kwargs = task_repo.create_task.call_args.kwargs
    assert kwargs["title"] == "Call client"
    assert kwargs["due_date"] is None
    assert kwargs["created_by"] == "u2"


async def test_create_task_without_assignee_fails(executor, repos) -> None:
    _, task_repo, _, _ = repos

    outcome = await executor.execute(action_result(assigned_to_user_id=None), _ctx())

    assert outcome.success is False
    assert outcome.error == "Assigned user is required"
    task_repo.create_task.assert_not_awaited()


async def test_create_task_missing_template_fails(executor, repos) -> None:
    template_repo, _, _, _ = repos
    template_repo.get_by_id_and_tenant = AsyncMock(return_value=None)

    outcome = await executor.execute(action_result(), _ctx())

    assert outcome.success is False
    assert outcome.error == "Task template not found: tpl1"


async def test_invalid_config_value_fails_action(executor) -> None:
    outcome = await executor.execute(action_result(config={"due_in_days": "soon"}), _ctx())
    assert outcome.success is False
    assert outcome.error == "config.due_in_days must be an integer"


async def test_create_design_item_schedules_from_event_date(executor, repos) -> None:
    _, _, _, design_item_repo = repos
    action = action_result(
        action_type="create_design_item",
        task_template_id=None,
        design_item_type_id="dit1",
        assigned_to_user_id=None,
    )

    outcome = await executor.execute(action, _ctx(event_result(start_date=date(2030, 6, 30))))

    assert outcome.success is True
    assert outcome.created_design_item_id == "di1"
    kwargs = design_item_repo.create_design_item.call_args.kwargs
    assert kwargs["item_name"] == "Invitations"
    assert kwargs["description"] == "Auto-created from workflow: Wedding kickoff"
    assert kwargs["schedule"].design_deadline == date(2030, 6, 13)
    assert kwargs["schedule"].shipping_deadline == date(2030, 6, 30)


async def test_create_design_item_config_overrides_lead_times(executor, repos) -> None:
    _, _, _, design_item_repo = repos
    action = action_result(
        action_type="create_design_item",
        design_item_type_id="dit1",
        config={"design_days": 1, "production_days": 0, "shipping_days": 0, "approval_buffer_days": 0},
    )

    await executor.execute(action, _ctx(event_result(start_date=date(2030, 6, 30))))

    schedule = design_item_repo.create_design_item.call_args.kwargs["schedule"]
    assert schedule.design_deadline == date(2030, 6, 29)
    assert schedule.design_start_date == date(2030, 6, 28)


async def test_create_design_item_needs_event_date(executor, repos) -> None:
    _, _, _, design_item_repo = repos
    action = action_result(action_type="create_design_item", design_item_type_id="dit1")

    outcome = await executor.execute(action, _ctx(event_result(start_date=None)))

    assert outcome.success is False
    assert "no start date" in outcome.error
    design_item_repo.create_design_item.assert_not_awaited()


async def test_unknown_action_type_is_a_failed_outcome(executor) -> None:
    outcome = await executor.execute(action_result(action_type="send_email"), _ctx())
    assert outcome == ActionOutcome(
        action_id="a1",
        action_type="send_email",
        success=False,
        error="Unknown action type: send_email",
    )


async def test_repository_error_is_caught(executor, repos) -> None:
    _, task_repo, _, _ = repos
    task_repo.create_task = AsyncMock(side_effect=RuntimeError("insert failed"))

    outcome = await executor.execute(action_result(), _ctx())

    assert outcome.success is False
    assert outcome.error == "insert failed"


async def test_registered_handler_is_used(executor) -> None:
    async def _notify(action, ctx):
        return ActionOutcome(action_id=action.id, action_type=action.action_type, success=True)

    assert executor.supports("notify") is False
    executor.register("notify", _notify)

    outcome = await executor.execute(action_result(action_type="notify"), _ctx())

    assert executor.supports("notify") is True
    assert outcome.success is True
