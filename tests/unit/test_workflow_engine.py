"""WorkflowEngine with mocked repositories and action executor."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import action_result, event_result, execution_result, workflow_result
from sqlalchemy.exc import OperationalError

from eventops.application.dtos.workflow import ActionOutcome
from eventops.domain.exceptions import ResourceNotFoundException
from eventops.infrastructure.services.workflow_engine import (
    CONDITIONS_NOT_MET,
    WorkflowEngine,
)


def _ok(action_id: str = "a1", task_id: str | None = "task1") -> ActionOutcome:
    return ActionOutcome(
        action_id=action_id, action_type="create_task", success=True, created_task_id=task_id
    )


def _failed(action_id: str = "a2", error: str = "boom") -> ActionOutcome:
    return ActionOutcome(
        action_id=action_id, action_type="create_task", success=False, error=error
    )


@pytest.fixture
def engine_mocks():
    workflow_repo = AsyncMock()
    workflow_repo.get_matching = AsyncMock(return_value=[workflow_result()])
    execution_repo = AsyncMock()
    execution_repo.get_for_entity = AsyncMock(return_value=[])
    execution_repo.start_execution = AsyncMock(return_value=execution_result(status="running"))
    execution_repo.record_skipped = AsyncMock(return_value=execution_result("ex-skip", status="skipped"))
    execution_repo.record_failed = AsyncMock(return_value=execution_result("ex-failed", status="failed"))
    event_repo = AsyncMock()
    event_repo.get_by_id_and_tenant = AsyncMock(return_value=event_result())
    executor = MagicMock()
    executor.execute = AsyncMock(return_value=_ok())
    task_repo = AsyncMock()
    design_item_repo = AsyncMock()
    engine = WorkflowEngine(
        workflow_repo=workflow_repo,
        execution_repo=execution_repo,
        event_repo=event_repo,
        action_executor=executor,
        task_repo=task_repo,
        design_item_repo=design_item_repo,
    )
    return engine, workflow_repo, execution_repo, event_repo, executor, task_repo


async def test_runs_matching_workflow_and_records_completion(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, executor, task_repo = engine_mocks

    runs = await engine.execute_workflows_for_event("t1", "ev1", "u1")

    assert len(runs) == 1
    run = runs[0]
    assert run.status == "completed"
    assert run.execution_id == "ex1"
    assert run.created_task_ids == ["task1"]
    workflow_repo.get_matching.assert_awaited_once_with("t1", "et1")
    execution_repo.start_execution.assert_awaited_once_with(
        "t1", "wf1", "ev1", executed_by="u1", condition_results=None
    )
    task_repo.link_execution.assert_awaited_once_with(["task1"], "ex1")
    finish = execution_repo.finish_execution.call_args
    assert finish.args == ("ex1",)
    assert finish.kwargs["status"] == "completed"
    assert finish.kwargs["actions_executed"] == 1
    assert finish.kwargs["actions_successful"] == 1
    assert finish.kwargs["error_message"] is None


async def test_event_not_found_raises(engine_mocks) -> None:
    engine, _, _, event_repo, _, _ = engine_mocks
    event_repo.get_by_id_and_tenant = AsyncMock(return_value=None)

    with pytest.raises(ResourceNotFoundException):
        await engine.execute_workflows_for_event("t1", "missing")


async def test_skips_workflow_already_completed_for_event(engine_mocks) -> None:
    engine, _, execution_repo, _, executor, _ = engine_mocks
    execution_repo.get_for_entity = AsyncMock(
        return_value=[execution_result(status="partial")]
    )

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert runs == []
    executor.execute.assert_not_awaited()
    execution_repo.start_execution.assert_not_awaited()


async def test_reruns_workflow_after_failed_or_skipped_execution(engine_mocks) -> None:
    engine, _, execution_repo, _, _, _ = engine_mocks
    execution_repo.get_for_entity = AsyncMock(
        return_value=[
            execution_result("ex-a", status="failed"),
            execution_result("ex-b", status="skipped"),
        ]
    )

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert [r.status for r in runs] == ["completed"]


async def test_ignores_workflow_not_applicable_to_event_type(engine_mocks) -> None:
    engine, workflow_repo, _, _, executor, _ = engine_mocks
    workflow_repo.get_matching = AsyncMock(
        return_value=[workflow_result(event_type_ids=["other"]), workflow_result(is_active=False)]
    )

    assert await engine.execute_workflows_for_event("t1", "ev1") == []
    executor.execute.assert_not_awaited()


async def test_conditions_not_met_records_skipped(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, executor, _ = engine_mocks
    conditions = [{"field": "event.status", "operator": "equals", "value": "confirmed"}]
    workflow_repo.get_matching = AsyncMock(
        return_value=[workflow_result(conditions=conditions)]
    )

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert runs[0].status == "skipped"
    assert runs[0].error_message == CONDITIONS_NOT_MET
    assert runs[0].execution_id == "ex-skip"
    executor.execute.assert_not_awaited()
    execution_repo.start_execution.assert_not_awaited()
    results = execution_repo.record_skipped.call_args.kwargs["condition_results"]
    assert results[0]["passed"] is False
    assert results[0]["actual_value"] == "scheduled"


async def test_conditions_met_are_recorded_on_execution(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, _, _ = engine_mocks
    conditions = [{"field": "event.status", "operator": "equals", "value": "scheduled"}]
    workflow_repo.get_matching = AsyncMock(
        return_value=[workflow_result(conditions=conditions)]
    )

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert runs[0].status == "completed"
    results = execution_repo.start_execution.call_args.kwargs["condition_results"]
    assert results[0]["passed"] is True


async def test_actions_run_in_execution_order(engine_mocks) -> None:
    engine, workflow_repo, _, _, executor, _ = engine_mocks
    workflow_repo.get_matching = AsyncMock(
        return_value=[
            workflow_result(
                actions=[
                    action_result("late", execution_order=2),
                    action_result("early", execution_order=0),
                    action_result("middle", execution_order=1),
                ]
            )
        ]
    )

    await engine.execute_workflows_for_event("t1", "ev1")

    order = [c.args[0].id for c in executor.execute.await_args_list]
    assert order == ["early", "middle", "late"]


async def test_mixed_outcomes_are_partial(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, executor, _ = engine_mocks
    workflow_repo.get_matching = AsyncMock(
        return_value=[
            workflow_result(
                actions=[action_result("a1", execution_order=0), action_result("a2", execution_order=1)]
            )
        ]
    )
    executor.execute = AsyncMock(side_effect=[_ok(), _failed()])

    (run,) = await engine.execute_workflows_for_event("t1", "ev1")

    assert run.status == "partial"
    assert run.actions_successful == 1
    assert run.actions_failed == 1
    assert run.error_message == "boom"
    finish = execution_repo.finish_execution.call_args.kwargs
    assert finish["error_details"] == [
        {"action_id": "a2", "action_type": "create_task", "error": "boom"}
    ]


async def test_all_actions_failed_is_failed(engine_mocks) -> None:
    engine, _, _, _, executor, task_repo = engine_mocks
    executor.execute = AsyncMock(return_value=_failed("a1", "nope"))

    (run,) = await engine.execute_workflows_for_event("t1", "ev1")

    assert run.status == "failed"
    assert run.error_message == "nope"
    task_repo.link_execution.assert_awaited_once_with([], "ex1")


async def test_workflow_without_actions_fails(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, _, _ = engine_mocks
    workflow_repo.get_matching = AsyncMock(return_value=[workflow_result(actions=[])])

    (run,) = await engine.execute_workflows_for_event("t1", "ev1")

    assert run.status == "failed"
    assert run.error_message == "Workflow has no actions"
    assert execution_repo.finish_execution.call_args.kwargs["actions_executed"] == 0


async def test_unexpected_error_marks_execution_failed(engine_mocks) -> None:
    engine, _, execution_repo, _, _, task_repo = engine_mocks
    task_repo.link_execution = AsyncMock(side_effect=RuntimeError("link failed"))

    (run,) = await engine.execute_workflows_for_event("t1", "ev1", "u1")

    assert run.status == "failed"
    assert run.error_message == "link failed"
    assert run.execution_id == "ex-failed"
    execution_repo.finish_execution.assert_not_awaited()
    execution_repo.record_failed.assert_awaited_once_with(
        "t1",
        "wf1",
        "ev1",
        executed_by="u1",
        error_message="link failed",
        condition_results=None,
    )


async def test_next_workflow_runs_after_unexpected_error(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, _, task_repo = engine_mocks
    workflow_repo.get_matching = AsyncMock(
        return_value=[workflow_result("wf1"), workflow_result("wf2", name="Follow-up")]
    )
    execution_repo.start_execution = AsyncMock(
        side_effect=[
            execution_result("ex1", status="running"),
            execution_result("ex2", workflow_id="wf2", status="running"),
        ]
    )
    task_repo.link_execution = AsyncMock(side_effect=[RuntimeError("link failed"), None])

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert [(r.workflow_id, r.status) for r in runs] == [
        ("wf1", "failed"),
        ("wf2", "completed"),
    ]
    assert execution_repo.start_execution.await_count == 2
    execution_repo.finish_execution.assert_awaited_once()
    assert execution_repo.finish_execution.call_args.args == ("ex2",)


async def test_programming_error_is_not_converted_to_failed_run(engine_mocks) -> None:
    engine, _, execution_repo, _, _, task_repo = engine_mocks
    task_repo.link_execution = AsyncMock(side_effect=TypeError("bad call"))

    with pytest.raises(TypeError):
        await engine.execute_workflows_for_event("t1", "ev1")
    execution_repo.record_failed.assert_not_awaited()


class _RecordingSavepoint:
    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def __aenter__(self):
        self.log.append("begin")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.log.append("rollback" if exc_type else "release")
        return False


class _RecordingSession:
    def __init__(self) -> None:
        self.log: list[str] = []

    def begin_nested(self) -> _RecordingSavepoint:
        return _RecordingSavepoint(self.log)


async def test_failed_run_is_rolled_back_to_its_own_savepoint(engine_mocks) -> None:
    engine, workflow_repo, execution_repo, _, _, task_repo = engine_mocks
    session = _RecordingSession()
    engine.db = session
    workflow_repo.get_matching = AsyncMock(
        return_value=[workflow_result("wf1"), workflow_result("wf2", name="Follow-up")]
    )
    task_repo.link_execution = AsyncMock(side_effect=[RuntimeError("link failed"), None])

    runs = await engine.execute_workflows_for_event("t1", "ev1")

    assert [r.status for r in runs] == ["failed", "completed"]
    assert session.log == [
        "begin",  # whole trigger
        "begin",  # wf1
        "rollback",
        "begin",  # failed record for wf1
        "release",
        "begin",  # wf2
        "release",
        "release",
    ]


async def test_unrecordable_failure_still_returns_failed_run(engine_mocks) -> None:
    engine, _, execution_repo, _, _, task_repo = engine_mocks
    task_repo.link_execution = AsyncMock(side_effect=RuntimeError("link failed"))
    execution_repo.record_failed = AsyncMock(
        side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
    )

    (run,) = await engine.execute_workflows_for_event("t1", "ev1")

    assert run.status == "failed"
    assert run.execution_id is None
    assert run.error_message == "link failed"


async def test_execute_workflow_does_not_check_previous_runs(engine_mocks) -> None:
    engine, _, execution_repo, _, _, _ = engine_mocks

    run = await engine.execute_workflow(workflow_result(), event_result(), "u1")

    assert run.status == "completed"
    execution_repo.get_for_entity.assert_not_awaited()
