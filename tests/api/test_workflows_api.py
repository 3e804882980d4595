"""Workflow endpoints with the service layer mocked out."""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from factories import execution_result, workflow_result
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from eventops.api.v1.dependencies import (
    get_apply_preview_use_case,
    get_apply_use_case,
    get_workflow_service,
    get_workflow_service_for_write,
)
from eventops.application.dtos.workflow import (
    ApplyEventResult,
    ApplyOutcome,
    ApplyPreview,
    ApplyPreviewEvent,
    WorkflowStats,
    WorkflowUpdate,
    WorkflowValidationResult,
)
from eventops.domain.exceptions import (
    ResourceNotFoundException,
    WorkflowInactiveException,
    WorkflowValidationException,
)

HEADERS = {"X-Tenant-ID": "tenant-test-1"}

WORKFLOW_BODY = {
    "name": "Wedding kickoff",
    "event_type_ids": ["et1"],
    "conditions": [{"field": "event.status", "operator": "equals", "value": "confirmed"}],
    "actions": [
        {"action_type": "create_task", "task_template_id": "tpl1", "assigned_to_user_id": "u2"},
        {"action_type": "create_design_item", "design_item_type_id": "dit1", "config": {"design_days": 3}},
    ],
}


@pytest.fixture
def svc(app, as_user):
    service = AsyncMock()
    app.dependency_overrides[get_workflow_service] = lambda: service
    app.dependency_overrides[get_workflow_service_for_write] = lambda: service
    return service


@pytest.fixture
def apply_use_case(app, as_user):
    use_case = AsyncMock()
    app.dependency_overrides[get_apply_preview_use_case] = lambda: use_case
    app.dependency_overrides[get_apply_use_case] = lambda: use_case
    return use_case


async def test_create_workflow(client: AsyncClient, svc) -> None:
    svc.create_workflow = AsyncMock(return_value=workflow_result())

    response = await client.post("/api/v1/workflows", json=WORKFLOW_BODY, headers=HEADERS)

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "wf1"
    assert data["actions"][0]["action_type"] == "create_task"
    assert data["stats"] is None
    args = svc.create_workflow.call_args
    assert args.args[0] == "tenant-test-1"
    assert args.args[1].trigger_type == "event_created"
    assert args.args[1].conditions == WORKFLOW_BODY["conditions"]
    assert [a.action_type for a in args.args[2]] == ["create_task", "create_design_item"]
    assert args.args[2][1].config == {"design_days": 3}
    assert args.kwargs["user_id"] == "user-1"


async def test_create_workflow_validation_errors_are_400(client: AsyncClient, svc) -> None:
    svc.create_workflow = AsyncMock(
        side_effect=WorkflowValidationException(["Event type not found: et1"], ["w"])
    )

    response = await client.post("/api/v1/workflows", json=WORKFLOW_BODY, headers=HEADERS)

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "WORKFLOW_VALIDATION_ERROR"
    assert data["details"]["errors"] == ["Event type not found: et1"]
    assert data["details"]["warnings"] == ["w"]


async def test_create_workflow_constraint_violation_is_409(client: AsyncClient, svc) -> None:
    svc.create_workflow = AsyncMock(
        side_effect=IntegrityError("INSERT INTO workflow_action", {}, Exception("uq_workflow_action_order"))
    )

    response = await client.post("/api/v1/workflows", json=WORKFLOW_BODY, headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["error"] == "RESOURCE_CONFLICT"


async def test_update_workflow_constraint_violation_is_409(client: AsyncClient, svc) -> None:
    svc.update_workflow = AsyncMock(
        side_effect=IntegrityError("INSERT INTO workflow_action", {}, Exception("uq_workflow_action_order"))
    )

    response = await client.patch(
        "/api/v1/workflows/wf1",
        json={"actions": WORKFLOW_BODY["actions"]},
        headers=HEADERS,
    )

    assert response.status_code == 409


@pytest.mark.parametrize("trigger_type", ["event_updated", "task_created", "task_status_changed"])
async def test_create_workflow_unknown_trigger_is_422(
    client: AsyncClient, svc, trigger_type: str
) -> None:
    body = {**WORKFLOW_BODY, "trigger_type": trigger_type}
    response = await client.post("/api/v1/workflows", json=body, headers=HEADERS)
    assert response.status_code == 422
    svc.create_workflow.assert_not_awaited()


async def test_staff_cannot_create_workflows(client: AsyncClient, svc, as_user) -> None:
    as_user("staff")

    response = await client.post("/api/v1/workflows", json=WORKFLOW_BODY, headers=HEADERS)

    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"
    svc.create_workflow.assert_not_awaited()


async def test_validate_workflow_dry_run(client: AsyncClient, svc) -> None:
    svc.validate_workflow = AsyncMock(
        return_value=WorkflowValidationResult(errors=["At least one action is required"])
    )

    response = await client.post("/api/v1/workflows/validate", json=WORKFLOW_BODY, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "errors": ["At least one action is required"],
        "warnings": [],
    }


async def test_list_workflows_passes_filters(client: AsyncClient, svc) -> None:
    svc.list_workflows = AsyncMock(return_value=[workflow_result(), workflow_result("wf2")])

    response = await client.get(
        "/api/v1/workflows", params={"is_active": "true", "event_type_id": "et1"}, headers=HEADERS
    )

    assert response.status_code == 200
    assert [w["id"] for w in response.json()] == ["wf1", "wf2"]
    svc.list_workflows.assert_awaited_once_with("tenant-test-1", is_active=True, event_type_id="et1")


async def test_get_workflow_with_stats(client: AsyncClient, svc) -> None:
    svc.get_workflow = AsyncMock(
        return_value=replace(workflow_result(), stats=WorkflowStats(total_executions=2))
    )

    response = await client.get(
        "/api/v1/workflows/wf1", params={"include_stats": "true"}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()["stats"]["total_executions"] == 2
    svc.get_workflow.assert_awaited_once_with("tenant-test-1", "wf1", include_stats=True)


async def test_get_missing_workflow_is_404(client: AsyncClient, svc) -> None:
    svc.get_workflow = AsyncMock(side_effect=ResourceNotFoundException("workflow", "nope"))

    response = await client.get("/api/v1/workflows/nope", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["details"] == {"resource_type": "workflow", "resource_id": "nope"}


async def test_patch_is_active_only_toggles(client: AsyncClient, svc) -> None:
    svc.set_active = AsyncMock(return_value=workflow_result(is_active=False))

    response = await client.patch("/api/v1/workflows/wf1", json={"is_active": False}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    svc.set_active.assert_awaited_once_with("tenant-test-1", "wf1", False)
    svc.update_workflow.assert_not_awaited()


async def test_patch_updates_fields_and_replaces_actions(client: AsyncClient, svc) -> None:
    svc.update_workflow = AsyncMock(return_value=workflow_result(name="Renamed"))

    response = await client.patch(
        "/api/v1/workflows/wf1",
        json={"name": "Renamed", "is_active": True, "actions": WORKFLOW_BODY["actions"]},
        headers=HEADERS,
    )

    assert response.status_code == 200
    args = svc.update_workflow.call_args
    assert args.args[2] == WorkflowUpdate(name="Renamed", is_active=True)
    assert len(args.kwargs["actions"]) == 2


async def test_patch_without_actions_keeps_them(client: AsyncClient, svc) -> None:
    svc.update_workflow = AsyncMock(return_value=workflow_result())

    await client.patch("/api/v1/workflows/wf1", json={"description": "x"}, headers=HEADERS)

    assert svc.update_workflow.call_args.kwargs["actions"] is None


async def test_delete_workflow(client: AsyncClient, svc) -> None:
    response = await client.delete("/api/v1/workflows/wf1", headers=HEADERS)

    assert response.status_code == 204
    svc.delete_workflow.assert_awaited_once_with("tenant-test-1", "wf1")


async def test_list_executions(client: AsyncClient, svc) -> None:
    svc.list_executions = AsyncMock(return_value=[execution_result()])

    response = await client.get(
        "/api/v1/workflows/wf1/executions", params={"limit": 5}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()[0]["status"] == "completed"
    svc.list_executions.assert_awaited_once_with("tenant-test-1", "wf1", skip=0, limit=5)


async def test_preview_apply_to_existing(client: AsyncClient, apply_use_case) -> None:
    apply_use_case.preview = AsyncMock(
        return_value=ApplyPreview(
            count=1,
            total_events=2,
            already_executed=1,
            event_type_name="Wedding",
            events=[ApplyPreviewEvent(id="ev1", client_name="Smith Wedding", event_date=None)],
        )
    )

    response = await client.get("/api/v1/workflows/wf1/apply-to-existing", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["events"][0]["client_name"] == "Smith Wedding"


async def test_apply_to_existing_passes_force(client: AsyncClient, apply_use_case) -> None:
    apply_use_case.apply = AsyncMock(
        return_value=ApplyOutcome(
            success=True,
            processed=1,
            failed=0,
            total_events=1,
            results=[
                ApplyEventResult(
                    event_id="ev1",
                    client_name="Smith Wedding",
                    event_date=None,
                    success=True,
                    tasks_created=2,
                )
            ],
        )
    )

    response = await client.post(
        "/api/v1/workflows/wf1/apply-to-existing", json={"force": True}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()["results"][0]["tasks_created"] == 2
    apply_use_case.apply.assert_awaited_once_with(
        "tenant-test-1", "wf1", force=True, user_id="user-1"
    )


async def test_apply_to_existing_without_body(client: AsyncClient, apply_use_case) -> None:
    apply_use_case.apply = AsyncMock(
        return_value=ApplyOutcome(success=True, processed=0, failed=0)
    )

    response = await client.post("/api/v1/workflows/wf1/apply-to-existing", headers=HEADERS)

    assert response.status_code == 200
    assert apply_use_case.apply.call_args.kwargs["force"] is False


async def test_apply_inactive_workflow_is_400(client: AsyncClient, apply_use_case) -> None:
    apply_use_case.apply = AsyncMock(side_effect=WorkflowInactiveException("wf1"))

    response = await client.post("/api/v1/workflows/wf1/apply-to-existing", headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot apply inactive workflow"
