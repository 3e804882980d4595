"""Event endpoints: creation runs workflows; related tasks, design items and executions."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from factories import design_item_result, event_result, execution_result, task_result
from httpx import AsyncClient

from eventops.api.v1.dependencies import (
    get_design_item_repo,
    get_event_repo,
    get_event_service,
    get_task_repo,
    get_workflow_execution_repo,
)
from eventops.application.dtos.workflow import WorkflowRunResult
from eventops.domain.exceptions import ResourceNotFoundException

HEADERS = {"X-Tenant-ID": "tenant-test-1"}


@pytest.fixture
def event_service(app, as_user):
    service = AsyncMock()
    service.create_event = AsyncMock(
        return_value=(
            event_result(),
            [
                WorkflowRunResult(
                    workflow_id="wf1",
                    workflow_name="Kickoff",
                    execution_id="ex1",
                    status="completed",
                    actions_executed=1,
                    actions_successful=1,
                    created_task_ids=["task1"],
                )
            ],
        )
    )
    app.dependency_overrides[get_event_service] = lambda: service
    return service


@pytest.fixture
def read_repos(app, as_user):
    event_repo = AsyncMock()
    event_repo.get_by_id_and_tenant = AsyncMock(return_value=event_result())
    event_repo.list_by_tenant = AsyncMock(return_value=[event_result()])
    task_repo = AsyncMock()
    task_repo.list_for_entity = AsyncMock(return_value=[task_result()])
    design_item_repo = AsyncMock()
    design_item_repo.list_for_event = AsyncMock(return_value=[design_item_result()])
    execution_repo = AsyncMock()
    execution_repo.get_for_entity = AsyncMock(return_value=[execution_result()])
    app.dependency_overrides[get_event_repo] = lambda: event_repo
    app.dependency_overrides[get_task_repo] = lambda: task_repo
    app.dependency_overrides[get_design_item_repo] = lambda: design_item_repo
    app.dependency_overrides[get_workflow_execution_repo] = lambda: execution_repo
    return event_repo, task_repo, design_item_repo, execution_repo


async def test_create_event_returns_workflow_runs(client: AsyncClient, event_service) -> None:
    response = await client.post(
        "/api/v1/events",
        json={
            "event_type_id": "et1",
            "title": "Smith Wedding",
            "start_date": "2030-06-01",
            "details": {"guests": 120},
        },
        headers=HEADERS,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "ev1"
    assert data["workflow_runs"][0]["status"] == "completed"
    assert data["workflow_runs"][0]["created_task_ids"] == ["task1"]
    args = event_service.create_event.call_args
    assert args.args[0] == "tenant-test-1"
    assert args.args[1].start_date == date(2030, 6, 1)
    assert args.args[1].details == {"guests": 120}
    assert args.kwargs["user_id"] == "user-1"


async def test_staff_can_create_events(client: AsyncClient, event_service, as_user) -> None:
    as_user("staff")
    response = await client.post(
        "/api/v1/events", json={"event_type_id": "et1", "title": "Gala"}, headers=HEADERS
    )
    assert response.status_code == 201


async def test_create_event_end_before_start_is_422(client: AsyncClient, event_service) -> None:
    response = await client.post(
        "/api/v1/events",
        json={
            "event_type_id": "et1",
            "title": "Gala",
            "start_date": "2030-06-02",
            "end_date": "2030-06-01",
        },
        headers=HEADERS,
    )
    assert response.status_code == 422
    event_service.create_event.assert_not_awaited()


async def test_create_event_unknown_type_is_404(client: AsyncClient, event_service) -> None:
    event_service.create_event = AsyncMock(
        side_effect=ResourceNotFoundException("event_type", "et9")
    )
    response = await client.post(
        "/api/v1/events", json={"event_type_id": "et9", "title": "Gala"}, headers=HEADERS
    )
    assert response.status_code == 404


async def test_list_events(client: AsyncClient, read_repos) -> None:
    event_repo, _, _, _ = read_repos

    response = await client.get(
        "/api/v1/events", params={"event_type_id": "et1", "limit": 10}, headers=HEADERS
    )

    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == ["ev1"]
    event_repo.list_by_tenant.assert_awaited_once_with(
        "tenant-test-1", skip=0, limit=10, event_type_id="et1"
    )


async def test_get_missing_event_is_404(client: AsyncClient, read_repos) -> None:
    event_repo, _, _, _ = read_repos
    event_repo.get_by_id_and_tenant = AsyncMock(return_value=None)

    response = await client.get("/api/v1/events/nope", headers=HEADERS)

    assert response.status_code == 404


async def test_event_tasks(client: AsyncClient, read_repos) -> None:
    _, task_repo, _, _ = read_repos

    response = await client.get("/api/v1/events/ev1/tasks", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()[0]["auto_created"] is True
    task_repo.list_for_entity.assert_awaited_once_with("tenant-test-1", "event", "ev1")


async def test_event_design_items(client: AsyncClient, read_repos) -> None:
    response = await client.get("/api/v1/events/ev1/design-items", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()[0]["item_name"] == "Invitations"


async def test_event_workflow_executions(client: AsyncClient, read_repos) -> None:
    response = await client.get("/api/v1/events/ev1/workflow-executions", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()[0]["trigger_entity_id"] == "ev1"


async def test_related_lists_for_missing_event_are_404(client: AsyncClient, read_repos) -> None:
    event_repo, task_repo, _, _ = read_repos
    event_repo.get_by_id_and_tenant = AsyncMock(return_value=None)

    response = await client.get("/api/v1/events/nope/tasks", headers=HEADERS)

    assert response.status_code == 404
    task_repo.list_for_entity.assert_not_awaited()
