"""Event type, task template and design item type endpoints."""

from unittest.mock import AsyncMock

import pytest
from factories import design_item_type_result, event_type_result, task_template_result
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from eventops.api.v1.dependencies import (
    get_design_item_type_repo,
    get_design_item_type_repo_for_write,
    get_event_type_repo,
    get_event_type_repo_for_write,
    get_task_template_repo,
    get_task_template_repo_for_write,
)

HEADERS = {"X-Tenant-ID": "tenant-test-1"}


def _override(app, read_dep, write_dep, repo) -> None:
    app.dependency_overrides[read_dep] = lambda: repo
    app.dependency_overrides[write_dep] = lambda: repo


@pytest.fixture
def event_type_repo(app, as_user):
    repo = AsyncMock()
    repo.get_by_name = AsyncMock(return_value=None)
    repo.create_event_type = AsyncMock(return_value=event_type_result())
    repo.list_by_tenant = AsyncMock(return_value=[event_type_result()])
    _override(app, get_event_type_repo, get_event_type_repo_for_write, repo)
    return repo


@pytest.fixture
def task_template_repo(app, as_user):
    repo = AsyncMock()
    repo.create_template = AsyncMock(return_value=task_template_result())
    repo.update_template = AsyncMock(return_value=task_template_result(enabled=False))
    repo.list_by_tenant = AsyncMock(return_value=[task_template_result()])
    _override(app, get_task_template_repo, get_task_template_repo_for_write, repo)
    return repo


@pytest.fixture
def design_item_type_repo(app, as_user):
    repo = AsyncMock()
    repo.create_type = AsyncMock(return_value=design_item_type_result())
    repo.update_type = AsyncMock(return_value=design_item_type_result(is_active=False))
    repo.list_by_tenant = AsyncMock(return_value=[design_item_type_result()])
    _override(app, get_design_item_type_repo, get_design_item_type_repo_for_write, repo)
    return repo


async def test_create_event_type(client: AsyncClient, event_type_repo) -> None:
    response = await client.post(
        "/api/v1/event-types", json={"name": "Wedding"}, headers=HEADERS
    )
    assert response.status_code == 201
    assert response.json()["name"] == "Wedding"
    event_type_repo.create_event_type.assert_awaited_once_with(
        "tenant-test-1", name="Wedding", description=None, is_active=True
    )


async def test_duplicate_event_type_is_409(client: AsyncClient, event_type_repo) -> None:
    event_type_repo.get_by_name = AsyncMock(return_value=event_type_result())
    response = await client.post(
        "/api/v1/event-types", json={"name": "Wedding"}, headers=HEADERS
    )
    assert response.status_code == 409
    event_type_repo.create_event_type.assert_not_awaited()


async def test_list_event_types(client: AsyncClient, event_type_repo) -> None:
    response = await client.get(
        "/api/v1/event-types", params={"include_inactive": "false"}, headers=HEADERS
    )
    assert response.status_code == 200
    event_type_repo.list_by_tenant.assert_awaited_once_with(
        "tenant-test-1", include_inactive=False
    )


async def test_create_task_template(client: AsyncClient, task_template_repo) -> None:
    response = await client.post(
        "/api/v1/task-templates",
        json={"name": "Call client", "default_priority": "high", "default_due_in_days": 3},
        headers=HEADERS,
    )
    assert response.status_code == 201
    fields = task_template_repo.create_template.call_args.args[1]
    assert fields["default_priority"] == "high"
    assert fields["enabled"] is True


async def test_create_task_template_invalid_priority(client: AsyncClient, task_template_repo) -> None:
    response = await client.post(
        "/api/v1/task-templates",
        json={"name": "Call client", "default_priority": "whenever"},
        headers=HEADERS,
    )
    assert response.status_code == 422


async def test_duplicate_task_template_is_409(client: AsyncClient, task_template_repo) -> None:
    task_template_repo.create_template = AsyncMock(
        side_effect=IntegrityError("INSERT", {}, Exception("unique"))
    )
    response = await client.post(
        "/api/v1/task-templates", json={"name": "Call client"}, headers=HEADERS
    )
    assert response.status_code == 409


async def test_update_task_template_sends_only_set_fields(
    client: AsyncClient, task_template_repo
) -> None:
    response = await client.patch(
        "/api/v1/task-templates/tpl1", json={"enabled": False}, headers=HEADERS
    )
    assert response.status_code == 200
    assert response.json()["enabled"] is False
    task_template_repo.update_template.assert_awaited_once_with(
        "tpl1", "tenant-test-1", {"enabled": False}
    )


async def test_update_missing_task_template_is_404(client: AsyncClient, task_template_repo) -> None:
    task_template_repo.update_template = AsyncMock(return_value=None)
    response = await client.patch(
        "/api/v1/task-templates/nope", json={"enabled": False}, headers=HEADERS
    )
    assert response.status_code == 404


async def test_create_design_item_type(client: AsyncClient, design_item_type_repo) -> None:
    response = await client.post(
        "/api/v1/design-item-types",
        json={"name": "Invitations", "type": "physical", "default_design_days": 5},
        headers=HEADERS,
    )
    assert response.status_code == 201
    assert response.json()["type"] == "physical"


async def test_list_design_item_types(client: AsyncClient, design_item_type_repo) -> None:
    response = await client.get("/api/v1/design-item-types", headers=HEADERS)
    assert response.status_code == 200
    design_item_type_repo.list_by_tenant.assert_awaited_once_with(
        "tenant-test-1", include_inactive=False
    )


async def test_staff_cannot_update_design_item_types(
    client: AsyncClient, design_item_type_repo, as_user
) -> None:
    as_user("staff")
    response = await client.patch(
        "/api/v1/design-item-types/dit1", json={"is_active": False}, headers=HEADERS
    )
    assert response.status_code == 403
    design_item_type_repo.update_type.assert_not_awaited()
