"""Login and tenant/auth dependency behaviour with mocked repositories."""

from unittest.mock import AsyncMock

import pytest
from factories import TEST_TENANT_ID, make_user
from httpx import AsyncClient

from eventops.api.v1.dependencies import (
    get_event_type_repo,
    get_tenant_repo,
    get_user_repo,
    get_workflow_service,
)
from eventops.application.dtos.user import TenantResult
from eventops.infrastructure.security.jwt import create_access_token, verify_token


@pytest.fixture
def auth_repos(app):
    tenant_repo = AsyncMock()
    tenant = TenantResult(id=TEST_TENANT_ID, code="acme", name="Acme", status="active")
    tenant_repo.get_by_code = AsyncMock(return_value=tenant)
    tenant_repo.get_by_id = AsyncMock(return_value=tenant)
    user_repo = AsyncMock()
    user_repo.authenticate = AsyncMock(return_value=make_user("manager"))
    user_repo.get_by_id_and_tenant = AsyncMock(return_value=make_user("manager"))
    app.dependency_overrides[get_tenant_repo] = lambda: tenant_repo
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_event_type_repo] = lambda: AsyncMock()
    app.dependency_overrides[get_workflow_service] = lambda: AsyncMock()
    return tenant_repo, user_repo


async def test_login_returns_token(client: AsyncClient, auth_repos) -> None:
    _, user_repo = auth_repos
    response = await client.post(
        "/api/v1/auth/login",
        json={"tenant_code": "acme", "username": "tester", "password": "password123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    payload = verify_token(data["access_token"])
    assert payload["sub"] == "user-1"
    assert payload["tenant_id"] == TEST_TENANT_ID
    assert payload["role"] == "manager"
    user_repo.authenticate.assert_awaited_once_with(
        tenant_id=TEST_TENANT_ID, username="tester", password="password123"
    )


async def test_login_bad_password(client: AsyncClient, auth_repos) -> None:
    _, user_repo = auth_repos
    user_repo.authenticate = AsyncMock(return_value=None)
    response = await client.post(
        "/api/v1/auth/login",
        json={"tenant_code": "acme", "username": "tester", "password": "password123"},
    )
    assert response.status_code == 401


async def test_login_unknown_tenant(client: AsyncClient, auth_repos) -> None:
    tenant_repo, user_repo = auth_repos
    tenant_repo.get_by_code = AsyncMock(return_value=None)
    response = await client.post(
        "/api/v1/auth/login",
        json={"tenant_code": "nope", "username": "tester", "password": "password123"},
    )
    assert response.status_code == 401
    user_repo.authenticate.assert_not_awaited()


async def test_login_short_password_is_422(client: AsyncClient, auth_repos) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"tenant_code": "acme", "username": "tester", "password": "short"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_protected_route_without_token_is_401(client: AsyncClient, auth_repos) -> None:
    response = await client.get("/api/v1/workflows", headers={"X-Tenant-ID": TEST_TENANT_ID})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_missing_tenant_header_is_400(client: AsyncClient, auth_repos) -> None:
    response = await client.get("/api/v1/event-types")
    assert response.status_code == 400
    assert "X-Tenant-ID" in response.json()["message"]


async def test_inactive_tenant_is_400(client: AsyncClient, auth_repos) -> None:
    tenant_repo, _ = auth_repos
    tenant_repo.get_by_id = AsyncMock(
        return_value=TenantResult(id=TEST_TENANT_ID, code="acme", name="Acme", status="suspended")
    )
    response = await client.get("/api/v1/event-types", headers={"X-Tenant-ID": TEST_TENANT_ID})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or unknown tenant"


async def test_token_for_other_tenant_is_403(client: AsyncClient, auth_repos) -> None:
    _, user_repo = auth_repos
    user_repo.get_by_id_and_tenant = AsyncMock(return_value=make_user(tenant_id="other"))
    token = create_access_token({"sub": "user-1", "tenant_id": "other", "role": "admin"})

    response = await client.get(
        "/api/v1/event-types",
        headers={"X-Tenant-ID": TEST_TENANT_ID, "Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 403
