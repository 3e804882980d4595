"""Role-based permission checks."""

import pytest

from eventops.application.services.authorization_service import AuthorizationService
from eventops.domain.exceptions import AuthorizationException


@pytest.fixture
def svc() -> AuthorizationService:
    return AuthorizationService()


def test_admin_has_every_permission(svc) -> None:
    assert svc.has_permission("admin", "workflow", "delete") is True
    assert svc.has_permission("admin", "anything", "whatever") is True


def test_manager_has_resource_wildcards(svc) -> None:
    assert svc.has_permission("manager", "workflow", "delete") is True
    assert svc.has_permission("manager", "tenant", "update") is False


def test_staff_can_create_events_but_not_workflows(svc) -> None:
    assert svc.has_permission("staff", "event", "create") is True
    assert svc.has_permission("staff", "workflow", "read") is True
    assert svc.has_permission("staff", "workflow", "create") is False


def test_unknown_role_has_no_permissions(svc) -> None:
    assert svc.get_role_permissions("guest") == frozenset()
    assert svc.has_permission("guest", "event", "read") is False


def test_require_permission_raises(svc) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        svc.require_permission("staff", "workflow", "update")
    assert exc_info.value.details == {"resource": "workflow", "action": "update"}


def test_custom_role_table() -> None:
    from eventops.domain.enums import UserRole

    svc = AuthorizationService({UserRole.STAFF: frozenset({"task:read"})})
    assert svc.has_permission("staff", "task", "read") is True
    assert svc.has_permission("staff", "event", "read") is False
