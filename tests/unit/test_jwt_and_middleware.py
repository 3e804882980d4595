"""JWT helpers, request id sanitizing and tenant context resolution."""

from datetime import timedelta

import pytest

from eventops.core.tenant_context import current_tenant_id
from eventops.core.tenant_validation import is_valid_tenant_id_format
from eventops.infrastructure.security.jwt import create_access_token, verify_token
from eventops.infrastructure.security.password import get_password_hash, verify_password
from eventops.middleware.request_id import sanitize_request_id
from eventops.middleware.tenant_context import TenantContextMiddleware, tenant_id_from_scope


def _scope(headers: dict[str, str]) -> dict:
    return {
        "type": "http",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }


def test_token_round_trip_keeps_claims() -> None:
    token = create_access_token({"sub": "u1", "tenant_id": "t1", "role": "staff"})
    payload = verify_token(token)
    assert payload["sub"] == "u1"
    assert payload["tenant_id"] == "t1"
    assert payload["role"] == "staff"


def test_expired_token_is_rejected() -> None:
    token = create_access_token(
        {"sub": "u1", "tenant_id": "t1"}, expires_delta=timedelta(seconds=-5)
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_without_tenant_is_rejected() -> None:
    token = create_access_token({"sub": "u1"})
    with pytest.raises(ValueError, match="tenant_id"):
        verify_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-jwt")


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("correct horse battery")
    assert verify_password("correct horse battery", hashed) is True
    assert verify_password("wrong password", hashed) is False


@pytest.mark.parametrize(
    ("raw", "kept"),
    [("abc-123_X", True), ("", False), (None, False), ("bad id!", False), ("x" * 65, False)],
)
def test_sanitize_request_id(raw, kept) -> None:
    result = sanitize_request_id(raw)
    assert (result == raw) is kept
    assert len(result) <= 64


@pytest.mark.parametrize(
    ("value", "valid"),
    [("tenant_1-a", True), ("", False), (None, False), ("a" * 65, False), ("t1'; --", False)],
)
def test_tenant_id_format(value, valid) -> None:
    assert is_valid_tenant_id_format(value) is valid


def test_tenant_from_header_wins_over_token() -> None:
    token = create_access_token({"sub": "u1", "tenant_id": "from-token"})
    scope = _scope({"X-Tenant-ID": " from-header ", "Authorization": f"Bearer {token}"})
    assert tenant_id_from_scope(scope) == "from-header"


def test_tenant_from_token() -> None:
    token = create_access_token({"sub": "u1", "tenant_id": "from-token"})
    assert tenant_id_from_scope(_scope({"Authorization": f"Bearer {token}"})) == "from-token"


def test_tenant_from_bad_token_is_none() -> None:
    assert tenant_id_from_scope(_scope({"Authorization": "Bearer nope"})) is None
    assert tenant_id_from_scope(_scope({})) is None


async def test_tenant_context_is_reset_after_request() -> None:
    seen: list[str | None] = []

    async def inner(scope, receive, send):
        seen.append(current_tenant_id.get())

    middleware = TenantContextMiddleware(inner)
    await middleware(_scope({"X-Tenant-ID": "t-ctx"}), None, None)

    assert seen == ["t-ctx"]
    assert current_tenant_id.get() is None
