"""Tenant context middleware for RLS.

Sets the current tenant id from X-Tenant-ID or the bearer token so that
database sessions can run SET LOCAL app.current_tenant_id.
"""

from __future__ import annotations

import logging
from typing import Callable

from eventops.core.config import get_settings
from eventops.core.tenant_context import current_tenant_id
from eventops.infrastructure.security.jwt import verify_token
from eventops.middleware._headers import get_header

logger = logging.getLogger(__name__)


def tenant_id_from_scope(scope: dict) -> str | None:
    """Return tenant_id from the tenant header or the JWT payload."""
    settings = get_settings()
    tenant_id = get_header(scope, settings.tenant_header_name)
    if tenant_id:
        return tenant_id.strip() or None
    auth = get_header(scope, "Authorization")
    if auth and auth.startswith("Bearer "):
        try:
            payload = verify_token(auth[7:].strip())
        except ValueError:
            # Auth dependency rejects the token; no tenant context here.
            logger.debug("Tenant context: bearer token rejected")
            return None
        return payload.get("tenant_id")
    return None


def TenantContextMiddleware(app: Callable) -> Callable:
    """Set tenant context for the duration of the request. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        token = current_tenant_id.set(tenant_id_from_scope(scope))
        try:
            await app(scope, receive, send)
        finally:
            current_tenant_id.reset(token)

    return asgi_app
