"""Correlation ID middleware: forward the client's id or reuse the request id."""

import uuid
from typing import Callable

from eventops.middleware._headers import get_header
from eventops.middleware.request_id import sanitize_request_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward X-Correlation-ID; fall back to request_id on scope state. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name)
        correlation_id = sanitize_request_id(raw) if raw else None
        if not correlation_id:
            correlation_id = scope.get("state", {}).get("request_id") or str(uuid.uuid4())
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
