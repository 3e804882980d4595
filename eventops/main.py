"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. See
eventops.core.lifespan and eventops.core.exception_handlers.

Settings are loaded inside create_app() so tests can set env (and clear the
get_settings cache) before calling it. Run with:
uvicorn eventops.main:app
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from eventops.api.v1.router import api_router
from eventops.core.config import get_settings
from eventops.core.exception_handlers import register_exception_handlers
from eventops.core.lifespan import create_lifespan
from eventops.core.limiter import limiter
from eventops.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    TenantContextMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: request ID -> correlation ID -> tenant -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TenantContextMiddleware)
    app.add_middleware(
        CorrelationIDMiddleware,
        header_name=settings.correlation_id_header,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
