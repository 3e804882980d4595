"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from eventops.api.v1.dependencies.
"""

from fastapi import APIRouter

from eventops.api.v1.endpoints import (
    auth,
    design_item_types,
    event_types,
    events,
    health,
    task_templates,
    workflows,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(event_types.router, prefix="/event-types", tags=["event-types"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(
    task_templates.router, prefix="/task-templates", tags=["task-templates"]
)
api_router.include_router(
    design_item_types.router, prefix="/design-item-types", tags=["design-item-types"]
)
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
