"""Event type API: the kinds of events workflows attach to."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from eventops.api.v1.dependencies import (
    get_event_type_repo,
    get_event_type_repo_for_write,
    get_tenant_id,
    require_permission,
)
from eventops.core.limiter import limit_writes
from eventops.domain.exceptions import DuplicateResourceException
from eventops.infrastructure.persistence.repositories import EventTypeRepository
from eventops.schemas.event import EventTypeCreateRequest, EventTypeResponse

router = APIRouter()


@router.get("", response_model=list[EventTypeResponse])
async def list_event_types(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_type_repo: EventTypeRepository = Depends(get_event_type_repo),
    include_inactive: bool = Query(True),
    _: Annotated[object, Depends(require_permission("event_type", "read"))] = None,
):
    """List event types for the tenant, ordered by name."""
    items = await event_type_repo.list_by_tenant(tenant_id, include_inactive=include_inactive)
    return [EventTypeResponse.model_validate(i) for i in items]


@router.post("", response_model=EventTypeResponse, status_code=201)
@limit_writes
async def create_event_type(
    request: Request,
    body: EventTypeCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_type_repo: EventTypeRepository = Depends(get_event_type_repo_for_write),
    _: Annotated[object, Depends(require_permission("event_type", "create"))] = None,
):
    """Create an event type; names are unique per tenant."""
    if await event_type_repo.get_by_name(tenant_id, body.name):
        raise DuplicateResourceException("event_type", body.name)
    created = await event_type_repo.create_event_type(
        tenant_id,
        name=body.name,
        description=body.description,
        is_active=body.is_active,
    )
    return EventTypeResponse.model_validate(created)
