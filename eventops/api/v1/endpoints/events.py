"""Event API: create (runs matching workflows), list, get, and what workflows produced."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from eventops.api.v1.dependencies import (
    get_current_user,
    get_design_item_repo,
    get_event_repo,
    get_event_service,
    get_task_repo,
    get_tenant_id,
    get_workflow_execution_repo,
    require_permission,
)
from eventops.application.dtos.event import EventCreate
from eventops.application.dtos.user import UserResult
from eventops.application.use_cases.events import EventService
from eventops.core.limiter import limit_writes
from eventops.domain.exceptions import ResourceNotFoundException
from eventops.infrastructure.persistence.repositories import (
    DesignItemRepository,
    EventRepository,
    TaskRepository,
    WorkflowExecutionRepository,
)
from eventops.schemas.design_item import DesignItemResponse
from eventops.schemas.event import (
    EventCreateRequest,
    EventCreateResponse,
    EventResponse,
)
from eventops.schemas.task import TaskResponse
from eventops.schemas.workflow import WorkflowExecutionResponse, WorkflowRunResponse

router = APIRouter()


@router.post("", response_model=EventCreateResponse, status_code=201)
@limit_writes
async def create_event(
    request: Request,
    body: EventCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    current_user: Annotated[UserResult, Depends(get_current_user)],
    event_service: EventService = Depends(get_event_service),
    _: Annotated[object, Depends(require_permission("event", "create"))] = None,
):
    """Create an event and run the workflows that match its type."""
    created, runs = await event_service.create_event(
        tenant_id,
        EventCreate(**body.model_dump()),
        user_id=current_user.id,
    )
    return EventCreateResponse(
        **EventResponse.model_validate(created).model_dump(),
        workflow_runs=[WorkflowRunResponse.model_validate(r) for r in runs],
    )


@router.get("", response_model=list[EventResponse])
async def list_events(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_repo: EventRepository = Depends(get_event_repo),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    event_type_id: str | None = Query(None),
    _: Annotated[object, Depends(require_permission("event", "read"))] = None,
):
    """List events (soonest start date first)."""
    events = await event_repo.list_by_tenant(
        tenant_id, skip=skip, limit=limit, event_type_id=event_type_id
    )
    return [EventResponse.model_validate(e) for e in events]


async def _require_event(event_repo: EventRepository, event_id: str, tenant_id: str) -> None:
    if not await event_repo.get_by_id_and_tenant(event_id, tenant_id):
        raise ResourceNotFoundException("event", event_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_repo: EventRepository = Depends(get_event_repo),
    _: Annotated[object, Depends(require_permission("event", "read"))] = None,
):
    event = await event_repo.get_by_id_and_tenant(event_id, tenant_id)
    if not event:
        raise ResourceNotFoundException("event", event_id)
    return EventResponse.model_validate(event)


@router.get("/{event_id}/tasks", response_model=list[TaskResponse])
async def list_event_tasks(
    event_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_repo: EventRepository = Depends(get_event_repo),
    task_repo: TaskRepository = Depends(get_task_repo),
    _: Annotated[object, Depends(require_permission("task", "read"))] = None,
):
    """Tasks attached to the event (including workflow-created ones)."""
    await _require_event(event_repo, event_id, tenant_id)
    tasks = await task_repo.list_for_entity(tenant_id, "event", event_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{event_id}/design-items", response_model=list[DesignItemResponse])
async def list_event_design_items(
    event_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_repo: EventRepository = Depends(get_event_repo),
    design_item_repo: DesignItemRepository = Depends(get_design_item_repo),
    _: Annotated[object, Depends(require_permission("design_item", "read"))] = None,
):
    await _require_event(event_repo, event_id, tenant_id)
    items = await design_item_repo.list_for_event(tenant_id, event_id)
    return [DesignItemResponse.model_validate(i) for i in items]


@router.get(
    "/{event_id}/workflow-executions",
    response_model=list[WorkflowExecutionResponse],
)
async def list_event_workflow_executions(
    event_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    event_repo: EventRepository = Depends(get_event_repo),
    execution_repo: WorkflowExecutionRepository = Depends(get_workflow_execution_repo),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    """Execution records for the event, newest first."""
    await _require_event(event_repo, event_id, tenant_id)
    executions = await execution_repo.get_for_entity(tenant_id, event_id)
    return [WorkflowExecutionResponse.model_validate(e) for e in executions]
