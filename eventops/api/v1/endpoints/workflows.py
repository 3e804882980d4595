"""Workflow API: definitions, dry-run validation, executions, and apply-to-existing."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.exc import IntegrityError

from eventops.api.v1.dependencies import (
    get_apply_preview_use_case,
    get_apply_use_case,
    get_current_user,
    get_tenant_id,
    get_workflow_service,
    get_workflow_service_for_write,
    require_permission,
)
from eventops.application.dtos.user import UserResult
from eventops.application.dtos.workflow import (
    WorkflowActionCreate,
    WorkflowCreate,
    WorkflowUpdate,
)
from eventops.application.use_cases.workflows import (
    ApplyWorkflowToExistingUseCase,
    WorkflowService,
)
from eventops.core.limiter import limit_apply, limit_writes
from eventops.domain.exceptions import ResourceConflictException
from eventops.schemas.workflow import (
    ApplyPreviewResponse,
    ApplyToExistingRequest,
    ApplyToExistingResponse,
    WorkflowActionRequest,
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowUpdateRequest,
    WorkflowValidationResponse,
)

router = APIRouter()

WORKFLOW_CONFLICT_MESSAGE = "Workflow conflicts with an existing workflow or action order"


def _to_actions(actions: list[WorkflowActionRequest]) -> list[WorkflowActionCreate]:
    return [WorkflowActionCreate(**a.model_dump()) for a in actions]


def _to_create(body: WorkflowCreateRequest) -> WorkflowCreate:
    return WorkflowCreate(
        name=body.name,
        description=body.description,
        is_active=body.is_active,
        trigger_type=body.trigger_type.value,
        event_type_ids=list(body.event_type_ids),
        conditions=list(body.conditions),
    )


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service),
    is_active: bool | None = Query(None),
    event_type_id: str | None = Query(None),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    """List workflows (newest first) with their actions."""
    workflows = await svc.list_workflows(
        tenant_id, is_active=is_active, event_type_id=event_type_id
    )
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    current_user: Annotated[UserResult, Depends(get_current_user)],
    svc: WorkflowService = Depends(get_workflow_service_for_write),
    _: Annotated[object, Depends(require_permission("workflow", "create"))] = None,
):
    """Create a workflow with its actions. Invalid references return 400 with all errors."""
    try:
        created = await svc.create_workflow(
            tenant_id,
            _to_create(body),
            _to_actions(body.actions),
            user_id=current_user.id,
        )
    except IntegrityError:
        raise ResourceConflictException("workflow", WORKFLOW_CONFLICT_MESSAGE) from None
    return WorkflowResponse.model_validate(created)


@router.post("/validate", response_model=WorkflowValidationResponse)
async def validate_workflow(
    body: WorkflowCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    """Dry-run: report errors and warnings without writing anything."""
    result = await svc.validate_workflow(
        tenant_id, _to_create(body), _to_actions(body.actions)
    )
    return WorkflowValidationResponse(
        valid=result.valid, errors=result.errors, warnings=result.warnings
    )


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service),
    include_stats: bool = Query(False),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    workflow = await svc.get_workflow(tenant_id, workflow_id, include_stats=include_stats)
    return WorkflowResponse.model_validate(workflow)


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowUpdateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service_for_write),
    _: Annotated[object, Depends(require_permission("workflow", "update"))] = None,
):
    """Partial update. A body with only is_active toggles the workflow."""
    if body.model_fields_set == {"is_active"} and body.is_active is not None:
        updated = await svc.set_active(tenant_id, workflow_id, body.is_active)
        return WorkflowResponse.model_validate(updated)

    fields = body.model_dump(exclude_unset=True, exclude={"actions"})
    actions = _to_actions(body.actions) if body.actions is not None else None
    try:
        updated = await svc.update_workflow(
            tenant_id, workflow_id, WorkflowUpdate(**fields), actions=actions
        )
    except IntegrityError:
        raise ResourceConflictException("workflow", WORKFLOW_CONFLICT_MESSAGE) from None
    return WorkflowResponse.model_validate(updated)


@router.delete("/{workflow_id}", status_code=204)
@limit_writes
async def delete_workflow(
    request: Request,
    workflow_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service_for_write),
    _: Annotated[object, Depends(require_permission("workflow", "delete"))] = None,
):
    """Delete the workflow, its actions, and its execution history."""
    await svc.delete_workflow(tenant_id, workflow_id)
    return Response(status_code=204)


@router.get("/{workflow_id}/executions", response_model=list[WorkflowExecutionResponse])
async def list_workflow_executions(
    workflow_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    svc: WorkflowService = Depends(get_workflow_service),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    executions = await svc.list_executions(tenant_id, workflow_id, skip=skip, limit=limit)
    return [WorkflowExecutionResponse.model_validate(e) for e in executions]


@router.get("/{workflow_id}/apply-to-existing", response_model=ApplyPreviewResponse)
async def preview_apply_to_existing(
    workflow_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    use_case: ApplyWorkflowToExistingUseCase = Depends(get_apply_preview_use_case),
    _: Annotated[object, Depends(require_permission("workflow", "read"))] = None,
):
    """Count future events the workflow would run for (no writes)."""
    preview = await use_case.preview(tenant_id, workflow_id)
    return ApplyPreviewResponse.model_validate(preview)


@router.post("/{workflow_id}/apply-to-existing", response_model=ApplyToExistingResponse)
@limit_apply
async def apply_to_existing(
    request: Request,
    workflow_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    current_user: Annotated[UserResult, Depends(get_current_user)],
    body: ApplyToExistingRequest | None = None,
    use_case: ApplyWorkflowToExistingUseCase = Depends(get_apply_use_case),
    _: Annotated[object, Depends(require_permission("workflow", "update"))] = None,
):
    """Run the workflow for existing future events; force re-runs completed ones."""
    outcome = await use_case.apply(
        tenant_id,
        workflow_id,
        force=body.force if body else False,
        user_id=current_user.id,
    )
    return ApplyToExistingResponse.model_validate(outcome)
