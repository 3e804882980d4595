"""Task template API: blueprints for create_task workflow actions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import IntegrityError

from eventops.api.v1.dependencies import (
    get_task_template_repo,
    get_task_template_repo_for_write,
    get_tenant_id,
    require_permission,
)
from eventops.core.limiter import limit_writes
from eventops.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from eventops.infrastructure.persistence.repositories import TaskTemplateRepository
from eventops.schemas.task import (
    TaskTemplateCreateRequest,
    TaskTemplateResponse,
    TaskTemplateUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[TaskTemplateResponse])
async def list_task_templates(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: TaskTemplateRepository = Depends(get_task_template_repo),
    enabled_only: bool = Query(False),
    _: Annotated[object, Depends(require_permission("task_template", "read"))] = None,
):
    templates = await repo.list_by_tenant(tenant_id, enabled_only=enabled_only)
    return [TaskTemplateResponse.model_validate(t) for t in templates]


@router.post("", response_model=TaskTemplateResponse, status_code=201)
@limit_writes
async def create_task_template(
    request: Request,
    body: TaskTemplateCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: TaskTemplateRepository = Depends(get_task_template_repo_for_write),
    _: Annotated[object, Depends(require_permission("task_template", "create"))] = None,
):
    try:
        created = await repo.create_template(tenant_id, body.model_dump(mode="json"))
    except IntegrityError:
        raise DuplicateResourceException("task_template", body.name) from None
    return TaskTemplateResponse.model_validate(created)


@router.patch("/{template_id}", response_model=TaskTemplateResponse)
@limit_writes
async def update_task_template(
    request: Request,
    template_id: str,
    body: TaskTemplateUpdateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: TaskTemplateRepository = Depends(get_task_template_repo_for_write),
    _: Annotated[object, Depends(require_permission("task_template", "update"))] = None,
):
    """Partial update; only fields present in the body are written."""
    fields = body.model_dump(mode="json", exclude_unset=True)
    try:
        updated = await repo.update_template(template_id, tenant_id, fields)
    except IntegrityError:
        raise DuplicateResourceException("task_template", fields.get("name", "")) from None
    if not updated:
        raise ResourceNotFoundException("task_template", template_id)
    return TaskTemplateResponse.model_validate(updated)
