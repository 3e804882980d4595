"""Design item type API: deliverable catalog with lead-time defaults."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import IntegrityError

from eventops.api.v1.dependencies import (
    get_design_item_type_repo,
    get_design_item_type_repo_for_write,
    get_tenant_id,
    require_permission,
)
from eventops.core.limiter import limit_writes
from eventops.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from eventops.infrastructure.persistence.repositories import DesignItemTypeRepository
from eventops.schemas.design_item import (
    DesignItemTypeCreateRequest,
    DesignItemTypeResponse,
    DesignItemTypeUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[DesignItemTypeResponse])
async def list_design_item_types(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: DesignItemTypeRepository = Depends(get_design_item_type_repo),
    include_inactive: bool = Query(False),
    _: Annotated[object, Depends(require_permission("design_item_type", "read"))] = None,
):
    """List design item types by display order."""
    types = await repo.list_by_tenant(tenant_id, include_inactive=include_inactive)
    return [DesignItemTypeResponse.model_validate(t) for t in types]


@router.post("", response_model=DesignItemTypeResponse, status_code=201)
@limit_writes
async def create_design_item_type(
    request: Request,
    body: DesignItemTypeCreateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: DesignItemTypeRepository = Depends(get_design_item_type_repo_for_write),
    _: Annotated[object, Depends(require_permission("design_item_type", "create"))] = None,
):
    try:
        created = await repo.create_type(tenant_id, body.model_dump(mode="json"))
    except IntegrityError:
        raise DuplicateResourceException("design_item_type", body.name) from None
    return DesignItemTypeResponse.model_validate(created)


@router.patch("/{type_id}", response_model=DesignItemTypeResponse)
@limit_writes
async def update_design_item_type(
    request: Request,
    type_id: str,
    body: DesignItemTypeUpdateRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    repo: DesignItemTypeRepository = Depends(get_design_item_type_repo_for_write),
    _: Annotated[object, Depends(require_permission("design_item_type", "update"))] = None,
):
    fields = body.model_dump(mode="json", exclude_unset=True)
    try:
        updated = await repo.update_type(type_id, tenant_id, fields)
    except IntegrityError:
        raise DuplicateResourceException("design_item_type", fields.get("name", "")) from None
    if not updated:
        raise ResourceNotFoundException("design_item_type", type_id)
    return DesignItemTypeResponse.model_validate(updated)
