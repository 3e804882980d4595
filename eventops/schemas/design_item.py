"""Design item type and event design item API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from eventops.shared.enums import DesignItemCategory, DesignItemKind


class DesignItemTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: DesignItemKind = DesignItemKind.DIGITAL
    category: DesignItemCategory | None = None
    default_design_days: int = Field(default=7, ge=0)
    default_production_days: int = Field(default=0, ge=0)
    default_shipping_days: int = Field(default=0, ge=0)
    client_approval_buffer_days: int = Field(default=2, ge=0)
    requires_approval: bool = True
    is_active: bool = True
    display_order: int = 0


class DesignItemTypeUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    type: DesignItemKind | None = None
    category: DesignItemCategory | None = None
    default_design_days: int | None = Field(default=None, ge=0)
    default_production_days: int | None = Field(default=None, ge=0)
    default_shipping_days: int | None = Field(default=None, ge=0)
    client_approval_buffer_days: int | None = Field(default=None, ge=0)
    requires_approval: bool | None = None
    is_active: bool | None = None
    display_order: int | None = None


class DesignItemTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    type: str
    category: str | None
    default_design_days: int
    default_production_days: int
    default_shipping_days: int
    client_approval_buffer_days: int
    requires_approval: bool
    is_active: bool
    display_order: int


class DesignItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    event_id: str
    design_item_type_id: str
    item_name: str
    description: str | None
    quantity: int
    status: str
    assigned_designer_id: str | None
    design_start_date: date | None
    design_deadline: date | None
    production_start_date: date | None
    shipping_start_date: date | None
    shipping_deadline: date | None
    auto_created: bool
    workflow_id: str | None
    workflow_execution_id: str | None
    created_at: datetime | None = None
