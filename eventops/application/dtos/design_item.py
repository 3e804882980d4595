"""DTOs for design item types and event design items (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DesignItemTypeResult:
    """Catalog entry with lead-time defaults used to schedule design items."""

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


@dataclass(frozen=True)
class DesignItemResult:
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
