"""DesignItemType and DesignItem ORM models."""

from datetime import date

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from eventops.infrastructure.persistence.database import Base
from eventops.infrastructure.persistence.models.mixins import MultiTenantModel
from eventops.shared.enums import (
    DesignItemCategory,
    DesignItemKind,
    DesignItemStatus,
    sql_in_check,
)


class DesignItemType(MultiTenantModel, Base):
    """Catalog of deliverables with lead-time defaults. Table: design_item_type."""

    __tablename__ = "design_item_type"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DesignItemKind.DIGITAL.value,
        server_default=DesignItemKind.DIGITAL.value,
    )
    category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    default_design_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=7, server_default=text("7")
    )
    default_production_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    default_shipping_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    client_approval_buffer_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=2, server_default=text("2")
    )
    requires_approval: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_design_item_type_tenant_name"),
        CheckConstraint(sql_in_check("type", DesignItemKind.values()), name="design_item_type_kind_check"),
        CheckConstraint(
            "category IS NULL OR " + sql_in_check("category", DesignItemCategory.values()),
            name="design_item_type_category_check",
        ),
    )


class DesignItem(MultiTenantModel, Base):
    """Design deliverable scheduled for an event. Table: event_design_items."""

    __tablename__ = "event_design_items"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id", ondelete="CASCADE"), nullable=False, index=True
    )
    design_item_type_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("design_item_type.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    item_name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DesignItemStatus.PENDING.value,
        server_default=DesignItemStatus.PENDING.value,
    )
    assigned_designer_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    design_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    design_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    production_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    shipping_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    shipping_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    auto_created: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    workflow_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="SET NULL"), nullable=True, index=True
    )
    workflow_execution_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("workflow_execution.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        Index("ix_event_design_items_tenant_event", "tenant_id", "event_id"),
        CheckConstraint(
            sql_in_check("status", DesignItemStatus.values()),
            name="event_design_items_status_check",
        ),
    )
