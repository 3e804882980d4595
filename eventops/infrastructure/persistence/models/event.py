"""EventType and Event ORM models. Events trigger workflow automation."""

from datetime import date
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from eventops.infrastructure.persistence.database import Base
from eventops.infrastructure.persistence.models.mixins import (
    AuditedMultiTenantModel,
    MultiTenantModel,
)


class EventType(MultiTenantModel, Base):
    """Kind of event (wedding, conference...). Table: event_type."""

    __tablename__ = "event_type"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_event_type_tenant_name"),
    )


class Event(AuditedMultiTenantModel, Base):
    """Tenant-scoped business event. Table: event."""

    __tablename__ = "event"

    event_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("event_type.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="scheduled", server_default="scheduled"
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    account_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    contact_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("ix_event_tenant_type_start", "tenant_id", "event_type_id", "start_date"),
    )
