"""Tenant ORM model. Root entity for multi-tenant hierarchy (no tenant_id)."""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from eventops.domain.enums import TenantStatus
from eventops.infrastructure.persistence.database import Base
from eventops.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from eventops.shared.enums import sql_in_check


class Tenant(CuidMixin, TimestampMixin, Base):
    """Customer organization. Table: tenant. Users log in with its code."""

    __tablename__ = "tenant"

    code: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TenantStatus.ACTIVE.value, index=True
    )

    __table_args__ = (
        CheckConstraint(
            sql_in_check("status", TenantStatus.values()), name="tenant_status_check"
        ),
    )
