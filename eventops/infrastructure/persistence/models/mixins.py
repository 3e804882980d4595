"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, TenantMixin, TimestampMixin, CreatedByMixin and the
combined MultiTenantModel and AuditedMultiTenantModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from eventops.shared.utils.generators import generate_cuid


class CuidMixin:
    """Primary key id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TenantMixin:
    """tenant_id FK to tenant with CASCADE delete."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class CreatedByMixin(TimestampMixin):
    """created_by FK to app_user.id (SET NULL when the user is removed)."""

    @declared_attr
    def created_by(cls) -> Mapped[str | None]:
        return mapped_column(
            String,
            ForeignKey("app_user.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )


class MultiTenantModel(CuidMixin, TenantMixin, TimestampMixin):
    """CUID + tenant_id + created_at/updated_at."""

    __abstract__ = True


class AuditedMultiTenantModel(CuidMixin, TenantMixin, CreatedByMixin):
    """CUID + tenant_id + timestamps + created_by."""

    __abstract__ = True
