"""User ORM model for authentication (tenant-scoped)."""

from sqlalchemy import Boolean, CheckConstraint, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from eventops.domain.enums import UserRole
from eventops.infrastructure.persistence.database import Base
from eventops.infrastructure.persistence.models.mixins import MultiTenantModel
from eventops.shared.enums import sql_in_check


class User(MultiTenantModel, Base):
    """User model. Table: app_user. Unique (tenant_id, username) and (tenant_id, email)."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=UserRole.STAFF.value,
        server_default=UserRole.STAFF.value,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "username", name="uq_tenant_username"),
        UniqueConstraint("tenant_id", "email", name="uq_tenant_email"),
        CheckConstraint(sql_in_check("role", UserRole.values()), name="app_user_role_check"),
    )
