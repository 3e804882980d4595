"""TaskTemplate and Task ORM models."""

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
from eventops.infrastructure.persistence.models.mixins import (
    AuditedMultiTenantModel,
    MultiTenantModel,
)
from eventops.shared.enums import TaskPriority, TaskStatus, sql_in_check


class TaskTemplate(MultiTenantModel, Base):
    """Reusable task blueprint for create_task actions. Table: task_template."""

    __tablename__ = "task_template"

    name: Mapped[str] = mapped_column(String, nullable=False)
    default_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    default_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TaskPriority.MEDIUM.value,
        server_default=TaskPriority.MEDIUM.value,
    )
    default_due_in_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    department: Mapped[str | None] = mapped_column(String, nullable=True)
    task_type: Mapped[str | None] = mapped_column(String, nullable=True)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_task_template_tenant_name"),
        CheckConstraint(
            sql_in_check("default_priority", TaskPriority.values()),
            name="task_template_priority_check",
        ),
    )


class Task(AuditedMultiTenantModel, Base):
    """Task attached to an entity (usually an event). Table: task."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TaskPriority.MEDIUM.value
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TaskStatus.PENDING.value,
        server_default=TaskStatus.PENDING.value,
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    entity_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    entity_id: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    department: Mapped[str | None] = mapped_column(String, nullable=True)
    task_type: Mapped[str | None] = mapped_column(String, nullable=True)
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
        Index("ix_task_tenant_entity", "tenant_id", "entity_type", "entity_id"),
        CheckConstraint(sql_in_check("priority", TaskPriority.values()), name="task_priority_check"),
        CheckConstraint(sql_in_check("status", TaskStatus.values()), name="task_status_check"),
    )
