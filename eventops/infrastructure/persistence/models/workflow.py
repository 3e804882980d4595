"""Workflow, WorkflowEventType, WorkflowAction and WorkflowExecution ORM models."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventops.infrastructure.persistence.database import Base
from eventops.infrastructure.persistence.models.mixins import (
    AuditedMultiTenantModel,
    CuidMixin,
    MultiTenantModel,
    TimestampMixin,
)
from eventops.shared.enums import (
    WorkflowActionType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
    sql_in_check,
)


class Workflow(AuditedMultiTenantModel, Base):
    """Workflow definition. Table: workflow. Name unique per tenant."""

    __tablename__ = "workflow"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.text("true")
    )
    trigger_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=WorkflowTriggerType.EVENT_CREATED.value,
        server_default=WorkflowTriggerType.EVENT_CREATED.value,
    )
    conditions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    event_types: Mapped[list["WorkflowEventType"]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    actions: Mapped[list["WorkflowAction"]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkflowAction.execution_order",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_workflow_tenant_name"),
        CheckConstraint(
            sql_in_check("trigger_type", WorkflowTriggerType.values()),
            name="workflow_trigger_type_check",
        ),
    )

    @property
    def event_type_ids(self) -> list[str]:
        return [link.event_type_id for link in self.event_types]


class WorkflowEventType(Base):
    """Applicability set: one row per (workflow, event type). Table: workflow_event_type."""

    __tablename__ = "workflow_event_type"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), primary_key=True
    )
    event_type_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("event_type.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    workflow: Mapped[Workflow] = relationship(back_populates="event_types")


class WorkflowAction(CuidMixin, TimestampMixin, Base):
    """One step of a workflow. Table: workflow_action."""

    __tablename__ = "workflow_action"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(String(32), nullable=False)
    execution_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    task_template_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("task_template.id", ondelete="CASCADE"), nullable=True, index=True
    )
    design_item_type_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("design_item_type.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    assigned_to_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    config: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    workflow: Mapped[Workflow] = relationship(back_populates="actions")

    __table_args__ = (
        UniqueConstraint(
            "workflow_id", "execution_order", name="uq_workflow_action_order"
        ),
        CheckConstraint(
            sql_in_check("action_type", WorkflowActionType.values()),
            name="workflow_action_type_check",
        ),
    )


class WorkflowExecution(MultiTenantModel, Base):
    """Execution record per (workflow, trigger entity). Table: workflow_execution."""

    __tablename__ = "workflow_execution"

    workflow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trigger_type: Mapped[str] = mapped_column(String(32), nullable=False)
    trigger_entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    trigger_entity_id: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=WorkflowExecutionStatus.RUNNING.value,
        index=True,
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    actions_executed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    actions_successful: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    actions_failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_details: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON, nullable=True
    )
    created_task_ids: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    created_design_item_ids: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    conditions_evaluated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )
    conditions_passed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    condition_results: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON, nullable=True
    )
    executed_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index(
            "ix_workflow_execution_workflow_entity",
            "workflow_id",
            "trigger_entity_id",
        ),
        Index(
            "ix_workflow_execution_tenant_entity",
            "tenant_id",
            "trigger_entity_type",
            "trigger_entity_id",
        ),
        CheckConstraint(
            sql_in_check("status", WorkflowExecutionStatus.values()),
            name="workflow_execution_status_check",
        ),
    )
