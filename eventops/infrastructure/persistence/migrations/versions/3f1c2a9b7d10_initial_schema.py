"""initial schema: tenants, users, events, workflows, tasks, design items

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-09-28 10:12:41.204118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _tenant_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE")


def _in(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(column, ", ".join(f"'{v}'" for v in values))


TASK_PRIORITIES = ["low", "medium", "high", "urgent"]
EXECUTION_STATUSES = ["running", "completed", "failed", "partial", "skipped"]
DESIGN_ITEM_STATUSES = [
    "pending",
    "in_progress",
    "awaiting_approval",
    "approved",
    "needs_revision",
    "completed",
    "cancelled",
]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenant",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("status", ["active", "suspended", "archived"]), name="tenant_status_check"
        ),
    )
    op.create_index("ix_tenant_code", "tenant", ["code"], unique=True)
    op.create_index("ix_tenant_status", "tenant", ["status"])

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", sa.String(32), server_default="staff", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.UniqueConstraint("tenant_id", "username", name="uq_tenant_username"),
        sa.UniqueConstraint("tenant_id", "email", name="uq_tenant_email"),
        sa.CheckConstraint(_in("role", ["admin", "manager", "staff"]), name="app_user_role_check"),
    )
    op.create_index("ix_app_user_tenant_id", "app_user", ["tenant_id"])

    op.create_table(
        "event_type",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.UniqueConstraint("tenant_id", "name", name="uq_event_type_tenant_name"),
    )
    op.create_index("ix_event_type_tenant_id", "event_type", ["tenant_id"])

    op.create_table(
        "event",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("event_type_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("status", sa.String(32), server_default="scheduled", nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("account_id", sa.String(), nullable=True),
        sa.Column("contact_id", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.ForeignKeyConstraint(["event_type_id"], ["event_type.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_event_tenant_id", "event", ["tenant_id"])
    op.create_index("ix_event_event_type_id", "event", ["event_type_id"])
    op.create_index("ix_event_account_id", "event", ["account_id"])
    op.create_index("ix_event_contact_id", "event", ["contact_id"])
    op.create_index("ix_event_created_by", "event", ["created_by"])
    op.create_index(
        "ix_event_tenant_type_start", "event", ["tenant_id", "event_type_id", "start_date"]
    )

    op.create_table(
        "task_template",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("default_title", sa.String(500), nullable=True),
        sa.Column("default_description", sa.Text(), nullable=True),
        sa.Column("default_priority", sa.String(16), server_default="medium", nullable=False),
        sa.Column("default_due_in_days", sa.Integer(), nullable=True),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("task_type", sa.String(), nullable=True),
        sa.Column("enabled", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.UniqueConstraint("tenant_id", "name", name="uq_task_template_tenant_name"),
        sa.CheckConstraint(
            _in("default_priority", TASK_PRIORITIES), name="task_template_priority_check"
        ),
    )
    op.create_index("ix_task_template_tenant_id", "task_template", ["tenant_id"])

    op.create_table(
        "design_item_type",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(16), server_default="digital", nullable=False),
        sa.Column("category", sa.String(32), nullable=True),
        sa.Column("default_design_days", sa.Integer(), server_default=sa.text("7"), nullable=False),
        sa.Column("default_production_days", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("default_shipping_days", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "client_approval_buffer_days", sa.Integer(), server_default=sa.text("2"), nullable=False
        ),
        sa.Column("requires_approval", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("display_order", sa.Integer(), server_default=sa.text("0"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.UniqueConstraint("tenant_id", "name", name="uq_design_item_type_tenant_name"),
        sa.CheckConstraint(_in("type", ["physical", "digital"]), name="design_item_type_kind_check"),
        sa.CheckConstraint(
            "category IS NULL OR "
            + _in("category", ["print", "digital", "environmental", "promotional", "other"]),
            name="design_item_type_category_check",
        ),
    )
    op.create_index("ix_design_item_type_tenant_id", "design_item_type", ["tenant_id"])

    op.create_table(
        "workflow",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("trigger_type", sa.String(32), server_default="event_created", nullable=False),
        sa.Column("conditions", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("tenant_id", "name", name="uq_workflow_tenant_name"),
        sa.CheckConstraint(
            _in("trigger_type", ["event_created"]), name="workflow_trigger_type_check"
        ),
    )
    op.create_index("ix_workflow_tenant_id", "workflow", ["tenant_id"])
    op.create_index("ix_workflow_created_by", "workflow", ["created_by"])

    op.create_table(
        "workflow_event_type",
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("event_type_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("workflow_id", "event_type_id"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["event_type_id"], ["event_type.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_workflow_event_type_event_type_id", "workflow_event_type", ["event_type_id"]
    )

    op.create_table(
        "workflow_action",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("action_type", sa.String(32), nullable=False),
        sa.Column("execution_order", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("task_template_id", sa.String(), nullable=True),
        sa.Column("design_item_type_id", sa.String(), nullable=True),
        sa.Column("assigned_to_user_id", sa.String(), nullable=True),
        sa.Column("config", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["task_template_id"], ["task_template.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["design_item_type_id"], ["design_item_type.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["assigned_to_user_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("workflow_id", "execution_order", name="uq_workflow_action_order"),
        sa.CheckConstraint(
            _in("action_type", ["create_task", "create_design_item"]),
            name="workflow_action_type_check",
        ),
    )
    op.create_index("ix_workflow_action_workflow_id", "workflow_action", ["workflow_id"])
    op.create_index("ix_workflow_action_task_template_id", "workflow_action", ["task_template_id"])
    op.create_index(
        "ix_workflow_action_design_item_type_id", "workflow_action", ["design_item_type_id"]
    )
    op.create_index(
        "ix_workflow_action_assigned_to_user_id", "workflow_action", ["assigned_to_user_id"]
    )

    op.create_table(
        "workflow_execution",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("trigger_type", sa.String(32), nullable=False),
        sa.Column("trigger_entity_type", sa.String(32), nullable=False),
        sa.Column("trigger_entity_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("actions_executed", sa.Integer(), nullable=False),
        sa.Column("actions_successful", sa.Integer(), nullable=False),
        sa.Column("actions_failed", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("error_details", sa.JSON(), nullable=True),
        sa.Column("created_task_ids", sa.JSON(), nullable=False),
        sa.Column("created_design_item_ids", sa.JSON(), nullable=False),
        sa.Column(
            "conditions_evaluated", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("conditions_passed", sa.Boolean(), nullable=True),
        sa.Column("condition_results", sa.JSON(), nullable=True),
        sa.Column("executed_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["executed_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            _in("status", EXECUTION_STATUSES), name="workflow_execution_status_check"
        ),
    )
    op.create_index("ix_workflow_execution_tenant_id", "workflow_execution", ["tenant_id"])
    op.create_index("ix_workflow_execution_workflow_id", "workflow_execution", ["workflow_id"])
    op.create_index("ix_workflow_execution_status", "workflow_execution", ["status"])
    op.create_index(
        "ix_workflow_execution_workflow_entity",
        "workflow_execution",
        ["workflow_id", "trigger_entity_id"],
    )
    op.create_index(
        "ix_workflow_execution_tenant_entity",
        "workflow_execution",
        ["tenant_id", "trigger_entity_type", "trigger_entity_id"],
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), server_default="pending", nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("entity_type", sa.String(32), nullable=True),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("assigned_to", sa.String(), nullable=True),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("task_type", sa.String(), nullable=True),
        sa.Column("auto_created", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=True),
        sa.Column("workflow_execution_id", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.ForeignKeyConstraint(["assigned_to"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["workflow_execution_id"], ["workflow_execution.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint(_in("priority", TASK_PRIORITIES), name="task_priority_check"),
        sa.CheckConstraint(
            _in("status", ["pending", "in_progress", "completed", "cancelled"]),
            name="task_status_check",
        ),
    )
    op.create_index("ix_task_tenant_id", "task", ["tenant_id"])
    op.create_index("ix_task_assigned_to", "task", ["assigned_to"])
    op.create_index("ix_task_created_by", "task", ["created_by"])
    op.create_index("ix_task_workflow_id", "task", ["workflow_id"])
    op.create_index("ix_task_workflow_execution_id", "task", ["workflow_execution_id"])
    op.create_index("ix_task_tenant_entity", "task", ["tenant_id", "entity_type", "entity_id"])

    op.create_table(
        "event_design_items",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("design_item_type_id", sa.String(), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("status", sa.String(32), server_default="pending", nullable=False),
        sa.Column("assigned_designer_id", sa.String(), nullable=True),
        sa.Column("design_start_date", sa.Date(), nullable=True),
        sa.Column("design_deadline", sa.Date(), nullable=True),
        sa.Column("production_start_date", sa.Date(), nullable=True),
        sa.Column("shipping_start_date", sa.Date(), nullable=True),
        sa.Column("shipping_deadline", sa.Date(), nullable=True),
        sa.Column("auto_created", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=True),
        sa.Column("workflow_execution_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _tenant_fk(),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["design_item_type_id"], ["design_item_type.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["assigned_designer_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["workflow_execution_id"], ["workflow_execution.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint(
            _in("status", DESIGN_ITEM_STATUSES), name="event_design_items_status_check"
        ),
    )
    op.create_index("ix_event_design_items_tenant_id", "event_design_items", ["tenant_id"])
    op.create_index("ix_event_design_items_event_id", "event_design_items", ["event_id"])
    op.create_index(
        "ix_event_design_items_design_item_type_id", "event_design_items", ["design_item_type_id"]
    )
    op.create_index(
        "ix_event_design_items_assigned_designer_id",
        "event_design_items",
        ["assigned_designer_id"],
    )
    op.create_index("ix_event_design_items_workflow_id", "event_design_items", ["workflow_id"])
    op.create_index(
        "ix_event_design_items_workflow_execution_id",
        "event_design_items",
        ["workflow_execution_id"],
    )
    op.create_index(
        "ix_event_design_items_tenant_event", "event_design_items", ["tenant_id", "event_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "event_design_items",
        "task",
        "workflow_execution",
        "workflow_action",
        "workflow_event_type",
        "workflow",
        "design_item_type",
        "task_template",
        "event",
        "event_type",
        "app_user",
        "tenant",
    ):
        op.drop_table(table)
