"""enable RLS for tenant isolation

Revision ID: 8a4d6e2f0b31
Revises: 3f1c2a9b7d10
Create Date: 2026-09-28 11:03:17.552904

Policy: only rows where tenant_id equals current_setting('app.current_tenant_id').
tenant and app_user stay unrestricted because login resolves them before a
tenant context exists. Migrations and admin scripts should use a role with
BYPASSRLS; the app role must not.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "8a4d6e2f0b31"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TENANT_SCOPED_TABLES = [
    "event_type",
    "event",
    "task_template",
    "design_item_type",
    "workflow",
    "workflow_execution",
    "task",
    "event_design_items",
]


def upgrade() -> None:
    for table in TENANT_SCOPED_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
        op.execute(
            f"CREATE POLICY tenant_isolation ON {table} "
            "USING (tenant_id = current_setting('app.current_tenant_id', true)) "
            "WITH CHECK (tenant_id = current_setting('app.current_tenant_id', true))"
        )


def downgrade() -> None:
    for table in reversed(TENANT_SCOPED_TABLES):
        op.execute(f"DROP POLICY IF EXISTS tenant_isolation ON {table}")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY")
