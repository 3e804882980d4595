"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from eventops.api.v1.dependencies.auth import (
    get_authorization_service,
    get_current_user,
    get_current_user_optional,
    get_user_repo,
    require_permission,
)
from eventops.api.v1.dependencies.catalog import (
    get_design_item_repo,
    get_design_item_type_repo,
    get_design_item_type_repo_for_write,
    get_event_type_repo,
    get_event_type_repo_for_write,
    get_task_repo,
    get_task_template_repo,
    get_task_template_repo_for_write,
)
from eventops.api.v1.dependencies.tenant import get_tenant_id, get_tenant_repo
from eventops.api.v1.dependencies.workflow import (
    build_workflow_engine,
    build_workflow_service,
    get_apply_preview_use_case,
    get_apply_use_case,
    get_event_repo,
    get_event_service,
    get_workflow_execution_repo,
    get_workflow_service,
    get_workflow_service_for_write,
)

__all__ = [
    "build_workflow_engine",
    "build_workflow_service",
    "get_apply_preview_use_case",
    "get_apply_use_case",
    "get_authorization_service",
    "get_current_user",
    "get_current_user_optional",
    "get_design_item_repo",
    "get_design_item_type_repo",
    "get_design_item_type_repo_for_write",
    "get_event_repo",
    "get_event_service",
    "get_event_type_repo",
    "get_event_type_repo_for_write",
    "get_task_repo",
    "get_task_template_repo",
    "get_task_template_repo_for_write",
    "get_tenant_id",
    "get_tenant_repo",
    "get_user_repo",
    "get_workflow_execution_repo",
    "get_workflow_service",
    "get_workflow_service_for_write",
    "require_permission",
]
