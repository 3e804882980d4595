"""Infrastructure services: workflow engine and action executors."""

from eventops.infrastructure.services.workflow_actions import (
    ActionContext,
    WorkflowActionExecutor,
)
from eventops.infrastructure.services.workflow_engine import WorkflowEngine

__all__ = [
    "ActionContext",
    "WorkflowActionExecutor",
    "WorkflowEngine",
]
