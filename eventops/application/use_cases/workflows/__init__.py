"""Workflow use cases: definition management and apply-to-existing."""

from eventops.application.use_cases.workflows.apply_to_existing import (
    ApplyWorkflowToExistingUseCase,
)
from eventops.application.use_cases.workflows.workflow_operations import WorkflowService

__all__ = ["ApplyWorkflowToExistingUseCase", "WorkflowService"]
