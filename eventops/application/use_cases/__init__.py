"""Application use cases: one entry point per workflow."""

from eventops.application.use_cases.events import EventService
from eventops.application.use_cases.workflows import (
    ApplyWorkflowToExistingUseCase,
    WorkflowService,
)

__all__ = [
    "ApplyWorkflowToExistingUseCase",
    "EventService",
    "WorkflowService",
]
