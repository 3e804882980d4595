"""Application services: condition evaluation, workflow validation, authorization."""

from eventops.application.services.authorization_service import AuthorizationService
from eventops.application.services.condition_evaluator import (
    evaluate_condition,
    evaluate_conditions,
    get_nested_value,
    validate_conditions,
)
from eventops.application.services.workflow_validator import WorkflowValidator

__all__ = [
    "AuthorizationService",
    "WorkflowValidator",
    "evaluate_condition",
    "evaluate_conditions",
    "get_nested_value",
    "validate_conditions",
]
