"""Domain exceptions and their HTTP mapping."""

import pytest

from eventops.core.exception_handlers import status_for_error_code
from eventops.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    EventOpsException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WorkflowActionError,
    WorkflowInactiveException,
    WorkflowValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = EventOpsException("boom")
    assert exc.error_code == "EventOpsException"
    assert exc.to_dict() == {"error": "EventOpsException", "message": "boom"}


def test_resource_not_found_details() -> None:
    exc = ResourceNotFoundException("workflow", "wf1")
    assert exc.message == "workflow not found: wf1"
    assert exc.details == {"resource_type": "workflow", "resource_id": "wf1"}


def test_authorization_message_names_resource_and_action() -> None:
    exc = AuthorizationException(resource="workflow", action="delete")
    assert exc.message == "Permission denied: delete on workflow"
    assert exc.to_dict()["details"] == {"resource": "workflow", "action": "delete"}


def test_workflow_validation_uses_first_error_as_message() -> None:
    exc = WorkflowValidationException(["a", "b"], ["w"])
    assert exc.message == "a"
    assert exc.errors == ["a", "b"]
    assert exc.details == {"errors": ["a", "b"], "warnings": ["w"]}


def test_validation_exception_field() -> None:
    assert ValidationException("bad", "name").details == {"field": "name"}
    assert ValidationException("bad").details == {}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("event", "e1"), 404),
        (AuthenticationException(), 401),
        (AuthorizationException("event", "create"), 403),
        (ValidationException("bad"), 400),
        (DuplicateResourceException("workflow", "x"), 409),
        (WorkflowInactiveException("wf1"), 400),
        (WorkflowValidationException(["bad"]), 400),
        (SqlNotConfiguredException(), 503),
        (WorkflowActionError("create_task", "no template"), 400),
    ],
)
def test_status_for_error_code(exc, status) -> None:
    assert status_for_error_code(exc.error_code) == status
