"""Workflow domain entity.

A workflow is a definition: the event types it applies to, optional
conditions, and an ordered list of actions.
"""

from dataclasses import dataclass, field
from typing import Any

from eventops.shared.enums import WorkflowExecutionStatus, WorkflowTriggerType


@dataclass
class WorkflowEntity:
    """Domain entity for a workflow definition (applicability set + conditions)."""

    id: str
    tenant_id: str
    name: str
    is_active: bool
    trigger_type: str
    event_type_ids: list[str] = field(default_factory=list)
    conditions: list[dict[str, Any]] = field(default_factory=list)

    def belongs_to_tenant(self, tenant_id: str) -> bool:
        """Return whether this workflow belongs to the given tenant."""
        return self.tenant_id == tenant_id

    def can_trigger_on(self, event_type_id: str | None) -> bool:
        """Return whether this workflow is active and applies to the event type."""
        return (
            self.is_active
            and self.trigger_type == WorkflowTriggerType.EVENT_CREATED.value
            and event_type_id is not None
            and event_type_id in self.event_type_ids
        )


def final_execution_status(
    actions_successful: int, actions_failed: int
) -> WorkflowExecutionStatus:
    """Outcome of a run from its action counts.

    No successful action means failed (including a workflow without
    actions); any failure next to a success means partial.
    """
    if actions_successful == 0:
        return WorkflowExecutionStatus.FAILED
    if actions_failed > 0:
        return WorkflowExecutionStatus.PARTIAL
    return WorkflowExecutionStatus.COMPLETED
