"""Shared enumerations for the eventops application.

Cross-cutting enums used by application and infrastructure (workflow
automation, tasks, design items). Tenant and role enums live in
eventops.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowTriggerType(_ValuesMixin, str, Enum):
    """What starts a workflow. Only event creation is supported."""

    EVENT_CREATED = "event_created"


class WorkflowActionType(_ValuesMixin, str, Enum):
    """Actions a workflow can fan out into."""

    CREATE_TASK = "create_task"
    CREATE_DESIGN_ITEM = "create_design_item"


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle status."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"

    @classmethod
    def executed(cls) -> frozenset["WorkflowExecutionStatus"]:
        """Statuses that mark a (workflow, event) pair as already run by the engine."""
        return frozenset({cls.COMPLETED, cls.PARTIAL})


class ConditionOperator(_ValuesMixin, str, Enum):
    """Comparison operators for workflow conditions."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    IS_SET = "is_set"
    IS_NOT_SET = "is_not_set"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class TaskPriority(_ValuesMixin, str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(_ValuesMixin, str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DesignItemKind(_ValuesMixin, str, Enum):
    """Physical items are produced and shipped; digital items are delivered as files."""

    PHYSICAL = "physical"
    DIGITAL = "digital"


class DesignItemCategory(_ValuesMixin, str, Enum):
    PRINT = "print"
    DIGITAL = "digital"
    ENVIRONMENTAL = "environmental"
    PROMOTIONAL = "promotional"
    OTHER = "other"


class DesignItemStatus(_ValuesMixin, str, Enum):
    """Design item review lifecycle."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    AWAITING_APPROVAL = "awaiting_approval"
    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def sql_in_check(column: str, values: list[str]) -> str:
    """Build the SQL text for a CHECK (column IN (...)) constraint."""
    return "{} IN ({})".format(
        column,
        ", ".join("'{}'".format(v.replace("'", "''")) for v in values),
    )
