"""Domain entities and value objects.

Pure domain models; no ORM or persistence concerns.
"""

from eventops.domain.entities.design_item import DesignSchedule
from eventops.domain.entities.workflow import WorkflowEntity, final_execution_status

__all__ = [
    "DesignSchedule",
    "WorkflowEntity",
    "final_execution_status",
]
