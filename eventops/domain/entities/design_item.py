"""Design item scheduling.

Deadlines are counted backwards from the event date: design, then
production, then shipping, plus a buffer for client approval.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from eventops.shared.enums import DesignItemKind


@dataclass(frozen=True)
class DesignSchedule:
    """Key dates for producing one design item before an event."""

    design_start_date: date
    design_deadline: date
    production_start_date: date | None = None
    shipping_start_date: date | None = None
    shipping_deadline: date | None = None

    @classmethod
    def for_event(
        cls,
        event_date: date,
        kind: str,
        *,
        design_days: int = 0,
        production_days: int = 0,
        shipping_days: int = 0,
        approval_buffer_days: int = 0,
    ) -> "DesignSchedule":
        """Compute the schedule for an item of the given kind.

        Digital items have no production or shipping dates.
        """
        design_days = design_days or 0
        production_days = production_days or 0
        shipping_days = shipping_days or 0
        approval_buffer_days = approval_buffer_days or 0

        total = design_days + production_days + shipping_days + approval_buffer_days
        design_deadline = event_date - timedelta(days=total)
        design_start = design_deadline - timedelta(days=design_days)
        if kind != DesignItemKind.PHYSICAL.value:
            return cls(design_start_date=design_start, design_deadline=design_deadline)

        production_start = design_deadline
        return cls(
            design_start_date=design_start,
            design_deadline=design_deadline,
            production_start_date=production_start,
            shipping_start_date=production_start + timedelta(days=production_days),
            shipping_deadline=event_date,
        )
