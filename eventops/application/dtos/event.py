"""DTOs for event use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class EventCreate:
    """Input for creating an event record. Use case builds this; repo persists it."""

    event_type_id: str
    title: str
    start_date: date | None = None
    end_date: date | None = None
    status: str = "scheduled"
    account_id: str | None = None
    contact_id: str | None = None
    location: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EventResult:
    """Event read-model (result of get_by_id_and_tenant, create_event, etc.)."""

    id: str
    tenant_id: str
    event_type_id: str
    title: str
    status: str
    start_date: date | None
    end_date: date | None
    account_id: str | None
    contact_id: str | None
    location: str | None
    details: dict[str, Any]
    created_by: str | None
    created_at: datetime | None = None

    def to_condition_context(self) -> dict[str, Any]:
        """Evaluation context for workflow conditions (fields under "event")."""
        return {"event": asdict(self)}


@dataclass(frozen=True)
class EventTypeResult:
    id: str
    tenant_id: str
    name: str
    description: str | None
    is_active: bool
