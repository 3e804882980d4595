"""Event use cases."""

from eventops.application.use_cases.events.create_event import EventService

__all__ = ["EventService"]
