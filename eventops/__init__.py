"""eventops: workflow automation for event-based CRM tenants."""

__version__ = "1.0.0"
