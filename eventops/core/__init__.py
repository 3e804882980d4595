"""Core: config, tenant context, rate limits and application bootstrap."""

from eventops.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
