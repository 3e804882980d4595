"""Shared utilities: datetime and ID generators."""

from eventops.shared.utils.datetime import (
    ensure_utc,
    parse_iso_datetime,
    utc_now,
    utc_today,
)
from eventops.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "utc_today",
    "ensure_utc",
    "parse_iso_datetime",
]
