"""Tenant ID format validation.

Shared by the tenant header dependency and database session setup so
invalid tenant IDs are rejected consistently.
"""

import re

TENANT_ID_MAX_LENGTH = 64
_TENANT_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(TENANT_ID_MAX_LENGTH) + r"}$"
)


def is_valid_tenant_id_format(value: str | None) -> bool:
    """Return True if value is safe for SET LOCAL and header validation."""
    if not value or len(value) > TENANT_ID_MAX_LENGTH:
        return False
    return bool(_TENANT_ID_RE.fullmatch(value))
