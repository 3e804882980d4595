"""Primary key generation (CUID2) for all ORM models."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant identifier for a row id."""
    value = _next_cuid()
    if not isinstance(value, str):
        raise TypeError(f"cuid2 returned {type(value).__name__}, expected str")
    return value
