"""Security: JWT access tokens and password hashing."""

from eventops.infrastructure.security.jwt import create_access_token, verify_token
from eventops.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
