"""JWT access tokens for API authentication.

Tokens carry the user id (sub), tenant id and role; secret and algorithm
come from eventops.core.config.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from eventops.core.config import get_settings
from eventops.shared.utils.datetime import utc_now


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Encode the given claims with an exp claim.

    Args:
        data: Claims to encode (sub, tenant_id, role, username).
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
    """
    settings = get_settings()
    claims = dict(data)
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims["exp"] = utc_now() + ttl
    return cast(
        str,
        jwt.encode(
            claims,
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        ),
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode a JWT; raise ValueError when it is invalid, expired or lacks sub/tenant_id."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    for claim in ("sub", "tenant_id"):
        if not payload.get(claim):
            raise ValueError(f"Token missing required claim: {claim}")
    return payload
