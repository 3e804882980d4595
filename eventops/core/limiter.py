"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
# Backfills fan out into many inserts per call.
APPLY_TO_EXISTING_LIMIT = "10/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_apply = limiter.limit(APPLY_TO_EXISTING_LIMIT)
