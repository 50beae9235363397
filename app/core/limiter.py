"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
AUTH_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

# Credential and password-link endpoints.
limit_auth = limiter.limit(AUTH_LIMIT)
# Admin writes on participants.
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
