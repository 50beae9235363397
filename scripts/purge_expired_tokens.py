"""Delete expired or used password tokens (Postgres).

Usage:
    python -m scripts.purge_expired_tokens
Safe to run from cron; valid tokens are never touched.
All imports use app.*.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence.database import _session_factory
from app.infrastructure.persistence.repositories import PasswordTokenStore


async def main() -> None:
    """Purge tokens that can no longer be redeemed and report the count."""
    get_settings()
    try:
        session_factory = _session_factory()
    except SqlNotConfiguredException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    async with session_factory() as session:
        async with session.begin():
            removed = await PasswordTokenStore(session).purge_expired()
    print(f"Removed {removed} expired or used password tokens")


if __name__ == "__main__":
    asyncio.run(main())
