"""Create an admin account without a password (Postgres).

Usage:
    python -m scripts.create_admin <email> <first_name> <last_name>
The new admin sets a password through /account/existing, which emails a
creation link. All imports use app.*.
"""

import asyncio
import sys

from app.application.dtos.account import SignupData
from app.application.services.account_workflow import normalize_email
from app.core.config import get_settings
from app.domain.enums import AccountRole
from app.domain.exceptions import ConflictException, SqlNotConfiguredException
from app.infrastructure.persistence.database import _session_factory
from app.infrastructure.persistence.repositories import AccountRepository


async def main() -> None:
    """Insert an admin account with no password hash."""
    if len(sys.argv) < 4:
        print(
            "Usage: python -m scripts.create_admin <email> <first_name> <last_name>",
            file=sys.stderr,
        )
        sys.exit(1)
    email = normalize_email(sys.argv[1])
    first_name, last_name = sys.argv[2], sys.argv[3]

    settings = get_settings()
    try:
        session_factory = _session_factory()
    except SqlNotConfiguredException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    async with session_factory() as session:
        async with session.begin():
            repo = AccountRepository(session)
            if await repo.get_active_by_email(email) is not None:
                print(f"An account already exists for {email}", file=sys.stderr)
                sys.exit(1)
            try:
                account = await repo.create_account(
                    SignupData(email=email, password="", first_name=first_name, last_name=last_name),
                    hashed_password=None,
                    role=AccountRole.ADMIN.value,
                )
            except ConflictException as e:
                print(e.message, file=sys.stderr)
                sys.exit(1)
    print(f"Created admin {account.id} ({email})")
    print(f"Set a password at {settings.base_url}/account/existing")


if __name__ == "__main__":
    asyncio.run(main())
