"""Development identity provider: two fixed logins that never touch the database.

Only the app.dev entry point installs this provider; the production entry
point (app.main) has no code path that constructs it.
"""

from __future__ import annotations

from app.application.dtos.account import AccountResult
from app.domain.enums import AccountRole


class DevIdentityProviderDisabledError(RuntimeError):
    """Raised when the development provider is constructed in production."""


_PARTICIPANT = AccountResult(
    id="dev-participant",
    email="participant@test.com",
    first_name="Test",
    last_name="Participant",
    role=AccountRole.PARTICIPANT.value,
    field_of_interest="Both",
)
_ADMIN = AccountResult(
    id="dev-admin",
    email="admin@test.com",
    first_name="Test",
    last_name="Admin",
    role=AccountRole.ADMIN.value,
)

# (email, password) -> identity; participant pair works on the participant path only,
# admin pair on the admin path only.
_CREDENTIALS: dict[tuple[str, str], AccountResult] = {
    ("participant@test.com", "Test1234!"): _PARTICIPANT,
    ("admin@test.com", "Admin1234!"): _ADMIN,
}


class DevIdentityProvider:
    """IIdentityProvider with hardcoded participant and admin test identities."""

    def __init__(self, environment: str) -> None:
        if environment == "production":
            raise DevIdentityProviderDisabledError(
                "DevIdentityProvider cannot be used when ENVIRONMENT=production"
            )

    def authenticate(
        self, email: str, password: str, *, admin: bool
    ) -> AccountResult | None:
        identity = _CREDENTIALS.get((email, password))
        if identity is None:
            return None
        if (identity.role == AccountRole.ADMIN.value) != admin:
            return None
        return identity

    def resolve(self, account_id: str) -> AccountResult | None:
        for identity in _CREDENTIALS.values():
            if identity.id == account_id:
                return identity
        return None
