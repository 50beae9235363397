"""Domain enumerations for the participant portal.

Enums represent fixed sets of domain values (account roles, token purposes,
account recovery states).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AccountRole(_ValuesMixin, str, Enum):
    """Account role. Donors are intake-only records and never authenticate."""

    PARTICIPANT = "participant"
    ADMIN = "admin"
    DONOR = "donor"


class TokenPurpose(_ValuesMixin, str, Enum):
    """Purpose tag of a password token. A token only validates for its own purpose."""

    CREATE_PASSWORD = "create_password"
    RESET_PASSWORD = "reset_password"


class AccountStatus(_ValuesMixin, str, Enum):
    """Outcome of the existing-participant account lookup."""

    NOT_FOUND = "not_found"
    HAS_PASSWORD = "has_password"
    NEEDS_PASSWORD = "needs_password"
