"""Primary key generator for account and password token rows (CUID2)."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id, e.g. for Account.id."""
    return _cuid()
