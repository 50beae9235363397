"""UTC clock helpers.

Token expiry and session lifetimes compare timezone-aware UTC datetimes only.
Services take a clock callable (default utc_now) so tests can move time.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime read from the database to aware UTC.

    Naive values are taken to be UTC already; None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
