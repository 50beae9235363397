"""Authorization contracts over the current session.

Three checks cover every protected operation: authenticated, role in a set,
owner-or-admin. They read only the session snapshot, so a role changed after
login applies from the next login on.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from app.application.dtos.session import SessionData
from app.domain.enums import AccountRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    OwnershipCheckException,
    PortalException,
)

logger = logging.getLogger(__name__)

OwnerResolver = Callable[[], Awaitable[str | None]]


def ensure_authenticated(session: SessionData | None) -> SessionData:
    """Return the session or raise AuthenticationException."""
    if session is None:
        raise AuthenticationException("Authentication required")
    return session


def ensure_role(session: SessionData | None, *roles: AccountRole | str) -> SessionData:
    """Require an authenticated session whose role is one of roles."""
    session = ensure_authenticated(session)
    allowed = {r.value if isinstance(r, AccountRole) else r for r in roles}
    if session.role not in allowed:
        raise AuthorizationException("Insufficient permissions")
    return session


async def ensure_owner_or_admin(
    session: SessionData | None, resolve_owner_id: OwnerResolver
) -> SessionData:
    """Admins pass without resolving; others must own the resource.

    A failing resolver surfaces as OwnershipCheckException (500). Portal errors
    raised by the resolver (e.g. not found) propagate unchanged.
    """
    session = ensure_authenticated(session)
    if session.is_admin:
        return session
    try:
        owner_id = await resolve_owner_id()
    except PortalException:
        raise
    except Exception:
        logger.exception("Ownership resolver failed for account %s", session.account_id)
        raise OwnershipCheckException() from None
    if owner_id is None or owner_id != session.account_id:
        raise AuthorizationException("Access denied")
    return session
