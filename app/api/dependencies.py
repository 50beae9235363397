"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, the account
workflow, the session cookie and the authorization gate. Routes depend only
on these; process-wide collaborators (session store, notifier, optional
identity provider) live on app.state and are set up in main/lifespan.

Two workflow flavours:
- get_account_workflow: plain session. Login, account-status and
  forgot-password issue tokens, and the token store commits each one itself.
- get_account_workflow_for_write: one transaction per request. Signup and
  password redemption must commit or roll back as a whole.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.session import SessionData
from app.application.interfaces.services import (
    IIdentityProvider,
    INotificationService,
    ISessionStore,
)
from app.application.services.account_workflow import AccountWorkflow
from app.application.services.authorization_service import (
    ensure_authenticated,
    ensure_owner_or_admin,
    ensure_role,
)
from app.core.config import Settings, get_settings
from app.domain.enums import AccountRole
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AccountRepository,
    PasswordTokenStore,
)
from app.infrastructure.security.password import BcryptPasswordHasher

RequestOwnerResolver = Callable[[Request], Awaitable[str | None]]


# ---- process-wide collaborators ------------------------------------------


def get_session_store(request: Request) -> ISessionStore:
    """Session store shared by all requests of this process."""
    return request.app.state.session_store


def get_notifier(request: Request) -> INotificationService:
    return request.app.state.notifier


def get_identity_provider(request: Request) -> IIdentityProvider | None:
    """Development identity provider when the dev entry point installed one."""
    return getattr(request.app.state, "identity_provider", None)


# ---- repositories and workflow ----------------------------------------------


async def get_account_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountRepository:
    """Account repository for read endpoints."""
    return AccountRepository(db)


async def get_account_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AccountRepository:
    """Account repository inside a request transaction."""
    return AccountRepository(db)


def _build_workflow(request: Request, db: AsyncSession) -> AccountWorkflow:
    settings = get_settings()
    return AccountWorkflow(
        accounts=AccountRepository(db),
        tokens=PasswordTokenStore(db, ttl_seconds=settings.password_token_ttl_seconds),
        notifier=get_notifier(request),
        sessions=get_session_store(request),
        hasher=BcryptPasswordHasher(settings.bcrypt_rounds),
        base_url=settings.base_url,
        identity_provider=get_identity_provider(request),
        session_ttl_seconds=settings.session_ttl_seconds,
    )


async def get_account_workflow(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountWorkflow:
    """Workflow for login, logout, current account, account-status and forgot-password."""
    return _build_workflow(request, db)


async def get_account_workflow_for_write(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AccountWorkflow:
    """Workflow for signup, create-password and reset-password (single transaction)."""
    return _build_workflow(request, db)


# ---- session cookie ---------------------------------------------------------


def get_session_id(request: Request) -> str | None:
    """Opaque session id from the session cookie, if any."""
    return request.cookies.get(get_settings().session_cookie_name) or None


def set_session_cookie(
    response: Response, session_id: str, settings: Settings | None = None
) -> None:
    """HttpOnly, SameSite=Lax, Secure in production, fixed lifetime."""
    settings = settings or get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


async def get_current_session(
    request: Request,
    store: Annotated[ISessionStore, Depends(get_session_store)],
) -> SessionData | None:
    """Session for the request's cookie, or None (no cookie, unknown or expired)."""
    session_id = get_session_id(request)
    if not session_id:
        return None
    return await store.get(session_id)


# ---- authorization gate -----------------------------------------------------


async def require_authenticated(
    session: Annotated[SessionData | None, Depends(get_current_session)],
) -> SessionData:
    """Dependency: reject anonymous requests (401)."""
    return ensure_authenticated(session)


def require_role(*roles: AccountRole | str) -> Callable[..., Awaitable[SessionData]]:
    """Dependency factory: authenticated and role in roles, else 401/403."""

    async def _require_role(
        session: Annotated[SessionData | None, Depends(get_current_session)],
    ) -> SessionData:
        return ensure_role(session, *roles)

    return _require_role


def require_ownership_or_admin(
    resolve_owner_id: RequestOwnerResolver,
) -> Callable[..., Awaitable[SessionData]]:
    """Dependency factory: admin, or the account that owns the resource.

    resolve_owner_id receives the request (path params, app state) and
    returns the owning account id. Admin sessions skip it.
    """

    async def _require_ownership_or_admin(
        request: Request,
        session: Annotated[SessionData | None, Depends(get_current_session)],
    ) -> SessionData:
        return await ensure_owner_or_admin(session, lambda: resolve_owner_id(request))

    return _require_ownership_or_admin


require_admin = require_role(AccountRole.ADMIN)
