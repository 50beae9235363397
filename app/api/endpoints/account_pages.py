"""Server-rendered account pages.

Same workflow operations as the JSON API, rendered as HTML forms. Expected
failures (validation, conflicts, bad links) re-render the form with a message
and status 400; everything else goes to the app's exception handlers.

Write routes open their own transaction around the workflow call, so a
failure rolls back before the error page is rendered (a lost token race must
not keep the password write).
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_account_workflow, set_session_cookie
from app.application.dtos.account import SignupData
from app.application.services.account_workflow import AccountWorkflow
from app.core.config import get_settings
from app.core.limiter import limit_auth
from app.infrastructure.persistence.database import get_db
from app.domain.exceptions import (
    ConflictException,
    InvalidTokenException,
    TokenAlreadyUsedException,
    ValidationException,
)
from app.pages import (
    GENERIC_EXISTING_MESSAGE,
    INVALID_LINK_MESSAGE,
    render_create_password_page,
    render_existing_page,
    render_forgot_password_page,
    render_message_page,
    render_reset_password_page,
    render_start_page,
)

router = APIRouter()

Workflow = Annotated[AccountWorkflow, Depends(get_account_workflow)]
Db = Annotated[AsyncSession, Depends(get_db)]
FormField = Annotated[str, Form()]


def _html(content: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(content=content, status_code=status_code)


def _invalid_link_page() -> HTMLResponse:
    return _html(
        render_message_page(
            "Link expired",
            INVALID_LINK_MESSAGE,
            "/account/existing",
            "Request a new link",
        ),
        status_code=400,
    )


def _signed_in_redirect(session_id: str) -> RedirectResponse:
    settings = get_settings()
    response = RedirectResponse(settings.portal_home_path, status_code=303)
    set_session_cookie(response, session_id, settings)
    return response


def _parse_date(raw: str) -> date | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationException("Date of birth must be a valid date", field="date_of_birth") from None


# ---- signup ------------------------------------------------------------------


@router.get("/start", response_class=HTMLResponse)
async def start_page():
    return _html(render_start_page(get_settings().login_page_path))


@router.post("/start", response_class=HTMLResponse)
@limit_auth
async def start_submit(
    request: Request,
    workflow: Workflow,
    db: Db,
    email: FormField = "",
    password: FormField = "",
    first_name: FormField = "",
    last_name: FormField = "",
    phone: FormField = "",
    date_of_birth: FormField = "",
    city: FormField = "",
    state: FormField = "",
    zip_code: FormField = "",
    school_or_employer: FormField = "",
    field_of_interest: FormField = "",
):
    values = {
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "phone": phone,
        "date_of_birth": date_of_birth,
        "city": city,
        "state": state,
        "zip_code": zip_code,
        "school_or_employer": school_or_employer,
        "field_of_interest": field_of_interest,
    }
    login_path = get_settings().login_page_path
    try:
        data = SignupData(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=_parse_date(date_of_birth),
            phone=phone,
            city=city,
            state=state,
            zip_code=zip_code,
            school_or_employer=school_or_employer,
            field_of_interest=field_of_interest,
        )
        async with db.begin():
            result = await workflow.signup(data)
    except ConflictException as e:
        if e.reason == ConflictException.EMAIL_EXISTS_NO_PASSWORD:
            return _html(
                render_existing_page(error=e.message, email=email), status_code=400
            )
        return _html(render_start_page(login_path, values, error=e.message), status_code=400)
    except ValidationException as e:
        return _html(render_start_page(login_path, values, error=e.message), status_code=400)
    return _signed_in_redirect(result.session_id)


# ---- existing participant ----------------------------------------------------


@router.get("/existing", response_class=HTMLResponse)
async def existing_page():
    return _html(render_existing_page())


@router.post("/existing", response_class=HTMLResponse)
@limit_auth
async def existing_submit(request: Request, workflow: Workflow, email: FormField = ""):
    """One message for every outcome so the page does not reveal which emails exist."""
    try:
        await workflow.request_account_status(email)
    except ValidationException as e:
        return _html(render_existing_page(error=e.message), status_code=400)
    return _html(render_existing_page(message=GENERIC_EXISTING_MESSAGE))


# ---- create password ---------------------------------------------------------


@router.get("/create-password", response_class=HTMLResponse)
async def create_password_page(token: Annotated[str, Query()] = ""):
    if not token:
        return _invalid_link_page()
    return _html(render_create_password_page(token))


@router.post("/create-password", response_class=HTMLResponse)
@limit_auth
async def create_password_submit(
    request: Request,
    workflow: Workflow,
    db: Db,
    token: FormField = "",
    password: FormField = "",
    confirm_password: FormField = "",
):
    try:
        async with db.begin():
            result = await workflow.create_password(token, password, confirm_password)
    except ValidationException as e:
        return _html(render_create_password_page(token, error=e.message), status_code=400)
    except (InvalidTokenException, TokenAlreadyUsedException):
        return _invalid_link_page()
    return _signed_in_redirect(result.session_id)


# ---- forgot / reset password -------------------------------------------------


@router.get("/forgot-password", response_class=HTMLResponse)
async def forgot_password_page():
    return _html(render_forgot_password_page())


@router.post("/forgot-password", response_class=HTMLResponse)
@limit_auth
async def forgot_password_submit(request: Request, workflow: Workflow, email: FormField = ""):
    message = await workflow.forgot_password(email)
    return _html(render_forgot_password_page(message=message))


@router.get("/reset-password", response_class=HTMLResponse)
async def reset_password_page(token: Annotated[str, Query()] = ""):
    if not token:
        return _invalid_link_page()
    return _html(render_reset_password_page(token))


@router.post("/reset-password", response_class=HTMLResponse)
@limit_auth
async def reset_password_submit(
    request: Request,
    workflow: Workflow,
    db: Db,
    token: FormField = "",
    password: FormField = "",
):
    try:
        async with db.begin():
            await workflow.reset_password(token, password)
    except ValidationException as e:
        return _html(render_reset_password_page(token, error=e.message), status_code=400)
    except (InvalidTokenException, TokenAlreadyUsedException):
        return _invalid_link_page()
    return _html(
        render_message_page(
            "Password updated",
            "Your password has been reset. You can now log in with your new password.",
            get_settings().login_page_path,
            "Log in",
        )
    )
