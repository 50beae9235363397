"""Auth API: signup, login, logout, current account and password links.

The session id travels only in the HttpOnly cookie; bodies carry the public
account fields and the placeholder token "session-based".
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.dependencies import (
    clear_session_cookie,
    get_account_workflow,
    get_account_workflow_for_write,
    get_session_id,
    set_session_cookie,
)
from app.application.dtos.account import AuthResult
from app.application.services.account_workflow import AccountWorkflow
from app.core.limiter import limit_auth
from app.domain.enums import AccountStatus
from app.schemas.auth import (
    AccountResponse,
    AccountStatusResponse,
    AuthResponse,
    CreatePasswordRequest,
    EmailRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    SignupRequest,
)

router = APIRouter()

ACCOUNT_STATUS_MESSAGES = {
    AccountStatus.NOT_FOUND: "We could not find an account with that email. Please sign up.",
    AccountStatus.HAS_PASSWORD: "An account with this email already has a password. Please log in.",
    AccountStatus.NEEDS_PASSWORD: "We sent you an email with a link to create your password.",
}

Workflow = Annotated[AccountWorkflow, Depends(get_account_workflow)]
WriteWorkflow = Annotated[AccountWorkflow, Depends(get_account_workflow_for_write)]


def _signed_in(response: Response, result: AuthResult) -> AuthResponse:
    set_session_cookie(response, result.session_id)
    return AuthResponse(account=AccountResponse.from_result(result.account))


@router.post("/signup", response_model=AuthResponse, status_code=201)
@limit_auth
async def signup(
    request: Request,
    response: Response,
    body: SignupRequest,
    workflow: WriteWorkflow,
):
    """Create a participant account and sign it in."""
    result = await workflow.signup(body.to_signup_data())
    return _signed_in(response, result)


@router.post("/login", response_model=AuthResponse)
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    workflow: Workflow,
):
    """Participant login. A passwordless account gets a creation link by email (400)."""
    result = await workflow.login(body.email or "", body.password or "")
    return _signed_in(response, result)


@router.post("/admin/login", response_model=AuthResponse)
@limit_auth
async def admin_login(
    request: Request,
    response: Response,
    body: LoginRequest,
    workflow: Workflow,
):
    """Admin login: same shape as /login, admin accounts only."""
    result = await workflow.admin_login(body.email or "", body.password or "")
    return _signed_in(response, result)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, workflow: Workflow):
    """Destroy the session (if any) and clear the cookie."""
    await workflow.logout(get_session_id(request))
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AccountResponse)
async def get_me(request: Request, workflow: Workflow):
    """Return the signed-in account, re-read from the store."""
    account = await workflow.get_current_account(get_session_id(request))
    return AccountResponse.from_result(account)


@router.post("/forgot-password", response_model=MessageResponse)
@limit_auth
async def forgot_password(request: Request, body: EmailRequest, workflow: Workflow):
    """Always 200 with the same message, whether or not the email is known."""
    message = await workflow.forgot_password(body.email or "")
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
@limit_auth
async def reset_password(
    request: Request, body: ResetPasswordRequest, workflow: WriteWorkflow
):
    """Set a new password from a reset link. Does not sign in."""
    await workflow.reset_password(body.token or "", body.password or "")
    return MessageResponse(
        message="Your password has been reset. You can now log in with your new password."
    )


@router.post("/create-password", response_model=AuthResponse)
@limit_auth
async def create_password(
    request: Request,
    response: Response,
    body: CreatePasswordRequest,
    workflow: WriteWorkflow,
):
    """Set the first password from a creation link and sign in."""
    result = await workflow.create_password(
        body.token or "", body.password or "", body.confirm_password or ""
    )
    return _signed_in(response, result)


@router.post("/account-status", response_model=AccountStatusResponse)
@limit_auth
async def account_status(request: Request, body: EmailRequest, workflow: Workflow):
    """Where an existing participant stands; emails a creation link when no password is set."""
    status = await workflow.request_account_status(body.email or "")
    return AccountStatusResponse(status=status.value, message=ACCOUNT_STATUS_MESSAGES[status])
