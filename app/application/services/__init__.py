"""Application services: account workflow and authorization contracts."""

from app.application.services.account_workflow import (
    FORGOT_PASSWORD_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    AccountWorkflow,
    normalize_email,
)
from app.application.services.authorization_service import (
    ensure_authenticated,
    ensure_owner_or_admin,
    ensure_role,
)

__all__ = [
    "AccountWorkflow",
    "FORGOT_PASSWORD_MESSAGE",
    "INVALID_CREDENTIALS_MESSAGE",
    "ensure_authenticated",
    "ensure_owner_or_admin",
    "ensure_role",
    "normalize_email",
]
