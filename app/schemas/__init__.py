"""Pydantic request/response schemas for the API."""

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
from app.schemas.health import HealthResponse
from app.schemas.participant import ParticipantListResponse

__all__ = [
    "AccountResponse",
    "AccountStatusResponse",
    "AuthResponse",
    "CreatePasswordRequest",
    "EmailRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ParticipantListResponse",
    "ResetPasswordRequest",
    "SignupRequest",
]
