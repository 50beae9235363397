"""Application DTOs: plain dataclasses passed between layers (no ORM)."""

from app.application.dtos.account import (
    AccountResult,
    AuthResult,
    ParticipantProfile,
    SignupData,
    account_to_result,
)
from app.application.dtos.session import SessionData
from app.application.dtos.token import IssuedToken, TokenRecord

__all__ = [
    "AccountResult",
    "AuthResult",
    "IssuedToken",
    "ParticipantProfile",
    "SessionData",
    "SignupData",
    "TokenRecord",
    "account_to_result",
]
