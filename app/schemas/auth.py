"""Auth API schemas.

Bodies use camelCase on the wire (firstName, zipCode, confirmPassword) to
match the React client; snake_case names are accepted too. Fields are
optional at this layer so the workflow reports missing values with its own
messages.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.account import AccountResult, SignupData


class CamelModel(BaseModel):
    """Base for request/response bodies exchanged with the front end."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Request body for POST /api/auth/signup."""

    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None

    def to_signup_data(self) -> SignupData:
        return SignupData(
            email=self.email or "",
            password=self.password or "",
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            date_of_birth=self.date_of_birth,
            phone=self.phone,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            school_or_employer=self.school_or_employer,
            field_of_interest=self.field_of_interest,
        )


class LoginRequest(CamelModel):
    """Request body for POST /api/auth/login and /api/auth/admin/login."""

    email: str | None = None
    password: str | None = None


class EmailRequest(CamelModel):
    """Request body carrying only an email (forgot-password, account-status)."""

    email: str | None = None


class ResetPasswordRequest(CamelModel):
    """Request body for POST /api/auth/reset-password."""

    token: str | None = None
    password: str | None = None


class CreatePasswordRequest(CamelModel):
    """Request body for POST /api/auth/create-password."""

    token: str | None = None
    password: str | None = None
    confirm_password: str | None = None


class AccountResponse(CamelModel):
    """Public account fields (never the password hash)."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None
    photo_path: str | None = None

    @classmethod
    def from_result(cls, account: AccountResult) -> "AccountResponse":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            date_of_birth=account.date_of_birth,
            phone=account.phone,
            city=account.city,
            state=account.state,
            zip_code=account.zip_code,
            school_or_employer=account.school_or_employer,
            field_of_interest=account.field_of_interest,
            photo_path=account.photo_path,
        )


class AuthResponse(CamelModel):
    """Signup/login/create-password response. The session itself travels in a cookie."""

    token: str = Field(default="session-based")
    account: AccountResponse


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str


class AccountStatusResponse(CamelModel):
    """Response for POST /api/auth/account-status."""

    status: str
    message: str
