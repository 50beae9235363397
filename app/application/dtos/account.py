"""DTOs for account use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class AccountResult:
    """Account read-model returned to callers. Never carries the password hash."""

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    role: str
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None
    photo_path: str | None = None


@dataclass(frozen=True)
class SignupData:
    """Signup input as submitted. AccountWorkflow.signup() validates and normalizes it."""

    email: str
    password: str
    first_name: str
    last_name: str
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None

    def profile_fields(self) -> dict[str, Any]:
        """Columns written to the account row besides credentials and role."""
        return _profile_fields(self)


@dataclass(frozen=True)
class ParticipantProfile:
    """Participant entered by an admin. No password: the person creates one from an emailed link."""

    email: str
    first_name: str
    last_name: str
    role: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None

    def profile_fields(self) -> dict[str, Any]:
        return _profile_fields(self)


def _profile_fields(data: SignupData | ParticipantProfile) -> dict[str, Any]:
    return {
        "email": data.email,
        "first_name": data.first_name,
        "last_name": data.last_name,
        "date_of_birth": data.date_of_birth,
        "phone": data.phone,
        "city": data.city,
        "state": data.state,
        "zip_code": data.zip_code,
        "school_or_employer": data.school_or_employer,
        "field_of_interest": data.field_of_interest,
    }


@dataclass(frozen=True)
class AuthResult:
    """Successful signup / login / password creation: public account plus new session id."""

    account: AccountResult
    session_id: str


def account_to_result(account: Any) -> AccountResult:
    """Map an account record (ORM Account or equivalent) to AccountResult (no password)."""
    return AccountResult(
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
