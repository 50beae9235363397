"""Participant administration schemas."""

from datetime import date
from typing import Any

from pydantic import Field

from app.application.dtos.account import ParticipantProfile
from app.schemas.auth import AccountResponse, CamelModel


class ParticipantCreateRequest(CamelModel):
    """Request body for POST /api/participants (admin creates an account without a password)."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None

    def to_profile(self) -> ParticipantProfile:
        return ParticipantProfile(
            email=self.email or "",
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            role=self.role,
            date_of_birth=self.date_of_birth,
            phone=self.phone,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            school_or_employer=self.school_or_employer,
            field_of_interest=self.field_of_interest,
        )


class ParticipantUpdateRequest(CamelModel):
    """Request body for PUT /api/participants/{id}. Omitted fields are left unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    role: str | None = Field(None, description="Admins only")
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    school_or_employer: str | None = None
    field_of_interest: str | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class ParticipantListResponse(CamelModel):
    """List of participants (admins and participants; donors excluded)."""

    items: list[AccountResponse]
    total: int = Field(..., description="Number of participants across all pages")
