"""Account ORM model: participants, admins and donor intake records."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import AccountRole
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)

# Fields kept when an account is anonymized; everything else identifying is nulled.
ANONYMIZATION_ALLOW_LIST = frozenset({"field_of_interest", "role"})


class Account(CuidMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Account model. Table: account. Email unique among rows that are not soft-deleted.

    hashed_password is null until the person creates a password (admin-created
    participants, donor intake records).
    """

    __tablename__ = "account"

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AccountRole.PARTICIPANT.value,
        server_default=text("'participant'"),
    )
    hashed_password: Mapped[str | None] = mapped_column(String, nullable=True)

    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(12), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(5), nullable=True)
    school_or_employer: Mapped[str | None] = mapped_column(String(200), nullable=True)
    field_of_interest: Mapped[str | None] = mapped_column(String(50), nullable=True)
    photo_path: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('participant', 'admin', 'donor')", name="ck_account_role"
        ),
        Index(
            "uq_account_email_active",
            "email",
            unique=True,
            postgresql_where=text("is_deleted = false"),
        ),
    )
