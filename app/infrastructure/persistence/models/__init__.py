"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.account import (
    ANONYMIZATION_ALLOW_LIST,
    Account,
)
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.password_token import PasswordToken

__all__ = [
    "ANONYMIZATION_ALLOW_LIST",
    "Account",
    "CuidMixin",
    "PasswordToken",
    "SoftDeleteMixin",
    "TimestampMixin",
]
