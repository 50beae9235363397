"""Domain value objects and shared value types."""

from app.domain.value_objects.core import NewPassword, PhoneNumber, ZipCode

__all__ = [
    "NewPassword",
    "PhoneNumber",
    "ZipCode",
]
