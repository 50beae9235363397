"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AccountRole, AccountStatus, TokenPurpose
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidTokenException,
    OwnershipCheckException,
    PasswordNotSetException,
    PortalException,
    ResourceNotFoundException,
    TokenAlreadyUsedException,
    ValidationException,
)
from app.domain.value_objects import NewPassword, PhoneNumber, ZipCode

__all__ = [
    # Enums
    "AccountRole",
    "AccountStatus",
    "TokenPurpose",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "InvalidTokenException",
    "OwnershipCheckException",
    "PasswordNotSetException",
    "PortalException",
    "ResourceNotFoundException",
    "TokenAlreadyUsedException",
    "ValidationException",
    # Value objects
    "NewPassword",
    "PhoneNumber",
    "ZipCode",
]
