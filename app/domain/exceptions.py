"""Domain exceptions for the participant portal.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class PortalException(Exception):
    """Base exception for all portal application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses: error code, message, and details when present."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(PortalException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ConflictException(PortalException):
    """Raised when signup hits an email that already belongs to an active account.

    reason is EMAIL_EXISTS_WITH_PASSWORD or EMAIL_EXISTS_NO_PASSWORD; in the
    latter case callers route the user to the password-creation flow.
    """

    EMAIL_EXISTS_WITH_PASSWORD = "EMAIL_EXISTS_WITH_PASSWORD"
    EMAIL_EXISTS_NO_PASSWORD = "EMAIL_EXISTS_NO_PASSWORD"

    _MESSAGES = {
        EMAIL_EXISTS_WITH_PASSWORD: "An account with this email already exists. Please log in.",
        EMAIL_EXISTS_NO_PASSWORD: (
            "An account with this email already exists but no password is set yet. "
            "Please create your password."
        ),
    }

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(self._MESSAGES[reason], "CONFLICT", {"reason": reason})


class AuthenticationException(PortalException):
    """Raised when authentication fails (e.g. invalid credentials or no session)."""

    def __init__(self, message: str = "Authentication required") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(PortalException):
    """Raised when the session lacks the role or ownership required for the operation."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message, "PERMISSION_DENIED")


class OwnershipCheckException(PortalException):
    """Raised when resolving a resource owner fails (reported as an internal error)."""

    def __init__(self, message: str = "Error checking ownership") -> None:
        super().__init__(message, "OWNERSHIP_CHECK_ERROR")


class PasswordNotSetException(PortalException):
    """Raised at login when the account exists but has no password; a creation link was emailed."""

    def __init__(self) -> None:
        super().__init__(
            "An account exists for this email but no password is set yet. "
            "We sent you an email with a link to create your password; please check your email.",
            "PASSWORD_NOT_SET",
        )


class InvalidTokenException(PortalException):
    """Raised when a password token is missing, expired, used, or for another purpose."""

    def __init__(self, message: str = "This link is invalid or has expired.") -> None:
        super().__init__(message, "INVALID_TOKEN")


class TokenAlreadyUsedException(PortalException):
    """Raised when a concurrent request redeemed the same token first (conditional update lost)."""

    def __init__(self) -> None:
        super().__init__("This link has already been used.", "TOKEN_ALREADY_USED")


class ResourceNotFoundException(PortalException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'participant').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(PortalException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
