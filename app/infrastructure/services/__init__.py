"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.identity_provider import (
    DevIdentityProvider,
    DevIdentityProviderDisabledError,
)
from app.infrastructure.services.notification_service import (
    LogOnlyNotificationService,
    SmtpNotificationService,
    build_notification_service,
)

__all__ = [
    "DevIdentityProvider",
    "DevIdentityProviderDisabledError",
    "LogOnlyNotificationService",
    "SmtpNotificationService",
    "build_notification_service",
]
