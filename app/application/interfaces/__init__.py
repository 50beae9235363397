"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    AccountRecord,
    IAccountRepository,
    ITokenStore,
)
from app.application.interfaces.services import (
    IIdentityProvider,
    INotificationService,
    IPasswordHasher,
    ISessionStore,
)

__all__ = [
    "AccountRecord",
    "IAccountRepository",
    "IIdentityProvider",
    "INotificationService",
    "IPasswordHasher",
    "ISessionStore",
    "ITokenStore",
]
