"""Application layer: interfaces, DTOs, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, token store, sessions, notifier).
"""

from app.application.interfaces import (
    IAccountRepository,
    IIdentityProvider,
    INotificationService,
    IPasswordHasher,
    ISessionStore,
    ITokenStore,
)
from app.application.services import AccountWorkflow

__all__ = [
    "AccountWorkflow",
    "IAccountRepository",
    "IIdentityProvider",
    "INotificationService",
    "IPasswordHasher",
    "ISessionStore",
    "ITokenStore",
]
