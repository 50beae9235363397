"""Development entry point: `uvicorn app.dev:app --reload`.

Same application as app.main plus two fixed test logins
(participant@test.com / Test1234!, admin@test.com / Admin1234!).
DevIdentityProvider refuses to start when ENVIRONMENT=production.
"""

from app.core.config import get_settings
from app.infrastructure.services.identity_provider import DevIdentityProvider
from app.main import create_app

app = create_app(identity_provider=DevIdentityProvider(get_settings().environment))
