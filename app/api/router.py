"""Router aggregation.

JSON API under /api, account pages under /account, liveness at /health.
All routes use dependencies from app.api.dependencies.
"""

from fastapi import APIRouter

from app.api.endpoints import account_pages, auth, health, participants

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(participants.router, prefix="/participants", tags=["participants"])

root_router = APIRouter()
root_router.include_router(health.router, prefix="/health", tags=["health"])
root_router.include_router(api_router, prefix="/api")
root_router.include_router(
    account_pages.router, prefix="/account", tags=["account-pages"], include_in_schema=False
)
