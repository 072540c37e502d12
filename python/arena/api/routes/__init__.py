"""API route definitions.

Uses a factory pattern to avoid import-time settings loading.
This allows tests to import modules without requiring all environment
variables to be configured upfront.
"""

from fastapi import APIRouter

from arena.api.routes.chats import router as chats_router
from arena.api.routes.health import router as health_router
from arena.api.routes.reference import router as reference_router
from arena.api.routes.session import router as session_router
from arena.api.routes.turns import router as turns_router
from arena.api.routes.users import router as users_router

API_PREFIX = "/api/v1"


def create_api_router() -> APIRouter:
    """Create and configure the versioned API router.

    Returns:
        APIRouter with all routes registered under /api/v1.
    """
    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(session_router)
    api_router.include_router(users_router)
    api_router.include_router(chats_router)
    api_router.include_router(turns_router)
    api_router.include_router(reference_router)
    return api_router


__all__ = ["API_PREFIX", "create_api_router"]
