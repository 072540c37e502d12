"""FastAPI dependencies for route handlers.

The store and the random source are created once per app in create_app()
and hung off app.state; handlers reach them only through these
dependencies, never through module globals.
"""

from fastapi import Request

from arena.config import Settings, get_settings
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore

__all__ = ["get_random_source", "get_settings", "get_store", "Settings"]


def get_store(request: Request) -> InMemoryStore:
    """Get the app's entity store."""
    return request.app.state.store


def get_random_source(request: Request) -> RandomSource:
    """Get the app's shared random source."""
    return request.app.state.random_source
