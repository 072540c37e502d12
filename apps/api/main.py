"""Thin API launcher.

This is the uvicorn entrypoint. All application logic lives in the arena package.
Run with: uvicorn main:app --reload

Note: The app instance is created here (not in arena.app) so that tests can
build isolated apps with their own store and random source.
"""

from arena.app import add_request_id_middleware, create_app

app = create_app()
# Add request-id middleware LAST so it runs FIRST (outermost)
add_request_id_middleware(app)

__all__ = ["app"]
