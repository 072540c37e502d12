"""Anonymous session endpoint.

POST /session issues an opaque session id in an httpOnly cookie. The id is
unrelated to user, chat and turn ids and is never used for authorization.
Calling it again with the cookie present is a no-op (204).
"""

from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from arena.api.deps import Settings, get_settings
from arena.logging import get_logger
from arena.responses import success_response

logger = get_logger(__name__)

router = APIRouter(tags=["session"])

SESSION_COOKIE_NAME = "session_id"


@router.post("/session", status_code=201, response_model=None)
async def create_session(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    """Issue a session cookie unless one is already present."""
    if request.cookies.get(SESSION_COOKIE_NAME):
        return Response(status_code=204)

    session_id = str(uuid4())
    response = JSONResponse(status_code=201, content=success_response({"session_id": session_id}))
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_id,
        max_age=settings.session_cookie_max_age_s,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    logger.info("session_created")
    return response
