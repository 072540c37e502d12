"""User API routes.

- POST /users: create an anonymous user
- GET /users/{user_id}/chats: the user's chats, most recently active first
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from arena.api.deps import get_store
from arena.responses import success_response
from arena.services import chats as chats_service
from arena.services import users as users_service
from arena.store import InMemoryStore

router = APIRouter(tags=["users"])


@router.post("/users", status_code=201)
async def create_user(store: Annotated[InMemoryStore, Depends(get_store)]) -> dict:
    """Create a user.

    Returns 201 Created with the user id and creation time.
    """
    result = users_service.create_user(store)
    return success_response(result.model_dump(mode="json"))


@router.get("/users/{user_id}/chats")
async def list_user_chats(
    user_id: UUID,
    store: Annotated[InMemoryStore, Depends(get_store)],
    limit: int = Query(default=50, description="Maximum results (clamped to 1-100)"),
    offset: int = Query(default=0, description="Number of chats to skip"),
) -> dict:
    """List the user's chats ordered by updated_at DESC.

    Unknown users get an empty list.
    """
    chats, page = chats_service.list_user_chats(store, user_id, limit=limit, offset=offset)
    return {
        "data": [c.model_dump(mode="json") for c in chats],
        "page": page.model_dump(mode="json"),
    }
