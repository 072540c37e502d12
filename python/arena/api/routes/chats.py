"""Chat API routes.

Route handlers for chat creation, chat history, and message streaming.
Routes are transport-only: each calls exactly one service function.

- POST /chats: create a chat and its first turn
- GET /chats/{chat_id}: chat with all turns, messages and reveal data
- POST /chats/{chat_id}/messages/stream: SSE dual-model answer for the current turn

Response envelope: {"data": ...}
Error envelope: {"error": {"code": "...", "message": "...", "request_id": "..."}}

Streaming errors:
- Before the channel opens (bad content, unknown chat, busy turn) the
  response is a JSON error with a 4xx status.
- Once the channel is open, errors only arrive as an in-band `error` event.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from arena.api.deps import Settings, get_random_source, get_settings, get_store
from arena.logging import get_request_id, set_turn_context
from arena.responses import success_response
from arena.schemas.chat import CreateChatRequest, SendMessageRequest
from arena.services import chats as chats_service
from arena.services import turns as turns_service
from arena.services.randomness import RandomSource
from arena.services.send_message_stream import SSE_HEADERS, stream_message_events
from arena.store import InMemoryStore

router = APIRouter(tags=["chats"])


@router.post("/chats", status_code=201)
async def create_chat(
    body: CreateChatRequest,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict:
    """Create a chat with its first waiting turn.

    Errors:
        E_USER_NOT_FOUND (404): user_id does not name an existing user.
    """
    result = chats_service.create_chat(store, body.user_id, body.mode)
    return success_response(result.model_dump(mode="json"))


@router.get("/chats/{chat_id}")
async def get_chat(
    chat_id: UUID,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict:
    """Get a chat's full history.

    Errors:
        E_CHAT_NOT_FOUND (404): Chat doesn't exist.
    """
    result = chats_service.get_chat_history(store, chat_id)
    return success_response(result.model_dump(mode="json"))


@router.post("/chats/{chat_id}/messages/stream")
async def stream_message(
    chat_id: UUID,
    body: SendMessageRequest,
    store: Annotated[InMemoryStore, Depends(get_store)],
    random_source: Annotated[RandomSource, Depends(get_random_source)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> StreamingResponse:
    """Send a message on the chat's current turn and stream both answers.

    Errors (before the stream opens):
        E_CONTENT_REQUIRED (400): content missing or whitespace only.
        E_CHAT_NOT_FOUND (404): Chat doesn't exist.
        E_TURN_NOT_FOUND (404): Chat's current turn is missing.
        E_TURN_NOT_ACCEPTING_MESSAGES (409): Current turn is not waiting.
    """
    turn = turns_service.begin_message(store, chat_id, body.content)
    set_turn_context(str(chat_id), str(turn.id))

    return StreamingResponse(
        stream_message_events(
            store=store,
            turn=turn,
            content=body.content,
            random_source=random_source,
            settings=settings,
            request_id=get_request_id(),
        ),
        media_type="text/event-stream; charset=utf-8",
        headers=SSE_HEADERS,
    )
