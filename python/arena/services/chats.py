"""Chat service layer.

Creation and read models for chats:
- create_chat: chat + first waiting turn
- get_chat_history: chat with every turn, its messages and reveal data
- list_user_chats: offset-paginated chat list, most recently active first

Service functions correspond 1:1 with route handlers.
Routes are transport-only and call exactly one service function.
"""

from uuid import UUID

from arena.errors import ApiErrorCode, NotFoundError
from arena.logging import get_logger
from arena.schemas.chat import (
    ChatCreatedOut,
    ChatHistoryOut,
    ChatSummaryOut,
    MessageOut,
    ModelInfoOut,
    OffsetPageInfo,
    TurnOut,
)
from arena.store import Chat, ChatMode, InMemoryStore, Message, ModelInfo, Turn

logger = get_logger(__name__)

# Pagination limits
DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_limit(limit: int) -> int:
    """Clamp limit to valid range [MIN_LIMIT, MAX_LIMIT]."""
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


def _model_out(model: ModelInfo | None) -> ModelInfoOut | None:
    if model is None:
        return None
    return ModelInfoOut(id=model.id, name=model.name, provider=model.provider)


def message_to_out(message: Message) -> MessageOut:
    return MessageOut(
        id=message.id,
        role=message.role.value,
        content=message.content,
        model_id=message.model_id,
        sequence_number=message.sequence_number,
        response_time_ms=message.response_time_ms,
        created_at=message.created_at,
    )


def turn_to_out(turn: Turn, messages: list[Message]) -> TurnOut:
    return TurnOut(
        id=turn.id,
        turn_number=turn.turn_number,
        status=turn.status.value,
        vote=turn.vote.value if turn.vote else None,
        model_a=_model_out(turn.model_a),
        model_b=_model_out(turn.model_b),
        messages=[message_to_out(m) for m in messages],
    )


def chat_to_summary(chat: Chat) -> ChatSummaryOut:
    return ChatSummaryOut(
        id=chat.id,
        mode=chat.mode.value,
        status=chat.status.value,
        name=chat.name,
        created_at=chat.created_at,
        updated_at=chat.updated_at,
    )


def create_chat(store: InMemoryStore, user_id: UUID, mode: ChatMode) -> ChatCreatedOut:
    """Create a chat and its first turn.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the user does not exist.
    """
    chat, turn = store.create_chat(user_id, mode=mode)

    logger.info(
        "chat_created",
        chat_id=str(chat.id),
        user_id=str(user_id),
        mode=chat.mode.value,
        turn_id=str(turn.id),
    )

    return ChatCreatedOut(
        id=chat.id,
        mode=chat.mode.value,
        name=chat.name,
        status=chat.status.value,
        turn_id=turn.id,
    )


def get_chat_history(store: InMemoryStore, chat_id: UUID) -> ChatHistoryOut:
    """Rebuild a chat with all of its turns and their messages.

    Raises:
        NotFoundError(E_CHAT_NOT_FOUND): If the chat does not exist.
    """
    with store.transaction():
        chat = store.get_chat(chat_id)
        if chat is None:
            raise NotFoundError(ApiErrorCode.E_CHAT_NOT_FOUND, "Chat not found")
        turns = [(t, store.get_turn_messages(t.id)) for t in store.get_chat_turns(chat_id)]

    return ChatHistoryOut(
        id=chat.id,
        mode=chat.mode.value,
        name=chat.name,
        status=chat.status.value,
        current_turn_id=chat.current_turn_id,
        created_at=chat.created_at,
        updated_at=chat.updated_at,
        turns=[turn_to_out(turn, messages) for turn, messages in turns],
    )


def list_user_chats(
    store: InMemoryStore,
    user_id: UUID,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> tuple[list[ChatSummaryOut], OffsetPageInfo]:
    """List a user's chats, most recently active first.

    Unknown users simply have no chats.
    """
    limit = clamp_limit(limit)
    offset = max(0, offset)

    chats = store.get_user_chats(user_id)
    page = chats[offset : offset + limit]

    return (
        [chat_to_summary(c) for c in page],
        OffsetPageInfo(limit=limit, offset=offset, total=len(chats)),
    )
