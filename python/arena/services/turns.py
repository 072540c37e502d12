"""Turn lifecycle controller.

Owns the turn state machine and the vote transaction:

    waiting -> streaming -> completed -> voted

voted is terminal for a turn id. A successful vote creates the chat's next
turn as a new waiting sibling; it never moves the voted turn back.

Transactions:
- begin_message: waiting -> streaming and the user's message (seq 1)
- complete_stream: streaming -> completed, skipped if the turn moved on
- submit_vote: vote + reveal, next turn, chat repoint, all or nothing

Every precondition failure raises an ApiError before anything is mutated.
Multi-step mutations run inside store.transaction() so readers never see
a turn with a vote but a chat still pointing at it, or the reverse.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4

from arena.errors import ApiErrorCode, ConflictError, InvalidRequestError, NotFoundError
from arena.logging import get_logger
from arena.services import catalog
from arena.services.randomness import RandomSource
from arena.store import (
    InMemoryStore,
    Message,
    MessageRole,
    ModelInfo,
    Turn,
    TurnStatus,
    Winner,
)
from arena.store.entities import utcnow

logger = get_logger(__name__)

USER_MESSAGE_SEQUENCE = 1
VALID_WINNERS = frozenset(w.value for w in Winner)


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a successful vote.

    category and tags are presentational only.
    """

    turn: Turn
    model_a: ModelInfo
    model_b: ModelInfo
    new_turn: Turn
    category: str
    tags: list[str]


def validate_content(content: str | None) -> str:
    """Reject missing or whitespace-only message content."""
    if content is None or not content.strip():
        raise InvalidRequestError(ApiErrorCode.E_CONTENT_REQUIRED, "content is required")
    return content


def begin_message(store: InMemoryStore, chat_id: UUID, content: str | None) -> Turn:
    """Claim the chat's current turn for streaming.

    Checks, in order:
    1. content is non-empty after trimming (E_CONTENT_REQUIRED)
    2. chat exists (E_CHAT_NOT_FOUND)
    3. current turn resolves (E_TURN_NOT_FOUND)
    4. turn is waiting (E_TURN_NOT_ACCEPTING_MESSAGES)

    On success the turn is streaming and holds the user's message as
    sequence 1.

    Returns:
        The turn, now in the streaming state.
    """
    content = validate_content(content)

    with store.transaction():
        chat = store.get_chat(chat_id)
        if chat is None:
            raise NotFoundError(ApiErrorCode.E_CHAT_NOT_FOUND, "Chat not found")

        turn = store.get_turn(chat.current_turn_id)
        if turn is None:
            raise NotFoundError(ApiErrorCode.E_TURN_NOT_FOUND, "Turn not found")

        if turn.status != TurnStatus.waiting:
            raise ConflictError(
                ApiErrorCode.E_TURN_NOT_ACCEPTING_MESSAGES,
                f"Turn is {turn.status.value} and does not accept messages",
            )

        turn = store.update_turn_status(turn.id, TurnStatus.streaming)
        store.add_message(
            turn.id,
            Message(
                id=uuid4(),
                turn_id=turn.id,
                role=MessageRole.user,
                content=content,
                sequence_number=USER_MESSAGE_SEQUENCE,
                created_at=utcnow(),
            ),
        )

    logger.info(
        "turn_streaming_started",
        chat_id=str(chat_id),
        turn_id=str(turn.id),
        turn_number=turn.turn_number,
    )
    return turn


def complete_stream(store: InMemoryStore, turn_id: UUID) -> Turn | None:
    """Mark a streaming turn completed.

    A turn that was voted on while its stream was still running keeps its
    voted state.
    """
    with store.transaction():
        turn = store.get_turn(turn_id)
        if turn is None or turn.status != TurnStatus.streaming:
            logger.info(
                "turn_completion_skipped",
                turn_id=str(turn_id),
                status=turn.status.value if turn else None,
            )
            return turn
        turn = store.update_turn_status(turn_id, TurnStatus.completed)

    logger.info("turn_completed", turn_id=str(turn_id))
    return turn


def _validate_winner(winner: str | None) -> Winner:
    if not winner:
        raise InvalidRequestError(ApiErrorCode.E_WINNER_REQUIRED, "winner is required")
    if winner not in VALID_WINNERS:
        raise InvalidRequestError(
            ApiErrorCode.E_INVALID_WINNER,
            f"winner must be one of: {', '.join(sorted(VALID_WINNERS))}",
        )
    return Winner(winner)


def submit_vote(
    store: InMemoryStore,
    turn_id: UUID,
    winner: str | None,
    random_source: RandomSource,
) -> VoteOutcome:
    """Record a vote, reveal the models, and roll the chat to its next turn.

    Checks, in order:
    1. turn exists (E_TURN_NOT_FOUND)
    2. turn is not already voted (E_TURN_ALREADY_VOTED)
    3. winner is present (E_WINNER_REQUIRED) and allowed (E_INVALID_WINNER)

    Effects, applied atomically:
    (a) draw two distinct catalog models
    (b) set vote and reveal on the turn (voted, write-once)
    (c) allocate turn_number + 1 in waiting for the same chat
    (d) repoint the chat's current turn and refresh updated_at
    """
    with store.transaction():
        turn = store.get_turn(turn_id)
        if turn is None:
            raise NotFoundError(ApiErrorCode.E_TURN_NOT_FOUND, "Turn not found")

        if turn.status == TurnStatus.voted:
            raise ConflictError(ApiErrorCode.E_TURN_ALREADY_VOTED, "Turn already voted")

        vote = _validate_winner(winner)

        if store.get_chat(turn.chat_id) is None:
            raise NotFoundError(ApiErrorCode.E_CHAT_NOT_FOUND, "Chat not found")

        model_a, model_b = catalog.pick_model_pair(random_source)
        voted_turn = store.record_vote(turn.id, vote, model_a, model_b)
        new_turn = store.create_turn(turn.chat_id, turn.turn_number + 1)
        store.set_current_turn(turn.chat_id, new_turn.id)

    category, tags = catalog.pick_category_tags(random_source)

    logger.info(
        "turn_voted",
        chat_id=str(turn.chat_id),
        turn_id=str(turn.id),
        winner=vote.value,
        model_a=model_a.id,
        model_b=model_b.id,
        new_turn_id=str(new_turn.id),
    )

    return VoteOutcome(
        turn=voted_turn,
        model_a=model_a,
        model_b=model_b,
        new_turn=new_turn,
        category=category,
        tags=tags,
    )
