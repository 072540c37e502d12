"""Demo fixture seeding.

Populates a fresh store with one demo user owning a chat whose first turn
is already answered and voted on, and whose second turn is waiting. Lets a
frontend render history, reveal and the chat list without clicking through
a full round first.

Seeding goes through the regular store primitives and the turn controller,
so the fixtures obey the same invariants as live data.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4

from arena.logging import get_logger
from arena.services import catalog
from arena.services import turns as turns_service
from arena.services.dual_stream import MODEL_SEQUENCE_NUMBERS, RESPONSE_TIME_MIN_MS
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore, Message, MessageRole, Winner
from arena.store.entities import utcnow

logger = get_logger(__name__)

DEMO_PROMPT = catalog.PROMPT_SUGGESTIONS[0].text


@dataclass(frozen=True)
class SeededDemo:
    user_id: UUID
    chat_id: UUID
    voted_turn_id: UUID
    current_turn_id: UUID


def seed_demo_data(store: InMemoryStore, random_source: RandomSource) -> SeededDemo:
    """Create the demo user, chat and one completed, voted round."""
    user = store.create_user()
    chat, turn = store.create_chat(user.id)

    turns_service.begin_message(store, chat.id, DEMO_PROMPT)

    answer = "".join(catalog.response_fragments(DEMO_PROMPT))
    for model_id, sequence_number in MODEL_SEQUENCE_NUMBERS.items():
        store.add_message(
            turn.id,
            Message(
                id=uuid4(),
                turn_id=turn.id,
                role=MessageRole.assistant,
                content=answer,
                model_id=model_id,
                sequence_number=sequence_number,
                response_time_ms=RESPONSE_TIME_MIN_MS + sequence_number * 250,
                created_at=utcnow(),
            ),
        )
    turns_service.complete_stream(store, turn.id)

    outcome = turns_service.submit_vote(store, turn.id, Winner.model_a.value, random_source)

    logger.info(
        "demo_data_seeded",
        user_id=str(user.id),
        chat_id=str(chat.id),
        current_turn_id=str(outcome.new_turn.id),
    )

    return SeededDemo(
        user_id=user.id,
        chat_id=chat.id,
        voted_turn_id=turn.id,
        current_turn_id=outcome.new_turn.id,
    )
