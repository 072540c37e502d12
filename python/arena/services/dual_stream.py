"""Dual-stream response generator.

Replays one canned fragment sequence twice, as "model A" then "model B",
to give the client two side-by-side answers from a single prompt.

Stream shape:
- model A fragments, each followed by fragment_delay_a
- model_pause
- model B fragments, each followed by fragment_delay_b; every model B
  fragment independently gets a trailing space with space_probability
- FragmentEvent.sequence is the 1-based fragment index within its model

Persistence:
- Once a model's fragments are exhausted its concatenated text is stored
  as an assistant message (model A seq 2, model B seq 3) with a synthetic
  response time in [1000, 3000) ms.
- If iteration stops early (consumer closes the generator, cancellation,
  error) the unfinished model gets no message. Partial text is never
  stored as a complete answer.
"""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass
from uuid import UUID, uuid4

from arena.config import Settings
from arena.logging import get_logger
from arena.services import catalog
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore, Message, MessageRole
from arena.store.entities import utcnow

logger = get_logger(__name__)

MODEL_A = "model_a"
MODEL_B = "model_b"

# Assistant sequence numbers follow the user prompt (sequence 1)
MODEL_SEQUENCE_NUMBERS = {MODEL_A: 2, MODEL_B: 3}

RESPONSE_TIME_MIN_MS = 1000
RESPONSE_TIME_MAX_MS = 3000


@dataclass(frozen=True)
class StreamTiming:
    """Cosmetic typing cadence, in seconds."""

    fragment_delay_a: float = 0.080
    fragment_delay_b: float = 0.085
    model_pause: float = 0.150
    space_probability: float = 0.3

    @classmethod
    def from_settings(cls, settings: Settings) -> "StreamTiming":
        return cls(
            fragment_delay_a=settings.stream_fragment_delay_a_ms / 1000,
            fragment_delay_b=settings.stream_fragment_delay_b_ms / 1000,
            model_pause=settings.stream_model_pause_ms / 1000,
            space_probability=settings.model_b_space_probability,
        )


@dataclass(frozen=True)
class FragmentEvent:
    """One incremental piece of a model's answer."""

    model_id: str
    content: str
    sequence: int

    def to_payload(self) -> dict:
        return {"model_id": self.model_id, "content": self.content, "sequence": self.sequence}


async def _pause(seconds: float) -> None:
    if seconds > 0:
        await asyncio.sleep(seconds)


def _persist_answer(
    store: InMemoryStore,
    turn_id: UUID,
    model_id: str,
    content: str,
    random_source: RandomSource,
) -> Message:
    message = Message(
        id=uuid4(),
        turn_id=turn_id,
        role=MessageRole.assistant,
        content=content,
        model_id=model_id,
        sequence_number=MODEL_SEQUENCE_NUMBERS[model_id],
        response_time_ms=random_source.randrange(RESPONSE_TIME_MIN_MS, RESPONSE_TIME_MAX_MS),
        created_at=utcnow(),
    )
    store.add_message(turn_id, message)
    logger.info(
        "assistant_message_persisted",
        turn_id=str(turn_id),
        model_id=model_id,
        sequence_number=message.sequence_number,
        chars=len(content),
    )
    return message


async def generate_dual_stream(
    store: InMemoryStore,
    turn_id: UUID,
    prompt: str,
    random_source: RandomSource,
    timing: StreamTiming | None = None,
) -> AsyncIterator[FragmentEvent]:
    """Yield model A's fragments, then model B's, persisting each finished answer.

    Args:
        store: Store the assistant messages are appended to.
        turn_id: Turn being answered (already streaming).
        prompt: The user's prompt.
        random_source: Source for perturbation and response times.
        timing: Delays and perturbation probability (defaults to the real cadence).

    Yields:
        FragmentEvent per fragment, model A strictly before model B.
    """
    timing = timing or StreamTiming()
    fragments = catalog.response_fragments(prompt)

    content_a = ""
    for index, fragment in enumerate(fragments, start=1):
        yield FragmentEvent(model_id=MODEL_A, content=fragment, sequence=index)
        content_a += fragment
        await _pause(timing.fragment_delay_a)

    _persist_answer(store, turn_id, MODEL_A, content_a, random_source)

    await _pause(timing.model_pause)

    content_b = ""
    for index, fragment in enumerate(fragments, start=1):
        if random_source.chance(timing.space_probability):
            fragment = fragment + " "
        yield FragmentEvent(model_id=MODEL_B, content=fragment, sequence=index)
        content_b += fragment
        await _pause(timing.fragment_delay_b)

    _persist_answer(store, turn_id, MODEL_B, content_b, random_source)
