"""Entity definitions for the in-memory store.

Entities are frozen dataclasses. The store swaps whole records on mutation,
so any value handed out by a read is a stable snapshot.

Turn state is a tagged variant (Waiting | Streaming | Completed | Voted).
Only Voted carries the vote and the revealed model pair, so a turn that has
not been voted on cannot hold reveal data at all.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum as PyEnum
from typing import ClassVar
from uuid import UUID


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


# =============================================================================
# Enums
# =============================================================================


class ChatMode(str, PyEnum):
    """How a chat pits models against each other."""

    battle = "battle"
    direct = "direct"


class ChatStatus(str, PyEnum):
    """Coarse chat lifecycle, independent of turn status."""

    active = "active"
    completed = "completed"
    archived = "archived"


class TurnStatus(str, PyEnum):
    """Turn lifecycle states.

    States:
        waiting: Created, accepting the user's prompt
        streaming: Both model responses are being generated
        completed: Both responses delivered, awaiting a vote
        voted: Terminal; vote recorded and models revealed
    """

    waiting = "waiting"
    streaming = "streaming"
    completed = "completed"
    voted = "voted"


class Winner(str, PyEnum):
    """Allowed vote outcomes."""

    model_a = "model_a"
    model_b = "model_b"
    tie = "tie"
    both_bad = "both_bad"


class MessageRole(str, PyEnum):
    user = "user"
    assistant = "assistant"


# =============================================================================
# Value objects
# =============================================================================


@dataclass(frozen=True)
class ModelInfo:
    """A concrete model from the catalog."""

    id: str
    name: str
    provider: str


# =============================================================================
# Turn state variant
# =============================================================================


@dataclass(frozen=True)
class Waiting:
    status: ClassVar[TurnStatus] = TurnStatus.waiting


@dataclass(frozen=True)
class Streaming:
    status: ClassVar[TurnStatus] = TurnStatus.streaming


@dataclass(frozen=True)
class Completed:
    status: ClassVar[TurnStatus] = TurnStatus.completed


@dataclass(frozen=True)
class Voted:
    """Terminal state. Written once, at vote time."""

    vote: Winner
    model_a: ModelInfo
    model_b: ModelInfo
    status: ClassVar[TurnStatus] = TurnStatus.voted


TurnState = Waiting | Streaming | Completed | Voted

# States reachable through a plain status update (Voted needs reveal data)
SIMPLE_STATES: dict[TurnStatus, TurnState] = {
    TurnStatus.waiting: Waiting(),
    TurnStatus.streaming: Streaming(),
    TurnStatus.completed: Completed(),
}


# =============================================================================
# Entities
# =============================================================================


@dataclass(frozen=True)
class User:
    id: UUID
    created_at: datetime


@dataclass(frozen=True)
class Chat:
    """A chat owned by a user.

    current_turn_id names the turn currently accepting input. It is
    reassigned on every vote; it is never the chat's identity.
    """

    id: UUID
    user_id: UUID
    mode: ChatMode
    status: ChatStatus
    name: str
    current_turn_id: UUID
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Turn:
    """One round of prompt, dual answers and vote within a chat."""

    id: UUID
    chat_id: UUID
    turn_number: int
    state: TurnState = field(default_factory=Waiting)

    @property
    def status(self) -> TurnStatus:
        return self.state.status

    @property
    def vote(self) -> Winner | None:
        return self.state.vote if isinstance(self.state, Voted) else None

    @property
    def model_a(self) -> ModelInfo | None:
        return self.state.model_a if isinstance(self.state, Voted) else None

    @property
    def model_b(self) -> ModelInfo | None:
        return self.state.model_b if isinstance(self.state, Voted) else None


@dataclass(frozen=True)
class Message:
    """A single message within a turn.

    sequence_number orders messages inside the turn: 1 is the user prompt,
    2 and 3 are the assistant answers in order of arrival.
    """

    id: UUID
    turn_id: UUID
    role: MessageRole
    content: str
    sequence_number: int
    created_at: datetime
    model_id: str | None = None
    response_time_ms: int | None = None
