"""User, Chat, Turn and Message Pydantic schemas.

Contains request and response models for the user, chat, streaming and
vote endpoints. Response models are built from store entities by the
service layer, with enum fields rendered as their plain string values.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from arena.store import ChatMode

# =============================================================================
# Response Schemas
# =============================================================================


class UserOut(BaseModel):
    """Response schema for a newly created user."""

    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModelInfoOut(BaseModel):
    """A revealed model."""

    id: str
    name: str
    provider: str

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    """Response schema for a message.

    Messages are immutable and ordered by sequence_number within a turn.
    """

    id: UUID
    role: str  # "user" | "assistant"
    content: str
    model_id: str | None = None
    sequence_number: int
    response_time_ms: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class TurnOut(BaseModel):
    """Response schema for a turn with its messages.

    vote, model_a and model_b stay null until the turn is voted on.
    """

    id: UUID
    turn_number: int
    status: str  # "waiting" | "streaming" | "completed" | "voted"
    vote: str | None = None
    model_a: ModelInfoOut | None = None
    model_b: ModelInfoOut | None = None
    messages: list[MessageOut] = []

    model_config = ConfigDict(protected_namespaces=())


class ChatSummaryOut(BaseModel):
    """Response schema for a chat in a user's chat list."""

    id: UUID
    mode: str
    status: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatCreatedOut(BaseModel):
    """Response schema for chat creation."""

    id: UUID
    mode: str
    name: str
    status: str
    turn_id: UUID


class ChatHistoryOut(BaseModel):
    """Response schema for a chat with its full turn history."""

    id: UUID
    mode: str
    name: str
    status: str
    current_turn_id: UUID
    created_at: datetime
    updated_at: datetime
    turns: list[TurnOut]


class OffsetPageInfo(BaseModel):
    """Pagination information for offset-paginated lists."""

    limit: int
    offset: int
    total: int


class RevealedModelsOut(BaseModel):
    model_a: ModelInfoOut
    model_b: ModelInfoOut

    model_config = ConfigDict(protected_namespaces=())


class VoteResultOut(BaseModel):
    """Response schema for a vote: reveal plus the chat's next turn."""

    id: UUID
    vote: str
    revealed_models: RevealedModelsOut
    new_turn_id: UUID
    category: str
    tags: list[str]


# =============================================================================
# Request Schemas
# =============================================================================


class CreateChatRequest(BaseModel):
    """Request schema for creating a chat."""

    user_id: UUID
    mode: ChatMode = ChatMode.battle


class SendMessageRequest(BaseModel):
    """Request schema for streaming a message.

    Emptiness is checked by the turn controller so the error code is
    E_CONTENT_REQUIRED rather than a generic validation failure.
    """

    content: str | None = None


class VoteRequest(BaseModel):
    """Request schema for a vote.

    winner is validated by the turn controller, after the turn lookup,
    so precondition failures are reported in a fixed order.
    """

    winner: str | None = None


# =============================================================================
# SSE payload schemas
# =============================================================================


class StreamChunkEvent(BaseModel):
    """SSE chunk event with one fragment of one model's answer."""

    model_id: str
    content: str
    sequence: int

    model_config = ConfigDict(protected_namespaces=())


class StreamDoneEvent(BaseModel):
    """SSE done event at stream end."""

    turn_id: UUID
    status: str
