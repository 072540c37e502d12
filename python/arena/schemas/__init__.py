"""Pydantic schemas for request/response models.

All schemas are re-exported here for convenient imports.
"""

from arena.schemas.chat import (
    ChatCreatedOut,
    ChatHistoryOut,
    ChatSummaryOut,
    CreateChatRequest,
    MessageOut,
    ModelInfoOut,
    OffsetPageInfo,
    SendMessageRequest,
    StreamChunkEvent,
    StreamDoneEvent,
    TurnOut,
    UserOut,
    VoteRequest,
    VoteResultOut,
)
from arena.schemas.reference import (
    CategoryOut,
    LeaderboardEntryOut,
    LeaderboardOut,
    PromptSuggestionOut,
    TagOut,
)

__all__ = [
    # User / chat schemas
    "UserOut",
    "CreateChatRequest",
    "ChatCreatedOut",
    "ChatSummaryOut",
    "ChatHistoryOut",
    "OffsetPageInfo",
    "TurnOut",
    "MessageOut",
    "ModelInfoOut",
    # Streaming schemas
    "SendMessageRequest",
    "StreamChunkEvent",
    "StreamDoneEvent",
    # Vote schemas
    "VoteRequest",
    "VoteResultOut",
    # Reference data schemas
    "CategoryOut",
    "TagOut",
    "LeaderboardEntryOut",
    "LeaderboardOut",
    "PromptSuggestionOut",
]
