"""In-memory entity store for Arena.

Provides the store, its entity types, and the turn state variant.
"""

from arena.store.entities import (
    Chat,
    ChatMode,
    ChatStatus,
    Completed,
    Message,
    MessageRole,
    ModelInfo,
    Streaming,
    Turn,
    TurnState,
    TurnStatus,
    User,
    Voted,
    Waiting,
    Winner,
)
from arena.store.memory import DEFAULT_CHAT_NAME, InMemoryStore

__all__ = [
    # Store
    "InMemoryStore",
    "DEFAULT_CHAT_NAME",
    # Enums
    "ChatMode",
    "ChatStatus",
    "TurnStatus",
    "Winner",
    "MessageRole",
    # Turn states
    "TurnState",
    "Waiting",
    "Streaming",
    "Completed",
    "Voted",
    # Entities
    "User",
    "Chat",
    "Turn",
    "Message",
    "ModelInfo",
]
