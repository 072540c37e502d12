"""In-memory entity store.

Process-wide authoritative state for users, chats, turns and messages.
The store holds no business rules: it offers create/read/update primitives
and a transaction() scope so callers can apply several primitives as one
atomic unit.

Concurrency:
- Every primitive runs under a single re-entrant lock, so each mutation is
  atomic even when sync handlers run in a threadpool.
- transaction() holds the same lock for a whole block. Readers never see
  a half-applied multi-step mutation.

Reads never raise on unknown keys: lookups return None and collection reads
return an empty list.
"""

import threading
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import replace
from uuid import UUID, uuid4

from arena.errors import ApiErrorCode, NotFoundError
from arena.logging import get_logger
from arena.store.entities import (
    SIMPLE_STATES,
    Chat,
    ChatMode,
    ChatStatus,
    Message,
    ModelInfo,
    Turn,
    TurnStatus,
    User,
    Voted,
    Winner,
    utcnow,
)

logger = get_logger(__name__)

DEFAULT_CHAT_NAME = "Untitled Chat"


class InMemoryStore:
    """Dict-backed store. Construct one per app instance (or per test)."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[UUID, User] = {}
        self._chats: dict[UUID, Chat] = {}
        self._turns: dict[UUID, Turn] = {}
        self._messages: dict[UUID, list[Message]] = {}
        self._user_chats: dict[UUID, list[UUID]] = {}
        self._chat_turns: dict[UUID, list[UUID]] = {}

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Hold the store lock for the duration of the block.

        Usage:
            with store.transaction():
                turn = store.get_turn(turn_id)
                store.update_turn_status(turn_id, TurnStatus.streaming)
        """
        with self._lock:
            yield

    # =========================================================================
    # Users
    # =========================================================================

    def create_user(self) -> User:
        user = User(id=uuid4(), created_at=utcnow())
        with self._lock:
            self._users[user.id] = user
            self._user_chats[user.id] = []
        return user

    def get_user(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)

    # =========================================================================
    # Chats
    # =========================================================================

    def create_chat(
        self,
        user_id: UUID,
        mode: ChatMode = ChatMode.battle,
        name: str = DEFAULT_CHAT_NAME,
    ) -> tuple[Chat, Turn]:
        """Create a chat together with its first turn.

        Both records become visible at the same time, so no chat ever
        exists without a current turn.

        Raises:
            NotFoundError(E_USER_NOT_FOUND): If the user does not exist.
        """
        now = utcnow()
        chat_id = uuid4()
        turn = Turn(id=uuid4(), chat_id=chat_id, turn_number=1)
        chat = Chat(
            id=chat_id,
            user_id=user_id,
            mode=mode,
            status=ChatStatus.active,
            name=name,
            current_turn_id=turn.id,
            created_at=now,
            updated_at=now,
        )

        with self._lock:
            if user_id not in self._users:
                raise NotFoundError(ApiErrorCode.E_USER_NOT_FOUND, "User not found")

            self._chats[chat.id] = chat
            self._turns[turn.id] = turn
            self._messages[turn.id] = []
            self._chat_turns[chat.id] = [turn.id]
            self._user_chats[user_id].append(chat.id)

        return chat, turn

    def get_chat(self, chat_id: UUID) -> Chat | None:
        return self._chats.get(chat_id)

    def get_user_chats(self, user_id: UUID) -> list[Chat]:
        """Return the user's chats, most recently active first.

        Ties on updated_at go to the chat created later.
        """
        with self._lock:
            chat_ids = list(self._user_chats.get(user_id, []))
            chats = [self._chats[cid] for cid in chat_ids if cid in self._chats]

        ordered = sorted(enumerate(chats), key=lambda p: (p[1].updated_at, p[0]), reverse=True)
        return [chat for _, chat in ordered]

    def set_current_turn(self, chat_id: UUID, turn_id: UUID) -> Chat | None:
        """Repoint the chat at a new current turn and refresh updated_at."""
        with self._lock:
            chat = self._chats.get(chat_id)
            if chat is None:
                return None
            chat = replace(chat, current_turn_id=turn_id, updated_at=utcnow())
            self._chats[chat_id] = chat
        return chat

    # =========================================================================
    # Turns
    # =========================================================================

    def get_turn(self, turn_id: UUID) -> Turn | None:
        return self._turns.get(turn_id)

    def get_chat_turns(self, chat_id: UUID) -> list[Turn]:
        """Return the chat's turns ordered by turn_number ascending."""
        with self._lock:
            turns = [self._turns[tid] for tid in self._chat_turns.get(chat_id, [])]
        return sorted(turns, key=lambda t: t.turn_number)

    def create_turn(self, chat_id: UUID, turn_number: int) -> Turn:
        """Allocate a new waiting turn for an existing chat."""
        turn = Turn(id=uuid4(), chat_id=chat_id, turn_number=turn_number)
        with self._lock:
            if chat_id not in self._chats:
                raise NotFoundError(ApiErrorCode.E_CHAT_NOT_FOUND, "Chat not found")
            self._turns[turn.id] = turn
            self._messages[turn.id] = []
            self._chat_turns[chat_id].append(turn.id)
        return turn

    def update_turn_status(self, turn_id: UUID, status: TurnStatus) -> Turn | None:
        """Swap a turn's state for waiting, streaming or completed.

        The voted state carries reveal data and is only reachable through
        record_vote().
        """
        state = SIMPLE_STATES.get(TurnStatus(status))
        if state is None:
            raise ValueError("voted state must be written with record_vote()")

        with self._lock:
            turn = self._turns.get(turn_id)
            if turn is None:
                return None
            turn = replace(turn, state=state)
            self._turns[turn_id] = turn
        return turn

    def record_vote(
        self,
        turn_id: UUID,
        vote: Winner,
        model_a: ModelInfo,
        model_b: ModelInfo,
    ) -> Turn | None:
        """Move a turn into the terminal voted state."""
        with self._lock:
            turn = self._turns.get(turn_id)
            if turn is None:
                return None
            turn = replace(turn, state=Voted(vote=vote, model_a=model_a, model_b=model_b))
            self._turns[turn_id] = turn
        return turn

    # =========================================================================
    # Messages
    # =========================================================================

    def get_turn_messages(self, turn_id: UUID) -> list[Message]:
        """Return the turn's messages in append order (a copy)."""
        with self._lock:
            return list(self._messages.get(turn_id, []))

    def add_message(self, turn_id: UUID, message: Message) -> None:
        """Append a message to a turn.

        Sequence numbers are not checked here; the turn controller owns them.
        """
        with self._lock:
            self._messages.setdefault(turn_id, []).append(message)
