"""Tests for the turn lifecycle controller.

Covers:
- begin_message preconditions and effects
- complete_stream never overriding a vote
- submit_vote check order, atomic effects and write-once reveal
"""

from uuid import uuid4

import pytest

from arena.errors import ApiError, ApiErrorCode
from arena.services import catalog
from arena.services.randomness import RandomSource
from arena.services.turns import begin_message, complete_stream, submit_vote
from arena.store import InMemoryStore, MessageRole, TurnStatus, Winner


@pytest.fixture
def chat_and_turn(store: InMemoryStore):
    user = store.create_user()
    return store.create_chat(user.id)


def _snapshot(store: InMemoryStore, chat_id):
    """Everything observable about a chat, for before/after comparisons."""
    turns = store.get_chat_turns(chat_id)
    return (
        store.get_chat(chat_id),
        turns,
        {t.id: store.get_turn_messages(t.id) for t in turns},
    )


class TestBeginMessage:
    def test_claims_turn_and_stores_prompt(self, store, chat_and_turn):
        chat, turn = chat_and_turn

        claimed = begin_message(store, chat.id, "hello")

        assert claimed.id == turn.id
        assert store.get_turn(turn.id).status == TurnStatus.streaming
        (message,) = store.get_turn_messages(turn.id)
        assert message.role == MessageRole.user
        assert message.content == "hello"
        assert message.sequence_number == 1

    @pytest.mark.parametrize("content", [None, "", "   ", "\n\t"])
    def test_blank_content_rejected_without_mutation(self, store, chat_and_turn, content):
        chat, turn = chat_and_turn

        with pytest.raises(ApiError) as exc:
            begin_message(store, chat.id, content)

        assert exc.value.code == ApiErrorCode.E_CONTENT_REQUIRED
        assert store.get_turn(turn.id).status == TurnStatus.waiting
        assert store.get_turn_messages(turn.id) == []

    def test_content_checked_before_chat(self, store):
        with pytest.raises(ApiError) as exc:
            begin_message(store, uuid4(), " ")

        assert exc.value.code == ApiErrorCode.E_CONTENT_REQUIRED

    def test_unknown_chat(self, store):
        with pytest.raises(ApiError) as exc:
            begin_message(store, uuid4(), "hello")

        assert exc.value.code == ApiErrorCode.E_CHAT_NOT_FOUND

    @pytest.mark.parametrize("status", [TurnStatus.streaming, TurnStatus.completed])
    def test_turn_not_waiting_rejected(self, store, chat_and_turn, status):
        chat, turn = chat_and_turn
        store.update_turn_status(turn.id, status)

        with pytest.raises(ApiError) as exc:
            begin_message(store, chat.id, "hello")

        assert exc.value.code == ApiErrorCode.E_TURN_NOT_ACCEPTING_MESSAGES
        assert exc.value.status_code == 409
        assert store.get_turn_messages(turn.id) == []


class TestCompleteStream:
    def test_streaming_becomes_completed(self, store, chat_and_turn):
        chat, turn = chat_and_turn
        begin_message(store, chat.id, "hello")

        result = complete_stream(store, turn.id)

        assert result.status == TurnStatus.completed

    def test_voted_turn_is_left_voted(self, store, chat_and_turn, random_source):
        """A vote landing mid-stream wins over the stream's completion."""
        chat, turn = chat_and_turn
        begin_message(store, chat.id, "hello")
        submit_vote(store, turn.id, "model_b", random_source)

        result = complete_stream(store, turn.id)

        assert result.status == TurnStatus.voted
        assert store.get_turn(turn.id).vote == Winner.model_b

    def test_unknown_turn(self, store):
        assert complete_stream(store, uuid4()) is None


class TestSubmitVote:
    def test_vote_reveals_and_rolls_over(self, store, chat_and_turn, random_source):
        chat, turn = chat_and_turn
        begin_message(store, chat.id, "hello")
        complete_stream(store, turn.id)

        outcome = submit_vote(store, turn.id, "tie", random_source)

        voted = store.get_turn(turn.id)
        assert voted.status == TurnStatus.voted
        assert voted.vote == Winner.tie
        assert voted.model_a == outcome.model_a
        assert voted.model_b == outcome.model_b
        assert outcome.model_a.id != outcome.model_b.id
        assert outcome.model_a in catalog.MODELS
        assert outcome.model_b in catalog.MODELS

        assert outcome.new_turn.turn_number == 2
        assert store.get_turn(outcome.new_turn.id).status == TurnStatus.waiting
        assert store.get_chat(chat.id).current_turn_id == outcome.new_turn.id
        assert [t.turn_number for t in store.get_chat_turns(chat.id)] == [1, 2]

    def test_vote_presentation_fields(self, store, chat_and_turn, random_source):
        _, turn = chat_and_turn

        outcome = submit_vote(store, turn.id, "both_bad", random_source)

        category = catalog.get_category(outcome.category)
        assert len(outcome.tags) <= 2
        assert set(outcome.tags) <= {t.slug for t in category.tags}

    def test_unknown_turn(self, store, random_source):
        with pytest.raises(ApiError) as exc:
            submit_vote(store, uuid4(), "tie", random_source)

        assert exc.value.code == ApiErrorCode.E_TURN_NOT_FOUND

    def test_revote_conflicts_and_changes_nothing(self, store, chat_and_turn, random_source):
        chat, turn = chat_and_turn
        submit_vote(store, turn.id, "model_a", random_source)
        before = _snapshot(store, chat.id)

        with pytest.raises(ApiError) as exc:
            submit_vote(store, turn.id, "model_b", random_source)

        assert exc.value.code == ApiErrorCode.E_TURN_ALREADY_VOTED
        assert _snapshot(store, chat.id) == before

    def test_already_voted_checked_before_winner(self, store, chat_and_turn, random_source):
        _, turn = chat_and_turn
        submit_vote(store, turn.id, "model_a", random_source)

        with pytest.raises(ApiError) as exc:
            submit_vote(store, turn.id, "nonsense", random_source)

        assert exc.value.code == ApiErrorCode.E_TURN_ALREADY_VOTED

    @pytest.mark.parametrize(
        "winner,code",
        [
            (None, ApiErrorCode.E_WINNER_REQUIRED),
            ("", ApiErrorCode.E_WINNER_REQUIRED),
            ("model_c", ApiErrorCode.E_INVALID_WINNER),
            ("TIE", ApiErrorCode.E_INVALID_WINNER),
        ],
    )
    def test_bad_winner_creates_no_turn(self, store, chat_and_turn, random_source, winner, code):
        chat, turn = chat_and_turn
        before = _snapshot(store, chat.id)

        with pytest.raises(ApiError) as exc:
            submit_vote(store, turn.id, winner, random_source)

        assert exc.value.code == code
        assert exc.value.status_code == 400
        assert _snapshot(store, chat.id) == before

    def test_same_seed_reveals_same_models(self, store):
        """All vote randomness comes from the injected source."""
        reveals = []
        for _ in range(2):
            user = store.create_user()
            _, turn = store.create_chat(user.id)
            outcome = submit_vote(store, turn.id, "tie", RandomSource(7))
            reveals.append((outcome.model_a.id, outcome.model_b.id, outcome.category))

        assert reveals[0] == reveals[1]
