"""Tests for demo data seeding."""

from fastapi.testclient import TestClient

from arena.app import create_app
from arena.config import Settings
from arena.services.seed import DEMO_PROMPT, seed_demo_data
from arena.store import InMemoryStore, TurnStatus, Winner
from tests.helpers import API


class TestSeedDemoData:
    def test_seeded_chat_has_voted_and_waiting_turns(self, store: InMemoryStore, random_source):
        demo = seed_demo_data(store, random_source)

        chat = store.get_chat(demo.chat_id)
        assert chat.user_id == demo.user_id
        assert chat.current_turn_id == demo.current_turn_id

        voted, waiting = store.get_chat_turns(demo.chat_id)
        assert voted.id == demo.voted_turn_id
        assert voted.status == TurnStatus.voted
        assert voted.vote == Winner.model_a
        assert voted.model_a != voted.model_b
        assert waiting.id == demo.current_turn_id
        assert waiting.status == TurnStatus.waiting

        messages = store.get_turn_messages(voted.id)
        assert [m.sequence_number for m in messages] == [1, 2, 3]
        assert messages[0].content == DEMO_PROMPT

    def test_seeded_data_served_by_api(self):
        """SEED_DEMO_DATA populates the app's store at creation."""
        store = InMemoryStore()
        app = create_app(store=store, settings=Settings(SEED_DEMO_DATA=True))
        client = TestClient(app)

        demo = app.state.demo
        (chat,) = store.get_user_chats(demo.user_id)
        data = client.get(f"{API}/chats/{chat.id}").json()["data"]

        assert [t["status"] for t in data["turns"]] == ["voted", "waiting"]
