"""Test helpers for common API operations.

Provides:
- SSE body parsing
- Shortcuts for creating users and chats and for running a full turn
"""

import json

from fastapi.testclient import TestClient

API = "/api/v1"


def parse_sse_events(body: str) -> list[tuple[str, dict]]:
    """Split an SSE body into (event, data) pairs in emission order."""
    events = []
    for frame in body.split("\n\n"):
        if not frame.strip():
            continue
        event = None
        data = None
        for line in frame.split("\n"):
            if line.startswith("event: "):
                event = line[len("event: ") :]
            elif line.startswith("data: "):
                data = json.loads(line[len("data: ") :])
        events.append((event, data))
    return events


def create_user(client: TestClient) -> str:
    """Create a user via the API and return its id."""
    response = client.post(f"{API}/users")
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def create_chat(client: TestClient, user_id: str | None = None) -> dict:
    """Create a chat (and a user if none is given); return the chat payload."""
    if user_id is None:
        user_id = create_user(client)
    response = client.post(f"{API}/chats", json={"user_id": user_id})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def stream_message(client: TestClient, chat_id: str, content: str = "Hello") -> list:
    """Send a message and return the parsed SSE events."""
    response = client.post(f"{API}/chats/{chat_id}/messages/stream", json={"content": content})
    assert response.status_code == 200, response.text
    return parse_sse_events(response.text)


def vote(client: TestClient, turn_id: str, winner: str = "model_a"):
    return client.post(f"{API}/turns/{turn_id}/vote", json={"winner": winner})
