"""Pytest configuration and fixtures for Arena tests.

Test isolation strategy:
- Every test gets a fresh InMemoryStore and a seeded RandomSource
- Stream delays are zeroed so SSE tests run instantly
- Settings are built per test and the get_settings cache is cleared around it
- client wraps an app built with the full middleware stack
"""

import sys
from collections.abc import Generator
from pathlib import Path

# Add repo root to sys.path for importing top-level packages (e.g., apps)
_repo_root = Path(__file__).parent.parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from arena.app import add_request_id_middleware, create_app
from arena.config import Settings, clear_settings_cache
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore

TEST_SEED = 1234

TEST_ENV = {
    "ARENA_ENV": "test",
    "STREAM_FRAGMENT_DELAY_A_MS": "0",
    "STREAM_FRAGMENT_DELAY_B_MS": "0",
    "STREAM_MODEL_PAUSE_MS": "0",
    "SEED_DEMO_DATA": "false",
    "LOG_JSON": "true",
}


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Pin environment variables and reset the settings cache for each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    for key in ("CORS_ORIGINS", "ARENA_RANDOM_SEED", "STREAM_TIMEOUT_S"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def random_source() -> RandomSource:
    return RandomSource(TEST_SEED)


@pytest.fixture
def app(store: InMemoryStore, random_source: RandomSource, settings: Settings) -> FastAPI:
    """Application with the test store, random source and settings."""
    app = create_app(store=store, random_source=random_source, settings=settings)
    add_request_id_middleware(app, log_requests=False)
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client for the app."""
    with TestClient(app) as client:
        yield client
