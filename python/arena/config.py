"""Application settings loaded from environment variables.

Environment Configuration:
    ARENA_ENV: Deployment environment (local | test | staging | prod)
    ARENA_RANDOM_SEED: Seed for the shared random source (optional)

Streaming Configuration:
    STREAM_FRAGMENT_DELAY_A_MS: Delay after each model A fragment (default 80)
    STREAM_FRAGMENT_DELAY_B_MS: Delay after each model B fragment (default 85)
    STREAM_MODEL_PAUSE_MS: Pause between the model A and model B streams (default 150)
    STREAM_TIMEOUT_S: Hard deadline for a whole stream (default 60)
    MODEL_B_SPACE_PROBABILITY: Chance a model B fragment gets a trailing space (default 0.3)

HTTP Configuration:
    CORS_ORIGINS: Comma-separated list of browser origins allowed on /api/*
    SESSION_COOKIE_MAX_AGE_S: Lifetime of the anonymous session cookie

Misc:
    SEED_DEMO_DATA: Seed a demo user and chat at startup
    LOG_JSON: Render logs as JSON (true) or console-friendly text (false)

Note: All state is in process memory, so there is no database or cache URL.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Valid deployment environments."""

    LOCAL = "local"
    TEST = "test"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables.
    Validation rules:
    - Stream delays must be >= 0
    - STREAM_TIMEOUT_S must be > 0
    - MODEL_B_SPACE_PROBABILITY must be within [0, 1]
    """

    arena_env: Environment = Field(default=Environment.LOCAL, alias="ARENA_ENV")
    arena_random_seed: int | None = Field(default=None, alias="ARENA_RANDOM_SEED")

    # Streaming cadence (purely cosmetic, tests run with zero delays)
    stream_fragment_delay_a_ms: int = Field(default=80, alias="STREAM_FRAGMENT_DELAY_A_MS")
    stream_fragment_delay_b_ms: int = Field(default=85, alias="STREAM_FRAGMENT_DELAY_B_MS")
    stream_model_pause_ms: int = Field(default=150, alias="STREAM_MODEL_PAUSE_MS")
    stream_timeout_s: float = Field(default=60.0, alias="STREAM_TIMEOUT_S")
    model_b_space_probability: float = Field(default=0.3, alias="MODEL_B_SPACE_PROBABILITY")

    cors_origins: str | None = Field(default=None, alias="CORS_ORIGINS")
    session_cookie_max_age_s: int = Field(
        default=60 * 60 * 24 * 30, alias="SESSION_COOKIE_MAX_AGE_S"
    )  # 30 days

    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def validate_stream_settings(self) -> "Settings":
        """Reject stream timing values that cannot be honoured."""
        negative = [
            name
            for name, value in (
                ("STREAM_FRAGMENT_DELAY_A_MS", self.stream_fragment_delay_a_ms),
                ("STREAM_FRAGMENT_DELAY_B_MS", self.stream_fragment_delay_b_ms),
                ("STREAM_MODEL_PAUSE_MS", self.stream_model_pause_ms),
            )
            if value < 0
        ]
        if negative:
            raise ValueError(f"{', '.join(negative)} must be >= 0")

        if self.stream_timeout_s <= 0:
            raise ValueError("STREAM_TIMEOUT_S must be > 0")

        if not 0.0 <= self.model_b_space_probability <= 1.0:
            raise ValueError("MODEL_B_SPACE_PROBABILITY must be between 0 and 1")

        return self

    @property
    def secure_cookies(self) -> bool:
        """Whether cookies must carry the Secure flag."""
        return self.arena_env in (Environment.STAGING, Environment.PROD)

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return []


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()
