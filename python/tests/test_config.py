"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from arena.config import Environment, Settings, clear_settings_cache, get_settings

STREAM_ENV_KEYS = (
    "STREAM_FRAGMENT_DELAY_A_MS",
    "STREAM_FRAGMENT_DELAY_B_MS",
    "STREAM_MODEL_PAUSE_MS",
    "STREAM_TIMEOUT_S",
    "MODEL_B_SPACE_PROBABILITY",
)


def _make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults + overrides."""
    defaults = {"ARENA_ENV": "test"}
    defaults.update(overrides)
    return Settings(**defaults)


class TestStreamSettingsDefaultsAndValidation:
    """Stream cadence defaults and range checks."""

    def test_defaults_match_typing_cadence(self, monkeypatch):
        for key in STREAM_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        s = _make_settings()
        assert s.stream_fragment_delay_a_ms == 80
        assert s.stream_fragment_delay_b_ms == 85
        assert s.stream_model_pause_ms == 150
        assert s.stream_timeout_s == 60.0
        assert s.model_b_space_probability == 0.3

    def test_zero_delays_accepted(self):
        s = _make_settings(
            STREAM_FRAGMENT_DELAY_A_MS=0,
            STREAM_FRAGMENT_DELAY_B_MS=0,
            STREAM_MODEL_PAUSE_MS=0,
        )
        assert s.stream_fragment_delay_a_ms == 0
        assert s.stream_model_pause_ms == 0

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError, match="STREAM_FRAGMENT_DELAY_B_MS must be >= 0"):
            _make_settings(STREAM_FRAGMENT_DELAY_B_MS=-1)

    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError, match="STREAM_TIMEOUT_S must be > 0"):
            _make_settings(STREAM_TIMEOUT_S=0)

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_space_probability_out_of_range_rejected(self, probability):
        with pytest.raises(ValidationError, match="MODEL_B_SPACE_PROBABILITY"):
            _make_settings(MODEL_B_SPACE_PROBABILITY=probability)

    def test_env_vars_are_read(self, monkeypatch):
        monkeypatch.setenv("STREAM_TIMEOUT_S", "5")
        monkeypatch.setenv("ARENA_RANDOM_SEED", "99")

        s = Settings()
        assert s.stream_timeout_s == 5.0
        assert s.arena_random_seed == 99


class TestDerivedSettings:
    """Properties computed from raw settings."""

    def test_cors_origin_list_parses_comma_separated(self):
        s = _make_settings(CORS_ORIGINS="http://a.test, http://b.test,,")
        assert s.cors_origin_list == ["http://a.test", "http://b.test"]

    def test_cors_origin_list_empty_by_default(self):
        assert _make_settings().cors_origin_list == []

    @pytest.mark.parametrize(
        "env,secure",
        [("local", False), ("test", False), ("staging", True), ("prod", True)],
    )
    def test_secure_cookies_by_environment(self, env, secure):
        s = _make_settings(ARENA_ENV=env)
        assert s.arena_env == Environment(env)
        assert s.secure_cookies is secure

    def test_invalid_environment_rejected(self):
        with pytest.raises(ValidationError):
            _make_settings(ARENA_ENV="qa")


class TestSettingsCache:
    def test_get_settings_is_cached_until_cleared(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("STREAM_TIMEOUT_S", "7")
        clear_settings_cache()

        assert get_settings().stream_timeout_s == 7.0
