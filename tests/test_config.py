"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from connexe.config import Settings, get_settings
from connexe.core.maze_generator import GenerationAlgorithm


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["DEBUG", "LOG_LEVEL", "DEFAULT_ROWS", "DEFAULT_COLS", "DEFAULT_SEED",
                 "DEFAULT_ALGORITHM", "CHAOS_PROBABILITY"]:
        monkeypatch.delenv(f"CONNEXE_{name}", raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.app_name == "Connexe"
    assert settings.debug is False
    assert settings.log_level == "WARNING"
    assert settings.default_rows == 10
    assert settings.default_cols == 10
    assert settings.default_seed is None
    assert settings.default_algorithm is GenerationAlgorithm.KRUSKAL
    assert settings.chaos_probability == 0.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONNEXE_DEFAULT_ROWS", "12")
    monkeypatch.setenv("CONNEXE_DEFAULT_SEED", "42")
    monkeypatch.setenv("CONNEXE_DEFAULT_ALGORITHM", "prim")
    monkeypatch.setenv("CONNEXE_LOG_LEVEL", "info")

    settings = Settings(_env_file=None)

    assert settings.default_rows == 12
    assert settings.default_seed == 42
    assert settings.default_algorithm is GenerationAlgorithm.PRIM
    assert settings.log_level == "INFO"


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "verbose"},
        {"default_rows": 0},
        {"default_cols": -3},
        {"chaos_probability": 1.5},
        {"default_algorithm": "eller"},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_debug_forces_debug_logging():
    assert Settings(_env_file=None, debug=True).effective_log_level == "DEBUG"
    assert Settings(_env_file=None, log_level="error").effective_log_level == "ERROR"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
