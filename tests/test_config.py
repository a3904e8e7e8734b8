# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from auto_physics.config import Settings

_VARS = [
    "AUTOPHYS_LANGUAGE",
    "AUTOPHYS_LLM_API_KEY",
    "OPENAI_API_KEY",
    "AUTOPHYS_LLM_MODELS",
    "AUTOPHYS_GENERATION_MAX_ATTEMPTS",
    "AUTOPHYS_LLM_TEMPERATURE",
    "AUTOPHYS_DATA_DIR",
    "AUTOPHYS_LLM_FIRST_TOKEN_TIMEOUT_SECONDS",
    "AUTOPHYS_LLM_READ_TIMEOUT_SECONDS",
    "AUTOPHYS_LLM_CONNECT_TIMEOUT_SECONDS",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.language == "id"
    assert s.llm_api_key is None
    assert s.generation_max_attempts == 3
    assert s.temperature == pytest.approx(0.65)
    assert s.data_dir == Path(".local/auto_physics")
    assert s.llm_first_token_timeout_seconds == 45.0
    assert s.llm_read_timeout_seconds == 60.0
    assert s.llm_connect_timeout_seconds == 5.0


def test_env_overrides_and_fallbacks(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("AUTOPHYS_LANGUAGE", "EN")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("AUTOPHYS_LLM_MODELS", "a/one, b/two  c/three")
    clean_env.setenv("AUTOPHYS_GENERATION_MAX_ATTEMPTS", "not-a-number")
    clean_env.setenv("AUTOPHYS_LLM_TEMPERATURE", "0.2")

    s = Settings.from_env()

    assert s.language == "en"
    assert s.llm_api_key == "sk-test"
    assert s.llm_models == ["a/one", "b/two", "c/three"]
    assert s.generation_max_attempts == 3
    assert s.temperature == pytest.approx(0.2)


def test_unknown_language_falls_back_to_indonesian(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("AUTOPHYS_LANGUAGE", "fr")
    assert Settings.from_env().language == "id"


def test_prefixed_key_wins_over_generic(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("AUTOPHYS_LLM_API_KEY", "sk-own")
    clean_env.setenv("OPENAI_API_KEY", "sk-generic")
    assert Settings.from_env().llm_api_key == "sk-own"


def test_read_timeout_never_undercuts_first_token_timeout(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("AUTOPHYS_LLM_FIRST_TOKEN_TIMEOUT_SECONDS", "90")
    clean_env.setenv("AUTOPHYS_LLM_READ_TIMEOUT_SECONDS", "30")
    clean_env.setenv("AUTOPHYS_LLM_CONNECT_TIMEOUT_SECONDS", "2.5")

    s = Settings.from_env()

    assert s.llm_first_token_timeout_seconds == 90.0
    assert s.llm_read_timeout_seconds == 90.0
    assert s.llm_connect_timeout_seconds == 2.5
