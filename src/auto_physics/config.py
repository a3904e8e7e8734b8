# src/auto_physics/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

ENV_PREFIX = "AUTOPHYS"

SUPPORTED_LANGUAGES = ("id", "en")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Locale ----
    language: str

    # ---- LLM (OpenAI-compatible endpoint) ----
    llm_api_key: Optional[str]
    llm_base_url: str
    llm_models: List[str]
    extra_headers: Dict[str, str]
    temperature: float
    top_p: float
    max_output_tokens: int
    llm_first_token_timeout_seconds: float
    llm_read_timeout_seconds: float
    llm_connect_timeout_seconds: float

    # ---- Generation ----
    generation_max_attempts: int
    generation_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Auto Physics")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/auto_physics"))

        language = _env(_k("LANGUAGE"), "id").strip().lower()
        if language not in SUPPORTED_LANGUAGES:
            language = "id"

        # Accept the generic OPENAI_API_KEY as a fallback.
        llm_api_key = _first_env(_k("LLM_API_KEY"), "OPENAI_API_KEY", default=None)
        llm_base_url = _env(_k("LLM_BASE_URL"), "https://openrouter.ai/api/v1")
        llm_models = _env_list(
            _k("LLM_MODELS"),
            [
                "google/gemini-2.5-flash",
                "deepseek/deepseek-chat-v3-0324:free",
            ],
        )

        extra_headers = {
            "HTTP-Referer": _env(_k("HTTP_REFERER"), "https://example.com"),
            "X-Title": _env(_k("APP_TITLE"), app_name),
        }

        temperature = _env_float(_k("LLM_TEMPERATURE"), 0.65)
        top_p = _env_float(_k("LLM_TOP_P"), 1.0)
        max_output_tokens = _env_int(_k("LLM_MAX_OUTPUT_TOKENS"), 16384)

        # Worked solutions are long, so these are more generous than chat timeouts.
        llm_first_token_timeout_seconds = _env_float(_k("LLM_FIRST_TOKEN_TIMEOUT_SECONDS"), 45.0)
        llm_connect_timeout_seconds = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        # keep read >= first_token
        llm_read_timeout_seconds = max(
            _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 60.0),
            llm_first_token_timeout_seconds,
        )

        generation_max_attempts = max(1, _env_int(_k("GENERATION_MAX_ATTEMPTS"), 3))
        generation_timeout_seconds = _env_float(_k("GENERATION_TIMEOUT_SECONDS"), 90.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            language=language,
            llm_api_key=llm_api_key,
            llm_base_url=llm_base_url,
            llm_models=llm_models,
            extra_headers=extra_headers,
            temperature=temperature,
            top_p=top_p,
            max_output_tokens=max_output_tokens,
            llm_first_token_timeout_seconds=llm_first_token_timeout_seconds,
            llm_read_timeout_seconds=llm_read_timeout_seconds,
            llm_connect_timeout_seconds=llm_connect_timeout_seconds,
            generation_max_attempts=generation_max_attempts,
            generation_timeout_seconds=generation_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
