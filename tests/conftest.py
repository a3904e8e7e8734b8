# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the CLI.

    A SimpleNamespace rather than the real config keeps tests independent of
    the developer's environment and .env file.
    """
    return SimpleNamespace(
        app_name="Auto Physics (test)",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        language="id",
        llm_api_key=None,
        llm_base_url="https://example.invalid/v1",
        llm_models=["test/model"],
        extra_headers={},
        temperature=0.65,
        top_p=1.0,
        max_output_tokens=256,
        llm_first_token_timeout_seconds=5.0,
        llm_read_timeout_seconds=10.0,
        llm_connect_timeout_seconds=1.0,
        generation_max_attempts=3,
        generation_timeout_seconds=0.0,
    )
