# tests/test_llm_client.py

from __future__ import annotations

import time
from types import SimpleNamespace

import httpx
import openai
import pytest

from auto_physics.llm.client import BAD_MODEL_COOLDOWN_SECONDS, OpenAICompatibleLLMClient

_REQUEST = httpx.Request("POST", "https://example.invalid/v1/chat/completions")

MESSAGES = [{"role": "user", "content": "|-[gerak parabola]-|"}]


def _status_error(cls, status: int):
    return cls(f"status {status}", response=httpx.Response(status, request=_REQUEST), body=None)


def _chunk(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


class ScriptedCompletions:
    """Stands in for `OpenAI().chat.completions`: one outcome per model name."""

    def __init__(self, outcomes: dict) -> None:
        self.outcomes = outcomes
        self.models: list[str] = []
        self.kwargs: list[dict] = []

    def create(self, *, model: str, **kwargs):
        self.models.append(model)
        self.kwargs.append(kwargs)
        outcome = self.outcomes[model]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome()
        return iter(outcome)


def _client(settings, outcomes: dict) -> tuple[OpenAICompatibleLLMClient, ScriptedCompletions]:
    settings.llm_api_key = "sk-test"
    settings.llm_models = list(outcomes)
    client = OpenAICompatibleLLMClient(settings)
    completions = ScriptedCompletions(outcomes)
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client, completions


def _collect(client: OpenAICompatibleLLMClient) -> str:
    return "".join(client.stream_chat(MESSAGES, "system"))


def test_streams_content_from_the_first_model(settings) -> None:
    client, completions = _client(settings, {"m1": [_chunk(None), _chunk("Judul"), _chunk("|->Soal")]})

    assert _collect(client) == "Judul|->Soal"
    assert completions.models == ["m1"]

    sent = completions.kwargs[0]
    assert sent["stream"] is True
    assert sent["messages"][0] == {"role": "system", "content": "system"}
    assert sent["messages"][1:] == MESSAGES
    assert sent["max_tokens"] == 256


def test_timeouts_come_from_settings(settings) -> None:
    client, _ = _client(settings, {"m1": [_chunk("x")]})

    assert client.first_token_timeout == 5.0
    assert client._timeout.read == 10.0
    assert client._timeout.connect == 1.0


@pytest.mark.parametrize(
    "error",
    [
        _status_error(openai.RateLimitError, 429),
        openai.APIConnectionError(request=_REQUEST),
        httpx.ReadTimeout("read timed out", request=_REQUEST),
    ],
    ids=["rate-limit", "connection", "read-timeout"],
)
def test_transient_errors_fall_back_to_the_next_model(settings, error) -> None:
    client, completions = _client(settings, {"m1": error, "m2": [_chunk("ok")]})

    assert _collect(client) == "ok"
    assert completions.models == ["m1", "m2"]
    assert client._bad_models == {}


def test_missing_model_is_cooled_down_for_an_hour(settings) -> None:
    client, completions = _client(
        settings,
        {"m1": _status_error(openai.NotFoundError, 404), "m2": [_chunk("ok")]},
    )

    before = time.monotonic()
    assert _collect(client) == "ok"
    assert client._bad_models["m1"] >= before + BAD_MODEL_COOLDOWN_SECONDS

    assert _collect(client) == "ok"
    assert completions.models == ["m1", "m2", "m2"]


def test_auth_error_fails_fast_without_trying_other_models(settings) -> None:
    auth_error = _status_error(openai.AuthenticationError, 401)
    client, completions = _client(settings, {"m1": auth_error, "m2": [_chunk("ok")]})

    with pytest.raises(RuntimeError, match="authentication failed") as excinfo:
        _collect(client)

    assert excinfo.value.__cause__ is auth_error
    assert completions.models == ["m1"]


def test_first_token_timeout_moves_to_the_next_model(settings) -> None:
    closed: list[str] = []

    def slow_stream():
        try:
            time.sleep(0.05)
            yield _chunk("too late")
        finally:
            closed.append("m1")

    client, completions = _client(settings, {"m1": slow_stream, "m2": [_chunk("ok")]})
    client.first_token_timeout = 0.01

    assert _collect(client) == "ok"
    assert completions.models == ["m1", "m2"]
    assert closed == ["m1"]


def test_empty_stream_moves_to_the_next_model(settings) -> None:
    client, completions = _client(settings, {"m1": [_chunk(None)], "m2": [_chunk("ok")]})

    assert _collect(client) == "ok"
    assert completions.models == ["m1", "m2"]


def test_all_models_failing_raises_chained_from_the_last_error(settings) -> None:
    last = ValueError("bad payload from m2")
    client, _ = _client(settings, {"m1": ValueError("bad payload from m1"), "m2": last})

    with pytest.raises(RuntimeError, match="All LLM models failed.") as excinfo:
        _collect(client)

    assert excinfo.value.__cause__ is last


def test_all_models_rate_limited_reports_rate_limit(settings) -> None:
    client, _ = _client(
        settings,
        {"m1": _status_error(openai.RateLimitError, 429), "m2": _status_error(openai.RateLimitError, 429)},
    )

    with pytest.raises(RuntimeError, match="rate-limited"):
        _collect(client)


def test_last_model_connection_error_reports_network_error(settings) -> None:
    client, _ = _client(settings, {"m1": ValueError("bad"), "m2": openai.APIConnectionError(request=_REQUEST)})

    with pytest.raises(RuntimeError, match="network/timeout"):
        _collect(client)


def test_empty_model_list_is_a_configuration_error(settings) -> None:
    client, _ = _client(settings, {"m1": [_chunk("x")]})
    client.models = []

    with pytest.raises(RuntimeError, match="model list is empty"):
        _collect(client)


def test_construction_requires_key_and_base_url(settings) -> None:
    with pytest.raises(RuntimeError, match="API key is not set"):
        OpenAICompatibleLLMClient(settings)

    settings.llm_api_key = "sk-test"
    settings.llm_base_url = " "
    with pytest.raises(RuntimeError, match="base URL is not set"):
        OpenAICompatibleLLMClient(settings)
