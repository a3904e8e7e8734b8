# tests/test_cli.py

from __future__ import annotations

import pytest

from auto_physics.cli.bootstrap import create_generator, create_llm_client
from auto_physics.cli.main import build_parser, run
from auto_physics.llm.client import OpenAICompatibleLLMClient, friendly_llm_error_message
from auto_physics.llm.offline import OfflineLLMClient


def test_missing_api_key_falls_back_to_offline_client(settings) -> None:
    assert isinstance(create_llm_client(settings), OfflineLLMClient)


def test_configured_key_builds_real_client(settings) -> None:
    settings.llm_api_key = "sk-test"
    client = create_llm_client(settings)
    assert isinstance(client, OpenAICompatibleLLMClient)
    assert client.models == ["test/model"]


def test_offline_flag_wins_over_configured_key(settings) -> None:
    settings.llm_api_key = "sk-test"
    assert isinstance(create_llm_client(settings, offline=True), OfflineLLMClient)


def test_create_generator_reads_generation_settings(settings) -> None:
    settings.generation_max_attempts = 5
    settings.generation_timeout_seconds = 12.5
    generator = create_generator(settings=settings, offline=True)
    assert generator.max_attempts == 5
    assert generator.timeout_seconds == 12.5
    assert generator.queue.name == "generate"


def test_friendly_error_message_for_missing_key() -> None:
    msg = friendly_llm_error_message(RuntimeError("LLM API key is not set. Set AUTOPHYS_LLM_API_KEY in your .env."))
    assert "missing API key" in msg


def test_parser_defaults() -> None:
    args = build_parser(default_lang="en").parse_args(["gerak parabola"])
    assert args.prompts == ["gerak parabola"]
    assert args.difficulty is None
    assert args.qtype is None
    assert args.ideas is None
    assert args.lang == "en"
    assert args.offline is False


@pytest.mark.asyncio
async def test_run_offline_prints_every_question(settings, capsys) -> None:
    args = build_parser().parse_args(["gerak parabola", "hukum Ohm", "--offline", "-d", "C3"])

    code = await run(args, settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    assert "#1 Offline: gerak parabola" in out
    assert "#2 Offline: hukum Ohm" in out


@pytest.mark.asyncio
async def test_run_offline_ideas_prints_one_line_per_number(settings, capsys) -> None:
    args = build_parser().parse_args(["fluida dinamis", "--offline", "--ideas", "3"])

    code = await run(args, settings=settings)

    out = capsys.readouterr().out
    assert code == 0
    assert "#1 fluida dinamis" in out
    for n in (1, 2, 3):
        assert f"#1.{n} [C3 / Essay] Offline idea {n}: fluida dinamis" in out


@pytest.mark.asyncio
async def test_run_rejects_more_than_five_ideas(settings, capsys) -> None:
    args = build_parser().parse_args(["fluida", "--offline", "--ideas", "6"])

    assert await run(args, settings=settings) == 2
    assert capsys.readouterr().out == ""


def test_offline_client_answers_list_mode_with_the_requested_numbers() -> None:
    client = OfflineLLMClient()
    content = "|-[listrik]-| |-[none]-| |-[C3]-| |-[MCQ]-| |-questions start from number 4 to number 5-|"
    messages = [{"role": "user", "content": content}]

    text = "".join(client.stream_chat(messages, "Indonesian SMA Physics Teacher Persona - Idea List Mode"))

    assert text == "4. Offline idea 4: listrik|->C3|->Essay<_>5. Offline idea 5: listrik|->C3|->Essay"
