# src/auto_physics/cli/bootstrap.py

"""
CLI bootstrap helpers.

Composition root: wires settings, the LLM client and the generation queue
into a QuestionGenerator.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LLMClient
from ..llm.client import OpenAICompatibleLLMClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..questions.generator import QuestionGenerator
from ..tasks.sequential_queue import SequentialTaskQueue

logger = logging.getLogger(__name__)


def create_llm_client(settings, *, offline: bool = False) -> LLMClient:
    """Real client when configured, OfflineLLMClient otherwise (or when forced)."""
    if offline:
        return OfflineLLMClient()
    try:
        return OpenAICompatibleLLMClient(settings)
    except RuntimeError as e:
        logger.warning("%s Falling back to offline mode.", friendly_llm_error_message(e))
        return OfflineLLMClient()


def create_generator(*, settings=None, offline: bool = False) -> QuestionGenerator:
    """
    Build a QuestionGenerator with its own SequentialTaskQueue.

    Settings stay injectable for tests; defaults to get_settings().
    """
    if settings is None:
        settings = get_settings()

    timeout = float(getattr(settings, "generation_timeout_seconds", 0.0) or 0.0)
    return QuestionGenerator(
        create_llm_client(settings, offline=offline),
        queue=SequentialTaskQueue(name="generate"),
        max_attempts=int(getattr(settings, "generation_max_attempts", 3)),
        timeout_seconds=timeout if timeout > 0 else None,
    )
