# src/auto_physics/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Services depend on Protocols instead of concrete implementations,
so LLM providers stay swappable and tests can use fakes.
"""

from typing import Iterable, Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI-compatible)."""
    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]: ...
