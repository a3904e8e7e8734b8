# src/auto_physics/llm/offline.py

from __future__ import annotations

import re
from collections.abc import Iterable

from ..core.ports import ChatMessage

_FIELD_RE = re.compile(r"\|-\[(.*?)\]-\|", re.DOTALL)
_RANGE_RE = re.compile(r"(\d+)\D+(\d+)-\|\s*$")
_LIST_MODE_MARKERS = ("Mode Daftar Ide", "Idea List Mode")


class OfflineLLMClient:
    """
    Offline deterministic LLM client used for demos when no external API is configured.

    Echoes the requested problem back in the shape the system prompt asks for:
    one complete question row (title|->description|->answer|->topic), or one
    "prompt|->level|->type" idea per requested number in list mode. The whole
    generation path works without credentials.
    """

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        user_text = ""
        for m in reversed(messages):
            if m["role"] == "user":
                user_text = m["content"]
                break

        fields = _FIELD_RE.findall(user_text)
        problem = (fields[0] if fields else user_text).strip() or "physics"
        level = fields[2].strip() if len(fields) > 2 else ""

        if any(marker in system_prompt for marker in _LIST_MODE_MARKERS):
            yield self._idea_rows(user_text, problem)
            return

        yield f"Offline: {problem[:60]}|->"
        yield (
            f"Offline demo mode: no external LLM is configured. Requested problem: {problem}. {level}".strip()
            + "|->"
        )
        yield "Set AUTOPHYS_LLM_API_KEY (and AUTOPHYS_LLM_MODELS) to enable real questions.|->"
        yield "Offline"

    @staticmethod
    def _idea_rows(user_text: str, problem: str) -> str:
        m = _RANGE_RE.search(user_text)
        start, end = (int(m.group(1)), int(m.group(2))) if m else (1, 1)
        return "<_>".join(f"{n}. Offline idea {n}: {problem[:60]}|->C3|->Essay" for n in range(start, end + 1))
