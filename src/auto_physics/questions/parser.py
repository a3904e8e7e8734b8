# src/auto_physics/questions/parser.py

from __future__ import annotations

import re
from typing import Any

from .models import RANDOM, GeneratedQuestion, QuestionIdea

FIELD_DELIMITER = "|->"
ROW_SEPARATOR = "<_>"

_NUMBERING_RE = re.compile(r"^\d+\s*[.)]\s*")

# "A. text" / "B) text" lines after a newline, up to the next option or end of text.
_OPTION_RE = re.compile(r"\n\s*([A-E])[.)]\s+(.*?)(?=\n\s*[A-E][.)]\s+|$)", re.DOTALL)
_HAS_OPTIONS_RE = re.compile(r"[A-E]\.")


def parse_question_row(text: str | None) -> GeneratedQuestion:
    """
    Parse a "title|->description|->answer|->topic" row.

    Missing fields become empty strings; segments past the fourth are ignored.
    """
    parts = [p.strip() for p in (text or "").split(FIELD_DELIMITER)]
    parts += [""] * (4 - len(parts))
    title, description, answer, topic = parts[:4]
    return GeneratedQuestion(title=title, description=description, answer=answer, topic=topic)


def parse_idea_rows(
    text: str | None,
    *,
    difficulty: str = RANDOM,
    qtype: str = RANDOM,
) -> list[QuestionIdea]:
    """
    Parse list-mode output: "<prompt>|-><level>|-><type>" rows joined by "<_>".

    A requested difficulty other than "Acak" overrides the model's level; the
    requested type only fills in when the model omits one. Rows without a prompt
    are dropped, and leading "1. " numbering is stripped.
    """
    ideas: list[QuestionIdea] = []
    for row in (text or "").split(ROW_SEPARATOR):
        row = row.strip()
        if not row:
            continue
        parts = [p.strip() for p in row.split(FIELD_DELIMITER)]
        parts += [""] * (3 - len(parts))
        prompt = _NUMBERING_RE.sub("", parts[0]).strip()
        if not prompt:
            continue
        ideas.append(
            QuestionIdea(
                prompt=prompt,
                difficulty=parts[1] if difficulty == RANDOM else difficulty,
                type=parts[2] or qtype,
            )
        )
    return ideas


def split_options(text: str) -> tuple[str, list[dict[str, str]]]:
    """Separate question text from trailing "A. ..." options."""
    if not text:
        return "", []

    options: list[dict[str, str]] = []
    first_index = -1
    for m in _OPTION_RE.finditer(text):
        if first_index == -1:
            first_index = m.start()
        options.append({"label": m.group(1).upper(), "text": m.group(2).strip()})

    content = text[:first_index].strip() if first_index != -1 else text
    return content, options


def normalize_question(question: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Give a stored question a uniform shape for display.

    Multiple-choice questions without structured options get `options` parsed out
    of the description; everything else gets `content = description`.
    The input dict is not mutated.
    """
    if question is None:
        return None

    normalized = dict(question)
    description = normalized.get("description") or ""
    is_multiple_choice = normalized.get("type") == "multipleChoice" or bool(
        _HAS_OPTIONS_RE.search(description)
    )

    if is_multiple_choice and not normalized.get("options"):
        content, options = split_options(description)
        normalized["content"] = content if options else description
        normalized["options"] = options
    else:
        normalized["content"] = description

    return normalized
