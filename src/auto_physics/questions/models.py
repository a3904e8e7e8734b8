# src/auto_physics/questions/models.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import SUPPORTED_LANGUAGES


@dataclass(slots=True, frozen=True)
class QuestionRequest:
    """One "generate" click for a question slot."""

    prompt: str
    difficulty: str = "c1"  # Bloom level, e.g. "C3"
    type: str = "essay"
    topic: str = ""
    reference: str | None = None
    lang: str = "id"

    def __post_init__(self) -> None:
        if not (self.prompt or "").strip():
            raise ValueError("Please enter a valid text")
        if self.lang not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {self.lang!r}")


@dataclass(slots=True)
class GeneratedQuestion:
    title: str
    description: str
    answer: str
    topic: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.title and self.description and self.answer)

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "answer": self.answer,
            "topic": self.topic,
        }


MAX_IDEAS_PER_REQUEST = 5
RANDOM = "Acak"  # "let the model pick" for difficulty / type


@dataclass(slots=True, frozen=True)
class IdeaListRequest:
    """
    List mode: ask for numbered question ideas (prompt, Bloom level, type).

    Ideas `start..end` are requested; the range defaults to 1..total.
    """

    prompt: str
    total: int = MAX_IDEAS_PER_REQUEST
    difficulty: str = RANDOM
    type: str = RANDOM
    reference: str | None = None
    lang: str = "id"
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        if not (self.prompt or "").strip():
            raise ValueError("Please enter a valid text")
        if self.lang not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {self.lang!r}")
        if self.total > MAX_IDEAS_PER_REQUEST:
            raise ValueError(
                f"Maximum {MAX_IDEAS_PER_REQUEST} questions per request. Please split into multiple requests."
            )
        if self.total < 1:
            raise ValueError("total must be at least 1")
        start, end = self.number_range
        if start < 1 or end < start:
            raise ValueError(f"Invalid question range: {start}..{end}")

    @property
    def number_range(self) -> tuple[int, int]:
        start = 1 if self.start is None else self.start
        end = start + self.total - 1 if self.end is None else self.end
        return start, end


@dataclass(slots=True, frozen=True)
class QuestionIdea:
    prompt: str
    difficulty: str
    type: str


@dataclass(slots=True)
class IdeaBatch:
    """Outcome for one question number of a streamed idea list."""

    number: int
    ideas: list[QuestionIdea]
    error: BaseException | None = None
