# src/auto_physics/questions/generator.py

from __future__ import annotations

"""
Question generation service.

Every generate() call becomes one job on a SequentialTaskQueue, so requests
coming from several question slots never interleave their LLM calls.
Inside a job, the model gets up to `max_attempts` tries to return a usable
answer; the caller sees either the result or a QuestionGenerationError.

The blocking LLM call runs in a worker thread. A job does not finish before its
worker does, even on timeout or cancellation, so the lane stays exclusive.
"""

import asyncio
import dataclasses
import logging
import time
from collections.abc import AsyncIterator, Callable, Sequence
from typing import TypeVar

from ..core.ports import ChatMessage, LLMClient
from ..tasks.sequential_queue import SequentialTaskQueue
from .models import GeneratedQuestion, IdeaBatch, IdeaListRequest, QuestionIdea, QuestionRequest
from .parser import parse_idea_rows, parse_question_row
from .prompts import build_idea_messages, build_messages

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuestionGenerationError(RuntimeError):
    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class QuestionGenerator:
    def __init__(
        self,
        llm: LLMClient,
        *,
        queue: SequentialTaskQueue | None = None,
        max_attempts: int = 3,
        timeout_seconds: float | None = None,
    ) -> None:
        self.llm = llm
        self.queue = queue if queue is not None else SequentialTaskQueue(name="generate")
        self.max_attempts = max(1, int(max_attempts))
        self.timeout_seconds = timeout_seconds

    # ---- detail mode ----

    async def generate(self, request: QuestionRequest) -> GeneratedQuestion:
        """Queue one generation; resolves with the question or raises for this request only."""
        return await self.queue.enqueue(self._question_job(request))

    async def generate_many(
        self,
        requests: Sequence[QuestionRequest],
    ) -> list[GeneratedQuestion | BaseException]:
        """
        Submit all requests at once and collect outcomes in input order.

        A failed request yields its exception in place of a question.
        """
        handles = [self.queue.enqueue(self._question_job(r)) for r in requests]
        return list(await asyncio.gather(*handles, return_exceptions=True))

    def _question_job(self, request: QuestionRequest):
        system_prompt, messages = build_messages(request)

        def parse(text: str) -> GeneratedQuestion | None:
            question = parse_question_row(text)
            if not question.is_complete:
                return None
            if not question.topic:
                question.topic = request.topic
            return question

        async def job() -> GeneratedQuestion:
            question = await self._generate_with_attempts(system_prompt, messages, parse)
            logger.info("generated question %r", question.title)
            return question

        return job

    # ---- list mode ----

    async def generate_ideas(self, request: IdeaListRequest) -> list[QuestionIdea]:
        """Queue one list-mode call for the whole range; resolves with its ideas."""
        return await self.queue.enqueue(self._ideas_job(request))

    async def stream_ideas(self, request: IdeaListRequest) -> AsyncIterator[IdeaBatch]:
        """
        One queued call per question number, yielded in order as each settles.

        A failed number yields a batch carrying its error and the stream goes on.
        Closing the stream early cancels the numbers that have not run yet.
        """
        start, end = request.number_range
        numbers = list(range(start, end + 1))
        handles = [
            self.queue.enqueue(self._ideas_job(dataclasses.replace(request, total=1, start=n, end=n)))
            for n in numbers
        ]
        try:
            for number, handle in zip(numbers, handles):
                try:
                    ideas = await handle
                except Exception as e:
                    logger.warning("idea #%d failed (%s: %s)", number, e.__class__.__name__, e)
                    yield IdeaBatch(number=number, ideas=[], error=e)
                    continue
                yield IdeaBatch(number=number, ideas=ideas)
        finally:
            for handle in handles:
                if not handle.done():
                    handle.cancel()

    def _ideas_job(self, request: IdeaListRequest):
        system_prompt, messages = build_idea_messages(request)
        start, end = request.number_range
        wanted = end - start + 1

        def parse(text: str) -> list[QuestionIdea] | None:
            ideas = parse_idea_rows(text, difficulty=request.difficulty, qtype=request.type)
            return ideas[:wanted] or None

        async def job() -> list[QuestionIdea]:
            ideas = await self._generate_with_attempts(system_prompt, messages, parse)
            logger.info("generated %d idea(s) for numbers %d..%d", len(ideas), start, end)
            return ideas

        return job

    # ---- shared ----

    async def _generate_with_attempts(
        self,
        system_prompt: str,
        messages: list[ChatMessage],
        parse: Callable[[str], T | None],
    ) -> T:
        deadline = None
        if self.timeout_seconds is not None and self.timeout_seconds > 0:
            deadline = time.monotonic() + self.timeout_seconds

        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"Generation timed out after {self.timeout_seconds}s.") from last_error

            try:
                text = await self._call_llm(system_prompt, messages, deadline)
            except Exception as e:
                if isinstance(e, TimeoutError) and deadline is not None and time.monotonic() >= deadline:
                    raise
                last_error = e
                logger.warning(
                    "generation attempt %d/%d failed (%s: %s)",
                    attempt,
                    self.max_attempts,
                    e.__class__.__name__,
                    e,
                )
                continue

            result = parse(text)
            if result is not None:
                logger.debug("generation succeeded on attempt %d", attempt)
                return result

            logger.info("generation attempt %d/%d returned an unusable answer", attempt, self.max_attempts)

        raise QuestionGenerationError(
            f"No usable answer after {self.max_attempts} attempt(s).",
            attempts=self.max_attempts,
        ) from last_error

    async def _call_llm(
        self,
        system_prompt: str,
        messages: list[ChatMessage],
        deadline: float | None,
    ) -> str:
        worker = asyncio.ensure_future(asyncio.to_thread(self._complete, system_prompt, messages, deadline))
        try:
            if deadline is None:
                return await asyncio.shield(worker)
            remaining = max(0.0, deadline - time.monotonic())
            return await asyncio.wait_for(asyncio.shield(worker), timeout=remaining)
        except (asyncio.CancelledError, TimeoutError):
            # A thread cannot be interrupted: hold the lane until the worker returns.
            await asyncio.wait([worker])
            if not worker.cancelled():
                worker.exception()
            raise

    def _complete(self, system_prompt: str, messages: list[ChatMessage], deadline: float | None) -> str:
        chunks = self.llm.stream_chat(messages, system_prompt)
        parts: list[str] = []
        try:
            for chunk in chunks:
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError("Generation deadline passed while streaming.")
                parts.append(chunk)
        finally:
            close = getattr(chunks, "close", None)
            if callable(close):
                close()
        return "".join(parts)
