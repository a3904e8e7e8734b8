# src/auto_physics/cli/main.py

"""
CLI entrypoint.

Generates one question per prompt. All prompts are submitted at once and run
one after another through the generator's queue.

With --ideas N, each prompt instead yields N question ideas (at most 5),
generated one number at a time and printed as they arrive.

Usage:
    auto-physics "gaya normal di MRT Jakarta" "energi mekanik wahana luncur" --difficulty C3 --type PG
    auto-physics "projectile motion" --lang en --offline
    auto-physics "fluida di Danau Toba" --ideas 3
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from ..config import SUPPORTED_LANGUAGES, get_settings
from ..logging_setup import setup_logging
from ..questions.generator import QuestionGenerator
from ..questions.models import (
    MAX_IDEAS_PER_REQUEST,
    RANDOM,
    GeneratedQuestion,
    IdeaBatch,
    IdeaListRequest,
    QuestionRequest,
)
from .bootstrap import create_generator

logger = logging.getLogger(__name__)


def build_parser(default_lang: str = "id") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auto-physics",
        description="Auto Physics - generate high-school physics questions",
    )
    parser.add_argument("prompts", nargs="+", help="One problem description per question")
    parser.add_argument("--difficulty", "-d", default=None, help="Bloom level, e.g. C3 (default: c1)")
    parser.add_argument("--type", "-t", dest="qtype", default=None, help="Question type, e.g. PG (default: essay)")
    parser.add_argument("--topic", default="", help="Topic used when the model omits one")
    parser.add_argument("--reference", default=None, help="Optional curriculum reference")
    parser.add_argument("--lang", choices=SUPPORTED_LANGUAGES, default=default_lang)
    parser.add_argument(
        "--ideas",
        type=int,
        default=None,
        metavar="N",
        help=f"List mode: N question ideas per prompt (1-{MAX_IDEAS_PER_REQUEST}); level and type default to {RANDOM}",
    )
    parser.add_argument("--offline", action="store_true", help="Use the offline demo client")
    return parser


def format_question(index: int, question: GeneratedQuestion) -> str:
    lines = [f"#{index} {question.title}"]
    if question.topic:
        lines.append(f"[{question.topic}]")
    lines += ["", question.description, "", question.answer]
    return "\n".join(lines)


def format_idea_batch(prompt_index: int, batch: IdeaBatch) -> str:
    if batch.error is not None:
        return f"#{prompt_index}.{batch.number} (failed: {batch.error})"
    return "\n".join(
        f"#{prompt_index}.{batch.number} [{idea.difficulty} / {idea.type}] {idea.prompt}" for idea in batch.ideas
    )


async def run(args: argparse.Namespace, *, settings=None) -> int:
    """Generate all prompts; returns the process exit code."""
    generator = create_generator(settings=settings, offline=args.offline)

    if args.ideas is not None:
        return await _run_ideas(generator, args)

    requests = [
        QuestionRequest(
            prompt=p,
            difficulty=args.difficulty or "c1",
            type=args.qtype or "essay",
            topic=args.topic,
            reference=args.reference,
            lang=args.lang,
        )
        for p in args.prompts
    ]

    results = await generator.generate_many(requests)

    failed = 0
    for i, result in enumerate(results, start=1):
        if isinstance(result, GeneratedQuestion):
            print(format_question(i, result))
            print()
            continue
        failed += 1
        logger.error("question #%d failed: %s", i, result, exc_info=result)

    if failed:
        logger.error("%d of %d question(s) failed", failed, len(results))
        return 1
    return 0


async def _run_ideas(generator: QuestionGenerator, args: argparse.Namespace) -> int:
    try:
        requests = [
            IdeaListRequest(
                prompt=p,
                total=args.ideas,
                difficulty=args.difficulty or RANDOM,
                type=args.qtype or RANDOM,
                reference=args.reference,
                lang=args.lang,
            )
            for p in args.prompts
        ]
    except ValueError as e:
        logger.error("%s", e)
        return 2

    failed = 0
    for i, request in enumerate(requests, start=1):
        print(f"#{i} {request.prompt}")
        async for batch in generator.stream_ideas(request):
            if batch.error is not None:
                failed += 1
                logger.error("idea #%d.%d failed: %s", i, batch.number, batch.error)
            print(format_idea_batch(i, batch))
        print()

    if failed:
        logger.error("%d idea(s) failed", failed)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    args = build_parser(default_lang=settings.language).parse_args(argv)

    try:
        if any(not p.strip() for p in args.prompts):
            logger.error("Please enter a valid text (empty prompt)")
            sys.exit(2)

        logger.info("Starting %s (%d prompt(s))...", settings.app_name, len(args.prompts))
        sys.exit(asyncio.run(run(args, settings=settings)))
    except KeyboardInterrupt:
        logger.info("interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
