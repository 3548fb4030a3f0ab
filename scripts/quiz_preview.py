#!/usr/bin/env python3
"""Generate a quiz from text on the command line and print it as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Sequence

from quizforge.core.config import get_settings
from quizforge.core.logging import configure_logging
from quizforge.quiz.errors import QuizError, QuizServiceError
from quizforge.quiz.generation import generate_questions
from quizforge.quiz.sample_bank import get_sample_questions
from quizforge.quiz.types import QuestionRecord


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Topic or paragraph to build the quiz from.")
    source.add_argument("--file", type=Path, help="Read the topic text from this file ('-' for stdin).")
    source.add_argument("--sample", action="store_true", help="Print the built-in sample quiz.")
    parser.add_argument("--indent", type=int, default=2)
    return parser.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if str(args.file) == "-":
        return sys.stdin.read()
    return args.file.read_text(encoding="utf-8")


def _as_json(records: Sequence[QuestionRecord], *, indent: int) -> str:
    return json.dumps([record.as_dict() for record in records], ensure_ascii=False, indent=indent)


async def _run(args: argparse.Namespace) -> int:
    if args.sample:
        print(_as_json(get_sample_questions(), indent=args.indent))  # noqa: T201
        return 0

    try:
        records = await generate_questions(_read_text(args))
    except QuizServiceError as exc:
        print(f"quiz_preview failed: status={exc.status_code} body={exc.body}", file=sys.stderr)  # noqa: T201
        return 1
    except QuizError as exc:
        print(f"quiz_preview failed: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    print(_as_json(records, indent=args.indent))  # noqa: T201
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(get_settings().log_level, json_logs=False, stream=sys.stderr)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
