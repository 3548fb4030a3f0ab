from __future__ import annotations

import json

import structlog

from quizforge.quiz.errors import QuizFormatError
from quizforge.quiz.types import QuestionRecord

logger = structlog.get_logger(__name__)

OPTIONS_PER_QUESTION = 4
OPTION_LETTERS = ("A", "B", "C", "D")

_decoder = json.JSONDecoder()


def extract_json_array(reply_text: str) -> list[object]:
    """Decodes the first JSON array literal in a free-text model reply.

    The reply may wrap the array in prose or code fences, so decoding starts at
    the first ``[`` and stops at the end of that value.
    """
    start_idx = reply_text.find("[")
    if start_idx == -1:
        raise QuizFormatError("Invalid questions format from model.")

    try:
        parsed, _ = _decoder.raw_decode(reply_text, start_idx)
    except json.JSONDecodeError as exc:
        raise QuizFormatError(f"Invalid questions format from model: {exc.msg}") from exc

    if not isinstance(parsed, list) or not parsed:
        raise QuizFormatError("Invalid questions format from model.")
    return parsed


def _clean_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text if text else None


def _resolve_answer(raw_answer: object, options: tuple[str, ...]) -> str | None:
    answer = _clean_text(raw_answer)
    if answer is None:
        return None
    if answer in options:
        return answer

    letter = answer.rstrip(").").upper()
    if letter in OPTION_LETTERS:
        return options[OPTION_LETTERS.index(letter)]
    return None


def validate_question_item(item: object) -> QuestionRecord | None:
    if not isinstance(item, dict):
        return None

    question = _clean_text(item.get("question"))
    raw_options = item.get("options")
    if question is None or not isinstance(raw_options, list):
        return None
    if len(raw_options) != OPTIONS_PER_QUESTION:
        return None

    options = tuple(_clean_text(option) for option in raw_options)
    if any(option is None for option in options):
        return None

    answer = _resolve_answer(item.get("answer"), options)
    if answer is None:
        return None

    return QuestionRecord(question=question, options=options, answer=answer)


def parse_question_records(reply_text: str, *, question_count: int) -> tuple[QuestionRecord, ...]:
    items = extract_json_array(reply_text)

    records: list[QuestionRecord] = []
    for position, item in enumerate(items):
        record = validate_question_item(item)
        if record is None:
            logger.warning("quiz_record_dropped", position=position)
            continue
        records.append(record)

    if not records:
        raise QuizFormatError("Model reply contained no usable questions.")

    if len(records) > question_count:
        logger.info(
            "quiz_records_truncated",
            received=len(records),
            question_count=question_count,
        )
    return tuple(records[:question_count])
