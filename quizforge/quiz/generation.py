from __future__ import annotations

from typing import Any

import structlog

from quizforge.core.config import get_settings
from quizforge.quiz.errors import QuizValidationError
from quizforge.quiz.parsing import parse_question_records
from quizforge.quiz.types import QuestionRecord
from quizforge.services import llm_client

logger = structlog.get_logger(__name__)

EMPTY_TOPIC_MESSAGE = "Paste a topic / paragraph first"
SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that creates clear multiple-choice quiz questions "
    "(4 options) from the given text/topic. Reply with a JSON array named questions "
    "where each item is {question, options, answer}."
)


def require_topic_text(content: str) -> str:
    if not content or not content.strip():
        raise QuizValidationError(EMPTY_TOPIC_MESSAGE)
    return content


def build_user_prompt(content: str, *, question_count: int) -> str:
    return (
        f"Create {question_count} multiple-choice questions (with exactly 4 options each) "
        f"based on this content. Output only valid JSON. Content:\n\n{content}"
    )


def build_generation_request(
    content: str,
    *,
    question_count: int,
    model: str,
    temperature: float,
    max_tokens: int,
) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": build_user_prompt(content, question_count=question_count)},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }


async def generate_questions(content: str) -> tuple[QuestionRecord, ...]:
    """Asks the text-generation service for a quiz about ``content``.

    Raises QuizValidationError before any network access when the text is
    blank, QuizServiceError on a failed call and QuizFormatError when the reply
    holds no usable questions.
    """
    require_topic_text(content)
    settings = get_settings()
    question_count = settings.quiz_question_count

    payload = build_generation_request(
        content,
        question_count=question_count,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )
    logger.info(
        "quiz_generation_started",
        model=settings.openai_model,
        question_count=question_count,
        content_length=len(content),
    )
    reply_text = await llm_client.request_chat_completion(
        payload=payload,
        base_url=settings.openai_base_url,
        api_key=settings.openai_api_key,
        timeout_seconds=settings.openai_timeout_seconds,
    )
    records = parse_question_records(reply_text, question_count=question_count)
    logger.info("quiz_generation_completed", questions=len(records))
    return records
