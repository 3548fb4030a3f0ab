from __future__ import annotations

from typing import Any

import httpx
import structlog

from quizforge.quiz.errors import QuizFormatError, QuizServiceError

logger = structlog.get_logger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"


def _chat_completions_url(base_url: str) -> str:
    return base_url.rstrip("/") + CHAT_COMPLETIONS_PATH


def _auth_headers(api_key: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def extract_reply_text(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


async def request_chat_completion(
    *,
    payload: dict[str, Any],
    base_url: str,
    api_key: str,
    timeout_seconds: float | None,
) -> str:
    """Posts one chat-completion request and returns the assistant message text."""
    url = _chat_completions_url(base_url)
    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            response = await client.post(url, headers=_auth_headers(api_key), json=payload)
    except httpx.HTTPError as exc:
        logger.warning(
            "llm_request_transport_failed",
            error_type=type(exc).__name__,
        )
        raise QuizServiceError(None, str(exc)) from exc

    if not response.is_success:
        logger.warning(
            "llm_request_rejected",
            status_code=response.status_code,
        )
        raise QuizServiceError(response.status_code, response.text)

    try:
        data = response.json()
    except ValueError as exc:
        raise QuizFormatError("Service reply is not valid JSON.") from exc

    return extract_reply_text(data)
