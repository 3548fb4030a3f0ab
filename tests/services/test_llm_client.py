from __future__ import annotations

from typing import Any

import pytest

from quizforge.quiz.errors import QuizFormatError, QuizServiceError
from quizforge.services import llm_client
from tests.fakes import FakeResponse, chat_reply, patch_http_client


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (chat_reply("hello"), "hello"),
        ({"choices": [{"message": {"content": None}}]}, ""),
        ({"choices": [{"message": "oops"}]}, ""),
        ({"choices": ["oops"]}, ""),
        ({"choices": []}, ""),
        ({}, ""),
        ([], ""),
    ],
)
def test_extract_reply_text(data: object, expected: str) -> None:
    assert llm_client.extract_reply_text(data) == expected


@pytest.mark.asyncio
async def test_request_chat_completion_posts_payload_and_returns_content(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    patch_http_client(monkeypatch, calls, response=FakeResponse(payload=chat_reply("[1]")))

    text = await llm_client.request_chat_completion(
        payload={"model": "m", "messages": []},
        base_url="https://api.example.local/v1",
        api_key="key",
        timeout_seconds=12.5,
    )

    assert text == "[1]"
    assert calls == [
        {
            "url": "https://api.example.local/v1/chat/completions",
            "headers": {"Content-Type": "application/json", "Authorization": "Bearer key"},
            "json": {"model": "m", "messages": []},
            "timeout": 12.5,
        }
    ]


@pytest.mark.asyncio
async def test_request_chat_completion_rejects_non_success_status(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    patch_http_client(
        monkeypatch,
        calls,
        response=FakeResponse(status_code=429, text="rate limited"),
    )

    with pytest.raises(QuizServiceError) as exc_info:
        await llm_client.request_chat_completion(
            payload={},
            base_url="https://api.example.local/v1",
            api_key="key",
            timeout_seconds=None,
        )

    assert exc_info.value.status_code == 429
    assert exc_info.value.body == "rate limited"
    assert "429" in str(exc_info.value)


@pytest.mark.asyncio
async def test_request_chat_completion_rejects_non_json_success_body(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []
    patch_http_client(monkeypatch, calls, response=FakeResponse(status_code=200, text="<html>"))

    with pytest.raises(QuizFormatError):
        await llm_client.request_chat_completion(
            payload={},
            base_url="https://api.example.local/v1",
            api_key="key",
            timeout_seconds=None,
        )
