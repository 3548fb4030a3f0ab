from __future__ import annotations

import pytest

from quizforge.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL",
        "OPENAI_TEMPERATURE",
        "OPENAI_MAX_TOKENS",
        "OPENAI_TIMEOUT_SECONDS",
        "QUIZ_QUESTION_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults_do_not_require_api_key() -> None:
    settings = Settings()

    assert settings.openai_api_key == ""
    assert settings.openai_base_url == "https://api.openai.com/v1"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.openai_temperature == 0.3
    assert settings.openai_max_tokens == 700
    assert settings.openai_timeout_seconds is None
    assert settings.quiz_question_count == 5


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("QUIZ_QUESTION_COUNT", "3")

    settings = Settings()

    assert settings.openai_api_key == "sk-env"
    assert settings.openai_timeout_seconds == 30.0
    assert settings.quiz_question_count == 3


def test_settings_read_dotenv_file(tmp_path) -> None:
    (tmp_path / ".env").write_text("OPENAI_MODEL=gpt-4.1-mini\n", encoding="utf-8")

    assert Settings().openai_model == "gpt-4.1-mini"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
