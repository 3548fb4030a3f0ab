from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Missing key is not a startup error: the upstream service rejects the call.
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_temperature: float = Field(default=0.3, ge=0.0, le=2.0, alias="OPENAI_TEMPERATURE")
    openai_max_tokens: int = Field(default=700, gt=0, alias="OPENAI_MAX_TOKENS")
    openai_timeout_seconds: float | None = Field(default=None, alias="OPENAI_TIMEOUT_SECONDS")

    quiz_question_count: int = Field(default=5, ge=1, le=20, alias="QUIZ_QUESTION_COUNT")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
