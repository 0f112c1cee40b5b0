"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    groq_api_key: str | None = Field(default=None, alias="GROQ_API_KEY")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL"
    )
    chat_model: str = Field(default="llama-3.3-70b-versatile", alias="CHAT_MODEL")
    chat_timeout: float = Field(default=30.0, alias="CHAT_TIMEOUT", description="Seconds")

    temperature: float = Field(default=0.8, alias="TEMPERATURE")
    top_p: float = Field(default=0.9, alias="TOP_P")
    frequency_penalty: float = Field(default=0.3, alias="FREQUENCY_PENALTY")
    presence_penalty: float = Field(default=0.2, alias="PRESENCE_PENALTY")

    max_question_length: int = Field(default=500, alias="MAX_QUESTION_LENGTH")
    max_name_length: int = Field(default=50, alias="MAX_NAME_LENGTH")
    special_char_ratio: float = Field(
        default=0.2,
        alias="SPECIAL_CHAR_RATIO",
        description="Maximum share of symbols allowed in user text.",
    )
    min_response_length: int = Field(default=100, alias="MIN_RESPONSE_LENGTH")
    relevance_min_length: int = Field(
        default=200,
        alias="RELEVANCE_MIN_LENGTH",
        description="Responses longer than this must mention a tarot keyword.",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=8000, alias="PORT")
    ws_inactivity_timeout: float = Field(
        default=120.0, alias="WS_INACTIVITY_TIMEOUT", description="Seconds"
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
