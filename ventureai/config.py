"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "production"] = Field(default="development")

    # Generation backend (OpenAI-compatible). DeepSeek is preferred, the
    # OpenAI key is accepted for older deployments.
    deepseek_api_key: str | None = Field(default=None)
    openai_api_key: str | None = Field(default=None)
    llm_model: str = Field(default="deepseek/deepseek-chat")
    llm_api_base: str | None = Field(default="https://api.deepseek.com/v1")

    # Document context budgets
    per_document_char_cap: int = Field(default=5000, gt=0)
    aggregate_char_cap: int = Field(default=20000, gt=0)
    max_context_documents: int = Field(default=10, gt=0)
    parallel_document_extraction: bool = Field(default=True)

    # Conversation
    chat_history_window: int = Field(default=2, ge=0)

    # Finance analysis
    finance_transaction_limit: int = Field(default=50, gt=0)
    finance_min_transactions: int = Field(default=3, ge=0)

    # Uploaded files are stored relative to this directory
    uploads_root: str = Field(default="public")

    # API Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
