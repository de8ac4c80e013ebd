"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./cardsmith.db"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # OpenRouter
    OPENROUTER_API_KEY: str = ""
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_DEFAULT_MODEL: str = "openai/gpt-4o-mini"
    OPENROUTER_TIMEOUT_SECONDS: float = 30.0

    # Model parameters
    OPENROUTER_TEMPERATURE: float = 0.7
    OPENROUTER_MAX_TOKENS: int = 2000
    OPENROUTER_TOP_P: float = 0.9
    OPENROUTER_FREQUENCY_PENALTY: float = 0.3
    OPENROUTER_PRESENCE_PENALTY: float = 0.1

    # Retry
    OPENROUTER_RETRY_MAX_ATTEMPTS: int = 3
    OPENROUTER_RETRY_INITIAL_BACKOFF_SECONDS: float = 1.0
    OPENROUTER_RETRY_MAX_BACKOFF_SECONDS: float = 10.0
    OPENROUTER_RETRY_MULTIPLIER: float = 2.0

    # Circuit breaker
    OPENROUTER_CIRCUIT_SLIDING_WINDOW_SIZE: int = 10
    OPENROUTER_CIRCUIT_FAILURE_RATE_THRESHOLD: float = 50.0
    OPENROUTER_CIRCUIT_WAIT_DURATION_SECONDS: float = 60.0
    OPENROUTER_CIRCUIT_PERMITTED_CALLS_IN_HALF_OPEN: int = 3

    # Generation
    GENERATION_TIMEOUT_SECONDS: float | None = None

    @field_validator("OPENROUTER_API_KEY", mode="after")
    @classmethod
    def strip_api_key(cls, value: str) -> str:
        """Strip whitespace from the API key."""
        return value.strip()

    @field_validator("OPENROUTER_BASE_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def validate_openrouter_config(self) -> "Settings":
        """Validate OpenRouter configuration."""
        if self.ENVIRONMENT != "test" and not self.OPENROUTER_API_KEY:
            msg = "OPENROUTER_API_KEY is required outside the test environment"
            raise ValueError(msg)
        if self.OPENROUTER_RETRY_MAX_ATTEMPTS < 1:
            msg = "OPENROUTER_RETRY_MAX_ATTEMPTS must be at least 1"
            raise ValueError(msg)
        if not 0 < self.OPENROUTER_CIRCUIT_FAILURE_RATE_THRESHOLD <= 100:  # noqa: PLR2004
            msg = "OPENROUTER_CIRCUIT_FAILURE_RATE_THRESHOLD must be in (0, 100]"
            raise ValueError(msg)
        if self.OPENROUTER_CIRCUIT_SLIDING_WINDOW_SIZE < 1:
            msg = "OPENROUTER_CIRCUIT_SLIDING_WINDOW_SIZE must be at least 1"
            raise ValueError(msg)
        if self.OPENROUTER_CIRCUIT_PERMITTED_CALLS_IN_HALF_OPEN < 1:
            msg = "OPENROUTER_CIRCUIT_PERMITTED_CALLS_IN_HALF_OPEN must be at least 1"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # JSON in production, colored console output otherwise
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
