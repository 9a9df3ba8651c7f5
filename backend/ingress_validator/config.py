"""Application configuration via environment variables."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Validation
    ENABLE_ADVANCED_VALIDATION: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 9085
    DEBUG: bool = False
    LOG_LEVEL: Literal["critical", "error", "warning", "info", "debug"] = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _lowercase_level(cls, value):
        return value.lower() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
