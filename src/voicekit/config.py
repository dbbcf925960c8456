"""
Application configuration with environment-driven settings.
"""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "voicekit"
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    log_level: str = "INFO"


_cached: Settings | None = None


def get_settings() -> Settings:
    global _cached
    # Under pytest env vars change between tests (monkeypatch), never freeze them.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    if _cached is None:
        _cached = Settings()
    return _cached
