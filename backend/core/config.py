"""
Centralised settings using `pydantic-settings`.

All env-vars are loaded once at import time.
"""

from __future__ import annotations

from pathlib import Path
from typing import List
from pydantic import HttpUrl

from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    # environment
    ENV: str = "development"  # development | staging | production

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Security / JWT
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 1 day
    SESSION_COOKIE_NAME: str = "access_token"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./app.db"

    # Summarization webhook (transcript in, summary out)
    SUMMARY_WEBHOOK_URL: HttpUrl | None = None
    WEBHOOK_TIMEOUT_SECONDS: float = 120.0

    # Optional: notified once per summary after it is deleted
    DELETE_NOTIFY_WEBHOOK_URL: HttpUrl | None = None

    # Log level (DEBUG/INFO/WARNING/ERROR)
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # --- internal ---
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def summary_webhook_url(self) -> str | None:
        return str(self.SUMMARY_WEBHOOK_URL) if self.SUMMARY_WEBHOOK_URL else None

    @property
    def delete_notify_webhook_url(self) -> str | None:
        return str(self.DELETE_NOTIFY_WEBHOOK_URL) if self.DELETE_NOTIFY_WEBHOOK_URL else None


settings = _Settings()  # Singleton
