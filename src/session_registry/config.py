"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_LOG_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    session_dir: str = "session"
    host: str = "0.0.0.0"
    port: int = 12020
    log_level: int = 2
    registry_urls: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_log_level(raw: int) -> int:
    """Map the 0 (errors only) to 3 (debug) verbosity scale to a logging level."""
    return _LOG_LEVELS.get(raw, logging.INFO)


def parse_registry_urls(raw: str | None) -> list[str]:
    """Parse a comma-separated list of registry base URLs."""
    if raw is None:
        return []
    urls: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in urls:
            urls.append(value)
    return urls
