from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from chatbot.core.errors import ConfigurationError


load_dotenv()


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid number for {name}: {raw!r}") from exc


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer for {name}: {raw!r}") from exc


def parse_log_level(name: str) -> str:
    level = name.strip().upper()
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level: {name!r}")
    return level


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read once,
    when the instance is created.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.temperature: float = _env_float("MODEL_TEMPERATURE", "0.3")
        self.top_p: float = _env_float("MODEL_TOP_P", "0.9")
        self.max_retries: int = _env_int("MODEL_MAX_RETRIES", "2")
        # 0 disables the client-side timeout
        self.timeout_seconds: float = _env_float("BACKEND_TIMEOUT_SECONDS", "60")
        self.system_prompt: str = os.getenv(
            "CHAT_SYSTEM_PROMPT", "You are a helpful assistant."
        )
        self.language: str = os.getenv("CHAT_LANGUAGE", "English")
        self.log_level: str = parse_log_level(os.getenv("LOG_LEVEL", "INFO"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
