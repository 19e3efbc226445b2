from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from chatbot.core.errors import BackendError, BackendTimeoutError, ConfigurationError
from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class CompletionBackend(Protocol):
    async def complete(self, prompt: str) -> str: ...


class GeminiBackend:
    """Sends a merged prompt string to Gemini and returns the reply text."""

    def __init__(self, chain: Runnable[Any, str], model: str = "gemini") -> None:
        self._chain = chain
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiBackend":
        if not settings.google_api_key:
            raise ConfigurationError(
                "GOOGLE_API_KEY not set. Please configure it in environment or .env"
            )
        llm = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.google_api_key,
            temperature=settings.temperature,
            top_p=settings.top_p,
            max_retries=settings.max_retries,
        )
        return cls(llm | StrOutputParser(), model=settings.gemini_model)

    async def complete(self, prompt: str) -> str:
        try:
            reply = await self._chain.ainvoke(prompt)
        except Exception as exc:
            logger.warning("%s call failed: %s", self.model, exc)
            raise BackendError(f"{self.model} request failed: {exc}") from exc

        if not isinstance(reply, str) or not reply.strip():
            raise BackendError(f"{self.model} returned an empty response")

        logger.info("Gemini response: %s", reply)
        return reply


class TimeoutBackend:
    """Bounds another backend's ``complete`` call by ``seconds``."""

    def __init__(self, inner: CompletionBackend, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self.inner = inner
        self.seconds = seconds

    async def complete(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(self.inner.complete(prompt), timeout=self.seconds)
        except asyncio.TimeoutError as exc:
            raise BackendTimeoutError(
                f"Backend did not answer within {self.seconds:g}s"
            ) from exc


def build_backend(settings: Optional[Settings] = None) -> CompletionBackend:
    settings = settings or get_settings()
    backend: CompletionBackend = GeminiBackend.from_settings(settings)
    if settings.timeout_seconds > 0:
        backend = TimeoutBackend(backend, settings.timeout_seconds)
    logger.info(
        "Backend: model=%s key_set=%s timeout=%s",
        settings.gemini_model,
        bool(settings.google_api_key),
        settings.timeout_seconds or "none",
    )
    return backend
