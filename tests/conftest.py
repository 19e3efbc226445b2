from __future__ import annotations

from typing import List

import pytest

from chatbot.core.errors import BackendError
from chatbot.core.memory import SessionStore
from chatbot.session import ConversationSession


class StubBackend:
    def __init__(self, *replies: str) -> None:
        self.replies = list(replies) or ["Hello!"]
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


class FailingBackend:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or BackendError("quota exceeded")
        self.calls = 0

    async def complete(self, prompt: str) -> str:
        self.calls += 1
        raise self.error


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend("Hello!")


@pytest.fixture
def session(backend: StubBackend, store: SessionStore) -> ConversationSession:
    return ConversationSession(backend, store)
