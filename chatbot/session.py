from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from chatbot.backends import CompletionBackend
from chatbot.core.errors import ValidationError
from chatbot.core.memory import SessionStore
from chatbot.core.messages import Message, Transcript
from chatbot.core.prompt import assemble_prompt


logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    PROMPT_BUILDING = "prompt_building"
    AWAITING_BACKEND = "awaiting_backend"
    APPENDING = "appending"
    FAILED = "failed"


class ConversationSession:
    """Runs one user -> assistant turn at a time against a completion backend.

    A turn is all-or-nothing: the store only changes once the assistant reply
    has been appended. On any failure the stored transcript stays as it was
    before the turn started.

    Callers must not run two ``turn`` calls for the same session id at once;
    nothing here serializes them and the second write would win. Different
    session ids are independent.
    """

    def __init__(self, backend: CompletionBackend, store: Optional[SessionStore] = None) -> None:
        self.backend = backend
        self.store = store if store is not None else SessionStore()
        self._states: Dict[str, TurnState] = {}

    def state(self, session_id: str) -> TurnState:
        return self._states.get(session_id, TurnState.IDLE)

    def _enter(self, session_id: str, state: TurnState) -> None:
        logger.debug("Session %s: %s -> %s", session_id, self.state(session_id).value, state.value)
        self._states[session_id] = state

    async def turn(self, session_id: str, user_text: str) -> Transcript:
        if not isinstance(user_text, str) or not user_text.strip():
            self._enter(session_id, TurnState.FAILED)
            raise ValidationError("User text must not be empty")

        try:
            stored = self.store.get(session_id)
            transcript = stored if stored is not None else self.store.seed(session_id)
            # working copy; the store keeps its own until the turn succeeds
            transcript.append(Message.user(user_text))

            self._enter(session_id, TurnState.PROMPT_BUILDING)
            prompt = assemble_prompt(transcript)

            self._enter(session_id, TurnState.AWAITING_BACKEND)
            reply = await self.backend.complete(prompt)

            self._enter(session_id, TurnState.APPENDING)
            transcript.append(Message.assistant(reply))
            self.store.put(session_id, transcript)
        except Exception:
            self._enter(session_id, TurnState.FAILED)
            raise

        self._enter(session_id, TurnState.IDLE)
        logger.info(
            "Session %s: turn complete (%s messages)", session_id, len(transcript)
        )
        return transcript

    async def reply(self, session_id: str, user_text: str) -> str:
        """Run a turn and return just the assistant's reply."""
        transcript = await self.turn(session_id, user_text)
        return transcript.last_reply or ""

    def reset(self, session_id: str) -> None:
        self.store.reset(session_id)
        self._states.pop(session_id, None)
