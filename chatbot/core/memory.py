from __future__ import annotations

"""Process-lifetime session memory.

Transcripts live only as long as the process. The store hands out and keeps
copies, so nothing outside it holds a mutable reference to what is stored.
Entries are never evicted.
"""

import logging
from typing import Dict, Optional

from chatbot.core.messages import DEFAULT_LANGUAGE, Message, Transcript
from chatbot.core.prompt import DEFAULT_SYSTEM_PROMPT


logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(
        self,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        # Validate the seed once, up front, instead of on every new session.
        self._seed = Message.system(system_prompt)
        self._language = language
        self._transcripts: Dict[str, Transcript] = {}

    def seed(self, session_id: str) -> Transcript:
        """Return a fresh seeded transcript without storing it."""
        return Transcript(session_id, [self._seed], language=self._language)

    def get_or_create(self, session_id: str) -> Transcript:
        transcript = self._transcripts.get(session_id)
        if transcript is None:
            transcript = self.seed(session_id)
            self._transcripts[session_id] = transcript
            logger.debug("Created session %s", session_id)
        return transcript.copy()

    def get(self, session_id: str) -> Optional[Transcript]:
        transcript = self._transcripts.get(session_id)
        return transcript.copy() if transcript is not None else None

    def put(self, session_id: str, transcript: Transcript) -> None:
        self._transcripts[session_id] = transcript.copy()

    def reset(self, session_id: str) -> None:
        if self._transcripts.pop(session_id, None) is not None:
            logger.debug("Dropped session %s", session_id)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._transcripts

    def __len__(self) -> int:
        return len(self._transcripts)
