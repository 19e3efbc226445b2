"""Typed conversation history: role-tagged messages and per-session transcripts."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from chatbot.core.errors import ValidationError


DEFAULT_LANGUAGE = "English"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One utterance. Frozen: a new turn makes new messages, never edits old ones."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'message'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ValidationError(f"Invalid message ({errors})") from exc

    @field_validator("text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be empty")
        return value

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role=Role.SYSTEM, text=text)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role=Role.ASSISTANT, text=text)


class Transcript:
    """Ordered message history for one session.

    Messages are kept in insertion order and never reordered or deduplicated.
    ``language`` rides along for downstream consumers and is not interpreted here.
    """

    def __init__(
        self,
        session_id: str,
        messages: Optional[Iterable[Message]] = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.session_id = session_id
        self.language = language
        self._messages: List[Message] = []
        for message in messages or ():
            self.append(message)

    def append(self, message: Message) -> None:
        if not isinstance(message, Message):
            raise ValidationError(
                f"Transcript accepts Message values only, got {type(message).__name__}"
            )
        # model_construct() skips validation, so check again here
        if not isinstance(message.role, Role) or not message.text.strip():
            raise ValidationError("Refusing to append a message with empty text or unknown role")
        self._messages.append(message)

    def to_sequence(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def copy(self) -> "Transcript":
        # Messages are immutable, so sharing them between copies is safe.
        clone = Transcript(self.session_id, language=self.language)
        clone._messages = list(self._messages)
        return clone

    @property
    def last_reply(self) -> Optional[str]:
        for message in reversed(self._messages):
            if message.role is Role.ASSISTANT:
                return message.text
        return None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.to_sequence())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transcript):
            return NotImplemented
        return (
            self.session_id == other.session_id
            and self.language == other.language
            and self._messages == other._messages
        )

    def __repr__(self) -> str:
        return (
            f"Transcript(session_id={self.session_id!r}, "
            f"language={self.language!r}, messages={len(self._messages)})"
        )
