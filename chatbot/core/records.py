from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from chatbot.core.errors import ValidationError
from chatbot.core.messages import DEFAULT_LANGUAGE, Message, Role, Transcript


RecordType = Literal["system", "human", "ai"]

ROLE_TO_TYPE: Dict[Role, RecordType] = {
    Role.SYSTEM: "system",
    Role.USER: "human",
    Role.ASSISTANT: "ai",
}
TYPE_TO_ROLE: Dict[str, Role] = {tag: role for role, tag in ROLE_TO_TYPE.items()}


class MessageRecord(BaseModel):
    type: RecordType = Field(..., description="'system', 'human' or 'ai'")
    content: str


class TranscriptRecord(BaseModel):
    messages: List[MessageRecord] = Field(default_factory=list)
    language: str = DEFAULT_LANGUAGE


def to_records(transcript: Transcript) -> Dict[str, Any]:
    record = TranscriptRecord(
        messages=[
            MessageRecord(type=ROLE_TO_TYPE[m.role], content=m.text)
            for m in transcript.to_sequence()
        ],
        language=transcript.language,
    )
    return record.model_dump()


def from_records(session_id: str, data: Dict[str, Any]) -> Transcript:
    """Rebuild a typed transcript from plain data.

    Unknown ``type`` tags and empty content are rejected rather than dropped.
    """
    try:
        record = TranscriptRecord.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Malformed transcript record: {exc}") from exc

    return Transcript(
        session_id,
        [Message(role=TYPE_TO_ROLE[m.type], text=m.content) for m in record.messages],
        language=record.language,
    )
