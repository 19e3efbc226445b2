from __future__ import annotations

import pytest

from chatbot.core.errors import ValidationError
from chatbot.core.messages import Message, Role, Transcript
from chatbot.core.records import from_records, to_records


def test_to_records_uses_type_tags() -> None:
    transcript = Transcript(
        "s1",
        [Message.system("sys"), Message.user("hi"), Message.assistant("hello")],
        language="German",
    )
    assert to_records(transcript) == {
        "messages": [
            {"type": "system", "content": "sys"},
            {"type": "human", "content": "hi"},
            {"type": "ai", "content": "hello"},
        ],
        "language": "German",
    }


def test_from_records_rebuilds_typed_transcript() -> None:
    transcript = from_records(
        "s1",
        {
            "messages": [
                {"type": "system", "content": "sys"},
                {"type": "human", "content": "hi"},
                {"type": "ai", "content": "hello"},
            ]
        },
    )
    assert [m.role for m in transcript] == [Role.SYSTEM, Role.USER, Role.ASSISTANT]
    assert transcript.language == "English"
    assert transcript.session_id == "s1"


def test_unknown_type_is_rejected_not_dropped() -> None:
    with pytest.raises(ValidationError):
        from_records("s1", {"messages": [{"type": "tool", "content": "x"}]})


def test_empty_content_is_rejected() -> None:
    with pytest.raises(ValidationError):
        from_records("s1", {"messages": [{"type": "human", "content": " "}]})


def test_round_trip_preserves_content() -> None:
    transcript = Transcript("s1", [Message.system("sys"), Message.user("hi")], language="Hindi")
    assert from_records("s1", to_records(transcript)) == transcript
