from __future__ import annotations

import pytest

from chatbot.core.errors import EmptyPromptError
from chatbot.core.messages import Message, Role, Transcript
from chatbot.core.prompt import ROLE_LABELS, assemble_prompt


def test_assemble_labels_and_order() -> None:
    transcript = Transcript(
        "s1",
        [
            Message.system("You are a helpful assistant."),
            Message.user("Hi"),
            Message.assistant("Hello!"),
        ],
    )
    assert assemble_prompt(transcript) == (
        "System: You are a helpful assistant.\n"
        "User: Hi\n"
        "Assistant: Hello!"
    )


def test_assemble_is_deterministic() -> None:
    transcript = Transcript("s1", [Message.system("sys"), Message.user("q")])
    assert assemble_prompt(transcript) == assemble_prompt(transcript)


def test_assemble_trims_outer_whitespace() -> None:
    transcript = Transcript("s1", [Message.user("q  \n")])
    assert assemble_prompt(transcript) == "User: q"


def test_empty_transcript_rejected() -> None:
    with pytest.raises(EmptyPromptError):
        assemble_prompt(Transcript("s1"))


def test_every_role_has_a_label() -> None:
    assert set(ROLE_LABELS) == set(Role)
