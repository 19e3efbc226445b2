from __future__ import annotations

from typing import Dict

from chatbot.core.errors import EmptyPromptError
from chatbot.core.messages import Role, Transcript


DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

ROLE_LABELS: Dict[Role, str] = {
    Role.SYSTEM: "System",
    Role.USER: "User",
    Role.ASSISTANT: "Assistant",
}


def assemble_prompt(transcript: Transcript) -> str:
    """Merge the transcript into the single prompt string the model expects.

    Each message becomes ``"<Label>: <text>"``; lines keep transcript order.
    Same transcript in, same string out.
    """
    messages = transcript.to_sequence()
    if not messages:
        raise EmptyPromptError(
            f"Transcript {transcript.session_id!r} has no messages to send"
        )

    # ROLE_LABELS covers every Role; a KeyError here means a new role was added
    # without a label.
    prompt = "\n".join(f"{ROLE_LABELS[m.role]}: {m.text}" for m in messages).strip()
    if not prompt:
        raise EmptyPromptError(
            f"Transcript {transcript.session_id!r} produced an empty prompt"
        )
    return prompt
