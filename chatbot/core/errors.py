from __future__ import annotations


class ChatbotError(Exception):
    """Base class for every error the chatbot raises on purpose."""


class ValidationError(ChatbotError):
    """Empty text, unknown role or otherwise malformed message data."""


class EmptyPromptError(ChatbotError):
    """Prompt assembly produced nothing to send to the backend."""


class BackendError(ChatbotError):
    """The completion backend failed (network, auth, quota, bad response)."""


class BackendTimeoutError(BackendError):
    """The completion backend did not answer within the allotted time."""


class ConfigurationError(ChatbotError):
    """Settings are missing or malformed."""
