"""Provider-agnostic message and generation types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class MessagePart:
    """A single text part of a message."""

    text: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "MessagePart":
        return cls(text=text)


@dataclass
class Message:
    """Provider-agnostic chat message."""

    role: str  # "user" | "assistant"
    parts: List[MessagePart] = field(default_factory=list)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", parts=[MessagePart.from_text(text)])

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role="assistant", parts=[MessagePart.from_text(text)])


@dataclass
class GenerationConfig:
    """Common generation settings passed to providers."""

    system_prompt: str = ""
    max_tokens: int = 4096
    temperature: Optional[float] = 0.7
    response_mime_type: Optional[str] = None


@dataclass
class LLMResponse:
    """Normalized response from a provider."""

    text: str = ""
    usage: Optional[Dict[str, int]] = None
    raw: Any = None


class ProviderError(Exception):
    """SDK failure raised by a provider, with the provider's response body attached."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload
