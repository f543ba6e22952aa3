"""Model client protocol and response type.

Defines the pluggable interface the assistant calls for completions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ChatResponse:
    """A single chat completion.

    Attributes:
        chat_completion: The completion text.
        role: Role the completion was produced under (usually "assistant").
        usage: Raw usage dict from the provider, if any.
    """

    chat_completion: str
    role: str = "assistant"
    usage: dict | None = None


@runtime_checkable
class ModelClient(Protocol):
    """Protocol for pluggable model clients.

    Any object with a ``chat(prompt)`` method returning something with
    ``chat_completion`` and ``role`` attributes works. The built-in
    OpenAIClient implements this protocol. Clients may also expose a
    ``default_model_name`` attribute, used when no model name is configured.
    """

    def chat(self, prompt: str) -> ChatResponse:
        """Send a prompt, return the completion."""
        ...
