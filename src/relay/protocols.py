"""Protocol definitions for Relay.

Defines the pluggable interfaces the run loop depends on (TokenCounter,
LengthValidator, TemplateProvider, ToolLike). Concrete implementations
live in relay.engine, relay.prompts and relay.toolkit; any object with
matching methods works.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenCounter(Protocol):
    """Counts tokens in a prompt string."""

    def count_text(self, text: str) -> int:
        """Return the number of tokens in ``text``."""
        ...


@runtime_checkable
class LengthValidator(Protocol):
    """Checks a prompt against a model's context window.

    Injected next to the model client so prompt-length policy does not
    depend on any particular client implementation.
    """

    def validate_max_tokens(self, prompt: str, model_name: str | None) -> int:
        """Return the tokens left over after ``prompt``.

        Raises:
            TokenLimitExceeded: If the prompt does not fit.
        """
        ...


@runtime_checkable
class TemplateProvider(Protocol):
    """Formats a named prompt template with placeholder values."""

    def format(self, key: str, **values: str) -> str:
        """Render template ``key`` with ``values``.

        Raises:
            TemplateError: If the key is unknown or a placeholder is missing.
        """
        ...


@runtime_checkable
class ToolLike(Protocol):
    """Anything the assistant can advertise to the model and execute."""

    name: str
    description: str

    def execute(self, input: str) -> str:
        """Run the tool on free-form input and return its output text."""
        ...

    def name_and_description(self) -> str:
        """One-line rendering used in the tools section of the prompt."""
        ...
