"""Shared test fixtures for Relay.

Provides a scripted fake model client, a character-counting token
counter, and helpers for building assistants without network access.
"""

from __future__ import annotations

import pytest

from relay import (
    Assistant,
    ChatResponse,
    NullTokenCounter,
    PromptTemplates,
    TokenLengthValidator,
    Tool,
)

# Short templates so tests can assert on exact prompt text.
PLAIN_TEMPLATES = {
    "instructions": "I:{instructions}",
    "tools": "T:{tools}",
    "chat_history": "H:{chat_history}",
}


class FakeLLM:
    """A model client that records prompts and returns scripted completions."""

    default_model_name = "fake-model"

    def __init__(self, responses: list[str] | None = None, role: str = "assistant"):
        self.prompts: list[str] = []
        self.role = role
        self._responses = list(responses or [])

    def chat(self, prompt: str) -> ChatResponse:
        self.prompts.append(prompt)
        text = self._responses.pop(0) if self._responses else "ok"
        return ChatResponse(chat_completion=text, role=self.role)


class CharCounter:
    """Counts one token per character."""

    def count_text(self, text: str) -> int:
        return len(text)


class RecordingTool:
    """Tool that records its inputs and echoes them back."""

    def __init__(self, name: str, description: str = "records input", prefix: str = ""):
        self.name = name
        self.description = description
        self.prefix = prefix
        self.calls: list[str] = []

    def execute(self, input: str) -> str:
        self.calls.append(input)
        return f"{self.prefix}{input}"

    def name_and_description(self) -> str:
        return f"{self.name}: {self.description}"


def unlimited_validator() -> TokenLengthValidator:
    """Validator that never rejects a prompt."""
    return TokenLengthValidator(counter=NullTokenCounter())


def char_validator(max_tokens: int) -> TokenLengthValidator:
    """Validator with a budget of ``max_tokens`` characters."""
    return TokenLengthValidator(counter=CharCounter(), max_tokens=max_tokens)


def make_assistant(llm=None, *, validator=None, templates=None, **kwargs) -> Assistant:
    """Create an Assistant for testing with no tokenizer dependency."""
    return Assistant(
        name=kwargs.pop("name", "test-assistant"),
        llm=llm if llm is not None else FakeLLM(),
        length_validator=validator or unlimited_validator(),
        templates=templates or PromptTemplates(PLAIN_TEMPLATES),
        **kwargs,
    )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def plain_templates() -> PromptTemplates:
    return PromptTemplates(PLAIN_TEMPLATES)


@pytest.fixture
def search_tool() -> RecordingTool:
    return RecordingTool("search", "Search the web", prefix="results for ")


@pytest.fixture
def upper_tool() -> Tool:
    return Tool(name="upper", description="Uppercase text", handler=str.upper)
