"""Tests for the in-memory prompt templates."""

from __future__ import annotations

import pytest

from relay import PromptTemplates, TemplateError, TemplateKey
from relay.prompts.assistant import CHAT_HISTORY_PROMPT, INSTRUCTIONS_PROMPT, TOOLS_PROMPT
from relay.protocols import TemplateProvider


class TestPromptTemplates:
    def test_implements_protocol(self):
        assert isinstance(PromptTemplates(), TemplateProvider)

    def test_defaults(self):
        templates = PromptTemplates()
        assert templates["instructions"] == INSTRUCTIONS_PROMPT
        assert templates["tools"] == TOOLS_PROMPT
        assert templates["chat_history"] == CHAT_HISTORY_PROMPT

    def test_format_default(self):
        text = PromptTemplates().format("instructions", instructions="Be brief.")
        assert text == "Instructions:\nBe brief."

    def test_enum_keys_accepted(self):
        text = PromptTemplates().format(TemplateKey.CHAT_HISTORY, chat_history="user: hi")
        assert text == "Chat history:\nuser: hi"

    def test_override_single_template(self):
        templates = PromptTemplates({"tools": "Tools -> {tools}"})
        assert templates.format("tools", tools="a: b") == "Tools -> a: b"
        assert templates["instructions"] == INSTRUCTIONS_PROMPT

    def test_unknown_key_raises(self):
        with pytest.raises(TemplateError, match="Unknown prompt template"):
            PromptTemplates().format("summary", text="x")

    def test_unknown_override_key_raises(self):
        with pytest.raises(TemplateError):
            PromptTemplates({"summary": "{text}"})

    def test_missing_placeholder_raises(self):
        templates = PromptTemplates({"instructions": "{instructions} for {audience}"})
        with pytest.raises(TemplateError, match="audience"):
            templates.format("instructions", instructions="x")

    @pytest.mark.parametrize("template", ["}{instructions}", "Rules: {instructions"])
    def test_unbalanced_brace_rejected_at_construction(self, template):
        with pytest.raises(TemplateError, match="malformed"):
            PromptTemplates({"instructions": template})

    def test_bad_format_spec_raises_template_error(self):
        templates = PromptTemplates({"instructions": "{instructions:d}"})
        with pytest.raises(TemplateError, match="malformed"):
            templates.format("instructions", instructions="x")
