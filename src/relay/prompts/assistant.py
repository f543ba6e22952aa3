"""Prompt templates for the assistant.

The assistant prompt has three sections, each rendered from a named
template:

- **instructions** -- placeholder ``{instructions}``.
- **tools** -- placeholder ``{tools}``; also explains the tag protocol
  the model must use to invoke a tool.
- **chat_history** -- placeholder ``{chat_history}``.

PromptTemplates is the in-memory TemplateProvider. Pass overrides to
replace individual templates.
"""

from __future__ import annotations

import enum
import string
from collections.abc import Mapping

from relay.exceptions import TemplateError


class TemplateKey(str, enum.Enum):
    """Names of the templates the prompt builder requests."""

    INSTRUCTIONS = "instructions"
    TOOLS = "tools"
    CHAT_HISTORY = "chat_history"


INSTRUCTIONS_PROMPT: str = "Instructions:\n{instructions}"

TOOLS_PROMPT: str = (
    "You have access to the following tools:\n"
    "{tools}\n\n"
    "To use a tool, reply with the tool name as an XML-style tag wrapping "
    "the tool input, for example <tool_name>input</tool_name>. "
    "The tool output will be added to the chat history as "
    "\"<tool_name>_output\"."
)

CHAT_HISTORY_PROMPT: str = "Chat history:\n{chat_history}"

DEFAULT_TEMPLATES: dict[str, str] = {
    TemplateKey.INSTRUCTIONS.value: INSTRUCTIONS_PROMPT,
    TemplateKey.TOOLS.value: TOOLS_PROMPT,
    TemplateKey.CHAT_HISTORY.value: CHAT_HISTORY_PROMPT,
}


class PromptTemplates:
    """In-memory template provider using ``str.format`` placeholders.

    Usage::

        templates = PromptTemplates({"instructions": "System: {instructions}"})
        templates.format("instructions", instructions="Be brief.")
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._templates = dict(DEFAULT_TEMPLATES)
        if overrides:
            for key, template in overrides.items():
                key = _template_key(key)
                _check_syntax(key, template)
                self._templates[key] = template

    def __getitem__(self, key: str) -> str:
        return self._templates[_template_key(key)]

    def format(self, key: str, **values: str) -> str:
        template = self[key]
        try:
            return template.format(**values)
        except (KeyError, IndexError) as exc:
            raise TemplateError(
                f"Template '{_template_key(key)}' needs placeholder {exc}"
            ) from exc
        except ValueError as exc:
            raise TemplateError(f"Template '{_template_key(key)}' is malformed: {exc}") from exc


def _template_key(key: str) -> str:
    try:
        return TemplateKey(key).value
    except ValueError:
        raise TemplateError(f"Unknown prompt template: {key}") from None


def _check_syntax(key: str, template: str) -> None:
    try:
        list(string.Formatter().parse(template))
    except ValueError as exc:
        raise TemplateError(f"Template '{key}' is malformed: {exc}") from exc
