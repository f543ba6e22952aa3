"""PromptBuilder: assembles the assistant prompt under a token budget.

The prompt is three sections joined by a blank line, in fixed order:
instructions (if any), tools (if any), chat history (always). After
assembly the prompt is checked by the injected LengthValidator; while it
is over budget the oldest message is removed from the thread and the
prompt is rebuilt. When the thread is empty and the prompt still does
not fit, PromptTooLargeError is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from relay.exceptions import PromptTooLargeError, TokenLimitExceeded
from relay.prompts.assistant import TemplateKey

if TYPE_CHECKING:
    from relay.models.message import Message, Thread
    from relay.protocols import LengthValidator, TemplateProvider, ToolLike

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class AssembledPrompt:
    """Output of prompt assembly.

    Attributes:
        text: The prompt sent to the model.
        truncated: Messages removed from the thread to fit, oldest first.
        remaining_tokens: Tokens left for the completion, as reported by
            the validator.
    """

    text: str
    truncated: tuple[Message, ...] = field(default_factory=tuple)
    remaining_tokens: int = 0


class PromptBuilder:
    """Builds budget-compliant prompts from instructions, tools and history.

    Truncation mutates the thread: dropped messages are gone for good.

    Usage::

        builder = PromptBuilder(PromptTemplates(), TokenLengthValidator(), "gpt-4o")
        prompt = builder.build("Be brief.", tools, thread)
    """

    def __init__(
        self,
        templates: TemplateProvider,
        validator: LengthValidator,
        model_name: str | None = None,
    ) -> None:
        self._templates = templates
        self._validator = validator
        self._model_name = model_name

    @property
    def model_name(self) -> str | None:
        return self._model_name

    def build(
        self,
        instructions: str | None,
        tools: Sequence[ToolLike],
        thread: Thread,
    ) -> str:
        """Return a prompt that fits the model's token budget."""
        return self.compile(instructions, tools, thread).text

    def compile(
        self,
        instructions: str | None,
        tools: Sequence[ToolLike],
        thread: Thread,
    ) -> AssembledPrompt:
        """Assemble the prompt, dropping oldest history until it fits.

        Raises:
            PromptTooLargeError: If the prompt is over budget with an
                empty thread.
        """
        truncated: list[Message] = []
        prompt = self.assemble(instructions, tools, thread.messages)
        while True:
            try:
                remaining = self._validator.validate_max_tokens(prompt, self._model_name)
            except TokenLimitExceeded as exc:
                if not thread:
                    logger.error(
                        "Prompt over budget with empty thread: %d tokens (max %d)",
                        exc.token_count, exc.max_tokens,
                    )
                    raise PromptTooLargeError(exc.token_count, exc.max_tokens) from exc
                dropped = thread.remove_oldest()
                truncated.append(dropped)
                logger.info(
                    "Prompt over budget by %d tokens, dropped oldest %s message",
                    exc.token_overflow, dropped.role,
                )
                prompt = self.assemble(instructions, tools, thread.messages)
                continue
            break

        logger.debug(
            "Built prompt: %d chars, %d remaining tokens, %d truncated",
            len(prompt), remaining, len(truncated),
        )
        return AssembledPrompt(
            text=prompt,
            truncated=tuple(truncated),
            remaining_tokens=remaining,
        )

    def assemble(
        self,
        instructions: str | None,
        tools: Sequence[ToolLike],
        history: Sequence[Message],
    ) -> str:
        """Render the prompt sections without any budget check."""
        sections: list[str] = []
        if instructions:
            sections.append(
                self._templates.format(TemplateKey.INSTRUCTIONS.value, instructions=instructions)
            )
        if tools:
            sections.append(
                self._templates.format(
                    TemplateKey.TOOLS.value,
                    tools="\n".join(tool.name_and_description() for tool in tools),
                )
            )
        sections.append(
            self._templates.format(
                TemplateKey.CHAT_HISTORY.value,
                chat_history="\n".join(str(message) for message in history),
            )
        )
        return SECTION_SEPARATOR.join(sections)
