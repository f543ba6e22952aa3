"""Assistant: the run loop tying thread, prompt builder, model and tools.

One ``run()`` is a single assistant turn:

1. Build a budget-compliant prompt from instructions, tools and thread
2. Call the model client with it
3. Append the response to the thread
4. If auto tool execution is on, parse tool invocations out of that
   response and, for each one in parser order: execute the tool, append
   its output, and call the model again
5. Return the thread's messages

Everything runs synchronously, one model call or tool execution at a time.
Errors are raised by stage: PromptAssemblyError while building the
prompt, ModelCallError from the model client, ToolError from tools.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from relay.engine.length import TokenLengthValidator
from relay.engine.prompt import PromptBuilder
from relay.exceptions import AssistantConfigError, ModelCallError, ToolExecutionError
from relay.llm.protocols import ChatResponse, ModelClient
from relay.models.config import AssistantConfig, ToolErrorPolicy
from relay.models.message import Message, Thread
from relay.prompts.assistant import PromptTemplates
from relay.protocols import ToolLike
from relay.toolkit.executor import ToolExecutor
from relay.toolkit.parser import ToolInvocationParser

if TYPE_CHECKING:
    from relay.protocols import LengthValidator, TemplateProvider
    from relay.toolkit.models import ToolInvocation, ToolResult

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    """Where the assistant is within the current run."""

    IDLE = "idle"
    AWAITING_MODEL_RESPONSE = "awaiting_model_response"
    TOOL_INVOCATIONS_PENDING = "tool_invocations_pending"
    DONE = "done"


class Assistant:
    """A named assistant with instructions, tools and a conversation thread.

    The assistant owns its thread and tool list. The model client is
    shared and never closed by the assistant.

    Usage::

        search = Tool.from_function(search_web)
        assistant = Assistant(
            name="helper",
            llm=OpenAIClient(),
            tools=[search],
            instructions="Answer using the search tool when needed.",
        )
        messages = assistant.add_message_and_run(
            "What's the weather in Paris?", auto_tool_execution=True
        )
        print(messages[-1].text)

    Args:
        name: Assistant name.
        llm: Model client exposing ``chat(prompt)``.
        thread: Conversation log. A new empty Thread when omitted.
        tools: Tools the model may invoke. Names must be unique and
            tag-safe.
        instructions: Text for the instructions section of the prompt.
        description: Free-form description of the assistant.
        length_validator: Token budget check. Defaults to a
            TokenLengthValidator configured from ``config``.
        templates: Template provider. Defaults to PromptTemplates().
        config: AssistantConfig with model name, budget and tool error
            policy.

    Raises:
        AssistantConfigError: If ``llm`` has no ``chat`` method or the
            tools are invalid (not tool-like, duplicate or unsafe names).
    """

    def __init__(
        self,
        name: str,
        llm: ModelClient,
        thread: Thread | None = None,
        tools: Iterable[ToolLike] = (),
        instructions: str | None = None,
        description: str | None = None,
        *,
        length_validator: LengthValidator | None = None,
        templates: TemplateProvider | None = None,
        config: AssistantConfig | None = None,
    ) -> None:
        if not isinstance(llm, ModelClient) or not callable(llm.chat):
            raise AssistantConfigError(
                f"LLM must implement a chat() method, got {type(llm).__name__}"
            )
        tools = tuple(tools)
        for tool in tools:
            if not isinstance(tool, ToolLike):
                raise AssistantConfigError(
                    f"Expected a tool with name, description and execute(), "
                    f"got {type(tool).__name__}"
                )

        self._name = name
        self._llm = llm
        self._thread = thread if thread is not None else Thread()
        self._tools: tuple[ToolLike, ...] = tools
        self._instructions = instructions
        self._description = description
        self._config = config or AssistantConfig()
        self._executor = ToolExecutor(self._tools)
        self._parser = ToolInvocationParser(tool.name for tool in self._tools)

        model_name = self._config.model_name or getattr(llm, "default_model_name", None)
        if length_validator is None:
            length_validator = TokenLengthValidator(
                max_tokens=self._config.max_tokens,
                reserve_tokens=self._config.reserve_tokens,
            )
        self._prompt_builder = PromptBuilder(
            templates if templates is not None else PromptTemplates(),
            length_validator,
            model_name,
        )
        self._state = RunState.IDLE

        logger.debug(
            "Assistant %s initialized with %d tool(s), model %s",
            name, len(self._tools), model_name,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def llm(self) -> ModelClient:
        return self._llm

    @property
    def thread(self) -> Thread:
        return self._thread

    @property
    def tools(self) -> tuple[ToolLike, ...]:
        return self._tools

    @property
    def instructions(self) -> str | None:
        return self._instructions

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def config(self) -> AssistantConfig:
        return self._config

    @property
    def prompt_builder(self) -> PromptBuilder:
        return self._prompt_builder

    @property
    def state(self) -> RunState:
        """Current position in the run loop.

        Left at the failing stage if a run raises.
        """
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add_message(self, text: str, role: str = "user") -> Message:
        """Append a message to the thread and return it."""
        return self._thread.append(Message(role=role, text=text))

    def run(self, auto_tool_execution: bool = False) -> list[Message]:
        """Run one assistant turn.

        Args:
            auto_tool_execution: Parse the model's response for tool
                invocations and execute them, re-prompting after each.

        Returns:
            All messages in the thread, oldest first.

        Raises:
            PromptTooLargeError: If instructions and tools alone exceed
                the token budget.
            ModelCallError: If the model client fails.
            ToolExecutionError: If a tool fails under ToolErrorPolicy.RAISE.
        """
        self._state = RunState.IDLE
        response = self._respond()
        if auto_tool_execution:
            self.run_tools(response.chat_completion)
        self._state = RunState.DONE
        return self._thread.messages

    def add_message_and_run(self, text: str, auto_tool_execution: bool = False) -> list[Message]:
        """Append a user message, then run one turn."""
        self.add_message(text)
        return self.run(auto_tool_execution=auto_tool_execution)

    def run_tools(self, completion: str) -> list[ToolResult]:
        """Execute every tool invocation in ``completion``.

        Each invocation is executed, its output appended as a
        ``<tool_name>_output`` message, and the model called once more
        with the updated thread. Responses obtained here are appended but
        not parsed for further invocations. Leaves the assistant in
        RunState.DONE once every invocation has been answered.

        Returns:
            One ToolResult per invocation, in execution order.
        """
        invocations = self._parser.parse(completion)
        results: list[ToolResult] = []
        for index, invocation in enumerate(invocations, start=1):
            self._state = RunState.TOOL_INVOCATIONS_PENDING
            logger.debug(
                "Tool invocation %d/%d: %s", index, len(invocations), invocation.tool_name
            )
            results.append(self.execute_invocation(invocation))
            self._respond()
        self._state = RunState.DONE
        return results

    def execute_invocation(self, invocation: ToolInvocation) -> ToolResult:
        """Run one invocation and append its output message.

        Raises:
            UnknownToolError: If no configured tool has the invoked name.
            ToolExecutionError: If the tool fails and the policy is RAISE.
        """
        result = self._executor.execute(invocation)
        if not result.success and self._config.tool_error_policy is ToolErrorPolicy.RAISE:
            raise ToolExecutionError(result.tool_name, result.error)
        self.submit_tool_output(result.tool_name, result.text)
        return result

    def submit_tool_output(self, tool_name: str, output: str) -> Message:
        """Append a tool's output to the thread as ``<tool_name>_output``."""
        return self._thread.append(Message.tool_output(tool_name, output))

    def build_prompt(self) -> str:
        """Build the prompt the next model call would receive.

        May truncate the thread to fit the token budget.
        """
        return self._prompt_builder.build(self._instructions, self._tools, self._thread)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _respond(self) -> ChatResponse:
        """Build the prompt, call the model, and append its response."""
        prompt = self.build_prompt()
        self._state = RunState.AWAITING_MODEL_RESPONSE
        response = self._call_model(prompt)
        self.add_message(response.chat_completion, role=response.role)
        return response

    def _call_model(self, prompt: str) -> ChatResponse:
        try:
            response = self._llm.chat(prompt)
        except ModelCallError:
            raise
        except Exception as exc:
            raise ModelCallError(
                f"Model call failed: {type(exc).__name__}: {exc}"
            ) from exc

        try:
            completion = response.chat_completion
            role = response.role
        except AttributeError as exc:
            raise ModelCallError(
                f"Model client returned {type(response).__name__}, expected an "
                f"object with chat_completion and role"
            ) from exc
        if not isinstance(response, ChatResponse):
            response = ChatResponse(chat_completion=completion, role=role)
        return response

    def __repr__(self) -> str:
        return (
            f"Assistant(name={self._name!r}, tools={[t.name for t in self._tools]}, "
            f"messages={len(self._thread)})"
        )
