"""Relay exception hierarchy.

All Relay-specific exceptions inherit from RelayError. Errors raised during
a run are grouped by stage: prompt assembly, model call, tool execution.
"""


class RelayError(Exception):
    """Base exception for all Relay errors."""


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class AssistantConfigError(RelayError):
    """Raised when an Assistant cannot be constructed from its arguments."""


class DuplicateToolError(AssistantConfigError):
    """Raised when two configured tools share a name."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Duplicate tool name: {tool_name}")


class InvalidToolNameError(AssistantConfigError):
    """Raised when a tool name cannot be embedded in an invocation tag."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid tool name '{name}': {reason}")


# ---------------------------------------------------------------------------
# Prompt assembly
# ---------------------------------------------------------------------------

class PromptAssemblyError(RelayError):
    """Base exception for errors while assembling a prompt."""


class TokenLimitExceeded(PromptAssemblyError):
    """Raised by a length validator when a prompt is over the model's limit.

    PromptBuilder recovers from this by truncating history.
    """

    def __init__(self, token_count: int, max_tokens: int) -> None:
        self.token_count = token_count
        self.max_tokens = max_tokens
        super().__init__(
            f"Token limit exceeded: {token_count} tokens "
            f"(max: {max_tokens})"
        )

    @property
    def token_overflow(self) -> int:
        """Number of tokens above the limit."""
        return self.token_count - self.max_tokens


class PromptTooLargeError(PromptAssemblyError):
    """Raised when the prompt exceeds the budget with no history left to drop."""

    def __init__(self, token_count: int, max_tokens: int) -> None:
        self.token_count = token_count
        self.max_tokens = max_tokens
        super().__init__(
            f"Prompt does not fit the token budget even with an empty thread: "
            f"{token_count} tokens (max: {max_tokens}). "
            f"Shorten the instructions or tool descriptions."
        )


class TemplateError(PromptAssemblyError):
    """Raised when a prompt template is missing or cannot be formatted."""


# ---------------------------------------------------------------------------
# Model call
# ---------------------------------------------------------------------------

class ModelCallError(RelayError):
    """Raised when the model client fails to produce a completion."""


# ---------------------------------------------------------------------------
# Tool execution
# ---------------------------------------------------------------------------

class ToolError(RelayError):
    """Base exception for tool resolution and execution errors."""


class UnknownToolError(ToolError):
    """Raised when an invocation names a tool that is not configured."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolExecutionError(ToolError):
    """Raised when a tool fails and the assistant is set to abort on failure."""

    def __init__(self, tool_name: str, error: str) -> None:
        self.tool_name = tool_name
        self.error = error
        super().__init__(f"Tool '{tool_name}' failed: {error}")
