"""Relay: a conversational assistant runtime.

Keeps a message thread, assembles prompts under the model's token budget,
and executes tools the model invokes with ``<tool_name>input</tool_name>``
markers.
"""

from relay._version import __version__

# Core entry point
from relay.assistant import Assistant, RunState

# Conversation log
from relay.models.message import Message, Thread

# Configuration
from relay.models.config import AssistantConfig, ToolErrorPolicy

# Prompt assembly
from relay.engine.length import TOKEN_LIMITS, TokenLengthValidator
from relay.engine.prompt import AssembledPrompt, PromptBuilder
from relay.engine.tokens import NullTokenCounter, TiktokenCounter
from relay.prompts.assistant import PromptTemplates, TemplateKey

# Tools
from relay.toolkit import (
    Tool,
    ToolExecutor,
    ToolInvocation,
    ToolInvocationParser,
    ToolResult,
    find_invocations,
)

# Protocols
from relay.protocols import LengthValidator, TemplateProvider, TokenCounter, ToolLike
from relay.llm.protocols import ChatResponse, ModelClient

# Exceptions
from relay.exceptions import (
    AssistantConfigError,
    DuplicateToolError,
    InvalidToolNameError,
    ModelCallError,
    PromptAssemblyError,
    PromptTooLargeError,
    RelayError,
    TemplateError,
    TokenLimitExceeded,
    ToolError,
    ToolExecutionError,
    UnknownToolError,
)

__all__ = [
    "__version__",
    # Core
    "Assistant",
    "RunState",
    "Message",
    "Thread",
    # Configuration
    "AssistantConfig",
    "ToolErrorPolicy",
    # Prompt assembly
    "AssembledPrompt",
    "PromptBuilder",
    "PromptTemplates",
    "TemplateKey",
    "TokenLengthValidator",
    "TOKEN_LIMITS",
    "TiktokenCounter",
    "NullTokenCounter",
    # Tools
    "Tool",
    "ToolExecutor",
    "ToolInvocation",
    "ToolInvocationParser",
    "ToolResult",
    "find_invocations",
    # Protocols
    "ChatResponse",
    "LengthValidator",
    "ModelClient",
    "TemplateProvider",
    "TokenCounter",
    "ToolLike",
    # Exceptions
    "RelayError",
    "AssistantConfigError",
    "DuplicateToolError",
    "InvalidToolNameError",
    "PromptAssemblyError",
    "TokenLimitExceeded",
    "PromptTooLargeError",
    "TemplateError",
    "ModelCallError",
    "ToolError",
    "UnknownToolError",
    "ToolExecutionError",
]
