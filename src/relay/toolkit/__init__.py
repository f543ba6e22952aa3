"""Tool definitions, invocation parsing and execution for Relay.

Provides the Tool model, the tag-based ToolInvocationParser, and the
ToolExecutor that runs parsed invocations.
"""

from relay.toolkit.executor import ToolExecutor
from relay.toolkit.models import Tool, ToolInvocation, ToolResult, validate_tool_name
from relay.toolkit.parser import ToolInvocationParser, find_invocations

__all__ = [
    "Tool",
    "ToolInvocation",
    "ToolResult",
    "ToolExecutor",
    "ToolInvocationParser",
    "find_invocations",
    "validate_tool_name",
]
