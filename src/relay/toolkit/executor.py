"""ToolExecutor: dispatches parsed invocations to configured tools.

Provides a single ``execute()`` method that looks up the tool by exact
name, runs it on the invocation's input, and returns a structured
``ToolResult``. Exceptions raised by a tool become failed results; an
invocation naming no configured tool raises UnknownToolError.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from relay.exceptions import DuplicateToolError, UnknownToolError
from relay.toolkit.models import ToolResult, validate_tool_name

if TYPE_CHECKING:
    from relay.protocols import ToolLike
    from relay.toolkit.models import ToolInvocation

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Runs invocations against a fixed set of uniquely named tools.

    Usage::

        executor = ToolExecutor([search_tool])
        result = executor.execute(ToolInvocation("search", "weather in Paris"))
        if result.success:
            print(result.output)
        else:
            print(result.error)
    """

    def __init__(self, tools: Sequence[ToolLike]) -> None:
        self._tools: dict[str, ToolLike] = {}
        for tool in tools:
            validate_tool_name(tool.name)
            if tool.name in self._tools:
                raise DuplicateToolError(tool.name)
            self._tools[tool.name] = tool

    def get(self, tool_name: str) -> ToolLike:
        """Return the tool named ``tool_name``.

        Raises:
            UnknownToolError: If no configured tool has that name.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)
        return tool

    def execute(self, invocation: ToolInvocation) -> ToolResult:
        """Execute one invocation.

        Args:
            invocation: Parsed tool name and input.

        Returns:
            ToolResult with success/failure status and output/error.

        Raises:
            UnknownToolError: If the invocation names an unconfigured tool.
        """
        tool = self.get(invocation.tool_name)
        logger.info("Executing tool: %s", invocation.tool_name)
        try:
            output = tool.execute(invocation.tool_input)
        except Exception as exc:
            logger.warning(
                "Tool %s failed: %s", invocation.tool_name, exc, exc_info=True
            )
            return ToolResult(
                tool_name=invocation.tool_name,
                success=False,
                error=f"{type(exc).__name__}: {exc}",
            )
        return ToolResult(
            tool_name=invocation.tool_name,
            success=True,
            output=str(output),
        )

    def available_tools(self) -> list[str]:
        """Return the names of all configured tools, in configured order."""
        return list(self._tools.keys())
