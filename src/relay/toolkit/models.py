"""Toolkit data models for Relay.

Frozen dataclasses for tool definitions, parsed invocations, and
execution results.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from relay.exceptions import InvalidToolNameError

if TYPE_CHECKING:
    from collections.abc import Callable

# Names are embedded verbatim in <name>...</name> markers.
_TOOL_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")


def validate_tool_name(name: str) -> None:
    """Check that ``name`` can be used as an invocation tag.

    Raises:
        InvalidToolNameError: If the name is empty or contains characters
            that would break the tag markup.
    """
    if not name:
        raise InvalidToolNameError(name, "name must not be empty")
    if not _TOOL_NAME_RE.fullmatch(name):
        raise InvalidToolNameError(
            name,
            "must start with a letter or underscore and contain only "
            "letters, digits, '_', '.', or '-'",
        )


@dataclass(frozen=True)
class Tool:
    """A tool the model can invoke with free-form text input.

    Attributes:
        name: Tool name, used verbatim as the invocation tag.
        description: When/why the model should use this tool.
        handler: Callable taking the tool input string. Its return value
            is converted with ``str()``.
    """

    name: str
    description: str
    handler: Callable[[str], object]

    def __post_init__(self) -> None:
        validate_tool_name(self.name)

    @classmethod
    def from_function(
        cls,
        fn: Callable[[str], object],
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Tool:
        """Build a Tool from a plain function.

        The name defaults to ``fn.__name__`` and the description to the
        first paragraph of its docstring.
        """
        if description is None:
            doc = inspect.getdoc(fn) or ""
            description = doc.split("\n\n", 1)[0].replace("\n", " ").strip()
        return cls(name=name or fn.__name__, description=description, handler=fn)

    def execute(self, input: str) -> str:
        return str(self.handler(input))

    def name_and_description(self) -> str:
        return f"{self.name}: {self.description}"


@dataclass(frozen=True)
class ToolInvocation:
    """A tool call parsed out of completion text."""

    tool_name: str
    tool_input: str


@dataclass(frozen=True)
class ToolResult:
    """Structured result from executing a tool.

    Attributes:
        tool_name: Name of the tool that was executed.
        success: Whether execution succeeded.
        output: String output on success.
        error: Error message on failure.
    """

    tool_name: str
    success: bool
    output: str = ""
    error: str = ""

    @property
    def text(self) -> str:
        """Body of the tool-output message for this result."""
        if self.success:
            return self.output
        return f"Error: {self.error}"
