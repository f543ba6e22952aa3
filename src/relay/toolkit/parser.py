"""Tag-based tool invocation parser.

A tool call inside completion text looks like ``<name>input</name>``.
Invocations are grouped by tool in configured order, and within one tool
kept in order of appearance. So for tools ``[b, a]`` the text
``<a>1</a><b>2</b><a>3</a>`` parses to ``b:2, a:1, a:3``. This order is
the order tools are executed in.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from relay.toolkit.models import ToolInvocation

if TYPE_CHECKING:
    from relay.protocols import ToolLike

logger = logging.getLogger(__name__)


def _marker_pattern(tool_name: str) -> re.Pattern[str]:
    name = re.escape(tool_name)
    return re.compile(rf"<{name}>(.*?)</{name}>", re.DOTALL)


class ToolInvocationParser:
    """Extracts invocations for a fixed, ordered set of tool names.

    Usage::

        parser = ToolInvocationParser(["search", "calculator"])
        parser.parse("<search>weather in Paris</search>")
        # [ToolInvocation(tool_name='search', tool_input='weather in Paris')]
    """

    def __init__(self, tool_names: Iterable[str]) -> None:
        self._patterns: list[tuple[str, re.Pattern[str]]] = [
            (name, _marker_pattern(name)) for name in tool_names
        ]

    @property
    def tool_names(self) -> list[str]:
        return [name for name, _ in self._patterns]

    def parse(self, completion: str) -> list[ToolInvocation]:
        """Return every invocation in ``completion``, grouped by tool order.

        Markers for names outside the configured set are ignored. Inner
        text is passed through unchanged, including surrounding whitespace.
        """
        invocations: list[ToolInvocation] = []
        for name, pattern in self._patterns:
            for tool_input in pattern.findall(completion):
                invocations.append(ToolInvocation(tool_name=name, tool_input=tool_input))
        if invocations:
            logger.debug(
                "Found %d tool invocation(s): %s",
                len(invocations), ", ".join(inv.tool_name for inv in invocations),
            )
        return invocations


def find_invocations(completion: str, tools: Sequence[ToolLike]) -> list[ToolInvocation]:
    """Parse ``completion`` for invocations of ``tools``."""
    return ToolInvocationParser(tool.name for tool in tools).parse(completion)
