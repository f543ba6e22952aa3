"""Message and Thread: the conversation log.

Message is a frozen record of one turn. Thread is the ordered, mutable
log of messages shared by the prompt builder and the run loop. The only
mutations are append (tail) and remove_oldest (head).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

TOOL_OUTPUT_SUFFIX = "_output"


@dataclass(frozen=True)
class Message:
    """A single conversational turn.

    Attributes:
        role: "user", "assistant", "system", or "<tool_name>_output" for
            tool results.
        text: Message body.
    """

    role: str
    text: str

    @classmethod
    def tool_output(cls, tool_name: str, text: str) -> Message:
        """Build the message carrying a tool's output."""
        return cls(role=f"{tool_name}{TOOL_OUTPUT_SUFFIX}", text=text)

    @property
    def is_tool_output(self) -> bool:
        return self.role.endswith(TOOL_OUTPUT_SUFFIX)

    def __str__(self) -> str:
        return f"{self.role}: {self.text}"


class Thread:
    """Ordered log of messages, oldest first.

    Usage::

        thread = Thread()
        thread.append(Message(role="user", text="Hi"))
        len(thread)  # 1
    """

    def __init__(self, messages: Iterable[Message] | None = None) -> None:
        self._messages: list[Message] = list(messages) if messages else []

    @property
    def messages(self) -> list[Message]:
        """Copy of the messages in conversational order."""
        return list(self._messages)

    @property
    def last(self) -> Message | None:
        """Most recent message, or None for an empty thread."""
        return self._messages[-1] if self._messages else None

    def append(self, message: Message) -> Message:
        """Add a message at the tail and return it."""
        self._messages.append(message)
        return message

    def remove_oldest(self) -> Message:
        """Remove and return the oldest message.

        Raises:
            IndexError: If the thread is empty.
        """
        if not self._messages:
            raise IndexError("remove_oldest() on an empty thread")
        return self._messages.pop(0)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"Thread(messages={len(self._messages)})"
