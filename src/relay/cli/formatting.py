"""Rich formatting helpers for the Relay CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from relay.models.message import Message

_ROLE_STYLES = {
    "user": "bold cyan",
    "assistant": "bold green",
    "system": "bold magenta",
}


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_message(message: Message, console: Console) -> None:
    """Print one message with its role highlighted."""
    style = "bold yellow" if message.is_tool_output else _ROLE_STYLES.get(message.role, "bold")
    console.print(f"[{style}]{escape(message.role)}[/{style}] {escape(message.text)}")


def format_token_count(
    model_name: str,
    token_count: int,
    token_limit: int,
    console: Console,
) -> None:
    """Display a token count against the model's limit."""
    remaining = token_limit - token_count
    remaining_style = "green" if remaining >= 0 else "red"

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="dim")
    table.add_column("Value", justify="right")
    table.add_row("Model", escape(model_name))
    table.add_row("Tokens", str(token_count))
    table.add_row("Limit", str(token_limit))
    table.add_row("Remaining", f"[{remaining_style}]{remaining}[/{remaining_style}]")
    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
