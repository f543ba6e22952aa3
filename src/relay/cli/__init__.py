"""Relay CLI -- chat with an assistant from the terminal.

This module is NEVER imported from relay/__init__.py.
It is only loaded via the ``relay`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install relay-assistant[cli]"
    ) from None

from relay.cli.formatting import format_error, format_message, format_token_count, get_console

if TYPE_CHECKING:
    from relay.llm.protocols import ModelClient

EXIT_COMMANDS = {"/exit", "/quit"}


@click.group()
@click.option(
    "--model",
    default="gpt-4o-mini",
    envvar="RELAY_MODEL",
    show_default=True,
    help="Model name used for requests and token budgeting.",
)
@click.option(
    "--max-tokens",
    type=click.IntRange(min=1),
    default=None,
    help="Token budget overriding the model's context window.",
)
@click.pass_context
def cli(ctx: click.Context, model: str, max_tokens: int | None) -> None:
    """Relay: conversational assistant runtime."""
    ctx.ensure_object(dict)
    ctx.obj["model"] = model
    ctx.obj["max_tokens"] = max_tokens


def _make_client(model: str) -> ModelClient:
    """Create the model client used by ``relay chat``."""
    from relay.llm.client import OpenAIClient

    return OpenAIClient(default_model=model)


@cli.command()
@click.option("--name", default="relay", show_default=True, help="Assistant name.")
@click.option("--instructions", default=None, help="Instructions section of the prompt.")
@click.pass_context
def chat(ctx: click.Context, name: str, instructions: str | None) -> None:
    """Chat interactively. Type /exit or send EOF to stop."""
    from relay.assistant import Assistant
    from relay.models.config import AssistantConfig

    console = get_console()
    try:
        llm = _make_client(ctx.obj["model"])
        try:
            assistant = Assistant(
                name=name,
                llm=llm,
                instructions=instructions,
                config=AssistantConfig(
                    model_name=ctx.obj["model"],
                    max_tokens=ctx.obj["max_tokens"],
                ),
            )
            while True:
                try:
                    text = click.prompt("you", prompt_suffix="> ")
                except click.Abort:
                    break
                if text.strip() in EXIT_COMMANDS:
                    break
                messages = assistant.add_message_and_run(text)
                format_message(messages[-1], console)
        finally:
            close = getattr(llm, "close", None)
            if callable(close):
                close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


@cli.command()
@click.argument("text")
@click.pass_context
def count(ctx: click.Context, text: str) -> None:
    """Count the tokens in TEXT against the model's budget."""
    from relay.engine.length import TokenLengthValidator

    console = get_console()
    try:
        model = ctx.obj["model"]
        validator = TokenLengthValidator(max_tokens=ctx.obj["max_tokens"])
        format_token_count(
            model,
            validator.count_tokens(text, model),
            validator.token_limit(model),
            console,
        )
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
