"""CLI tests for Relay -- tests commands via Click's CliRunner.

The model client and tokenizer are replaced with in-memory fakes so no
network access is needed.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from relay.cli import cli
from relay.llm import LLMConfigError
from tests.conftest import CharCounter, FakeLLM


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def char_tokens(monkeypatch):
    """Count one token per character instead of loading tiktoken."""
    monkeypatch.setattr(
        "relay.engine.tokens.TiktokenCounter", lambda model="gpt-4o": CharCounter()
    )


@pytest.fixture
def fake_llm(monkeypatch):
    llm = FakeLLM(["Hello from relay!", "Second answer"])
    monkeypatch.setattr("relay.cli._make_client", lambda model: llm)
    return llm


# ---------------------------------------------------------------------------
# chat
# ---------------------------------------------------------------------------

class TestChat:
    def test_single_turn_then_exit(self, runner, fake_llm):
        result = runner.invoke(cli, ["chat"], input="hi there\n/exit\n")
        assert result.exit_code == 0, result.output
        assert "Hello from relay!" in result.output
        assert fake_llm.prompts[0].endswith("user: hi there")

    def test_eof_ends_session(self, runner, fake_llm):
        result = runner.invoke(cli, ["chat"], input="one\ntwo\n")
        assert result.exit_code == 0, result.output
        assert "Second answer" in result.output
        assert len(fake_llm.prompts) == 2

    def test_conversation_accumulates(self, runner, fake_llm):
        runner.invoke(cli, ["chat"], input="one\ntwo\n/quit\n")
        assert "user: one\nassistant: Hello from relay!\nuser: two" in fake_llm.prompts[1]

    def test_instructions_in_prompt(self, runner, fake_llm):
        runner.invoke(cli, ["chat", "--instructions", "Be terse."], input="hi\n/exit\n")
        assert fake_llm.prompts[0].startswith("Instructions:\nBe terse.")

    def test_budget_error_reported(self, runner, fake_llm):
        result = runner.invoke(
            cli,
            ["--max-tokens", "5", "chat", "--instructions", "Far too long for the budget."],
            input="hi\n",
        )
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert fake_llm.prompts == []

    def test_missing_api_key_reported(self, runner, monkeypatch):
        def no_key(model):
            raise LLMConfigError("No API key provided.")

        monkeypatch.setattr("relay.cli._make_client", no_key)
        result = runner.invoke(cli, ["chat"], input="hi\n")
        assert result.exit_code == 1
        assert "No API key provided." in result.output


# ---------------------------------------------------------------------------
# count
# ---------------------------------------------------------------------------

class TestCount:
    def test_count_with_budget(self, runner):
        result = runner.invoke(cli, ["--max-tokens", "10", "count", "abcd"])
        assert result.exit_code == 0, result.output
        assert "4" in result.output
        assert "10" in result.output
        assert "6" in result.output

    def test_count_uses_model_table(self, runner):
        result = runner.invoke(cli, ["--model", "gpt-4", "count", "abc"])
        assert result.exit_code == 0, result.output
        assert "gpt-4" in result.output
        assert "8192" in result.output

    def test_count_over_budget_shows_negative(self, runner):
        result = runner.invoke(cli, ["--max-tokens", "2", "count", "abcd"])
        assert result.exit_code == 0
        assert "-2" in result.output

    def test_invalid_budget_rejected(self, runner):
        result = runner.invoke(cli, ["--max-tokens", "0", "count", "x"])
        assert result.exit_code == 2
