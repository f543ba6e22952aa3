"""Tests for AssistantConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from relay import AssistantConfig, ToolErrorPolicy


class TestAssistantConfig:
    def test_defaults(self):
        config = AssistantConfig()
        assert config.model_name is None
        assert config.max_tokens is None
        assert config.reserve_tokens == 0
        assert config.tool_error_policy is ToolErrorPolicy.MESSAGE

    def test_policy_from_string(self):
        config = AssistantConfig(tool_error_policy="raise")
        assert config.tool_error_policy is ToolErrorPolicy.RAISE

    def test_rejects_non_positive_budget(self):
        with pytest.raises(ValidationError):
            AssistantConfig(max_tokens=0)

    def test_rejects_negative_reserve(self):
        with pytest.raises(ValidationError):
            AssistantConfig(reserve_tokens=-1)

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            AssistantConfig(tool_error_policy="ignore")
