"""Configuration models for Relay.

AssistantConfig holds per-assistant settings: which model the prompt is
budgeted for, an optional explicit token budget, and what to do when a
tool raises.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field


class ToolErrorPolicy(str, enum.Enum):
    """Action to take when a tool raises during auto execution."""

    MESSAGE = "message"  # write the error as the tool-output message
    RAISE = "raise"  # abort the run with ToolExecutionError


class AssistantConfig(BaseModel):
    """Per-assistant configuration."""

    model_name: Optional[str] = None  # None = ask the model client
    max_tokens: Optional[int] = Field(default=None, gt=0)  # None = model's window
    reserve_tokens: int = Field(default=0, ge=0)  # headroom for the completion
    tool_error_policy: ToolErrorPolicy = ToolErrorPolicy.MESSAGE
