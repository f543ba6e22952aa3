"""LLM client infrastructure for Relay.

Provides an OpenAI-compatible HTTP client, the pluggable ModelClient
protocol, and the LLM error hierarchy.
"""

from relay.llm.client import OpenAIClient
from relay.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from relay.llm.protocols import ChatResponse, ModelClient

__all__ = [
    "OpenAIClient",
    "ModelClient",
    "ChatResponse",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
