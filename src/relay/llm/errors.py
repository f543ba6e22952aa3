"""Errors raised by the HTTP model client.

Every client error is a ModelCallError, so a run reports them under the
model-call stage.
"""

from __future__ import annotations

from relay.exceptions import ModelCallError


class LLMClientError(ModelCallError):
    """Raised by OpenAIClient when a chat request cannot be completed."""


class LLMConfigError(LLMClientError):
    """The client cannot be built, usually because no API key was found."""


class LLMRateLimitError(LLMClientError):
    """The endpoint answered 429 and retries ran out.

    ``retry_after`` holds the Retry-After header in seconds, if one was sent.
    """

    def __init__(self, message: str = "Rate limited", retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message)


class LLMAuthError(LLMClientError):
    """The endpoint rejected the API key (401 or 403)."""


class LLMResponseError(LLMClientError):
    """The completion payload has no usable choice."""
