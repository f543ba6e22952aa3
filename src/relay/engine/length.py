"""Context-window validation for prompts.

TokenLengthValidator implements the LengthValidator protocol: it counts
the prompt's tokens and compares them against the model's context window
(or an explicit budget), raising TokenLimitExceeded when the prompt does
not fit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relay.exceptions import TokenLimitExceeded

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from relay.protocols import TokenCounter

logger = logging.getLogger(__name__)

# Context windows (prompt + completion) in tokens.
TOKEN_LIMITS: dict[str, int] = {
    "gpt-4.1": 1_047_576,
    "gpt-4.1-mini": 1_047_576,
    "gpt-4.1-nano": 1_047_576,
    "gpt-4o": 128_000,
    "gpt-4o-mini": 128_000,
    "gpt-4-turbo": 128_000,
    "gpt-4-32k": 32_768,
    "gpt-4": 8_192,
    "gpt-3.5-turbo-16k": 16_385,
    "gpt-3.5-turbo": 16_385,
    "o1": 200_000,
    "o1-mini": 128_000,
    "o3": 200_000,
    "o3-mini": 200_000,
    "o4-mini": 200_000,
}

DEFAULT_TOKEN_LIMIT = 8_192
DEFAULT_MODEL_NAME = "gpt-4o-mini"


def lookup_token_limit(model_name: str | None, limits: Mapping[str, int] | None = None) -> int:
    """Return the context window for ``model_name``.

    Exact names win; otherwise the longest table key that prefixes the
    name is used, so dated ids like ``gpt-4o-2024-08-06`` resolve to
    ``gpt-4o``. Unknown models get DEFAULT_TOKEN_LIMIT.
    """
    table = TOKEN_LIMITS if limits is None else limits
    if not model_name:
        return DEFAULT_TOKEN_LIMIT
    if model_name in table:
        return table[model_name]
    prefixes = [key for key in table if model_name.startswith(key)]
    if prefixes:
        return table[max(prefixes, key=len)]
    logger.debug("No token limit known for %s, using %d", model_name, DEFAULT_TOKEN_LIMIT)
    return DEFAULT_TOKEN_LIMIT


class TokenLengthValidator:
    """Validates prompts against a model's token budget.

    Usage::

        validator = TokenLengthValidator(max_tokens=4000)
        remaining = validator.validate_max_tokens(prompt, "gpt-4o")

    Args:
        counter: Token counter to use for every model. When None, a
            TiktokenCounter is created (and cached) per model name.
        token_limits: Override for the TOKEN_LIMITS table.
        max_tokens: Explicit budget; takes precedence over the table.
        reserve_tokens: Tokens held back for the completion.
        counter_factory: Builds the per-model counter when ``counter`` is
            None. Defaults to TiktokenCounter.
    """

    def __init__(
        self,
        counter: TokenCounter | None = None,
        token_limits: Mapping[str, int] | None = None,
        max_tokens: int | None = None,
        reserve_tokens: int = 0,
        counter_factory: Callable[[str], TokenCounter] | None = None,
    ) -> None:
        self._counter = counter
        self._token_limits = dict(token_limits) if token_limits is not None else None
        self._max_tokens = max_tokens
        self._reserve_tokens = reserve_tokens
        self._counter_factory = counter_factory
        self._counters: dict[str, TokenCounter] = {}

    def token_limit(self, model_name: str | None) -> int:
        """Budget that applies to ``model_name``."""
        if self._max_tokens is not None:
            return self._max_tokens
        return lookup_token_limit(model_name, self._token_limits)

    def count_tokens(self, prompt: str, model_name: str | None) -> int:
        return self._counter_for(model_name).count_text(prompt)

    def validate_max_tokens(self, prompt: str, model_name: str | None) -> int:
        """Return tokens left for the completion after ``prompt``.

        Raises:
            TokenLimitExceeded: If the prompt plus reserved tokens exceed
                the budget.
        """
        limit = self.token_limit(model_name)
        token_count = self.count_tokens(prompt, model_name)
        remaining = limit - token_count - self._reserve_tokens
        if remaining < 0:
            raise TokenLimitExceeded(token_count + self._reserve_tokens, limit)
        return remaining

    def _counter_for(self, model_name: str | None) -> TokenCounter:
        if self._counter is not None:
            return self._counter
        key = model_name or DEFAULT_MODEL_NAME
        counter = self._counters.get(key)
        if counter is None:
            if self._counter_factory is not None:
                counter = self._counter_factory(key)
            else:
                from relay.engine.tokens import TiktokenCounter

                counter = TiktokenCounter(model=key)
            self._counters[key] = counter
        return counter
