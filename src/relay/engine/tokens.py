"""Token counters used to measure assembled prompts.

TiktokenCounter measures prompts the way OpenAI models see them.
NullTokenCounter reports every prompt as empty, which disables budgeting.
"""

from __future__ import annotations


class TiktokenCounter:
    """Counts prompt tokens with a tiktoken encoding.

    The encoding is chosen from ``model`` unless ``encoding_name`` is
    given. Model names tiktoken does not recognise use o200k_base.
    """

    def __init__(self, model: str = "gpt-4o", encoding_name: str | None = None) -> None:
        import tiktoken

        if encoding_name is not None:
            self._enc = tiktoken.get_encoding(encoding_name)
        else:
            try:
                self._enc = tiktoken.encoding_for_model(model)
            except KeyError:
                self._enc = tiktoken.get_encoding("o200k_base")

    @property
    def encoding_name(self) -> str:
        return self._enc.name

    def count_text(self, text: str) -> int:
        # Prompts quote user input, so special-token markers count as text.
        if not text:
            return 0
        return len(self._enc.encode(text, disallowed_special=()))


class NullTokenCounter:
    """Counter for which every prompt fits."""

    def count_text(self, text: str) -> int:
        return 0
