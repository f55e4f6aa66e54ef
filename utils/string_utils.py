from __future__ import annotations

import unicodedata
from typing import Final

__all__: list[str] = ["StringUtils"]

LOG_PREVIEW_LENGTH: Final[int] = 40


class StringUtils:
    """Utility class for string manipulation shared by the translators and the policy layer."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Return the value as a string, or an empty string for None.

        Whitespace is preserved; indentation is significant in source code.

        Args:
            value (str | None): The value to convert.

        Returns:
            str: The value as a string.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def compress_blanks(value: str) -> str:
        """Collapse every whitespace run (including newlines) into one space and strip the ends.

        Args:
            value (str): The string to compress.

        Returns:
            str: The compressed string.
        """
        value = StringUtils.ensure_str(value)
        return " ".join(value.split())

    @staticmethod
    def normalize_text(text: str) -> str:
        """Apply NFC normalization so that composed and decomposed forms compare equal."""
        return unicodedata.normalize("NFC", StringUtils.ensure_str(text))

    @staticmethod
    def preview(text: str, length: int = LOG_PREVIEW_LENGTH) -> str:
        """Shorten text for log output.

        Args:
            text (str): Text to shorten.
            length (int): Maximum number of characters kept.

        Returns:
            str: Single-line preview, suffixed with '...' when truncated.
        """
        flat: str = StringUtils.compress_blanks(text)
        if len(flat) <= length:
            return flat
        return f"{flat[:length]}..."
