"""Text normalization utilities for romanized input."""

import logging
import re
import unicodedata

logger = logging.getLogger(__name__)


class SinglishTextNormalizer:
    """Normalize romanized Sinhala text before conversion."""

    # Zero-width space, word joiner, BOM and soft hyphen. ZWJ/ZWNJ are kept,
    # they are meaningful inside Sinhala words.
    ZERO_WIDTH = re.compile(r"[\u200B\u2060\uFEFF\u00AD]")

    # Typographic quotes and apostrophes
    CURLY_SINGLE = re.compile(r"[\u2018\u2019\u201A\u201B]")
    CURLY_DOUBLE = re.compile(r"[\u201C\u201D\u201E\u201F]")

    @classmethod
    def remove_zero_width(cls, text: str) -> str:
        """Strip invisible characters that would split words."""
        return cls.ZERO_WIDTH.sub("", text)

    @classmethod
    def normalize_quotes(cls, text: str) -> str:
        """Replace typographic quotes with their ASCII forms."""
        text = cls.CURLY_SINGLE.sub("'", text)
        return cls.CURLY_DOUBLE.sub('"', text)

    @classmethod
    def normalize_text(cls, text: str) -> str:
        """
        Main normalization function.

        Applies NFC composition, zero-width removal and quote
        normalization. Whitespace and line structure are left untouched.

        Args:
            text: Input text

        Returns:
            Normalized text
        """
        if not text:
            return text

        text = unicodedata.normalize("NFC", text)
        text = cls.remove_zero_width(text)
        return cls.normalize_quotes(text)


def normalize_singlish_text(text: str) -> str:
    """
    Convenience function for normalizing romanized input.

    Args:
        text: Input text

    Returns:
        Normalized text
    """
    return SinglishTextNormalizer.normalize_text(text)
