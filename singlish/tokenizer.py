"""Split raw text into typed, offset-carrying spans."""

import unicodedata
from typing import Iterator

from .models import Token, TokenKind

ZERO_WIDTH_JOINERS = {"\u200c", "\u200d"}  # ZWNJ, ZWJ (used inside Sinhala conjuncts)
NEWLINE_CHARS = {"\n", "\r"}


def char_kind(ch: str) -> TokenKind:
    """Classify a single character into a token kind."""
    if ch in NEWLINE_CHARS:
        return TokenKind.NEWLINE
    if ch.isspace():
        return TokenKind.WHITESPACE
    category = unicodedata.category(ch)
    if category == "Nd":
        return TokenKind.NUMERAL
    if ch.isalpha() or category.startswith("M") or ch in ZERO_WIDTH_JOINERS:
        return TokenKind.WORD
    return TokenKind.SYMBOL


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield maximal runs of same-kind characters.

    Args:
        text: Arbitrary input text

    Yields:
        Tokens covering the whole input in order, with no gaps or overlaps
    """
    if not text:
        return

    start = 0
    current = char_kind(text[0])
    for i in range(1, len(text)):
        kind = char_kind(text[i])
        if kind is not current:
            yield Token(kind=current, text=text[start:i], start=start, end=i)
            start = i
            current = kind
    yield Token(kind=current, text=text[start:], start=start, end=len(text))


def tokenize(text: str) -> list[Token]:
    """Tokenize text into a list of spans.

    Args:
        text: Arbitrary input text

    Returns:
        List of Token objects; empty for empty input
    """
    return list(iter_tokens(text))


def detokenize(tokens: list[Token]) -> str:
    """Rebuild the original text from its tokens."""
    return "".join(token.text for token in sorted(tokens, key=lambda t: t.start))
