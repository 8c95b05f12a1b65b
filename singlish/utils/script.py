"""Helpers for measuring Sinhala script in text."""

from ..engines.base import SINHALA_PATTERN, SINHALA_RUN_PATTERN


def longest_sinhala_run(text: str) -> int:
    """Length of the longest contiguous run of Sinhala code points."""
    return max((len(m.group(0)) for m in SINHALA_RUN_PATTERN.finditer(text)), default=0)


def has_sinhala_run(text: str, min_length: int) -> bool:
    """Check for a run of at least ``min_length`` Sinhala code points."""
    return longest_sinhala_run(text) >= min_length


def sinhala_ratio(text: str) -> float:
    """Share of non-space characters that are Sinhala."""
    visible = [ch for ch in text if not ch.isspace()]
    if not visible:
        return 0.0
    return sum(1 for ch in visible if SINHALA_PATTERN.match(ch)) / len(visible)
