"""Utility functions."""

from .script import has_sinhala_run, longest_sinhala_run, sinhala_ratio
from .text_normalizer import normalize_singlish_text

__all__ = [
    "has_sinhala_run",
    "longest_sinhala_run",
    "sinhala_ratio",
    "normalize_singlish_text",
]
