"""Singlish - fail-safe transliteration of romanized Sinhala to Sinhala script."""

__version__ = "0.1.0"

from .config import Config, EngineConfig, InputConfig, OutputConfig
from .models import (
    Classification,
    ClassificationLabel,
    ConversionResult,
    RomanizationRule,
    Token,
    TokenKind,
)
from .pipeline import TransliterationPipeline
from .tokenizer import tokenize
from .transliterator import Transliterator, transliterate

__all__ = [
    "Config",
    "EngineConfig",
    "InputConfig",
    "OutputConfig",
    "Classification",
    "ClassificationLabel",
    "ConversionResult",
    "RomanizationRule",
    "Token",
    "TokenKind",
    "TransliterationPipeline",
    "tokenize",
    "Transliterator",
    "transliterate",
]
