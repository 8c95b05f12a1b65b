"""Data models for the transliteration engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    """Kinds of spans produced by the tokenizer."""

    WORD = "word"
    NUMERAL = "numeral"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"


class ClassificationLabel(str, Enum):
    """Script classifier verdicts for a word token."""

    SINGLISH_CANDIDATE = "singlish_candidate"
    FOREIGN_WORD = "foreign_word"
    AMBIGUOUS = "ambiguous"


class PhonemeKind(str, Enum):
    """Rendering class of a romanization rule."""

    CONSONANT = "consonant"
    VOWEL = "vowel"
    MODIFIER = "modifier"  # anusvara / visarga, attach to the preceding syllable


class PassthroughReason(str, Enum):
    """Why a token was returned unchanged."""

    NOT_A_WORD = "not_a_word"
    FOREIGN_WORD = "foreign_word"
    AMBIGUOUS = "ambiguous"
    UNMAPPABLE = "unmappable"
    EXPANSION_LIMIT = "expansion_limit"
    SCRIPT_DENSITY = "script_density"


@dataclass(frozen=True)
class Token:
    """A typed span of the input text."""

    kind: TokenKind
    text: str
    start: int
    end: int

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD


@dataclass(frozen=True)
class Classification:
    """Classifier verdict attached to a word token."""

    label: ClassificationLabel
    confidence: float
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class RomanizationRule:
    """Maps a romanized phoneme pattern to Sinhala glyphs.

    Consonants carry their base letter in ``glyph``. Vowels carry the
    independent letter in ``glyph`` and the dependent sign used after a
    consonant in ``sign`` (empty for the inherent ``a``).
    """

    pattern: str
    glyph: str
    kind: PhonemeKind
    sign: Optional[str] = None


@dataclass(frozen=True)
class TokenOutcome:
    """What happened to a single token during conversion."""

    token: Token
    output: str
    classification: Optional[Classification] = None
    passthrough_reason: Optional[PassthroughReason] = None

    @property
    def transliterated(self) -> bool:
        return self.passthrough_reason is None

    def to_dict(self) -> dict:
        """Convert to dictionary for trace output."""
        return {
            "text": self.token.text,
            "kind": self.token.kind.value,
            "start": self.token.start,
            "end": self.token.end,
            "output": self.output,
            "label": self.classification.label.value if self.classification else None,
            "confidence": (
                round(self.classification.confidence, 3) if self.classification else None
            ),
            "passthrough_reason": (
                self.passthrough_reason.value if self.passthrough_reason else None
            ),
        }


@dataclass
class ConversionResult:
    """Result of converting one input string."""

    output_text: str
    dropped_or_passthrough_count: int
    outcomes: list[TokenOutcome] = field(default_factory=list)

    @property
    def transliterated_count(self) -> int:
        return sum(
            1 for outcome in self.outcomes if outcome.token.is_word and outcome.transliterated
        )
