"""Base class and Sinhala constants for phoneme mapping engines."""

import re
from abc import ABC, abstractmethod

from ..exceptions import UnmappableToken
from ..models import PhonemeKind, RomanizationRule

# Sinhala Unicode constants
SINHALA_RANGE = r"[\u0D80-\u0DFF]"
VIRAMA = "\u0DCA"  # hal kirima
ANUSVARA = "\u0D82"
VISARGA = "\u0D83"

SINHALA_PATTERN = re.compile(SINHALA_RANGE)
SINHALA_RUN_PATTERN = re.compile(f"{SINHALA_RANGE}+")

# A matched rule together with the offset it was matched at
Unit = tuple[RomanizationRule, int]


class PhonemeMapper(ABC):
    """Base class for phoneme mapping engines."""

    def __init__(self, rules: tuple[RomanizationRule, ...]):
        """Initialize the mapper.

        Args:
            rules: Romanization rule table (never mutated)
        """
        self.rules = tuple(rules)
        self.alphabet = frozenset(ch for rule in self.rules for ch in rule.pattern)
        self.max_pattern_length = max((len(rule.pattern) for rule in self.rules), default=0)

    @abstractmethod
    def match_at(self, text: str, pos: int) -> RomanizationRule | None:
        """Return the longest rule whose pattern starts at ``pos``.

        Args:
            text: Romanized token
            pos: Offset into ``text``

        Returns:
            Matching rule, or None if nothing matches
        """
        pass

    def in_alphabet(self, ch: str) -> bool:
        """Check whether a character can appear in a romanized token."""
        return ch in self.alphabet or ch.lower() in self.alphabet

    def segment(self, text: str) -> list[Unit]:
        """Split a token into phoneme units, greedily and longest-first.

        Exact-case matches win; otherwise the lower-cased text is tried at
        the same offset.

        Args:
            text: Romanized token

        Returns:
            List of (rule, offset) pairs covering the token

        Raises:
            UnmappableToken: If no rule matches at some offset
        """
        lowered = text.lower()
        units = []
        pos = 0
        while pos < len(text):
            rule = self.match_at(text, pos)
            if rule is None and lowered != text:
                rule = self.match_at(lowered, pos)
            if rule is None:
                raise UnmappableToken(text, pos)
            units.append((rule, pos))
            pos += len(rule.pattern)
        return units

    def render(self, text: str, units: list[Unit]) -> str:
        """Render phoneme units as Sinhala glyphs.

        A consonant takes the sign of the vowel after it, keeps its
        inherent vowel before a modifier, and gets a virama otherwise.
        A vowel that does not follow a consonant uses its independent
        letter, except after a modifier, where it cannot be written.
        A modifier must follow a syllable.

        Args:
            text: Original token (for error reporting)
            units: Output of ``segment``

        Returns:
            Sinhala text

        Raises:
            UnmappableToken: If a modifier has no syllable to attach to, or a
                vowel follows a modifier
        """
        out = []
        i = 0
        while i < len(units):
            rule, pos = units[i]
            nxt = units[i + 1][0] if i + 1 < len(units) else None

            if rule.kind is PhonemeKind.CONSONANT:
                if nxt is not None and nxt.kind is PhonemeKind.VOWEL:
                    out.append(rule.glyph + (nxt.sign or ""))
                    i += 2
                    continue
                if nxt is not None and nxt.kind is PhonemeKind.MODIFIER:
                    out.append(rule.glyph)
                else:
                    out.append(rule.glyph + VIRAMA)
            elif rule.kind is PhonemeKind.MODIFIER:
                if not out or out[-1].endswith(VIRAMA) or out[-1][-1:] in (ANUSVARA, VISARGA):
                    raise UnmappableToken(text, pos)
                out.append(rule.glyph)
            elif i > 0 and units[i - 1][0].kind is PhonemeKind.MODIFIER:
                raise UnmappableToken(text, pos)
            else:
                out.append(rule.glyph)
            i += 1
        return "".join(out)

    def transliterate(self, text: str) -> str:
        """Convert one romanized token to Sinhala script.

        Args:
            text: Romanized token

        Returns:
            Sinhala text

        Raises:
            UnmappableToken: If the token cannot be fully mapped
        """
        return self.render(text, self.segment(text))
