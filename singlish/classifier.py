"""Per-token script classification.

Decides whether a word token is romanized Sinhala worth converting, a
foreign word to leave alone, or too uncertain to touch. Anything the
classifier cannot vouch for is Ambiguous and therefore passed through.
"""

import logging
from typing import Iterable, Optional

from .config import EngineConfig
from .engines.base import PhonemeMapper
from .exceptions import UnmappableToken
from .lexicon import (
    BUILTIN_FOREIGN_WORDS,
    ENGLISH_SUFFIXES,
    LEGAL_FINAL_CONSONANTS,
    SINGLISH_WORDS,
    SLANG_WORDS,
)
from .models import Classification, ClassificationLabel, PhonemeKind

logger = logging.getLogger(__name__)

BASE_SCORE = 0.4
ALTERNATION_WEIGHT = 0.2
LEGAL_ENDING_BONUS = 0.2
KNOWN_WORD_BONUS = 0.35
VOWEL_CLASH_PENALTY = 0.3
CLUSTER_PENALTY = 0.25
SUFFIX_PENALTY = 0.3
LENGTH_PENALTY_PER_CHAR = 0.05
SLANG_CONFIDENCE = 0.5


class ScriptClassifier:
    """Classify word tokens as Singlish, foreign or ambiguous."""

    def __init__(
        self,
        mapper: PhonemeMapper,
        config: Optional[EngineConfig] = None,
        known_words: Iterable[str] = SINGLISH_WORDS,
        slang_words: Iterable[str] = SLANG_WORDS,
    ):
        """Initialize the classifier.

        Args:
            mapper: Phoneme mapper whose rule table defines the alphabet
            config: Engine configuration (threshold, allow-list, lengths)
            known_words: Lexicon of Singlish words that earn a bonus
            slang_words: Words always treated as ambiguous
        """
        self.mapper = mapper
        self.config = config or EngineConfig()
        self.threshold = self.config.confidence_threshold

        allow_list = set(self.config.foreign_word_allow_list)
        if self.config.use_builtin_allow_list:
            allow_list |= BUILTIN_FOREIGN_WORDS
        self.allow_list = frozenset(allow_list)
        self.known_words = frozenset(w.lower() for w in known_words)
        self.slang_words = frozenset(w.lower() for w in slang_words)

    def classify(self, text: str) -> Classification:
        """Classify a single word.

        Args:
            text: Word token text

        Returns:
            Classification with label, confidence and reasons
        """
        if not text or any(not self.mapper.in_alphabet(ch) for ch in text):
            return Classification(
                ClassificationLabel.FOREIGN_WORD, 1.0, ("outside romanization alphabet",)
            )

        key = text.lower()
        if key in self.allow_list:
            return Classification(ClassificationLabel.FOREIGN_WORD, 1.0, ("allow-listed",))
        if key in self.slang_words:
            return Classification(ClassificationLabel.AMBIGUOUS, SLANG_CONFIDENCE, ("slang",))
        if len(text) > 1 and text.isupper():
            return Classification(ClassificationLabel.AMBIGUOUS, 0.0, ("all capitals",))

        known = key in self.known_words
        if len(text) < self.config.min_candidate_length and not known:
            return Classification(ClassificationLabel.AMBIGUOUS, 0.0, ("too short",))

        try:
            units = self.mapper.segment(text)
        except UnmappableToken:
            return Classification(ClassificationLabel.AMBIGUOUS, 0.0, ("unparseable",))

        if self.capital_changes_reading(text, units):
            return Classification(
                ClassificationLabel.AMBIGUOUS, 0.0, ("capital first letter changes reading",)
            )

        confidence, reasons = self.score([rule for rule, _ in units], text, known)
        if confidence >= self.threshold:
            label = ClassificationLabel.SINGLISH_CANDIDATE
        else:
            label = ClassificationLabel.AMBIGUOUS
        return Classification(label, confidence, tuple(reasons))

    def capital_changes_reading(self, text: str, units: list) -> bool:
        """Check whether a leading capital selects a different rule than its lower case.

        ``Api`` may be sentence case for ``api`` or the ``A`` vowel; the
        two readings give different Sinhala, so the word cannot be trusted.
        """
        if not text[0].isupper():
            return False
        decapitalized = text[0].lower() + text[1:]
        try:
            alternative = self.mapper.segment(decapitalized)
        except UnmappableToken:
            return True
        return [rule for rule, _ in units] != [rule for rule, _ in alternative]

    def score(self, rules: list, text: str, known: bool = False) -> tuple[float, list[str]]:
        """Score the phonetic plausibility of a segmented word.

        Args:
            rules: Romanization rules the word segments into
            text: Original word
            known: Whether the word is in the Singlish lexicon

        Returns:
            Tuple of (confidence in [0, 1], reasons)
        """
        reasons = []
        vowelish = [rule.kind is not PhonemeKind.CONSONANT for rule in rules]

        pairs = list(zip(vowelish, vowelish[1:]))
        alternation = sum(1 for a, b in pairs if a != b) / len(pairs) if pairs else 1.0
        confidence = BASE_SCORE + ALTERNATION_WEIGHT * alternation

        last = rules[-1]
        if last.kind is not PhonemeKind.CONSONANT or last.pattern in LEGAL_FINAL_CONSONANTS:
            confidence += LEGAL_ENDING_BONUS
        else:
            reasons.append(f"illegal final {last.pattern!r}")

        # Every legal vowel sequence is a single rule, so two vowel rules in
        # a row mean a vowel cluster Sinhala does not have.
        clashes = sum(
            1
            for a, b in zip(rules, rules[1:])
            if a.kind is PhonemeKind.VOWEL and b.kind is PhonemeKind.VOWEL
        )
        if clashes:
            confidence -= VOWEL_CLASH_PENALTY * clashes
            reasons.append(f"{clashes} vowel clash(es)")

        run = 0
        for is_vowel in vowelish + [True]:
            if not is_vowel:
                run += 1
                continue
            if run >= 3:
                confidence -= CLUSTER_PENALTY
                reasons.append(f"{run}-consonant cluster")
            run = 0

        lowered = text.lower()
        if lowered.endswith(ENGLISH_SUFFIXES):
            confidence -= SUFFIX_PENALTY
            reasons.append("english suffix")

        extra = len(text) - self.config.soft_length_limit
        if extra > 0:
            confidence -= LENGTH_PENALTY_PER_CHAR * extra
            reasons.append(f"{extra} letters over length limit")

        if known:
            confidence += KNOWN_WORD_BONUS
            reasons.append("known word")

        return min(1.0, max(0.0, confidence)), reasons
