"""Fail-safe orchestration of per-token conversion."""

import logging
from typing import Iterable

from .classifier import ScriptClassifier
from .engines.base import PhonemeMapper
from .exceptions import (
    AmbiguousClassification,
    ExpansionLimitExceeded,
    ScriptDensityExceeded,
    TransliterationError,
)
from .models import (
    Classification,
    ClassificationLabel,
    PassthroughReason,
    Token,
    TokenOutcome,
)
from .utils.script import longest_sinhala_run

logger = logging.getLogger(__name__)


class FailSafePolicy:
    """Decide, token by token, between transliteration and pass-through.

    Every failure degrades to returning the token unchanged. Once the
    output length budget would be exceeded, no further token of the
    current input is transliterated.
    """

    def __init__(
        self,
        classifier: ScriptClassifier,
        mapper: PhonemeMapper,
        max_output_expansion_factor: float = 3.0,
        max_sinhala_run: int = 40,
    ):
        """Initialize the policy.

        Args:
            classifier: Script classifier for word tokens
            mapper: Phoneme mapper for Singlish candidates
            max_output_expansion_factor: Output length cap as a multiple of input length
            max_sinhala_run: Longest Sinhala run a single mapped token may produce
        """
        self.classifier = classifier
        self.mapper = mapper
        self.max_output_expansion_factor = max_output_expansion_factor
        self.max_sinhala_run = max_sinhala_run

    def output_limit(self, input_length: int) -> int:
        """Maximum output length allowed for an input of this length."""
        return int(self.max_output_expansion_factor * input_length)

    def apply(self, tokens: Iterable[Token], input_length: int) -> list[TokenOutcome]:
        """Process a token sequence.

        Args:
            tokens: Tokens in document order
            input_length: Length of the original input

        Returns:
            One TokenOutcome per token, in the same order
        """
        limit = self.output_limit(input_length)
        # Length the output would have if every remaining token passed through
        projected = input_length
        exhausted = False
        outcomes = []

        for token in tokens:
            if not token.is_word:
                outcomes.append(
                    TokenOutcome(token, token.text, None, PassthroughReason.NOT_A_WORD)
                )
                continue

            classification = self.classifier.classify(token.text)
            if classification.label is ClassificationLabel.FOREIGN_WORD:
                outcomes.append(
                    TokenOutcome(token, token.text, classification, PassthroughReason.FOREIGN_WORD)
                )
                continue

            try:
                if exhausted and classification.label is ClassificationLabel.SINGLISH_CANDIDATE:
                    raise ExpansionLimitExceeded(token.text, projected, limit)
                output = self._transliterate(token, classification)
                grown = projected - len(token.text) + len(output)
                if grown > limit:
                    exhausted = True
                    raise ExpansionLimitExceeded(token.text, grown, limit)
            except TransliterationError as e:
                logger.debug(f"Passing through {token.text!r}: {e}")
                outcomes.append(TokenOutcome(token, token.text, classification, e.reason))
                continue

            projected = grown
            outcomes.append(TokenOutcome(token, output, classification, None))

        return outcomes

    def _transliterate(self, token: Token, classification: Classification) -> str:
        """Map a word that the classifier did not reject outright.

        Raises:
            AmbiguousClassification: If the classifier was not confident
            UnmappableToken: If the mapper cannot cover the word
            ScriptDensityExceeded: If the result is an implausibly long Sinhala run
        """
        if classification.label is not ClassificationLabel.SINGLISH_CANDIDATE:
            raise AmbiguousClassification(token.text, classification.confidence)

        output = self.mapper.transliterate(token.text)

        run = longest_sinhala_run(output)
        if run > self.max_sinhala_run:
            raise ScriptDensityExceeded(token.text, run, self.max_sinhala_run)
        return output
