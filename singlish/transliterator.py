"""Engine facade: Tokenizer -> Classifier -> Fail-Safe Policy -> Reassembler."""

import logging
from functools import lru_cache
from typing import Optional

from .classifier import ScriptClassifier
from .config import EngineConfig
from .engines import IndexMapper, PhonemeMapper, TrieMapper
from .engines.rules import default_rules, load_rules
from .models import ConversionResult
from .policy import FailSafePolicy
from .reassembler import reassemble
from .tokenizer import tokenize
from .utils.text_normalizer import normalize_singlish_text

logger = logging.getLogger(__name__)

MAPPERS = {
    "index": IndexMapper,
    "trie": TrieMapper,
}


def create_mapper(config: EngineConfig) -> PhonemeMapper:
    """Build the phoneme mapper selected by the configuration."""
    rules = load_rules(config.rules_file) if config.rules_file else default_rules()
    return MAPPERS[config.mapper](rules)


class Transliterator:
    """Singlish-to-Sinhala conversion engine.

    Built once per configuration; holds only read-only state, so a single
    instance can serve concurrent ``convert`` calls.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize the engine.

        Args:
            config: Engine configuration (defaults if omitted)
        """
        self.config = config or EngineConfig()
        self.mapper = create_mapper(self.config)
        self.classifier = ScriptClassifier(self.mapper, self.config)
        self.policy = FailSafePolicy(
            self.classifier,
            self.mapper,
            max_output_expansion_factor=self.config.max_output_expansion_factor,
            max_sinhala_run=self.config.max_sinhala_run,
        )
        logger.debug(
            f"Initialized {self.mapper.__class__.__name__} with {len(self.mapper.rules)} rules, "
            f"threshold={self.config.confidence_threshold}"
        )

    def convert(self, text: Optional[str]) -> ConversionResult:
        """Convert romanized text to Sinhala script.

        Never raises for string input; tokens that cannot be converted
        confidently are returned unchanged.

        Args:
            text: Input text (None is treated as empty)

        Returns:
            ConversionResult with the output text and per-token outcomes
        """
        text = text or ""
        if self.config.normalize_input:
            text = normalize_singlish_text(text)

        tokens = tokenize(text)
        outcomes = self.policy.apply(tokens, len(text))
        output = reassemble(outcomes)

        passthrough = sum(
            1 for outcome in outcomes if outcome.token.is_word and not outcome.transliterated
        )
        return ConversionResult(
            output_text=output,
            dropped_or_passthrough_count=passthrough,
            outcomes=outcomes,
        )

    def convert_text(self, text: Optional[str]) -> str:
        """Convert text and return only the output string."""
        return self.convert(text).output_text


@lru_cache(maxsize=1)
def get_default_transliterator() -> Transliterator:
    """Shared engine with the default configuration."""
    return Transliterator()


def transliterate(text: Optional[str]) -> str:
    """
    Convenience function for converting text with the default engine.

    Args:
        text: Romanized input

    Returns:
        Converted text
    """
    return get_default_transliterator().convert_text(text)
