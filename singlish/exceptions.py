"""Recoverable errors raised inside the conversion loop.

None of these reach the caller of ``Transliterator.convert``; the fail-safe
policy catches them and passes the affected token through unchanged.
"""

from .models import PassthroughReason


class TransliterationError(Exception):
    """Base class for per-token conversion failures."""

    reason: PassthroughReason = PassthroughReason.UNMAPPABLE

    def __init__(self, token_text: str, message: str = ""):
        self.token_text = token_text
        super().__init__(message or f"{self.__class__.__name__}: {token_text!r}")


class UnmappableToken(TransliterationError):
    """No romanization rule matches at some position of the token."""

    reason = PassthroughReason.UNMAPPABLE

    def __init__(self, token_text: str, position: int):
        self.position = position
        super().__init__(
            token_text,
            f"No romanization rule matches {token_text[position:]!r} in {token_text!r}",
        )


class AmbiguousClassification(TransliterationError):
    """The classifier could not commit to a Singlish reading."""

    reason = PassthroughReason.AMBIGUOUS

    def __init__(self, token_text: str, confidence: float):
        self.confidence = confidence
        super().__init__(
            token_text, f"Ambiguous token {token_text!r} (confidence {confidence:.2f})"
        )


class ExpansionLimitExceeded(TransliterationError):
    """Transliterating the token would push output past the length budget."""

    reason = PassthroughReason.EXPANSION_LIMIT

    def __init__(self, token_text: str, projected: int, limit: int):
        self.projected = projected
        self.limit = limit
        super().__init__(
            token_text,
            f"Output would grow to {projected} chars (limit {limit}) at {token_text!r}",
        )


class ScriptDensityExceeded(TransliterationError):
    """A mapped token produced an implausibly long Sinhala run."""

    reason = PassthroughReason.SCRIPT_DENSITY

    def __init__(self, token_text: str, run_length: int, limit: int):
        self.run_length = run_length
        self.limit = limit
        super().__init__(
            token_text,
            f"Sinhala run of {run_length} code points exceeds {limit} for {token_text!r}",
        )
