"""Rebuild output text from processed tokens."""

from typing import Iterable

from .models import TokenOutcome


def reassemble(outcomes: Iterable[TokenOutcome]) -> str:
    """Concatenate token outputs in original document order.

    Args:
        outcomes: Processed tokens

    Returns:
        Output text

    Raises:
        ValueError: If the tokens leave gaps or overlap
    """
    ordered = sorted(outcomes, key=lambda o: o.token.start)
    expected = 0
    for outcome in ordered:
        if outcome.token.start != expected:
            raise ValueError(
                f"Token at offset {outcome.token.start} does not continue from {expected}"
            )
        expected = outcome.token.end
    return "".join(outcome.output for outcome in ordered)
