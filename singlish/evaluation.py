"""Evaluate engine output against gold transliterations."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import Levenshtein

from .transliterator import Transliterator

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    """Aggregate scores over a gold set."""

    total: int = 0
    exact_matches: int = 0
    edit_distance: int = 0
    reference_chars: int = 0
    mismatches: list[tuple[str, str, str]] = field(default_factory=list)

    @property
    def exact_match_rate(self) -> float:
        return self.exact_matches / self.total if self.total else 0.0

    @property
    def character_error_rate(self) -> float:
        return self.edit_distance / self.reference_chars if self.reference_chars else 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for output."""
        return {
            "total": self.total,
            "exact_matches": self.exact_matches,
            "exact_match_rate": round(self.exact_match_rate, 4),
            "character_error_rate": round(self.character_error_rate, 4),
        }


def read_gold_pairs(path: str | Path) -> list[tuple[str, str]]:
    """
    Read a tab-separated gold file.

    Each non-empty line holds ``romanized<TAB>expected``. Lines starting
    with ``#`` are comments.

    Args:
        path: Path to the gold file

    Returns:
        List of (romanized, expected) pairs

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a line has no tab separator
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Gold file not found: {path}")

    pairs = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if not line.strip() or line.startswith("#"):
                continue
            if "\t" not in line:
                raise ValueError(f"Line {line_number} of {path} has no tab separator")
            source, expected = line.split("\t", 1)
            pairs.append((source, expected))
    return pairs


def evaluate(engine: Transliterator, pairs: Iterable[tuple[str, str]]) -> EvaluationReport:
    """
    Score an engine on gold pairs.

    Args:
        engine: Engine under evaluation
        pairs: (romanized, expected) pairs

    Returns:
        EvaluationReport with exact-match rate and character error rate
    """
    report = EvaluationReport()
    for source, expected in pairs:
        output = engine.convert_text(source)
        report.total += 1
        report.reference_chars += len(expected)
        report.edit_distance += Levenshtein.distance(output, expected)
        if output == expected:
            report.exact_matches += 1
        else:
            report.mismatches.append((source, expected, output))

    logger.info(
        f"Evaluated {report.total} pairs: exact={report.exact_match_rate:.2%}, "
        f"CER={report.character_error_rate:.2%}"
    )
    return report
