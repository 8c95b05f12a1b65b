"""Length-indexed rule lookup (default engine)."""

from ..models import RomanizationRule
from .base import PhonemeMapper


class IndexMapper(PhonemeMapper):
    """Greedy longest-match mapper over a length-bucketed rule index."""

    def __init__(self, rules: tuple[RomanizationRule, ...]):
        super().__init__(rules)
        index: dict[int, dict[str, RomanizationRule]] = {}
        for rule in self.rules:
            # later rules override earlier ones with the same pattern
            index.setdefault(len(rule.pattern), {})[rule.pattern] = rule
        self._index = index
        self._lengths = sorted(index, reverse=True)

    def match_at(self, text: str, pos: int) -> RomanizationRule | None:
        for length in self._lengths:
            if pos + length > len(text):
                continue
            rule = self._index[length].get(text[pos:pos + length])
            if rule is not None:
                return rule
        return None
