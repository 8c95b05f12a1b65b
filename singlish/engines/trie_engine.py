"""Trie-based rule lookup."""

from ..models import RomanizationRule
from .base import PhonemeMapper

_RULE = "__rule__"


class TrieMapper(PhonemeMapper):
    """Greedy longest-match mapper walking a character trie."""

    def __init__(self, rules: tuple[RomanizationRule, ...]):
        super().__init__(rules)
        root: dict = {}
        for rule in self.rules:
            node = root
            for ch in rule.pattern:
                node = node.setdefault(ch, {})
            node[_RULE] = rule
        self._root = root

    def match_at(self, text: str, pos: int) -> RomanizationRule | None:
        node = self._root
        best = None
        for ch in text[pos:]:
            node = node.get(ch)
            if node is None:
                break
            best = node.get(_RULE, best)
        return best
