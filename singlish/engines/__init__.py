"""Phoneme mapping engines."""

from .base import PhonemeMapper
from .index_engine import IndexMapper
from .trie_engine import TrieMapper

__all__ = ["PhonemeMapper", "IndexMapper", "TrieMapper"]
