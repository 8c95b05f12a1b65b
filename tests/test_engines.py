"""Tests for the phoneme mapping engines and rule tables."""

import pytest

from singlish.engines import IndexMapper, TrieMapper
from singlish.engines.base import VIRAMA
from singlish.engines.rules import build_default_rules, default_rules, load_rules
from singlish.exceptions import UnmappableToken
from singlish.models import PhonemeKind


@pytest.fixture(params=[IndexMapper, TrieMapper], ids=["index", "trie"])
def mapper(request):
    """Each engine over the built-in rule table."""
    return request.param(default_rules())


class TestTransliterate:
    """Tests for greedy longest-match mapping."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("mama", "මම"),
            ("gedhara", "ගෙදර"),
            ("yanavaa", "යනවා"),
            ("oyaa", "ඔයා"),
            ("enavadha", "එනවද"),
            ("hari", "හරි"),
            ("eka", "එක"),
            ("ekakin", "එකකින්"),
            ("kiyanna", "කියන්න"),
            ("aethi", "ඇති"),
            ("vuu", "වූ"),
            ("suLi", "සුළි"),
            ("kuNaatuva", "කුණාටුව"),
            ("samaGa", "සමඟ"),
            ("aDhikaariya", "අධිකාරිය"),
            ("naayayaeem", "නායයෑම්"),
            ("heethuven", "හේතුවෙන්"),
        ],
    )
    def test_known_words(self, mapper, word, expected):
        """Common words map to the expected glyphs."""
        assert mapper.transliterate(word) == expected

    def test_anusvara_keeps_inherent_vowel(self, mapper):
        """A consonant before a modifier keeps its inherent vowel."""
        assert mapper.transliterate("gQQvathura") == "ගංවතුර"
        assert mapper.transliterate("sQQvarDhana") == "සංවර්ධන"

    def test_final_consonant_gets_virama(self, mapper):
        """A consonant with no following vowel is closed with hal kirima."""
        output = mapper.transliterate("kotas")
        assert output.endswith("ස" + VIRAMA)

    def test_longest_match_wins(self, mapper):
        """'dh' is read as one phoneme, not 'd' + 'h'."""
        assert mapper.transliterate("dha") == "ද"
        assert mapper.transliterate("da") == "ඩ"

    def test_word_initial_vowel_is_independent(self, mapper):
        """A vowel not preceded by a consonant uses its own letter."""
        assert mapper.transliterate("api") == "අපි"

    def test_lowercase_fallback(self, mapper):
        """Capitals without a rule of their own fall back to lower case."""
        assert mapper.transliterate("Mama") == mapper.transliterate("mama")

    def test_capital_selects_distinct_letter(self, mapper):
        """'L' and 'l' map to different letters."""
        assert mapper.transliterate("La") != mapper.transliterate("la")

    def test_unmappable_character_raises(self, mapper):
        """A letter with no rule fails the whole token."""
        with pytest.raises(UnmappableToken) as exc_info:
            mapper.transliterate("cancel")
        assert exc_info.value.position == 0

    def test_dangling_modifier_raises(self, mapper):
        """A modifier with nothing to attach to is rejected."""
        with pytest.raises(UnmappableToken):
            mapper.transliterate("QQa")

    @pytest.mark.parametrize("word", ["kaHa", "THa", "kaxa"])
    def test_vowel_after_modifier_raises(self, mapper, word):
        """A vowel cannot follow an anusvara or visarga inside a word."""
        with pytest.raises(UnmappableToken) as exc_info:
            mapper.transliterate(word)
        assert exc_info.value.position == len(word) - 1

    def test_leading_capital_is_read_exactly(self, mapper):
        """A leading capital selects its own rule when one exists."""
        assert mapper.transliterate("Api") == "ඇපි"
        assert mapper.transliterate("api") == "අපි"
        assert [rule.kind for rule, _ in mapper.segment("Heta")][0] is PhonemeKind.MODIFIER

    def test_deterministic(self, mapper):
        """Same token, same rules, same output."""
        assert mapper.transliterate("kiloomiitar") == mapper.transliterate("kiloomiitar")


class TestEngineParity:
    """Both lookup strategies implement the same mapping."""

    @pytest.mark.parametrize(
        "word",
        ["mama", "pravaahana", "sQQvarDhana", "nndhuru", "mmbala", "Khaa", "aiyaa", "chhaayaa"],
    )
    def test_index_and_trie_agree(self, word):
        """IndexMapper and TrieMapper segment identically."""
        rules = default_rules()
        index_units = [(r.pattern, p) for r, p in IndexMapper(rules).segment(word)]
        trie_units = [(r.pattern, p) for r, p in TrieMapper(rules).segment(word)]
        assert index_units == trie_units


class TestRules:
    """Tests for the rule tables."""

    def test_default_rules_are_shared(self):
        """The built-in table is built once."""
        assert default_rules() is default_rules()

    def test_every_vowel_has_a_sign(self):
        """Vowel rules carry a dependent sign (empty for inherent 'a')."""
        for rule in build_default_rules():
            if rule.kind is PhonemeKind.VOWEL:
                assert rule.sign is not None

    def test_alphabet_excludes_unused_letters(self):
        """Letters no rule uses are outside the alphabet."""
        mapper = IndexMapper(default_rules())
        assert not mapper.in_alphabet("z")
        assert not mapper.in_alphabet("q")
        assert not mapper.in_alphabet("ç")
        assert mapper.in_alphabet("M")

    def test_load_rules_from_yaml(self, tmp_path):
        """Custom tables load from YAML."""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "consonants:\n  k: ක\n  m: ම\nvowels:\n  a: [අ, '']\n  aa: [ආ, ා]\nmodifiers:\n  x: ං\n",
            encoding="utf-8",
        )
        rules = load_rules(path)
        assert len(rules) == 5
        mapper = IndexMapper(rules)
        assert mapper.transliterate("kaama") == "කාම"
        assert mapper.transliterate("kax") == "කං"

    def test_load_rules_rejects_bad_vowel(self, tmp_path):
        """A vowel entry without both forms is an error."""
        path = tmp_path / "rules.yaml"
        path.write_text("vowels:\n  a: අ\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_rules(path)

    def test_load_rules_missing_file(self, tmp_path):
        """Missing rule files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
