"""Romanization rule tables and YAML rule loading."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from ..models import PhonemeKind, RomanizationRule

logger = logging.getLogger(__name__)

# Consonants: pattern -> base letter (inherent "a")
# Capitals select the retroflex, aspirated or prenasalized member of a pair.
CONSONANTS = {
    "k": "ක", "kh": "ඛ", "g": "ග", "gh": "ඝ", "G": "ඟ", "nng": "ඟ",
    "ch": "ච", "Ch": "ඡ", "chh": "ඡ", "j": "ජ", "jh": "ඣ",
    "Ny": "ඤ", "KN": "ඥ",
    "t": "ට", "T": "ඨ", "d": "ඩ", "D": "ඪ", "N": "ණ", "nnd": "ඬ",
    "th": "ත", "Th": "ථ", "dh": "ද", "Dh": "ධ", "n": "න", "nndh": "ඳ",
    "p": "ප", "P": "ඵ", "ph": "ඵ", "b": "බ", "B": "භ", "bh": "භ", "m": "ම", "mmb": "ඹ",
    "y": "ය", "r": "ර", "l": "ල", "L": "ළ", "v": "ව", "w": "ව",
    "s": "ස", "sh": "ශ", "Sh": "ෂ", "h": "හ", "f": "ෆ",
}

# Vowels: pattern -> (independent letter, dependent sign)
VOWELS = {
    "a": ("අ", ""),
    "aa": ("ආ", "ා"),
    "A": ("ඇ", "ැ"),
    "ae": ("ඇ", "ැ"),
    "Aa": ("ඈ", "ෑ"),
    "aae": ("ඈ", "ෑ"),
    "aee": ("ඈ", "ෑ"),
    "i": ("ඉ", "ි"),
    "ii": ("ඊ", "ී"),
    "u": ("උ", "ු"),
    "uu": ("ඌ", "ූ"),
    "e": ("එ", "ෙ"),
    "ee": ("ඒ", "ේ"),
    "ai": ("ඓ", "ෛ"),
    "o": ("ඔ", "ො"),
    "oo": ("ඕ", "ෝ"),
    "au": ("ඖ", "ෞ"),
}

# Modifiers attach to the syllable before them
MODIFIERS = {
    "QQ": "ං",  # anusvara
    "x": "ං",
    "H": "ඃ",  # visarga
}


def build_default_rules() -> tuple[RomanizationRule, ...]:
    """Build the built-in rule table."""
    rules = [
        RomanizationRule(pattern=p, glyph=g, kind=PhonemeKind.CONSONANT)
        for p, g in CONSONANTS.items()
    ]
    rules.extend(
        RomanizationRule(pattern=p, glyph=g, kind=PhonemeKind.VOWEL, sign=s)
        for p, (g, s) in VOWELS.items()
    )
    rules.extend(
        RomanizationRule(pattern=p, glyph=g, kind=PhonemeKind.MODIFIER)
        for p, g in MODIFIERS.items()
    )
    return tuple(rules)


@lru_cache(maxsize=1)
def default_rules() -> tuple[RomanizationRule, ...]:
    """Return the shared, read-only built-in rule table."""
    return build_default_rules()


def load_rules(path: str | Path) -> tuple[RomanizationRule, ...]:
    """Load a rule table from YAML.

    Expected layout::

        consonants: {k: ක, ...}
        vowels: {aa: [ආ, ා], ...}
        modifiers: {x: ං}

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of RomanizationRule objects

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If an entry is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    rules = []
    for pattern, glyph in (data.get("consonants") or {}).items():
        rules.append(RomanizationRule(str(pattern), str(glyph), PhonemeKind.CONSONANT))
    for pattern, forms in (data.get("vowels") or {}).items():
        if not isinstance(forms, (list, tuple)) or len(forms) != 2:
            raise ValueError(
                f"Vowel {pattern!r} needs [independent, sign], got {forms!r}"
            )
        glyph, sign = forms
        rules.append(
            RomanizationRule(str(pattern), str(glyph), PhonemeKind.VOWEL, sign=str(sign or ""))
        )
    for pattern, glyph in (data.get("modifiers") or {}).items():
        rules.append(RomanizationRule(str(pattern), str(glyph), PhonemeKind.MODIFIER))

    if not rules:
        raise ValueError(f"No romanization rules found in {path}")

    logger.info(f"Loaded {len(rules)} romanization rules from {path}")
    return tuple(rules)
