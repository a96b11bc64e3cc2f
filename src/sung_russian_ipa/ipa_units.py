from __future__ import annotations

import unicodedata


_WORD_BREAKS = {" ", "\t", "\n", "."}
_DIACRITICS_ATTACH_TO_PREV = {"ː", "ʲ"}

# Ordered longest-first for greedy scan.
_MULTI = [
    # щ renderings
    "ʃʲtʃʲ",
    "ʒʲdʒʲ",
    "ʃʲʃʲ",
    "ʒʲʒʲ",
    # Affricates
    "tʃʲ",
    "dʒʲ",
    "tʃ",
    "dʒ",
    "ts",
    "dz",
]

IPA_VOWELS = frozenset("ɑaʌoɛeɪiɨu")
SONORANT_UNITS = frozenset({"m", "mʲ", "n", "nʲ", "ɲ", "l", "lʲ", "ɫ", "r", "rʲ", "j"})

# Voiceless obstruent unit -> voiced partner.
VOICING_PAIRS = {
    "p": "b",
    "pʲ": "bʲ",
    "t": "d",
    "tʲ": "dʲ",
    "k": "ɡ",
    "kʲ": "ɡʲ",
    "s": "z",
    "sʲ": "zʲ",
    "f": "v",
    "fʲ": "vʲ",
    "ʃ": "ʒ",
    "x": "ɣ",
    "xʲ": "ɣʲ",
    "ts": "dz",
    "tʃʲ": "dʒʲ",
    "ʃʲʃʲ": "ʒʲʒʲ",
    "ʃʲtʃʲ": "ʒʲdʒʲ",
}
DEVOICING_PAIRS = {v: k for k, v in VOICING_PAIRS.items()}
VOICELESS_OBSTRUENTS = frozenset(VOICING_PAIRS)
VOICED_OBSTRUENTS = frozenset(DEVOICING_PAIRS)

# Glyphs outside the house inventory -> preferred replacement.
FORBIDDEN_GLYPHS = {
    "g": "ɡ",
    "ə": "ʌ",
    "ɐ": "ɑ",
    "nʲ": "ɲ",
    "ɔ": "o",
    "ʊ": "u",
}


def _greedy_scan(s: str) -> list[str]:
    tokens: list[str] = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch in _WORD_BREAKS:
            i += 1
            continue

        matched = None
        for m in _MULTI:
            if s.startswith(m, i):
                matched = m
                break
        if matched is not None:
            tokens.append(matched)
            i += len(matched)
            continue

        # Attach palatalization/length to previous token when possible.
        if ch in _DIACRITICS_ATTACH_TO_PREV and tokens:
            tokens[-1] = tokens[-1] + ch
            i += 1
            continue

        tokens.append(ch)
        i += 1
    return tokens


def tokenize_ipa(text: str) -> list[str]:
    """
    Split an IPA string into segment units.

    - Drops whitespace and syllable dots.
    - Greedy longest-match for multi-symbol units (affricates, щ renderings).
    - Attaches ʲ and ː to the previous token.
    """
    text = unicodedata.normalize("NFC", text)
    return _greedy_scan(text)


def is_soft_unit(unit: str) -> bool:
    return "ʲ" in unit or unit in {"j", "ɲ"}


def strip_length(unit: str) -> tuple[str, bool]:
    if unit.endswith("ː"):
        return unit[:-1], True
    return unit, False


def validate_ipa(text: str) -> dict[str, str]:
    """
    Glyphs in `text` that fall outside the house inventory, with their replacements.
    """
    return {bad: good for bad, good in FORBIDDEN_GLYPHS.items() if bad in text}
