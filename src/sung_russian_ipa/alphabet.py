from __future__ import annotations

from enum import Enum


VOWELS = frozenset("аеёиоуыэюя")
CONSONANTS = frozenset("бвгджзйклмнпрстфхцчшщ")
SIGNS = frozenset("ъь")
SONORANTS = frozenset("лмнрй")

DENTALS = frozenset("тдсзнц")
VELARS = frozenset("кгх")
LABIALS = frozenset("бпвфм")

ALWAYS_HARD = frozenset("жшц")
INHERENTLY_SOFT = frozenset("чщй")
PALATALIZING_VOWELS = frozenset("еёиюя")
IOTATED_VOWELS = frozenset("еёяю")
# Segments after which a preceding consonant is soft.
SOFTENERS = PALATALIZING_VOWELS | {"ь"}

VOICED = frozenset("бвгджз")
VOICELESS = frozenset("пфктшсхцчщ")


class GraphemeClass(str, Enum):
    VOWEL = "vowel"
    CONSONANT = "consonant"
    SONORANT = "sonorant"
    SIGN = "sign"
    OTHER = "other"


def grapheme_class(ch: str) -> GraphemeClass:
    if ch in VOWELS:
        return GraphemeClass.VOWEL
    if ch in SIGNS:
        return GraphemeClass.SIGN
    if ch in SONORANTS:
        return GraphemeClass.SONORANT
    if ch in CONSONANTS:
        return GraphemeClass.CONSONANT
    return GraphemeClass.OTHER


def count_vowels(word: str) -> int:
    return sum(1 for ch in word if ch in VOWELS)


class PhonemeClass(str, Enum):
    """
    Closed set of consonant classes, one allophone selector each (see engine.py).
    """

    PLAIN = "plain"  # takes a ʲ marker when palatalized
    ALWAYS_HARD = "always-hard"
    INHERENTLY_SOFT = "inherently-soft"
    LATERAL = "lateral"
    NASAL = "nasal"
    TRILL = "trill"
    GLIDE = "glide"


PHONEME_CLASS: dict[str, PhonemeClass] = {
    **{ch: PhonemeClass.PLAIN for ch in "бпвфдтгкхзсм"},
    **{ch: PhonemeClass.ALWAYS_HARD for ch in "жшц"},
    "ч": PhonemeClass.INHERENTLY_SOFT,
    "щ": PhonemeClass.INHERENTLY_SOFT,
    "л": PhonemeClass.LATERAL,
    "н": PhonemeClass.NASAL,
    "р": PhonemeClass.TRILL,
    "й": PhonemeClass.GLIDE,
}

CONSONANT_IPA = {
    "б": "b",
    "п": "p",
    "в": "v",
    "ф": "f",
    "д": "d",
    "т": "t",
    "г": "ɡ",
    "к": "k",
    "х": "x",
    "з": "z",
    "с": "s",
    "ж": "ʒ",
    "ш": "ʃ",
    "ц": "ts",
    "ч": "tʃʲ",
    "щ": "ʃʲʃʲ",
    "м": "m",
    "й": "j",
}
