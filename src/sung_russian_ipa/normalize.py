from __future__ import annotations

import re
import unicodedata


# Latin and Greek letters that are routinely typed in place of Cyrillic ones,
# plus the pre-1918 letters.
_LOOKALIKES = str.maketrans(
    {
        "A": "А",
        "a": "а",
        "B": "В",
        "C": "С",
        "c": "с",
        "E": "Е",
        "e": "е",
        "H": "Н",
        "K": "К",
        "M": "М",
        "O": "О",
        "o": "о",
        "P": "Р",
        "p": "р",
        "T": "Т",
        "X": "Х",
        "x": "х",
        "Y": "У",
        "y": "у",
        "α": "а",
        "β": "в",
        "γ": "г",
        "ε": "е",
        "η": "н",
        "ι": "и",
        "κ": "к",
        "μ": "м",
        "ν": "н",
        "ο": "о",
        "ρ": "р",
        "τ": "т",
        "υ": "у",
        "χ": "х",
        "ω": "о",
        "ѣ": "е",
        "Ѣ": "Е",
        "і": "и",
        "І": "И",
        "ѵ": "и",
        "Ѵ": "И",
        "ѳ": "ф",
        "Ѳ": "Ф",
    }
)

_STRESS_ACCENTS = re.compile("[\u0300\u0301\u0341]")


def normalize(text: str) -> str:
    """
    Fold look-alike and obsolete letters to modern Cyrillic and lowercase.

    Punctuation is kept; building dictionary keys is the caller's job.
    """
    # Decompose first so precomposed accented vowels (ó, ѝ) lose their accent too.
    text = _STRESS_ACCENTS.sub("", unicodedata.normalize("NFD", text))
    text = unicodedata.normalize("NFC", text)
    return text.translate(_LOOKALIKES).lower()
