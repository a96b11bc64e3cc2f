from __future__ import annotations

from typing import Optional, Sequence

from .ipa_units import (
    DEVOICING_PAIRS,
    IPA_VOWELS,
    SONORANT_UNITS,
    VOICED_OBSTRUENTS,
    VOICELESS_OBSTRUENTS,
    VOICING_PAIRS,
    strip_length,
    tokenize_ipa,
)
from .schemas import ProcessedWord, SandhiChange


# Punctuation that ends the phonological phrase.
BLOCKING_PUNCTUATION = frozenset(".,!?;:…")


def _coda(ipa: str) -> Optional[str]:
    units = tokenize_ipa(ipa)
    if not units or units[-1][0] in IPA_VOWELS:
        return None
    return units[-1]


def _onset(ipa: str) -> Optional[str]:
    units = tokenize_ipa(ipa)
    if not units or units[0][0] in IPA_VOWELS:
        return None
    return units[0]


def is_blocked(punctuation: str) -> bool:
    return any(ch in BLOCKING_PUNCTUATION for ch in punctuation)


def voice_boundary(a: ProcessedWord, b: ProcessedWord) -> ProcessedWord:
    """
    Assimilate the last consonant of `a` to the voicing of the first consonant of `b`.

    Only the trailing unit of `a`'s final syllable can change; `a` is returned as is
    when nothing applies.
    """
    if not a.syllables or not b.syllables:
        return a
    last = a.syllables[-1]
    coda = _coda(last.ipa)
    onset = _onset(b.syllables[0].ipa)
    if coda is None or onset is None:
        return a

    trigger, _ = strip_length(onset)
    if trigger in SONORANT_UNITS:
        return a
    base, long = strip_length(coda)
    if trigger in VOICED_OBSTRUENTS:
        target = VOICING_PAIRS.get(base)
    elif trigger in VOICELESS_OBSTRUENTS:
        target = DEVOICING_PAIRS.get(base)
    else:
        target = None
    if target is None:
        return a

    new_coda = target + ("ː" if long else "")
    syllable = last.model_copy(
        update={
            "ipa": last.ipa[: len(last.ipa) - len(coda)] + new_coda,
            "sandhi": SandhiChange(source=coda, target=new_coda, trigger=onset),
        }
    )
    return a.model_copy(update={"syllables": [*a.syllables[:-1], syllable]})


def apply_sandhi(words: Sequence[ProcessedWord], punctuation: Optional[Sequence[str]] = None) -> list[ProcessedWord]:
    """
    Cross-word voicing over a phrase; `punctuation[i]` is what follows word i.
    """
    punctuation = punctuation or [""] * len(words)
    if len(punctuation) != len(words):
        raise ValueError("punctuation must align with words")
    out = list(words)
    for i in range(len(words) - 1):
        if is_blocked(punctuation[i]):
            continue
        out[i] = voice_boundary(words[i], words[i + 1])
    return out
