from __future__ import annotations

from .alphabet import VOWELS


def syllabify(word: str) -> list[str]:
    """
    Split a normalized word into open syllables for singing.

    Each vowel is a nucleus. The whole consonant run between two vowels opens the
    next syllable, except a й right after a vowel, which closes it. Signs travel
    with the consonant before them. Trailing consonants stay on the last syllable.
    """
    nuclei = [i for i, ch in enumerate(word) if ch in VOWELS]
    if not nuclei:
        return [word]

    syllables: list[str] = []
    start = 0
    for here, nxt in zip(nuclei, nuclei[1:]):
        cut = here + 1
        if cut < nxt and word[cut] == "й":
            cut += 1
        syllables.append(word[start:cut])
        start = cut
    syllables.append(word[start:])
    return syllables


def syllable_offsets(syllables: list[str]) -> list[int]:
    offsets: list[int] = []
    pos = 0
    for syl in syllables:
        offsets.append(pos)
        pos += len(syl)
    return offsets
