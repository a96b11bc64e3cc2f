from __future__ import annotations

import logging
from typing import Literal, Mapping, Optional

from .alphabet import count_vowels
from .errors import InvalidStressIndex, StressOnYoRejected
from .lexicon import Lexicon, lookup_key
from .schemas import Provenance, StressAssignment


logger = logging.getLogger(__name__)

# Unstressed function words when they stand alone.
CLITICS = frozenset(
    "в к с б во ко со о об у за на по до из от при про и а но да ль ли же ж бы не ни".split()
)

ManualSource = Literal["user", "composer"]


def yo_syllable(syllables: list[str]) -> Optional[int]:
    for i, syl in enumerate(syllables):
        if "ё" in syl:
            return i
    return None


def validate_stress_index(index: int, syllable_count: int) -> None:
    if not -1 <= index < syllable_count:
        raise InvalidStressIndex(index, syllable_count)


def resolve_stress(
    word: str,
    syllables: list[str],
    lexicon: Lexicon,
    harvested: Optional[Mapping[str, int]] = None,
    is_clitic: bool = False,
) -> StressAssignment:
    """
    Stressed syllable of `word` and where that answer came from.

    Lookup order: corrections, dictionary, harvested cache, the ё syllable, then a
    placeholder on syllable 0. Single-vowel words are always stressed on their
    vowel unless they stand alone as clitics.
    """
    if is_clitic:
        return StressAssignment(index=-1, provenance="clitic")

    n = len(syllables)
    key = lookup_key(word)
    found: Optional[StressAssignment] = None
    tables: tuple[tuple[Provenance, Mapping[str, int]], ...] = (
        ("correction", lexicon.corrections),
        ("dictionary", lexicon.stress),
        ("harvested", harvested or {}),
    )
    for provenance, table in tables:
        index = table.get(key)
        if index is None:
            continue
        if index >= n:
            logger.warning("%s stress %d for %r exceeds its %d syllables, ignoring", provenance, index, word, n)
            continue
        found = StressAssignment(index=index, provenance=provenance)
        break

    if found is None:
        yo = yo_syllable(syllables)
        if yo is not None:
            found = StressAssignment(index=yo, provenance="ё-rule")
        else:
            logger.debug("no stress known for %r, placing it on syllable 0", word)
            found = StressAssignment(index=0, provenance="placeholder")

    if count_vowels(word) == 1 and found.index != 0:
        found = StressAssignment(index=0, provenance=found.provenance)
    return found


def change_stress(
    current: StressAssignment,
    word: str,
    syllables: list[str],
    index: int,
    provenance: ManualSource,
    lexicon: Lexicon,
    harvested: Optional[Mapping[str, int]] = None,
) -> StressAssignment:
    """
    Move stress on request. Stress resting on ё by rule cannot be moved.

    Returning to the looked-up index restores the looked-up provenance.
    """
    validate_stress_index(index, len(syllables))
    if current.provenance == "ё-rule" and index != current.index:
        raise StressOnYoRejected(word, current.index, index)
    resolved = resolve_stress(word, syllables, lexicon, harvested)
    if resolved.index == index and resolved.provenance != "placeholder":
        return resolved
    return StressAssignment(index=index, provenance=provenance)
