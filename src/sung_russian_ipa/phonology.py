from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .alphabet import (
    ALWAYS_HARD,
    CONSONANTS,
    DENTALS,
    INHERENTLY_SOFT,
    LABIALS,
    SIGNS,
    SOFTENERS,
    SONORANTS,
    VELARS,
    VOICED,
    VOICELESS,
    GraphemeClass,
    grapheme_class,
)


Direction = Literal["devoice", "voice"]
RegressiveMode = Literal["full", "partial", "minimal"]


@dataclass(frozen=True)
class VoicingDirective:
    direction: Direction
    ipa: str


_DEVOICED = {"б": "p", "в": "f", "г": "k", "д": "t", "ж": "ʃ", "з": "s"}
_VOICED = {
    "п": "b",
    "ф": "v",
    "к": "ɡ",
    "т": "d",
    "ш": "ʒ",
    "с": "z",
    "х": "ɣ",
    "ц": "dz",
    "ч": "dʒʲ",
    "щ": "ʒʲʒʲ",
}

# Word-final devoicing uses the same pairs.
FINAL_DEVOICING = _DEVOICED


def _voicing_trigger(word: str, i: int) -> str | None:
    # Nearest following obstruent in the same cluster; в never triggers.
    for ch in word[i + 1 :]:
        kind = grapheme_class(ch)
        if kind in (GraphemeClass.SIGN, GraphemeClass.SONORANT) or ch == "в":
            continue
        return ch if kind is GraphemeClass.CONSONANT else None
    return None


def analyze_voicing(word: str) -> dict[int, VoicingDirective]:
    """
    Regressive voicing assimilation inside consonant clusters.

    Returns a sparse map from character index to the replacement IPA. Sonorants
    neither trigger nor receive a directive.
    """
    out: dict[int, VoicingDirective] = {}
    for i in range(len(word) - 1, -1, -1):
        ch = word[i]
        if ch not in CONSONANTS or ch in SONORANTS:
            continue
        trigger = _voicing_trigger(word, i)
        if trigger is None:
            continue
        if trigger in VOICELESS and ch in _DEVOICED:
            out[i] = VoicingDirective("devoice", _DEVOICED[ch])
        elif trigger in VOICED and ch in _VOICED:
            out[i] = VoicingDirective("voice", _VOICED[ch])
    return out


def _next_consonant(word: str, i: int) -> int | None:
    for j in range(i + 1, len(word)):
        ch = word[j]
        if ch in SIGNS:
            continue
        if ch in CONSONANTS:
            return j
        return None
    return None


def _propagates(ch: str, nxt: str, mode: RegressiveMode) -> bool:
    if ch == "л":
        return nxt == "л"
    if ch == "р":
        return nxt == "р"
    if ch == "н":
        return nxt == "н" or nxt in DENTALS
    if mode == "partial":
        return ch in DENTALS and nxt in DENTALS
    if ch in VELARS:
        return nxt in VELARS
    if ch in LABIALS:
        return nxt in LABIALS
    return ch in DENTALS


def analyze_palatalization(word: str, mode: RegressiveMode = "full") -> dict[int, bool]:
    """
    Sparse map of palatalized consonant indices.

    Pass 1 marks consonants softened by what follows them directly. Pass 2 runs
    right to left and lets palatalization spread back through a cluster, limited
    by natural class. `partial` keeps only dental-before-dental spreading (plus the
    л/р/н rules) and `minimal` skips pass 2.
    """
    out: dict[int, bool] = {}
    for i, ch in enumerate(word):
        if ch not in CONSONANTS or ch in ALWAYS_HARD:
            continue
        nxt = word[i + 1] if i + 1 < len(word) else ""
        if ch in INHERENTLY_SOFT or nxt in SOFTENERS:
            out[i] = True

    if mode == "minimal":
        return out

    for i in range(len(word) - 1, -1, -1):
        ch = word[i]
        if ch not in CONSONANTS or ch in ALWAYS_HARD or i in out:
            continue
        j = _next_consonant(word, i)
        if j is None or not out.get(j):
            continue
        if _propagates(ch, word[j], mode):
            out[i] = True
    return out
