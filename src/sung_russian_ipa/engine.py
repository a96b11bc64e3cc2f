from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .alphabet import (
    ALWAYS_HARD,
    CONSONANT_IPA,
    CONSONANTS,
    IOTATED_VOWELS,
    PALATALIZING_VOWELS,
    PHONEME_CLASS,
    SIGNS,
    SOFTENERS,
    VOWELS,
    PhonemeClass,
)
from .clusters import ClusterMatch, plan_clusters
from .ipa_units import is_soft_unit, tokenize_ipa
from .phonology import FINAL_DEVOICING, RegressiveMode, VoicingDirective, analyze_palatalization, analyze_voicing
from .position import Position, position
from .syllabify import syllable_offsets


# Hushers already carry length or palatal doubling; they never merge.
_NO_GEMINATE = frozenset("жшщч")
_FRONT_VOWELS = frozenset("иеэ")


@dataclass(frozen=True)
class WordContext:
    word: str
    voicing: Mapping[int, VoicingDirective]
    palatalization: Mapping[int, bool]
    clusters: Mapping[int, ClusterMatch]
    geminate_heads: frozenset[int] = frozenset()
    geminate_tails: frozenset[int] = frozenset()
    stressed_span: Optional[tuple[int, int]] = None
    is_clitic: bool = False
    covered: Mapping[int, ClusterMatch] = field(default_factory=dict)


@dataclass(frozen=True)
class SyllableContext:
    start: int
    position: Position
    is_last: bool
    locked: bool = False


def _cross_syllable_geminates(word: str, syllables: list[str]) -> tuple[frozenset[int], frozenset[int]]:
    heads: set[int] = set()
    tails: set[int] = set()
    offsets = syllable_offsets(syllables)
    for k in range(len(syllables) - 1):
        first = offsets[k + 1]
        j = first - 1
        while j >= offsets[k] and word[j] in SIGNS:
            j -= 1
        if j < offsets[k] or first >= len(word):
            continue
        if word[j] in CONSONANTS and word[j] == word[first] and word[j] not in _NO_GEMINATE:
            heads.add(j)
            tails.add(first)
    return frozenset(heads), frozenset(tails)


def build_word_context(
    word: str,
    syllables: list[str],
    stress: int,
    mode: RegressiveMode = "full",
    is_clitic: bool = False,
) -> WordContext:
    clusters = plan_clusters(word)
    covered = {j: m for m in clusters.values() for j in range(m.offset, min(len(word), m.offset + m.length))}
    heads, tails = _cross_syllable_geminates(word, syllables)
    span = None
    if 0 <= stress < len(syllables):
        start = syllable_offsets(syllables)[stress]
        span = (start, start + len(syllables[stress]))
    return WordContext(
        word=word,
        voicing=analyze_voicing(word),
        palatalization=analyze_palatalization(word, mode),
        clusters=clusters,
        geminate_heads=heads,
        geminate_tails=tails,
        stressed_span=span,
        is_clitic=is_clitic,
        covered=covered,
    )


# --- consonants -------------------------------------------------------------


def _is_word_final(ctx: WordContext, idx: int) -> bool:
    return all(ch in SIGNS for ch in ctx.word[idx + 1 :])


def _base_ipa(ctx: WordContext, idx: int, final: bool) -> str:
    ch = ctx.word[idx]
    directive = ctx.voicing.get(idx)
    if directive is not None:
        return directive.ipa
    if final and ch in FINAL_DEVOICING:
        return FINAL_DEVOICING[ch]
    return CONSONANT_IPA[ch]


def _plain(ctx: WordContext, idx: int, final: bool) -> str:
    ipa = _base_ipa(ctx, idx, final)
    if ctx.palatalization.get(idx) and "ʲ" not in ipa:
        ipa += "ʲ"
    return ipa


def _as_is(ctx: WordContext, idx: int, final: bool) -> str:
    return _base_ipa(ctx, idx, final)


def _lateral(ctx: WordContext, idx: int, final: bool) -> str:
    return "lʲ" if ctx.palatalization.get(idx) else "ɫ"


def _nasal(ctx: WordContext, idx: int, final: bool) -> str:
    return "ɲ" if ctx.palatalization.get(idx) else "n"


def _trill(ctx: WordContext, idx: int, final: bool) -> str:
    if ctx.palatalization.get(idx):
        return "rʲ"
    # р after a stressed front vowel softens before a further consonant.
    word, span = ctx.word, ctx.stressed_span
    prev = idx - 1
    if (
        span is not None
        and span[0] <= prev < span[1]
        and word[prev] in _FRONT_VOWELS
        and idx + 1 < len(word)
        and word[idx + 1] in CONSONANTS
    ):
        return "rʲ"
    return "r"


def _glide(ctx: WordContext, idx: int, final: bool) -> str:
    return "j"


CONSONANT_SELECTORS: dict[PhonemeClass, Callable[[WordContext, int, bool], str]] = {
    PhonemeClass.PLAIN: _plain,
    PhonemeClass.ALWAYS_HARD: _as_is,
    PhonemeClass.INHERENTLY_SOFT: _as_is,
    PhonemeClass.LATERAL: _lateral,
    PhonemeClass.NASAL: _nasal,
    PhonemeClass.TRILL: _trill,
    PhonemeClass.GLIDE: _glide,
}


# --- vowels -----------------------------------------------------------------


@dataclass(frozen=True)
class VowelEnv:
    letter: str
    position: Position
    glide: bool
    left_soft: bool
    interpalatal: bool
    after_hard: bool
    word_initial: bool
    word_final: bool
    aya_ending: bool
    is_clitic: bool


def _left_soft(ctx: WordContext, idx: int) -> bool:
    j = idx - 1
    if j < 0 or ctx.word[j] not in CONSONANTS:
        return False
    m = ctx.covered.get(j)
    if m is not None:
        return is_soft_unit(tokenize_ipa(m.ipa)[-1])
    return bool(ctx.palatalization.get(j))


def _right_soft(ctx: WordContext, idx: int) -> bool:
    word = ctx.word
    j = idx + 1
    if j >= len(word):
        return False
    ch = word[j]
    if ch == "й" or ch in PALATALIZING_VOWELS:
        return True
    if ch not in CONSONANTS or ch in ALWAYS_HARD:
        return False
    direct = ch in {"ч", "щ"} or (j + 1 < len(word) and word[j + 1] in SOFTENERS)
    if not direct:
        return False
    m = ctx.covered.get(j)
    if m is not None:
        return is_soft_unit(tokenize_ipa(m.ipa)[0])
    return True


def _vowel_env(ctx: WordContext, idx: int, pos: Position) -> VowelEnv:
    word = ctx.word
    ch = word[idx]
    prev = word[idx - 1] if idx > 0 else ""
    rest = word[idx + 1 :]
    glide = ch in IOTATED_VOWELS and (idx == 0 or prev in VOWELS or prev in SIGNS)
    left = glide or _left_soft(ctx, idx)
    if ch == "а":
        aya = rest in {"я", "яь"}
    elif ch == "я":
        aya = prev == "а" and rest in {"", "ь"}
    else:
        aya = False
    return VowelEnv(
        letter=ch,
        position=pos,
        glide=glide,
        left_soft=left,
        interpalatal=left and _right_soft(ctx, idx),
        after_hard=prev in ALWAYS_HARD,
        word_initial=idx == 0,
        word_final=not rest,
        aya_ending=aya,
        is_clitic=ctx.is_clitic,
    )


def _vowel_a(v: VowelEnv) -> str:
    if v.position is Position.STRESSED:
        return "a" if v.interpalatal and not v.aya_ending else "ɑ"
    if v.position is Position.PRETONIC_IMMEDIATE:
        return "a" if v.interpalatal else "ɑ"
    if v.position is Position.POSTTONIC_IMMEDIATE or v.aya_ending:
        return "ɑ"
    return "ɪ" if v.interpalatal else "ʌ"


def _vowel_o(v: VowelEnv) -> str:
    if v.position is Position.STRESSED:
        return "o"
    if v.position is Position.PRETONIC_IMMEDIATE:
        return "ɑ"
    if v.position is Position.POSTTONIC_IMMEDIATE:
        return "ʌ"
    return "ɑ" if v.word_initial or v.is_clitic else "ʌ"


def _vowel_e(v: VowelEnv) -> str:
    if v.position is Position.STRESSED:
        if v.letter == "ё":
            return "o"
        return "e" if v.interpalatal else "ɛ"
    if v.after_hard:
        return "ɨ"
    return "i" if v.interpalatal else "ɪ"


def _vowel_e_hard(v: VowelEnv) -> str:
    if v.position is Position.STRESSED:
        return "e" if v.interpalatal else "ɛ"
    return "ɪ"


def _vowel_ya(v: VowelEnv) -> str:
    if v.position in (Position.STRESSED, Position.PRETONIC_IMMEDIATE):
        return "a" if v.interpalatal else "ɑ"
    if v.aya_ending:
        return "ɑ"
    if v.position is Position.POSTTONIC_IMMEDIATE and v.word_final:
        return "ɑ"
    return "ɪ" if v.left_soft else "ʌ"


def _vowel_i(v: VowelEnv) -> str:
    return "ɨ" if v.after_hard else "i"


VOWEL_SELECTORS: dict[str, Callable[[VowelEnv], str]] = {
    "а": _vowel_a,
    "о": _vowel_o,
    "е": _vowel_e,
    "ё": _vowel_e,
    "э": _vowel_e_hard,
    "я": _vowel_ya,
    "и": _vowel_i,
    "ы": lambda v: "ɨ",
    "у": lambda v: "u",
    "ю": lambda v: "u",
}


# --- syllables --------------------------------------------------------------


def transcribe_syllable(syllable: str, ctx: WordContext, syl: SyllableContext) -> str:
    """
    IPA for one syllable, reading neighbours from the whole-word context.
    """
    word = ctx.word
    end = syl.start + len(syllable)
    out: list[str] = []
    idx = syl.start
    while idx < end:
        ch = word[idx]
        match = ctx.clusters.get(idx)
        if match is not None:
            out.append(match.ipa)
            idx += 1
            continue
        if idx in ctx.covered or ch in SIGNS:
            idx += 1
            continue

        if ch in CONSONANTS:
            if idx in ctx.geminate_tails:
                idx += 1
                continue
            final = syl.is_last and _is_word_final(ctx, idx)
            out.append(CONSONANT_SELECTORS[PHONEME_CLASS[ch]](ctx, idx, final))
            if idx in ctx.geminate_heads:
                out.append("ː")
            elif (
                ch not in _NO_GEMINATE
                and idx + 1 < end
                and word[idx + 1] == ch
                and idx + 1 not in ctx.clusters
            ):
                out.append("ː")
                idx += 1
            idx += 1
            continue

        if ch in VOWELS:
            pos = Position.STRESSED if syl.locked else syl.position
            env = _vowel_env(ctx, idx, pos)
            out.append(("j" if env.glide else "") + VOWEL_SELECTORS[ch](env))
        idx += 1
    return "".join(out)


def transcribe_word(
    word: str,
    syllables: list[str],
    stress: int,
    *,
    locked: frozenset[int] = frozenset(),
    mode: RegressiveMode = "full",
    is_clitic: bool = False,
) -> list[str]:
    """
    Per-syllable IPA for a normalized word with a resolved stress index.
    """
    ctx = build_word_context(word, syllables, stress, mode=mode, is_clitic=is_clitic)
    n = len(syllables)
    return [
        transcribe_syllable(
            syl,
            ctx,
            SyllableContext(start=start, position=position(k, stress, n), is_last=k == n - 1, locked=k in locked),
        )
        for k, (syl, start) in enumerate(zip(syllables, syllable_offsets(syllables)))
    ]
