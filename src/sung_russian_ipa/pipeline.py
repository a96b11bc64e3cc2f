from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .alphabet import count_vowels
from .engine import transcribe_word
from .errors import InvalidStressIndex, StressOnYoRejected, YoToggleRejected
from .harvest import HarvestRepository
from .ipa_units import validate_ipa
from .lexicon import Lexicon, builtin_lexicon, lookup_key
from .normalize import normalize
from .sandhi import apply_sandhi
from .schemas import ProcessedWord, Provenance, StressAssignment, TextTranscription, TextWord, TranscribedSyllable
from .stress import (
    CLITICS,
    ManualSource,
    change_stress as _change_stress,
    resolve_stress,
    validate_stress_index,
    yo_syllable,
)
from .styles import DEFAULT_STYLE, StyleConfig, apply_style
from .syllabify import syllabify
from .text import Token, tokenize_text


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptionRequest:
    """
    Everything one word's transcription depends on besides the lexicon.

    `stress=None` resolves stress from the lexicon; an explicit index is used as
    given and tagged with `provenance`.
    """

    word: str
    stress: Optional[int] = None
    provenance: Provenance = "user"
    locked_syllables: frozenset[int] = frozenset()
    is_clitic: bool = False
    style: StyleConfig = DEFAULT_STYLE
    yo_exceptions: bool = True


def process_word(
    request: TranscriptionRequest,
    lexicon: Optional[Lexicon] = None,
    harvest: Optional[HarvestRepository] = None,
) -> ProcessedWord:
    lexicon = lexicon if lexicon is not None else builtin_lexicon()
    source = normalize(request.word)
    word = lookup_key(source)
    stress = request.stress
    provenance = request.provenance
    yo_note = None
    yo_ambiguous = False

    if request.yo_exceptions and word in lexicon.yo_exceptions:
        entry = lexicon.yo_exceptions[word]
        word = entry.actual_form
        yo_note = entry.note or None
        yo_ambiguous = entry.ambiguous
        if stress is None:
            if 0 <= entry.stress < len(syllabify(word)):
                stress, provenance = entry.stress, "correction"
            else:
                logger.warning("ё-exception stress %d for %r is out of range, ignoring", entry.stress, word)

    syllables = syllabify(word)
    n = len(syllables)
    locked = frozenset(request.locked_syllables)
    bad_locks = sorted(i for i in locked if not 0 <= i < n)
    if bad_locks:
        raise ValueError(f"Locked syllables {bad_locks} outside a {n}-syllable word")

    if stress is None:
        snapshot = harvest.snapshot() if harvest is not None else None
        assignment = resolve_stress(word, syllables, lexicon, snapshot, is_clitic=request.is_clitic)
    else:
        validate_stress_index(stress, n)
        if provenance == "ё-rule":
            yo = yo_syllable(syllables)
            if yo is None:
                raise InvalidStressIndex(stress, n)
            if yo != stress:
                raise StressOnYoRejected(word, yo, stress)
        assignment = StressAssignment(index=stress, provenance=provenance)

    exception = lexicon.exceptions.get(word)
    if exception is not None and request.stress not in (None, exception.stress):
        exception = None
    if exception is not None and len(exception.syllables) != n:
        logger.warning("exception IPA for %r has %d syllables, expected %d", word, len(exception.syllables), n)
        exception = None

    if exception is not None:
        if request.stress is None:
            assignment = StressAssignment(index=exception.stress, provenance="dictionary")
        raw = exception.syllables
    else:
        raw = transcribe_word(
            word,
            syllables,
            assignment.index,
            locked=locked,
            mode=request.style.regressive_palatalization,
            is_clitic=request.is_clitic,
        )
        bad = validate_ipa("".join(raw))
        if bad:
            logger.warning("%r produced non-inventory glyphs %s", word, sorted(bad))

    return ProcessedWord(
        source=source,
        word=word,
        syllables=[
            TranscribedSyllable(cyrillic=syl, ipa=apply_style(ipa, request.style), is_stressed=k == assignment.index)
            for k, (syl, ipa) in enumerate(zip(syllables, raw))
        ],
        stress=assignment,
        locked_syllables=sorted(locked),
        is_clitic=request.is_clitic,
        style=request.style.name,
        exception=word if exception is not None else None,
        yo_note=yo_note,
        yo_ambiguous=yo_ambiguous,
    )


def transcribe(
    word: str,
    stress: Optional[int] = None,
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
    is_clitic: bool = False,
) -> str:
    """
    Syllable-spaced IPA for one word.
    """
    request = TranscriptionRequest(word=word, stress=stress, style=style, is_clitic=is_clitic)
    return process_word(request, lexicon).ipa


def _rerun(
    processed: ProcessedWord,
    style: StyleConfig,
    lexicon: Optional[Lexicon],
    harvest: Optional[HarvestRepository],
    **changes,
) -> ProcessedWord:
    request = TranscriptionRequest(
        word=processed.word,
        stress=processed.stress.index,
        provenance=processed.stress.provenance,
        locked_syllables=frozenset(processed.locked_syllables),
        is_clitic=processed.is_clitic,
        style=style,
        yo_exceptions=False,
    )
    result = process_word(replace(request, **changes), lexicon, harvest)
    return result.model_copy(
        update={"source": processed.source, "yo_note": processed.yo_note, "yo_ambiguous": processed.yo_ambiguous}
    )


def change_stress(
    processed: ProcessedWord,
    index: int,
    provenance: ManualSource = "user",
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
    harvest: Optional[HarvestRepository] = None,
) -> ProcessedWord:
    """
    Re-transcribe with stress moved to `index`. Raises StressOnYoRejected or
    InvalidStressIndex and leaves `processed` untouched.
    """
    lexicon = lexicon if lexicon is not None else builtin_lexicon()
    snapshot = harvest.snapshot() if harvest is not None else None
    syllables = [s.cyrillic for s in processed.syllables]
    assignment = _change_stress(processed.stress, processed.word, syllables, index, provenance, lexicon, snapshot)
    return _rerun(processed, style, lexicon, harvest, stress=assignment.index, provenance=assignment.provenance)


def accept_corrected_stress(
    processed: ProcessedWord,
    index: int,
    harvest: Optional[HarvestRepository] = None,
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
) -> ProcessedWord:
    """
    Apply a stress index verified outside the pipeline and remember it in `harvest`.

    A failing repository is logged; the word is still re-transcribed.
    """
    lexicon = lexicon if lexicon is not None else builtin_lexicon()
    validate_stress_index(index, len(processed.syllables))
    if processed.stress.provenance == "ё-rule" and index != processed.stress.index:
        raise StressOnYoRejected(processed.word, processed.stress.index, index)
    if harvest is not None:
        try:
            harvest.add(processed.word, index, lexicon)
        except Exception as e:
            logger.warning("harvest repository rejected %r (%s)", processed.word, e)
    return _rerun(processed, style, lexicon, harvest, stress=index, provenance="harvested")


def cycle_yo(
    processed: ProcessedWord,
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
) -> ProcessedWord:
    """
    Swap е and ё in the stressed syllable and re-transcribe.
    """
    s = processed.stress.index
    if s < 0:
        raise YoToggleRejected(processed.word)
    parts = [syl.cyrillic for syl in processed.syllables]
    if "ё" in parts[s]:
        parts[s] = parts[s].replace("ё", "е")
        provenance: Provenance = "user"
    elif "е" in parts[s]:
        parts[s] = parts[s].replace("е", "ё")
        provenance = "ё-rule"
    else:
        raise YoToggleRejected(processed.word)
    return _rerun(processed, style, lexicon, None, word="".join(parts), provenance=provenance)


def lock_syllables(
    processed: ProcessedWord,
    locked: frozenset[int] | set[int],
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
) -> ProcessedWord:
    return _rerun(processed, style, lexicon, None, locked_syllables=frozenset(locked))


def _process_token(
    token: Token,
    style: StyleConfig,
    lexicon: Lexicon,
    harvest: Optional[HarvestRepository],
) -> ProcessedWord:
    merged = token.proclitic is not None or token.enclitic is not None
    if not merged:
        request = TranscriptionRequest(word=token.host, style=style, is_clitic=token.host in CLITICS)
        return process_word(request, lexicon, harvest)

    # Stress comes from the host; a proclitic shifts it by its own syllables.
    host = process_word(TranscriptionRequest(word=token.host, style=style), lexicon, harvest)
    shift = count_vowels(token.proclitic or "")
    index = host.stress.index + shift if host.stress.index >= 0 else -1
    request = TranscriptionRequest(
        word=(token.proclitic or "") + host.word + (token.enclitic or ""),
        stress=index,
        provenance=host.stress.provenance,
        style=style,
        yo_exceptions=False,
    )
    return process_word(request, lexicon, harvest).model_copy(
        update={"yo_note": host.yo_note, "yo_ambiguous": host.yo_ambiguous}
    )


def process_text(
    text: str,
    style: StyleConfig = DEFAULT_STYLE,
    lexicon: Optional[Lexicon] = None,
    harvest: Optional[HarvestRepository] = None,
) -> TextTranscription:
    """
    Transcribe every word of `text`, then apply cross-word voicing line by line.
    """
    lexicon = lexicon if lexicon is not None else builtin_lexicon()
    tokens = tokenize_text(text)
    words = [
        TextWord(
            text=t.text,
            processed=_process_token(t, style, lexicon, harvest),
            trailing_punctuation=t.trailing_punctuation,
            line_index=t.line_index,
            proclitic=t.proclitic,
            enclitic=t.enclitic,
        )
        for t in tokens
    ]

    out: list[TextWord] = []
    for line in TextTranscription(text=text, style=style.name, words=words).lines:
        adjusted = apply_sandhi([w.processed for w in line], [w.trailing_punctuation for w in line])
        out.extend(w.model_copy(update={"processed": p}) for w, p in zip(line, adjusted))
    return TextTranscription(text=text, style=style.name, words=out)
