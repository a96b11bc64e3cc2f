import logging

import pytest

from sung_russian_ipa.errors import InvalidStressIndex, StressOnYoRejected
from sung_russian_ipa.lexicon import Lexicon, builtin_lexicon
from sung_russian_ipa.schemas import StressAssignment
from sung_russian_ipa.stress import change_stress, resolve_stress, validate_stress_index
from sung_russian_ipa.syllabify import syllabify


def _resolve(word, lexicon=None, **kwargs):
    return resolve_stress(word, syllabify(word), lexicon or Lexicon(), **kwargs)


def test_corrections_outrank_dictionary():
    lexicon = builtin_lexicon().merged(Lexicon(stress={"вода": 0, "окно": 1}))
    assert _resolve("вода", lexicon) == StressAssignment(index=1, provenance="correction")
    assert _resolve("окно", lexicon) == StressAssignment(index=1, provenance="dictionary")


def test_harvested_after_dictionary():
    lexicon = Lexicon(stress={"окно": 1})
    assert _resolve("окно", lexicon, harvested={"окно": 0}).provenance == "dictionary"
    assert _resolve("окно", harvested={"окно": 1}) == StressAssignment(index=1, provenance="harvested")


def test_yo_rule_then_placeholder():
    assert _resolve("ёлочка") == StressAssignment(index=0, provenance="ё-rule")
    assert _resolve("берёза") == StressAssignment(index=1, provenance="ё-rule")
    placeholder = _resolve("окно")
    assert placeholder == StressAssignment(index=0, provenance="placeholder")
    assert placeholder.needs_attention


def test_out_of_range_entry_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        found = _resolve("окно", harvested={"окно": 5})
    assert found.provenance == "placeholder"
    assert "exceeds" in caplog.text


def test_lookup_ignores_case_and_punctuation():
    assert resolve_stress("«Вода»,", ["во", "да"], builtin_lexicon()).index == 1


def test_single_vowel_word_stressed_on_its_vowel():
    assert _resolve("дом").index == 0


def test_standalone_clitic_is_unstressed():
    assert _resolve("во", is_clitic=True) == StressAssignment(index=-1, provenance="clitic")


def test_validate_stress_index():
    validate_stress_index(-1, 2)
    validate_stress_index(1, 2)
    with pytest.raises(InvalidStressIndex) as e:
        validate_stress_index(2, 2)
    assert e.value.index == 2
    assert e.value.syllable_count == 2
    with pytest.raises(ValueError):
        validate_stress_index(-2, 2)


def test_change_stress_and_restore_provenance():
    lexicon = builtin_lexicon()
    syllables = syllabify("молоко")
    current = resolve_stress("молоко", syllables, lexicon)
    moved = change_stress(current, "молоко", syllables, 0, "user", lexicon)
    assert moved == StressAssignment(index=0, provenance="user")
    back = change_stress(moved, "молоко", syllables, 2, "composer", lexicon)
    assert back == StressAssignment(index=2, provenance="correction")


def test_change_stress_rejects_moving_off_yo():
    lexicon = Lexicon()
    syllables = syllabify("берёза")
    current = resolve_stress("берёза", syllables, lexicon)
    with pytest.raises(StressOnYoRejected) as e:
        change_stress(current, "берёза", syllables, 0, "user", lexicon)
    assert e.value.yo_index == 1
    assert change_stress(current, "берёза", syllables, 1, "user", lexicon).provenance == "ё-rule"


def test_change_stress_validates_index():
    lexicon = Lexicon()
    syllables = syllabify("окно")
    current = resolve_stress("окно", syllables, lexicon)
    with pytest.raises(InvalidStressIndex):
        change_stress(current, "окно", syllables, 2, "user", lexicon)
