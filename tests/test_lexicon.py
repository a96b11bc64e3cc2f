import json
import logging

import pytest

from sung_russian_ipa.lexicon import (
    builtin_lexicon,
    load_lexicon,
    load_mapping,
    lookup_key,
    parse_exceptions,
    parse_stress_table,
    parse_yo_exceptions,
)


def test_lookup_key():
    assert lookup_key("«Вода»,") == "вода"
    assert lookup_key("Ёлка!") == "ёлка"
    assert lookup_key("вода́") == "вода"


def test_load_yaml_and_json(tmp_path):
    y = tmp_path / "stress.yaml"
    y.write_text("окно: 1\nДорога: 1\n", encoding="utf-8")
    j = tmp_path / "stress.json"
    j.write_text(json.dumps({"окно": 1}, ensure_ascii=False), encoding="utf-8")
    assert load_mapping(y) == {"окно": 1, "Дорога": 1}
    assert load_mapping(j) == {"окно": 1}
    assert dict(load_lexicon(stress_path=y, include_builtin=False).stress) == {"окно": 1, "дорога": 1}


def test_load_mapping_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_mapping(tmp_path / "missing.yaml")
    txt = tmp_path / "stress.txt"
    txt.write_text("окно 1", encoding="utf-8")
    with pytest.raises(ValueError):
        load_mapping(txt)
    lst = tmp_path / "list.yaml"
    lst.write_text("- окно\n- вода\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_mapping(lst)


def test_empty_yaml_is_empty_mapping(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_mapping(p) == {}


def test_malformed_stress_entries_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        table = parse_stress_table({"вода": "x", "окно": 1, "лес": -1, "да": True})
    assert table == {"окно": 1}
    assert caplog.text.count("skipping") == 3


def test_malformed_yo_and_exception_entries_are_skipped():
    yo = parse_yo_exceptions({"ее": {"actual_form": "её", "stress": 1}, "нем": {"stress": 0}, "мое": "моё"})
    assert list(yo) == ["ее"]
    assert yo["ее"].actual_form == "её"
    assert not yo["ее"].ambiguous
    exc = parse_exceptions({"ага": {"ipa": "ɑ.hɑ", "stress": 1}, "ангел": {"ipa": "ɑn.ɡʲɪɫ"}})
    assert list(exc) == ["ага"]
    assert exc["ага"].syllables == ["ɑ", "hɑ"]


def test_builtin_tables():
    lexicon = builtin_lexicon()
    assert lexicon.corrections["молоко"] == 2
    assert lexicon.yo_exceptions["все"].ambiguous
    assert lexicon.exceptions["ангел"].stress == 0
    assert not lexicon.stress
    assert lexicon.knows("вода")
    assert not lexicon.knows("окно")


def test_user_files_layer_over_builtin(tmp_path):
    corrections = tmp_path / "corrections.yaml"
    corrections.write_text("вода: 0\n", encoding="utf-8")
    exceptions = tmp_path / "exceptions.yaml"
    exceptions.write_text('окно: {ipa: "ɑk.no", stress: 1}\n', encoding="utf-8")
    lexicon = load_lexicon(corrections_path=corrections, exceptions_path=exceptions)
    assert lexicon.corrections["вода"] == 0
    assert lexicon.corrections["молоко"] == 2
    assert "окно" in lexicon.exceptions
    assert "ангел" in lexicon.exceptions
    assert builtin_lexicon().corrections["вода"] == 1
