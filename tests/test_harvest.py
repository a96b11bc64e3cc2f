import json

from sung_russian_ipa.harvest import InMemoryHarvestCache, JsonHarvestCache
from sung_russian_ipa.lexicon import builtin_lexicon


def test_add_and_get():
    cache = InMemoryHarvestCache()
    assert cache.get("окно") is None
    assert cache.add("Окно", 1)
    assert cache.get("окно") == 1
    assert cache.snapshot() == {"окно": 1}


def test_repeat_add_updates_stress_and_count():
    cache = InMemoryHarvestCache()
    cache.add("окно", 0)
    cache.add("окно", 1)
    assert cache.get("окно") == 1
    assert cache._entries["окно"]["count"] == 2


def test_words_known_to_lexicon_are_not_harvested():
    cache = InMemoryHarvestCache()
    assert not cache.add("вода", 1, builtin_lexicon())
    assert cache.snapshot() == {}


def test_export_stats_clear():
    cache = InMemoryHarvestCache()
    assert cache.stats() == {"total": 0, "oldest": None, "newest": None}
    cache.add("окно", 1)
    cache.add("дорога", 1)
    assert list(cache.export()) == ["дорога", "окно"]
    stats = cache.stats()
    assert stats["total"] == 2
    assert stats["oldest"] <= stats["newest"]
    cache.clear()
    assert cache.snapshot() == {}


def test_json_cache_persists(tmp_path):
    path = tmp_path / "cache" / "harvest.json"
    cache = JsonHarvestCache(path)
    cache.add("окно", 1)
    assert json.loads(path.read_text(encoding="utf-8"))["окно"]["stress"] == 1
    assert JsonHarvestCache(path).get("окно") == 1


def test_json_cache_tolerates_bad_files(tmp_path):
    path = tmp_path / "harvest.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonHarvestCache(path).snapshot() == {}
    path.write_text(json.dumps({"окно": {"stress": 1}, "вода": {"stress": "x"}, "лес": 3}), encoding="utf-8")
    assert JsonHarvestCache(path).snapshot() == {"окно": 1}


def test_seed_entries_are_copied():
    seed = {"окно": {"stress": 0, "timestamp": 1.0, "last_seen": 1.0, "count": 1}}
    cache = InMemoryHarvestCache(seed)
    cache.add("окно", 1)
    assert seed["окно"] == {"stress": 0, "timestamp": 1.0, "last_seen": 1.0, "count": 1}
    assert cache.get("окно") == 1
