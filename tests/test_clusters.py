import pytest

from sung_russian_ipa.clusters import LexicalCondition, match_cluster, plan_clusters


def _plan(word):
    return {i: m.ipa for i, m in plan_clusters(word).items()}


def test_chto_only_in_listed_words():
    assert match_cluster("что", 0).ipa == "ʃt"
    assert match_cluster("ничто", 2).ipa == "ʃt"
    assert match_cluster("чтобы", 0).ipa == "ʃt"
    assert match_cluster("нечто", 2) is None


def test_chn_as_shn_in_closed_list_and_skuchn_stem():
    assert match_cluster("конечно", 4).ipa == "ʃn"
    assert match_cluster("скучно", 3).ipa == "ʃn"
    assert match_cluster("скучный", 3).ipa == "ʃn"
    assert match_cluster("вечно", 2) is None


def test_gk_stem_uses_soft_variant_before_softener():
    assert match_cluster("мягко", 2).ipa == "xk"
    assert match_cluster("мягкий", 2).ipa == "xʲkʲ"
    assert match_cluster("лёгкий", 2).ipa == "xʲkʲ"


def test_gch_consumes_only_g():
    m = match_cluster("мягче", 2)
    assert m.ipa == "x"
    assert m.length == 1
    assert plan_clusters("мягче").keys() == {2}


def test_silent_consonants():
    assert match_cluster("честно", 2).ipa == "sn"
    assert match_cluster("поздно", 2).ipa == "zn"
    assert match_cluster("сердце", 2).ipa == "rts"
    assert match_cluster("солнце", 2).ipa == "nts"
    assert match_cluster("чувство", 2).ipa == "stv"


def test_bezdna_keeps_its_d():
    assert match_cluster("бездна", 2) is None


def test_genitive_g_reads_v():
    assert match_cluster("его", 1).ipa == "v"
    assert match_cluster("доброго", 5).ipa == "v"
    assert match_cluster("много", 3) is None
    assert match_cluster("дорого", 4) is None


def test_genitive_g_only_inside_the_ending():
    assert match_cluster("город", 0) is None
    assert match_cluster("ого", 1).ipa == "v"


def test_longest_pattern_wins():
    m = match_cluster("рассчитать", 2)
    assert m.rule.pattern == "ссч"
    assert m.ipa == "ʃʲʃʲ"
    assert _plan("рассчитать") == {2: "ʃʲʃʲ"}


def test_reflexive_clusters():
    assert _plan("купаться") == {4: "tːsʌ"}
    assert _plan("боится") == {3: "tːsʌ"}
    assert _plan("бойся") == {3: "sʌ"}
    assert _plan("сяду") == {}


def test_sibilant_assimilation():
    assert match_cluster("сжигать", 0).ipa == "ʒː"
    assert match_cluster("счастье", 0).ipa == "ʃʲʃʲ"
    assert match_cluster("младший", 3).ipa == "tʃː"
    assert match_cluster("подчас", 2).ipa == "tʲʃʲ"


def test_offset_past_end():
    assert match_cluster("что", 3) is None


def test_unknown_condition_kind_raises():
    with pytest.raises(ValueError):
        LexicalCondition("suffix", ("ого",)).holds("его", 1, "г")  # type: ignore[arg-type]
