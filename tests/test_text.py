from sung_russian_ipa.text import split_words, tokenize_text


def _joined(token):
    return (token.proclitic or "") + token.host + (token.enclitic or "")


def test_split_words_attaches_punctuation():
    assert split_words("Ну, что ж — пора!") == [("Ну", ","), ("что", ""), ("ж", "—"), ("пора", "!")]


def test_hyphen_splits_compounds():
    assert split_words("кто-то") == [("кто", ""), ("то", "")]


def test_combining_marks_stay_in_word():
    assert split_words("вода́ ле́с") == [("вода́", ""), ("ле́с", "")]


def test_leading_punctuation_is_dropped():
    assert split_words("«Вода»") == [("Вода", "»")]


def test_proclitic_merges_with_next_word():
    tokens = tokenize_text("В лесу родилась")
    assert [_joined(t) for t in tokens] == ["влесу", "родилась"]
    assert tokens[0].proclitic == "в"
    assert tokens[0].text == "В лесу"


def test_proclitic_with_punctuation_or_at_line_end_stays_alone():
    assert [_joined(t) for t in tokenize_text("пойду в")] == ["пойду", "в"]
    assert [_joined(t) for t in tokenize_text("с, но")] == ["с", "но"]


def test_enclitic_merges_with_previous_word():
    tokens = tokenize_text("Ну, что ж — пора!")
    assert [_joined(t) for t in tokens] == ["ну", "чтож", "пора"]
    assert tokens[1].enclitic == "ж"
    assert tokens[1].trailing_punctuation == "—"
    assert tokens[1].text == "что ж"


def test_enclitic_after_punctuation_stays_alone():
    tokens = tokenize_text("Он, же")
    assert [_joined(t) for t in tokens] == ["он", "же"]


def test_only_one_enclitic_per_host():
    tokens = tokenize_text("он же ли")
    assert [_joined(t) for t in tokens] == ["онже", "ли"]


def test_line_indices():
    tokens = tokenize_text("вода\n\nбрат был")
    assert [t.line_index for t in tokens] == [0, 2, 2]
