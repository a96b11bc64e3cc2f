from __future__ import annotations

import unicodedata
from dataclasses import dataclass, replace
from typing import Optional

from .lexicon import lookup_key


PROCLITICS = frozenset({"в", "к", "с"})
ENCLITICS = frozenset({"ли", "ль", "же", "ж", "бы", "б"})


@dataclass(frozen=True)
class Token:
    text: str
    host: str
    trailing_punctuation: str = ""
    line_index: int = 0
    proclitic: Optional[str] = None
    enclitic: Optional[str] = None


def _is_word_char(ch: str) -> bool:
    # Combining marks (stress accents, diaeresis) stay inside the word.
    return ch.isalpha() or unicodedata.category(ch) == "Mn"


def split_words(line: str) -> list[tuple[str, str]]:
    """
    (word, trailing punctuation) pairs. Hyphens split compounds without punctuation.
    """
    words: list[tuple[str, str]] = []
    buff: list[str] = []
    for ch in line:
        if _is_word_char(ch):
            buff.append(ch)
            continue
        if buff:
            words.append(("".join(buff), ""))
            buff = []
        if words and not ch.isspace() and ch != "-":
            word, punct = words[-1]
            words[-1] = (word, punct + ch)
    if buff:
        words.append(("".join(buff), ""))
    return words


def tokenize_text(text: str) -> list[Token]:
    """
    Words of `text` line by line, with vowelless prepositions and enclitic
    particles merged into their host word.
    """
    tokens: list[Token] = []
    for line_index, line in enumerate(text.splitlines()):
        raw = split_words(line)
        line_tokens: list[Token] = []
        i = 0
        while i < len(raw):
            word, punct = raw[i]
            key = lookup_key(word)
            if key in PROCLITICS and not punct and i + 1 < len(raw):
                host, host_punct = raw[i + 1]
                line_tokens.append(
                    Token(
                        text=f"{word} {host}",
                        host=lookup_key(host),
                        trailing_punctuation=host_punct,
                        line_index=line_index,
                        proclitic=key,
                    )
                )
                i += 2
                continue
            prev = line_tokens[-1] if line_tokens else None
            if key in ENCLITICS and prev is not None and not prev.trailing_punctuation and prev.enclitic is None:
                line_tokens[-1] = replace(
                    prev, text=f"{prev.text} {word}", enclitic=key, trailing_punctuation=punct
                )
                i += 1
                continue
            line_tokens.append(Token(text=word, host=key, trailing_punctuation=punct, line_index=line_index))
            i += 1
        tokens.extend(line_tokens)
    return tokens
