from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from .alphabet import SOFTENERS


logger = logging.getLogger(__name__)

ConditionKind = Literal["stem", "without-stem", "word", "not-word", "word-prefix", "ending"]


@dataclass(frozen=True)
class LexicalCondition:
    kind: ConditionKind
    values: tuple[str, ...]

    def holds(self, word: str, offset: int, pattern: str) -> bool:
        if self.kind == "stem":
            return any(v in word for v in self.values)
        if self.kind == "without-stem":
            return not any(v in word for v in self.values)
        if self.kind == "word":
            return word in self.values
        if self.kind == "not-word":
            return word not in self.values
        if self.kind == "word-prefix":
            return any(word.startswith(v) for v in self.values)
        if self.kind == "ending":
            # The pattern must sit at its place inside a word-final ending.
            for ending in self.values:
                if word.endswith(ending) and offset == len(word) - len(ending) + ending.index(pattern):
                    return True
            return False
        raise ValueError(f"Unknown condition kind: {self.kind}")


@dataclass(frozen=True)
class ClusterRule:
    pattern: str
    ipa: str
    soft_ipa: Optional[str] = None  # used when the next segment is soft
    consumes: Optional[int] = None
    conditions: tuple[LexicalCondition, ...] = ()
    note: str = ""

    @property
    def length(self) -> int:
        return self.consumes if self.consumes is not None else len(self.pattern)


@dataclass(frozen=True)
class ClusterMatch:
    offset: int
    length: int
    ipa: str
    rule: ClusterRule


def _rules(patterns: str, ipa: str, **kwargs) -> list[ClusterRule]:
    return [ClusterRule(p, ipa, **kwargs) for p in patterns.split()]


# Ordered by priority; among matches at one offset the longest pattern wins and
# ties go to the earlier rule.
CLUSTER_RULES: tuple[ClusterRule, ...] = tuple(
    [
        *_rules("сш зш", "ʃː", note="s/z + ʃ assimilate to long ʃ"),
        *_rules("зж сж", "ʒː", note="s/z + ʒ assimilate to long ʒ"),
        *_rules("сч зч жч", "ʃʲʃʲ", note="sibilant + ч read as щ"),
        *_rules("стч здч ссч", "ʃʲʃʲ", note="sibilant cluster + ч read as щ"),
        *_rules("тш дш чш", "tʃː", note="stop + ш"),
        *_rules("дж тж", "dʒː", note="stop + ж"),
        *_rules("тч дч", "tʲʃʲ", note="stop + ч"),
        *_rules("тц дц", "tːs", note="stop + ц"),
        ClusterRule("чн", "ʃn", conditions=(LexicalCondition("stem", ("скучн",)),), note="скучно family"),
        ClusterRule(
            "чн",
            "ʃn",
            conditions=(
                LexicalCondition(
                    "word",
                    ("конечно", "нарочно", "яичница", "яичницу", "скворечник", "пустячный", "прачечная"),
                ),
            ),
            note="closed list of чн as ʃn",
        ),
        ClusterRule("чт", "ʃt", conditions=(LexicalCondition("word", ("что", "ничто")),), note="что"),
        ClusterRule("чт", "ʃt", conditions=(LexicalCondition("word-prefix", ("чтоб",)),), note="чтобы"),
        ClusterRule(
            "гк",
            "xk",
            soft_ipa="xʲkʲ",
            conditions=(LexicalCondition("stem", ("мягк", "лёгк", "легк")),),
            note="мягк-/лёгк- stems",
        ),
        ClusterRule(
            "гч",
            "x",
            consumes=1,
            conditions=(LexicalCondition("stem", ("мягч", "лёгч", "легч")),),
            note="мягч-/лёгч- stems",
        ),
        ClusterRule("стн", "sn", soft_ipa="sɲ", note="silent т"),
        ClusterRule(
            "здн",
            "zn",
            soft_ipa="zɲ",
            conditions=(LexicalCondition("without-stem", ("бездн",)),),
            note="silent д",
        ),
        ClusterRule("рдц", "rts", note="silent д"),
        ClusterRule("лнц", "nts", note="silent л"),
        ClusterRule("вств", "stv", note="silent first в"),
        *_rules("ться тся дься дся", "tːsʌ", note="reflexive infinitive / 3rd person"),
        ClusterRule("ся", "sʌ", conditions=(LexicalCondition("ending", ("ся",)),), note="reflexive -ся"),
        ClusterRule(
            "г",
            "v",
            conditions=(
                LexicalCondition("ending", ("ого", "его")),
                LexicalCondition(
                    "not-word",
                    ("много", "немного", "строго", "нестрого", "дорого", "недорого", "убого", "полого", "отлого"),
                ),
            ),
            note="genitive -ого/-его",
        ),
    ]
)

_BY_FIRST: dict[str, list[tuple[int, ClusterRule]]] = {}
for _rank, _rule in enumerate(CLUSTER_RULES):
    _BY_FIRST.setdefault(_rule.pattern[0], []).append((_rank, _rule))


def match_cluster(word: str, offset: int) -> ClusterMatch | None:
    """
    Longest cluster rule matching at `offset` whose lexical conditions hold.
    """
    if offset >= len(word):
        return None
    best: tuple[int, int, ClusterRule] | None = None
    for rank, rule in _BY_FIRST.get(word[offset], ()):
        if not word.startswith(rule.pattern, offset):
            continue
        if not all(c.holds(word, offset, rule.pattern) for c in rule.conditions):
            logger.debug("cluster %r at %d in %r: condition unmet, using default rules", rule.pattern, offset, word)
            continue
        key = (len(rule.pattern), -rank)
        if best is None or key > best[:2]:
            best = (key[0], key[1], rule)
    if best is None:
        return None
    rule = best[2]
    after = offset + len(rule.pattern)
    ipa = rule.ipa
    if rule.soft_ipa is not None and after < len(word) and word[after] in SOFTENERS:
        ipa = rule.soft_ipa
    return ClusterMatch(offset=offset, length=rule.length, ipa=ipa, rule=rule)


def plan_clusters(word: str) -> dict[int, ClusterMatch]:
    """
    Scan a word left to right; a match consumes its length before scanning resumes.
    """
    out: dict[int, ClusterMatch] = {}
    i = 0
    while i < len(word):
        m = match_cluster(word, i)
        if m is None:
            i += 1
            continue
        out[i] = m
        i += m.length
    return out
