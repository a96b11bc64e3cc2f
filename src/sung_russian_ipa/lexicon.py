from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from .normalize import normalize


logger = logging.getLogger(__name__)

_KEY_PUNCTUATION = re.compile(r"[.,!?;:\"“”'‘’„‚«»—–\-()…\s]")


@dataclass(frozen=True)
class YoException:
    actual_form: str
    stress: int
    note: str = ""
    ambiguous: bool = False


@dataclass(frozen=True)
class PureException:
    ipa: str
    stress: int
    note: str = ""

    @property
    def syllables(self) -> list[str]:
        return self.ipa.split(".")


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class Lexicon:
    """
    Read-only lookup tables shared by every transcription call.
    """

    stress: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    corrections: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    yo_exceptions: Mapping[str, YoException] = field(default_factory=lambda: _frozen({}))
    exceptions: Mapping[str, PureException] = field(default_factory=lambda: _frozen({}))

    def knows(self, key: str) -> bool:
        return key in self.stress or key in self.corrections

    def merged(self, other: "Lexicon") -> "Lexicon":
        # Entries from `other` win.
        return Lexicon(
            stress=_frozen({**self.stress, **other.stress}),
            corrections=_frozen({**self.corrections, **other.corrections}),
            yo_exceptions=_frozen({**self.yo_exceptions, **other.yo_exceptions}),
            exceptions=_frozen({**self.exceptions, **other.exceptions}),
        )


def lookup_key(word: str) -> str:
    return _KEY_PUNCTUATION.sub("", normalize(word))


def load_mapping(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    if p.suffix.lower() in {".yml", ".yaml"}:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    elif p.suffix.lower() == ".json":
        data = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError("Dictionary must be .yml/.yaml or .json")
    if not isinstance(data, dict):
        raise ValueError(f"{p.name}: expected a mapping of word -> entry")
    return data


def parse_stress_table(data: Mapping[str, Any], source: str = "<memory>") -> dict[str, int]:
    out: dict[str, int] = {}
    for word, value in data.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("%s: skipping %r, stress must be a non-negative integer (got %r)", source, word, value)
            continue
        out[lookup_key(str(word))] = value
    return out


def parse_yo_exceptions(data: Mapping[str, Any], source: str = "<memory>") -> dict[str, YoException]:
    out: dict[str, YoException] = {}
    for word, entry in data.items():
        try:
            out[lookup_key(str(word))] = YoException(
                actual_form=normalize(str(entry["actual_form"])),
                stress=int(entry["stress"]),
                note=str(entry.get("note", "")),
                ambiguous=bool(entry.get("ambiguous", False)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("%s: skipping malformed ё-exception %r (%s)", source, word, e)
    return out


def parse_exceptions(data: Mapping[str, Any], source: str = "<memory>") -> dict[str, PureException]:
    out: dict[str, PureException] = {}
    for word, entry in data.items():
        try:
            out[lookup_key(str(word))] = PureException(
                ipa=str(entry["ipa"]),
                stress=int(entry["stress"]),
                note=str(entry.get("note", "")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("%s: skipping malformed exception %r (%s)", source, word, e)
    return out


def _bundled(name: str) -> dict[str, Any]:
    text = resources.files("sung_russian_ipa").joinpath("data", name).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


@lru_cache(maxsize=1)
def builtin_lexicon() -> Lexicon:
    """
    Tables bundled with the package. There is no bundled general stress dictionary.
    """
    return Lexicon(
        corrections=_frozen(parse_stress_table(_bundled("stress_corrections.yaml"), "stress_corrections.yaml")),
        yo_exceptions=_frozen(parse_yo_exceptions(_bundled("yo_exceptions.yaml"), "yo_exceptions.yaml")),
        exceptions=_frozen(parse_exceptions(_bundled("exceptions.yaml"), "exceptions.yaml")),
    )


def load_lexicon(
    stress_path: Optional[str | Path] = None,
    corrections_path: Optional[str | Path] = None,
    yo_exceptions_path: Optional[str | Path] = None,
    exceptions_path: Optional[str | Path] = None,
    include_builtin: bool = True,
) -> Lexicon:
    """
    Build a Lexicon from YAML/JSON files, layered over the bundled tables.
    """
    extra = Lexicon(
        stress=_frozen(parse_stress_table(load_mapping(stress_path), str(stress_path)) if stress_path else {}),
        corrections=_frozen(
            parse_stress_table(load_mapping(corrections_path), str(corrections_path)) if corrections_path else {}
        ),
        yo_exceptions=_frozen(
            parse_yo_exceptions(load_mapping(yo_exceptions_path), str(yo_exceptions_path))
            if yo_exceptions_path
            else {}
        ),
        exceptions=_frozen(
            parse_exceptions(load_mapping(exceptions_path), str(exceptions_path)) if exceptions_path else {}
        ),
    )
    return builtin_lexicon().merged(extra) if include_builtin else extra
