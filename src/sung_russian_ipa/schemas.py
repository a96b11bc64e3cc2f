from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Provenance = Literal[
    "correction",
    "dictionary",
    "harvested",
    "ё-rule",
    "placeholder",
    "user",
    "composer",
    "clitic",
]


class StressAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    provenance: Provenance

    @property
    def needs_attention(self) -> bool:
        return self.provenance == "placeholder"


class SandhiChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    trigger: str


class TranscribedSyllable(BaseModel):
    model_config = ConfigDict(frozen=True)

    cyrillic: str
    ipa: str
    is_stressed: bool = False
    sandhi: Optional[SandhiChange] = None


class ProcessedWord(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    word: str
    syllables: list[TranscribedSyllable]
    stress: StressAssignment
    locked_syllables: list[int] = Field(default_factory=list)
    is_clitic: bool = False
    style: str = "sung-russian"
    exception: Optional[str] = None
    yo_note: Optional[str] = None
    yo_ambiguous: bool = False

    @property
    def ipa(self) -> str:
        return " ".join(s.ipa for s in self.syllables)


class TextWord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    processed: ProcessedWord
    trailing_punctuation: str = ""
    line_index: int = 0
    proclitic: Optional[str] = None
    enclitic: Optional[str] = None


class TextTranscription(BaseModel):
    text: str
    style: str
    words: list[TextWord] = Field(default_factory=list)

    @property
    def lines(self) -> list[list[TextWord]]:
        out: list[list[TextWord]] = []
        for w in self.words:
            while len(out) <= w.line_index:
                out.append([])
            out[w.line_index].append(w)
        return out

    @property
    def ipa_text(self) -> str:
        return "\n".join(
            " ".join(w.processed.ipa.replace(" ", "") + w.trailing_punctuation for w in line) for line in self.lines
        )

    @property
    def placeholder_words(self) -> list[str]:
        return [w.text for w in self.words if w.processed.stress.needs_attention]
