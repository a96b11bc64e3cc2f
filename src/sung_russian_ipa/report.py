from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from .schemas import TextTranscription


def write_json(result: BaseModel, path: str | Path) -> None:
    Path(path).write_text(result.model_dump_json(indent=2), encoding="utf-8")


def format_syllables(result: TextTranscription) -> str:
    """
    One line per text line: each word as its syllables joined by dots, stressed one marked.
    """
    lines = []
    for line in result.lines:
        cells = []
        for w in line:
            cells.append(
                ".".join(("ˈ" if s.is_stressed else "") + s.ipa for s in w.processed.syllables)
                + w.trailing_punctuation
            )
        lines.append(" ".join(cells))
    return "\n".join(lines)


def write_text(result: TextTranscription, path: str | Path, syllables: bool = False) -> None:
    body = format_syllables(result) if syllables else result.ipa_text
    Path(path).write_text(body + "\n", encoding="utf-8")
