from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .errors import TranscriptionError
from .harvest import JsonHarvestCache
from .lexicon import Lexicon, builtin_lexicon, load_lexicon
from .pipeline import TranscriptionRequest, process_text, process_word
from .report import format_syllables, write_json, write_text
from .styles import STYLE_PRESETS, StyleConfig, get_style


app = typer.Typer(
    add_completion=False,
    help="Russian text to IPA for classical singing.",
    pretty_exceptions_show_locals=False,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _configure_logging(level: Optional[str]) -> None:
    """
    Log to stderr (default level from `SUNG_RUSSIAN_IPA_LOG_LEVEL`, else WARNING).
    """
    import os

    name = (level or os.environ.get("SUNG_RUSSIAN_IPA_LOG_LEVEL", "") or "WARNING").strip().upper()
    if name not in _LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of {', '.join(sorted(_LOG_LEVELS))}")
    logging.basicConfig(level=name, format="%(levelname)s %(name)s: %(message)s")


def _ensure_parent(path: str | Path | None) -> None:
    if not path:
        return
    p = Path(path)
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)


def _style(name: str) -> StyleConfig:
    try:
        return get_style(name)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _lexicon(
    stress_dict: Optional[str],
    corrections: Optional[str],
    yo_exceptions: Optional[str],
    exceptions: Optional[str],
) -> Lexicon:
    try:
        return load_lexicon(stress_dict, corrections, yo_exceptions, exceptions)
    except FileNotFoundError as e:
        raise typer.BadParameter(f"file not found: {e}") from e
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command()
def doctor() -> None:
    """
    Print an environment diagnostic and the size of the bundled tables.
    """
    import platform
    import sys

    typer.echo(f"python: {sys.version.split()[0]}")
    typer.echo(f"platform: {platform.platform()}")

    for module in ("pydantic", "yaml", "typer"):
        try:
            mod = __import__(module)
            typer.echo(f"{module}: {getattr(mod, '__version__', '?')}")
        except Exception as e:
            typer.echo(f"{module}: not importable ({type(e).__name__})")

    lex = builtin_lexicon()
    typer.echo(f"stress corrections: {len(lex.corrections)}")
    typer.echo(f"ё-exceptions: {len(lex.yo_exceptions)}")
    typer.echo(f"pure exceptions: {len(lex.exceptions)}")


@app.command()
def styles() -> None:
    """
    List the style presets.
    """
    for name, s in STYLE_PRESETS.items():
        typer.echo(
            f"{name}: reduction={s.vowel_reduction} щ={s.shcha_notation} "
            f"palatal-n={s.palatal_n_notation} regressive={s.regressive_palatalization}"
        )
        typer.echo(f"  {s.description}")


@app.command()
def word(
    text: str = typer.Argument(..., help="Cyrillic word."),
    stress: Optional[int] = typer.Option(None, "--stress", help="0-based stressed syllable (-1 = none)."),
    lock: Optional[list[int]] = typer.Option(None, "--lock", help="Syllable to sing unreduced (repeatable)."),
    clitic: bool = typer.Option(False, "--clitic", help="Treat as an unstressed function word."),
    style: str = typer.Option("sung-russian", "--style", help="Style preset (see `styles`)."),
    as_json: bool = typer.Option(False, "--json", help="Print the full record as JSON."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    _configure_logging(log_level)
    request = TranscriptionRequest(
        word=text,
        stress=stress,
        locked_syllables=frozenset(lock or []),
        is_clitic=clitic,
        style=_style(style),
    )
    try:
        result = process_word(request)
    except (TranscriptionError, ValueError) as e:
        raise typer.BadParameter(str(e)) from e

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    typer.echo(result.ipa)
    typer.echo(f"stress: {result.stress.index} ({result.stress.provenance})")
    if result.yo_note:
        typer.echo(f"ё: {result.word} ({result.yo_note})")


@app.command()
def transcribe(
    text: Optional[str] = typer.Argument(None, help="Text to transcribe (or use --file)."),
    file: Optional[str] = typer.Option(None, "--file", help="Read the text from a UTF-8 file."),
    style: str = typer.Option("sung-russian", "--style", help="Style preset (see `styles`)."),
    stress_dict: Optional[str] = typer.Option(None, "--stress-dict", help="YAML/JSON word->stress index."),
    corrections: Optional[str] = typer.Option(None, "--corrections", help="YAML/JSON stress corrections."),
    yo_exceptions: Optional[str] = typer.Option(None, "--yo-exceptions", help="YAML/JSON ё-exception table."),
    exceptions: Optional[str] = typer.Option(None, "--exceptions", help="YAML/JSON pure-exception table."),
    harvest: Optional[str] = typer.Option(None, "--harvest", help="JSON harvested-stress cache."),
    syllables: bool = typer.Option(False, "--syllables", help="Show syllables and stress marks."),
    out_json: Optional[str] = typer.Option(None, "--out-json", help="Write JSON output."),
    out_txt: Optional[str] = typer.Option(None, "--out-txt", help="Write IPA text output."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    _configure_logging(log_level)
    if (text is None) == (file is None):
        raise typer.BadParameter("give either TEXT or --file")
    if file is not None:
        if not Path(file).exists():
            raise typer.BadParameter(f"file not found: {file}")
        text = Path(file).read_text(encoding="utf-8")

    lexicon = _lexicon(stress_dict, corrections, yo_exceptions, exceptions)
    cache = JsonHarvestCache(harvest) if harvest else None
    result = process_text(text or "", style=_style(style), lexicon=lexicon, harvest=cache)

    if out_json:
        _ensure_parent(out_json)
        write_json(result, out_json)
    if out_txt:
        _ensure_parent(out_txt)
        write_text(result, out_txt, syllables=syllables)
    if not out_json and not out_txt:
        typer.echo(format_syllables(result) if syllables else result.ipa_text)

    unresolved = result.placeholder_words
    if unresolved:
        typer.echo(f"stress unverified: {', '.join(unresolved)}", err=True)


@app.command()
def batch(
    folder: str = typer.Argument(..., help="Folder of .txt files."),
    out_dir: str = typer.Option("outputs", "--out-dir", help="Output directory."),
    style: str = typer.Option("sung-russian", "--style", help="Style preset (see `styles`)."),
    stress_dict: Optional[str] = typer.Option(None, "--stress-dict", help="YAML/JSON word->stress index."),
    harvest: Optional[str] = typer.Option(None, "--harvest", help="JSON harvested-stress cache."),
) -> None:
    _configure_logging(None)
    folder_p = Path(folder)
    if not folder_p.is_dir():
        raise typer.BadParameter(f"not a folder: {folder}")
    out_p = Path(out_dir)
    out_p.mkdir(parents=True, exist_ok=True)

    style_cfg = _style(style)
    lexicon = _lexicon(stress_dict, None, None, None)
    cache = JsonHarvestCache(harvest) if harvest else None
    for path in sorted(folder_p.glob("*.txt")):
        result = process_text(path.read_text(encoding="utf-8"), style=style_cfg, lexicon=lexicon, harvest=cache)
        write_json(result, out_p / f"{path.stem}.json")
        write_text(result, out_p / f"{path.stem}.ipa.txt")
        typer.echo(f"Wrote {out_p / path.stem}.json")
