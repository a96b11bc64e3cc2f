from __future__ import annotations

import argparse
from pathlib import Path
from time import perf_counter

from sung_russian_ipa.pipeline import process_text
from sung_russian_ipa.styles import get_style


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("folder")
    ap.add_argument("--style", default="sung-russian")
    args = ap.parse_args()

    folder = Path(args.folder)
    files = sorted(folder.glob("*.txt"))
    if not files:
        print("No .txt files found.")
        return 1

    style = get_style(args.style)
    t0 = perf_counter()
    words = 0
    for p in files:
        res = process_text(p.read_text(encoding="utf-8"), style=style)
        words += len(res.words)
        print(p.name, len(res.words), len(res.placeholder_words))
    dt = perf_counter() - t0
    print(f"Processed {len(files)} files ({words} words) in {dt:.2f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
