from __future__ import annotations

import argparse
from pathlib import Path

from sung_russian_ipa.cli import transcribe


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("text_file")
    ap.add_argument("--out-dir", default="outputs")
    ap.add_argument("--style", default="sung-russian")
    ap.add_argument("--stress-dict", default=None)
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    stem = Path(args.text_file).stem
    transcribe(
        text=None,
        file=args.text_file,
        style=args.style,
        stress_dict=args.stress_dict,
        corrections=None,
        yo_exceptions=None,
        exceptions=None,
        harvest=None,
        syllables=True,
        out_json=str(out_dir / f"{stem}.json"),
        out_txt=str(out_dir / f"{stem}.txt"),
        log_level=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
