from __future__ import annotations

from .pipeline import TranscriptionRequest, process_text, process_word, transcribe
from .styles import STYLE_PRESETS, StyleConfig, get_style

__all__ = [
    "STYLE_PRESETS",
    "StyleConfig",
    "TranscriptionRequest",
    "get_style",
    "process_text",
    "process_word",
    "transcribe",
]

__version__ = "0.1.0"
