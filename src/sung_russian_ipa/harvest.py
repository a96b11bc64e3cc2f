from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Optional, Protocol

from .lexicon import Lexicon, lookup_key


logger = logging.getLogger(__name__)


class HarvestRepository(Protocol):
    """
    Append-only store of externally verified stress indices.
    """

    def get(self, word: str) -> Optional[int]: ...

    def add(self, word: str, stress: int, lexicon: Optional[Lexicon] = None) -> bool: ...

    def snapshot(self) -> dict[str, int]: ...


class InMemoryHarvestCache:
    def __init__(self, entries: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._entries: dict[str, dict[str, Any]] = {k: dict(v) for k, v in (entries or {}).items()}
        self._lock = threading.Lock()

    def get(self, word: str) -> Optional[int]:
        with self._lock:
            entry = self._entries.get(lookup_key(word))
        return None if entry is None else int(entry["stress"])

    def add(self, word: str, stress: int, lexicon: Optional[Lexicon] = None) -> bool:
        """
        Record a verified stress. Words the lexicon already knows are skipped.
        """
        key = lookup_key(word)
        if lexicon is not None and lexicon.knows(key):
            return False
        now = time.time()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = {"stress": stress, "timestamp": now, "last_seen": now, "count": 1}
            else:
                entry.update(stress=stress, last_seen=now, count=int(entry.get("count", 0)) + 1)
        self._persist()
        return True

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {k: int(v["stress"]) for k, v in self._entries.items()}

    def export(self) -> dict[str, int]:
        return dict(sorted(self.snapshot().items()))

    def stats(self) -> dict[str, Any]:
        with self._lock:
            stamps = [float(v.get("timestamp", 0.0)) for v in self._entries.values()]
            total = len(self._entries)
        return {
            "total": total,
            "oldest": min(stamps) if stamps else None,
            "newest": max(stamps) if stamps else None,
        }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        self._persist()

    def _persist(self) -> None:
        pass


class JsonHarvestCache(InMemoryHarvestCache):
    """
    Harvest cache backed by a JSON file. I/O errors are logged, never raised.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("harvest cache %s unreadable, starting empty (%s)", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("harvest cache %s is not a mapping, starting empty", self.path)
            return {}
        out: dict[str, dict[str, Any]] = {}
        for word, entry in data.items():
            if isinstance(entry, dict) and isinstance(entry.get("stress"), int):
                out[str(word)] = entry
            else:
                logger.warning("harvest cache %s: skipping malformed entry %r", self.path, word)
        return out

    def _persist(self) -> None:
        with self._lock:
            payload = json.dumps(self._entries, ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.warning("could not write harvest cache %s (%s)", self.path, e)
