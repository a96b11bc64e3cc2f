from __future__ import annotations


class TranscriptionError(Exception):
    """
    Base class for caller-contract violations. Linguistic input never raises.
    """


class InvalidStressIndex(TranscriptionError, ValueError):
    def __init__(self, index: int, syllable_count: int) -> None:
        super().__init__(
            f"Stress index {index} outside [-1, {syllable_count - 1}] for a {syllable_count}-syllable word"
        )
        self.index = index
        self.syllable_count = syllable_count


class StressOnYoRejected(TranscriptionError):
    def __init__(self, word: str, yo_index: int, requested: int) -> None:
        super().__init__(f"'{word}': stress is fixed on the ё syllable {yo_index}, cannot move it to {requested}")
        self.word = word
        self.yo_index = yo_index
        self.requested = requested


class YoToggleRejected(TranscriptionError):
    def __init__(self, word: str) -> None:
        super().__init__(f"'{word}': stressed syllable has no е or ё to toggle")
        self.word = word
