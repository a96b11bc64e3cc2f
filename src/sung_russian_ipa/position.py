from __future__ import annotations

from enum import Enum


class Position(str, Enum):
    STRESSED = "stressed"
    PRETONIC_IMMEDIATE = "pretonic-immediate"
    PRETONIC_REMOTE = "pretonic-remote"
    POSTTONIC_IMMEDIATE = "posttonic-immediate"
    POSTTONIC_REMOTE = "posttonic-remote"
    UNSTRESSED = "unstressed"


def position(i: int, stress: int, n: int) -> Position:
    """
    Positional label of syllable `i` in an `n`-syllable word stressed on `stress` (-1 = none).
    """
    if not 0 <= i < n:
        raise ValueError(f"Syllable index {i} outside a {n}-syllable word")
    if stress == -1:
        return Position.UNSTRESSED
    if i == stress:
        return Position.STRESSED
    if i == stress - 1:
        return Position.PRETONIC_IMMEDIATE
    if i < stress:
        return Position.PRETONIC_REMOTE
    if i == stress + 1:
        return Position.POSTTONIC_IMMEDIATE
    return Position.POSTTONIC_REMOTE
