# app/calculation.py
from dataclasses import dataclass


@dataclass(frozen=True)
class SessionStats:
    wpm: float
    raw_wpm: float
    accuracy: float
    correct: int
    incorrect: int


def wpm(chars_typed: int, mistakes: int, seconds: float) -> float:
    """
    WPM from correctly typed characters only.
    WPM = ((typed - mistakes) / 5) * (60 / seconds)
    """
    if seconds <= 0:
        return 0.0
    return ((chars_typed - mistakes) / 5.0) * (60.0 / seconds)


def raw_wpm(chars_typed: int, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return (chars_typed / 5.0) * (60.0 / seconds)


def accuracy(chars_typed: int, mistakes: int) -> float:
    # percentage of characters that were right when entered
    if chars_typed < 1:
        return 0.0
    return (1.0 - (mistakes / chars_typed)) * 100.0


def compute_stats(chars_typed: int, mistakes: int, seconds: float) -> SessionStats:
    return SessionStats(
        wpm=wpm(chars_typed, mistakes, seconds),
        raw_wpm=raw_wpm(chars_typed, seconds),
        accuracy=accuracy(chars_typed, mistakes),
        correct=chars_typed - mistakes,
        incorrect=mistakes,
    )
