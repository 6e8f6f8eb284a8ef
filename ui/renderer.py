# ui/renderer.py
from __future__ import annotations
from typing import List

from app.calculation import compute_stats
from app.state import SessionState, View
from app.themes import Palette

DEFAULT_WIDTH = 70
FOOTER = "Press ESC to quit"


def _tag_for(session: SessionState, i: int, ch: str) -> str:
    if i < len(session.user_input):
        return "correct" if session.user_input[i] == ch else "mistake"
    if i == session.cursor:
        return "cursor"
    return "untyped"


def render_prompt(session: SessionState, palette: Palette, width: int = DEFAULT_WIDTH) -> str:
    parts: List[str] = [f"{session.time_remaining}\n\n"]

    line_len = 0
    ready_to_split = False
    for i, ch in enumerate(session.prompt):
        # line_len counts the characters already on this line
        if line_len >= width:
            ready_to_split = True
        line_len += 1

        parts.append(palette.paint(_tag_for(session, i, ch), ch))

        # only break after a space so words stay whole
        if ready_to_split and ch == " ":
            parts.append("\n")
            line_len = 0
            ready_to_split = False

    parts.append(f"\n\n{FOOTER}\n")
    return "".join(parts)


def render_stats(session: SessionState) -> str:
    stats = compute_stats(session.chars_typed, session.mistakes, session.time_passed)
    return (
        "\n"
        f"WPM: {stats.wpm:.2f}\n"
        f"Raw: {stats.raw_wpm:.2f}\n"
        f"Accuracy: {stats.accuracy:.2f}%"
        f" (Correct: {stats.correct} | Incorrect: {stats.incorrect})\n"
        "\n"
    )


def render(session: SessionState, palette: Palette, width: int = DEFAULT_WIDTH) -> str:
    if session.view is View.STATS:
        return render_stats(session)
    return render_prompt(session, palette, width)
