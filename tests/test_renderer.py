"""Tests for ui.renderer."""

import re

import pytest
from rich.color import ColorSystem

from app.state import SessionState, State, View
from app.themes import Palette, Theme
from ui.renderer import FOOTER, render, render_prompt, render_stats

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def prompt_lines(frame):
    """The prompt body between the timer header and the footer."""
    body = frame.split("\n\n")[1]
    return body.split("\n")


@pytest.fixture
def tagged_palette():
    """Marks every tag with a distinct attribute so tests can tell them apart."""
    theme = Theme(name="test", untyped="dim", mistake="underline", cursor="reverse", correct="")
    return Palette.from_theme(theme, ColorSystem.STANDARD)


class TestPromptView:

    def test_header_shows_time_remaining(self, plain_palette):
        s = SessionState.new("ab cd", time_limit=30)
        s.type_chars("a")
        s.tick()
        s.tick()
        assert render(s, plain_palette).startswith("28\n\n")

    def test_plain_frame(self, plain_palette):
        s = SessionState.new("ab cd", time_limit=30)
        assert render(s, plain_palette) == f"30\n\nab cd\n\n{FOOTER}\n"

    def test_footer(self, plain_palette):
        s = SessionState.new("ab", time_limit=5)
        assert render(s, plain_palette).endswith("Press ESC to quit\n")

    def test_tags(self, tagged_palette):
        s = SessionState.new("abcd")
        s.type_chars("ax")
        out = render_prompt(s, tagged_palette)
        assert "a" + tagged_palette.paint("mistake", "b") in out
        assert tagged_palette.paint("cursor", "c") in out
        assert tagged_palette.paint("untyped", "d") in out
        assert ANSI.sub("", out).splitlines()[2] == "abcd"

    def test_prompt_text_shown_for_mistakes(self, tagged_palette):
        """The prompt character is drawn, not what the user typed."""
        s = SessionState.new("abc")
        s.type_chars("z")
        out = ANSI.sub("", render_prompt(s, tagged_palette))
        assert "z" not in out
        assert "abc" in out

    def test_overflow_input_renders(self, plain_palette):
        s = SessionState.new("ab")
        s.type_chars("abcdef")
        assert "ab" in render(s, plain_palette)

    def test_backspace_restores_cursor(self, tagged_palette):
        s = SessionState.new("abc")
        s.type_chars("ax")
        s.backspace()
        out = render_prompt(s, tagged_palette)
        assert tagged_palette.paint("cursor", "b") in out
        assert tagged_palette.paint("mistake", "b") not in out


class TestWrapping:

    def test_short_prompt_not_wrapped(self, plain_palette):
        s = SessionState.new("one two three")
        assert prompt_lines(render(s, plain_palette, width=70)) == ["one two three"]

    def test_breaks_at_first_space_after_width(self, plain_palette):
        s = SessionState.new("aaaa bbbb cccc dddd")
        lines = prompt_lines(render(s, plain_palette, width=6))
        assert lines == ["aaaa bbbb ", "cccc dddd"]

    def test_never_breaks_inside_word(self, plain_palette, rng):
        words = ["".join(rng.choice("abcdefgh") for _ in range(rng.randint(1, 12)))
                 for _ in range(200)]
        prompt = " ".join(words)
        s = SessionState.new(prompt)
        lines = prompt_lines(render(s, plain_palette, width=20))
        assert "".join(lines) == prompt
        for line in lines[:-1]:
            assert line.endswith(" ")
            assert len(line) >= 20

    def test_width_counts_characters_not_markup(self, tagged_palette, plain_palette):
        s = SessionState.new("aaaa bbbb cccc dddd eeee")
        s.type_chars("aaxa bb")
        styled = [ANSI.sub("", l) for l in prompt_lines(render(s, tagged_palette, width=6))]
        plain = prompt_lines(render(s, plain_palette, width=6))
        assert styled == plain

    def test_space_just_before_width_does_not_break(self, plain_palette):
        """A space at index width - 1 is still inside the first line."""
        s = SessionState.new("aaaaa bbbbb")
        assert prompt_lines(render(s, plain_palette, width=6)) == ["aaaaa bbbbb"]

    def test_default_width_breaks_at_or_after_70(self, plain_palette):
        s = SessionState.new("a" * 69 + " " + "b" * 10 + " " + "c" * 5)
        lines = prompt_lines(render(s, plain_palette))
        assert lines == ["a" * 69 + " " + "b" * 10 + " ", "c" * 5]

    def test_space_at_width_breaks(self, plain_palette):
        s = SessionState.new("aaaaaa bb")
        assert prompt_lines(render(s, plain_palette, width=6)) == ["aaaaaa ", "bb"]

    def test_line_count_resets_after_break(self, plain_palette):
        s = SessionState.new("abcdef gh ij kl mnopqr st")
        lines = prompt_lines(render(s, plain_palette, width=5))
        assert lines == ["abcdef ", "gh ij ", "kl mnopqr ", "st"]


class TestStatsView:

    def finished(self, prompt, typed, limit):
        s = SessionState.new(prompt, time_limit=limit)
        s.type_chars(typed)
        for _ in range(limit + 1):
            s.tick()
        assert s.view is View.STATS
        return s

    def test_scenario(self, plain_palette):
        s = self.finished("ab cd", "ax cd", 1)
        out = render(s, plain_palette)
        assert "Accuracy: 80.00% (Correct: 4 | Incorrect: 1)" in out
        assert "WPM: 24.00" in out
        assert "Raw: 30.00" in out

    def test_each_value_on_own_line(self):
        s = self.finished("ab cd", "ab cd", 1)
        lines = [l for l in render_stats(s).splitlines() if l]
        assert lines[0].startswith("WPM: ")
        assert lines[1].startswith("Raw: ")
        assert lines[2].startswith("Accuracy: ")

    def test_zero_time_passed_guard(self, plain_palette):
        s = SessionState.new("abc", time_limit=0)
        s.state = State.DONE
        s.view = View.STATS
        out = render(s, plain_palette)
        assert "WPM: 0.00" in out
        assert "Raw: 0.00" in out
        assert "Accuracy: 0.00%" in out
