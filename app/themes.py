# app/themes.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from app.errors import ConfigError


TAGS = ("correct", "mistake", "cursor", "untyped")


@dataclass
class Theme:
    """Named style tags, each a rich style definition ("#999999", "on red", ...)."""
    name: str
    untyped: str
    mistake: str
    cursor: str
    correct: str = ""


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="classic",
        untyped="#999999",
        mistake="on #ff0000",
        cursor="#000000 on #e2b714",
    ),
    Theme(
        name="nord",
        untyped="#4c566a",
        mistake="#eceff4 on #bf616a",
        cursor="#2e3440 on #88c0d0",
        correct="#eceff4",
    ),
    Theme(
        name="mono",
        untyped="dim",
        mistake="underline",
        cursor="reverse",
    ),
]

DEFAULT_THEME = "classic"


def theme_names() -> List[str]:
    return [t.name for t in THEMES]


def get_theme(name: str) -> Theme:
    for theme in THEMES:
        if theme.name == name:
            return theme
    raise ConfigError(
        f"unknown theme {name!r} (available: {', '.join(theme_names())})"
    )


def _parse(definition: str) -> Style:
    if not definition:
        return Style.null()
    return Style.parse(definition)


@dataclass
class Palette:
    """
    Styles resolved once at startup and handed to the renderer.
    color_system=None renders plain text.
    """
    styles: Dict[str, Style]
    color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR
    _cache: Dict[tuple, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_theme(
        cls, theme: Theme, color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR
    ) -> "Palette":
        styles = {}
        for tag in TAGS:
            try:
                styles[tag] = _parse(getattr(theme, tag))
            except StyleSyntaxError as e:
                raise ConfigError(f"theme {theme.name!r}: bad {tag} style: {e}") from e
        return cls(styles=styles, color_system=color_system)

    @classmethod
    def plain(cls) -> "Palette":
        return cls(styles={tag: Style.null() for tag in TAGS}, color_system=None)

    def paint(self, tag: str, text: str) -> str:
        if not text or self.color_system is None:
            return text
        key = (tag, text)
        out = self._cache.get(key)
        if out is None:
            out = self.styles[tag].render(text, color_system=self.color_system)
            self._cache[key] = out
        return out
