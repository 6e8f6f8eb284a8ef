# app/settings.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import json

from app.errors import ConfigError
from app.state import DEFAULT_TIME_LIMIT
from app.themes import DEFAULT_THEME
from services.prompt_builder import DEFAULT_WORD_COUNT


@dataclass
class Settings:
    time_limit: int = DEFAULT_TIME_LIMIT
    word_count: int = DEFAULT_WORD_COUNT
    word_list: str = "english"
    terminal_width: int = 70
    theme: str = DEFAULT_THEME
    color: bool = True

    def merged(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> "Settings":
        if self.time_limit < 0:
            raise ConfigError("time limit must be >= 0 seconds")
        if self.word_count < 1:
            raise ConfigError("word count must be >= 1")
        if self.terminal_width < 1:
            raise ConfigError("terminal width must be >= 1")
        if not self.word_list:
            raise ConfigError("word list name is empty")
        return self


def _settings_from_dict(d: Dict[str, Any]) -> Settings:
    known = {f.name: f for f in fields(Settings)}
    unknown = set(d.keys()) - set(known)
    if unknown:
        raise ConfigError(f"Unknown settings keys: {', '.join(sorted(unknown))}")
    defaults = Settings()
    values = {}
    for key, value in d.items():
        expected = type(getattr(defaults, key))
        # bool is an int subclass; keep them apart
        if type(value) is not expected:
            raise ConfigError(
                f"setting {key!r} must be {expected.__name__}, got {type(value).__name__}"
            )
        values[key] = value
    return replace(defaults, **values)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a JSON object file. A missing file means defaults."""
    if path is None or not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    return _settings_from_dict(data)
