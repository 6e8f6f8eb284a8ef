import json, logging
from pathlib import Path
from typing import List, Optional

from app.errors import WordSourceError

log = logging.getLogger(__name__)

# words/ sits next to main.py
_BASE_DIR = Path(__file__).resolve().parent.parent
WORDS_DIR = "words"


def resolve_word_source(name: str, base_dir: Optional[Path] = None) -> Path:
    """
    "english" -> <base>/words/english.json
    Anything that looks like a path ("my.json", "lists/foo.json") is used as-is.
    """
    if name.endswith(".json") or "/" in name or "\\" in name:
        return Path(name).expanduser()
    return (base_dir or _BASE_DIR) / WORDS_DIR / f"{name}.json"


def load_words(name: str, base_dir: Optional[Path] = None) -> List[str]:
    path = resolve_word_source(name, base_dir)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
    except OSError as e:
        raise WordSourceError(f"failed to open file: {e}") from e

    try:
        words = json.loads(data)
    except json.JSONDecodeError as e:
        raise WordSourceError(f"failed to parse json: {e}") from e

    if not isinstance(words, list):
        raise WordSourceError(f"failed to parse json: {path} is not a list of words")
    for i, w in enumerate(words):
        if not isinstance(w, str) or not w.strip():
            raise WordSourceError(f"failed to parse json: entry {i} is not a word: {w!r}")
    if not words:
        raise WordSourceError(f"word list {path} is empty")

    log.info("Loaded %d words from %s", len(words), path)
    return words
