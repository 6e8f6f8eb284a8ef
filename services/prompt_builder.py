# services/prompt_builder.py
import random
from typing import Optional, Sequence

from app.errors import InsufficientWords

DEFAULT_WORD_COUNT = 50


def generate_prompt(
    words: Sequence[str], count: int = DEFAULT_WORD_COUNT, rng: Optional[random.Random] = None
) -> str:
    """Shuffle the word source and join the first `count` words with spaces."""
    if count < 1:
        raise ValueError("count must be >= 1")
    if len(words) < count:
        raise InsufficientWords(len(words), count)
    pool = list(words)
    (rng or random).shuffle(pool)
    return " ".join(pool[:count])
