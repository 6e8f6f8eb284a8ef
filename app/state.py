# app/state.py
from dataclasses import dataclass
from enum import Enum


class State(Enum):
    READY = "ready"    # waiting for the first keystroke
    TYPING = "typing"
    DONE = "done"


class View(Enum):
    PROMPT = "prompt"
    STATS = "stats"


DEFAULT_TIME_LIMIT = 30


@dataclass
class SessionState:
    prompt: str = ""
    user_input: str = ""
    cursor: int = 0
    mistakes: int = 0
    chars_typed: int = 0
    time_passed: int = 0
    time_limit: int = DEFAULT_TIME_LIMIT
    view: View = View.PROMPT
    state: State = State.READY

    @classmethod
    def new(cls, prompt: str, time_limit: int = DEFAULT_TIME_LIMIT) -> "SessionState":
        return cls(prompt=prompt, time_limit=time_limit)

    @property
    def time_remaining(self) -> int:
        return self.time_limit - self.time_passed

    @property
    def finished(self) -> bool:
        return self.view is View.STATS

    def type_chars(self, runes: str):
        """
        Feed a batch of characters (a single key or a paste).
        Each character is compared against the prompt at its own position;
        anything typed past the end of the prompt counts as a mistake.
        """
        if not runes:
            return
        if self.state is State.READY:
            self.state = State.TYPING
        if self.state is not State.TYPING:
            return

        for i, ch in enumerate(runes):
            pos = self.cursor + i
            if pos >= len(self.prompt) or ch != self.prompt[pos]:
                self.mistakes += 1

        self.user_input += runes
        self.cursor += len(runes)
        self.chars_typed += len(runes)

    def backspace(self):
        # mistakes and chars_typed are never given back
        if self.state is not State.TYPING or self.cursor < 1:
            return
        self.cursor -= 1
        self.user_input = self.user_input[: self.cursor]

    def tick(self):
        if self.state is not State.TYPING:
            return
        # checked before the increment: the test flips on tick time_limit + 1
        if self.time_passed >= self.time_limit:
            self.state = State.DONE
            self.view = View.STATS
        self.time_passed += 1
