# services/typing_engine.py
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from app.state import SessionState, State

log = logging.getLogger(__name__)


class KeyKind(Enum):
    RUNES = "runes"
    BACKSPACE = "backspace"
    CANCEL = "cancel"


@dataclass(frozen=True)
class KeyPress:
    kind: KeyKind
    runes: str = ""


@dataclass(frozen=True)
class Tick:
    timestamp: float = 0.0


Event = Union[KeyPress, Tick]


@dataclass(frozen=True)
class Transition:
    session: SessionState
    schedule_tick: bool = False
    quit: bool = False


def step(session: SessionState, event: Event) -> Transition:
    """
    (SessionState, Event) -> next SessionState plus host directives.
    The session passed in is left untouched.
    """
    if session.finished:
        return Transition(session, quit=True)

    if isinstance(event, Tick):
        nxt = replace(session)
        nxt.tick()
        # the clock keeps running even before the first keystroke
        return Transition(nxt, schedule_tick=True)

    if event.kind is KeyKind.CANCEL:
        return Transition(session, quit=True)

    nxt = replace(session)
    if event.kind is KeyKind.BACKSPACE:
        nxt.backspace()
    else:
        nxt.type_chars(event.runes)
    return Transition(nxt)


class TypingEngine:
    """Holds the live session and feeds events through step()."""

    def __init__(self, session: SessionState):
        self.session = session

    def dispatch(self, event: Event) -> Transition:
        before = self.session.state
        result = step(self.session, event)
        self.session = result.session

        after = self.session.state
        if before is not after:
            if after is State.TYPING:
                log.info("Test started (%ds limit)", self.session.time_limit)
            elif after is State.DONE:
                log.info(
                    "Test finished at %ds: %d chars, %d mistakes",
                    self.session.time_passed,
                    self.session.chars_typed,
                    self.session.mistakes,
                )
        if result.quit:
            log.debug("Quit requested in state %s", after.name)
        return result
