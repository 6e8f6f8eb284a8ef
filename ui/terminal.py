# ui/terminal.py
from __future__ import annotations
import codecs
import contextlib
import logging
import os
import sys
from typing import List, Optional, TextIO

from PySide6.QtCore import QObject, QSocketNotifier, Signal

from app.themes import Palette
from core.chrono import TickClock
from services.typing_engine import Event, KeyKind, KeyPress, Tick, TypingEngine
from ui.renderer import DEFAULT_WIDTH, render

log = logging.getLogger(__name__)

ESC = "\x1b"
CTRL_C = "\x03"
BACKSPACE = "\x7f"

CLEAR_SCREEN = "\x1b[H\x1b[2J"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def _skip_escape(text: str, i: int) -> int:
    """Index just past the escape sequence starting at text[i] (an ESC)."""
    if i + 1 >= len(text):
        return i + 1
    intro = text[i + 1]
    if intro == "[":
        j = i + 2
        # parameter/intermediate bytes, then one final byte in @..~
        while j < len(text) and not ("@" <= text[j] <= "~"):
            j += 1
        return j + 1
    if intro == "O":
        return i + 3
    return i + 2


def decode_keys(text: str) -> List[KeyPress]:
    """
    Turn raw terminal input into key events.
    Printable runs become one batch, so a paste is a single event.
    Alt+key types its character; Ctrl+H and other control keys carry no
    runes and are dropped.
    """
    events: List[KeyPress] = []
    run: List[str] = []

    def flush():
        if run:
            events.append(KeyPress(KeyKind.RUNES, "".join(run)))
            run.clear()

    i = 0
    while i < len(text):
        ch = text[i]
        if ch == ESC:
            flush()
            if i + 1 >= len(text):
                events.append(KeyPress(KeyKind.CANCEL))
            elif text[i + 1] not in "[O" and text[i + 1].isprintable():
                # alt + key still types the key
                run.append(text[i + 1])
            i = _skip_escape(text, i)
            continue
        if ch == CTRL_C:
            flush()
            events.append(KeyPress(KeyKind.CANCEL))
        elif ch == BACKSPACE:
            flush()
            events.append(KeyPress(KeyKind.BACKSPACE))
        elif ch.isprintable():
            run.append(ch)
        else:
            # enter, tab and other control keys carry no runes
            flush()
        i += 1
    flush()
    return events


@contextlib.contextmanager
def raw_terminal(fd: Optional[int]):
    """Put a tty into raw mode for the duration; anything else is left alone."""
    if fd is None or not os.isatty(fd):
        yield
        return
    import termios
    import tty

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class TerminalHost(QObject):
    """
    Bridges the Qt event loop and the typing engine:
    stdin bytes and clock ticks in, a redrawn frame out.
    """
    finished = Signal()

    def __init__(
        self,
        engine: TypingEngine,
        palette: Palette,
        width: int = DEFAULT_WIDTH,
        out: Optional[TextIO] = None,
        in_fd: Optional[int] = None,
        clock: Optional[TickClock] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.engine = engine
        self.palette = palette
        self.width = width
        self.out = out if out is not None else sys.stdout
        self.in_fd = in_fd
        self.clock = clock or TickClock(parent=self)
        self.clock.ticked.connect(self.on_tick)

        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._notifier: Optional[QSocketNotifier] = None
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def start(self):
        if self.in_fd is not None:
            self._notifier = QSocketNotifier(self.in_fd, QSocketNotifier.Type.Read, self)
            self._notifier.activated.connect(self._on_readable)
        self._write(HIDE_CURSOR)
        self.draw()
        self.clock.schedule()

    def draw(self):
        frame = render(self.engine.session, self.palette, self.width)
        # raw mode has no output post-processing
        self._write(CLEAR_SCREEN + frame.replace("\n", "\r\n"))

    def on_tick(self, timestamp: float):
        self.handle(Tick(timestamp))

    def feed(self, text: str):
        for event in decode_keys(text):
            if self._done:
                break
            self.handle(event)

    def handle(self, event: Event):
        if self._done:
            return
        result = self.engine.dispatch(event)
        if result.quit:
            self._finish()
            return
        self.draw()
        if result.schedule_tick:
            self.clock.schedule()

    def _on_readable(self, *args):
        data = os.read(self.in_fd, 4096)
        if not data:
            log.info("Input closed, quitting")
            self._finish()
            return
        self.feed(self._decoder.decode(data))

    def _finish(self):
        self._done = True
        self.clock.stop()
        if self._notifier is not None:
            self._notifier.setEnabled(False)
        # leave the last frame on screen
        self._write(SHOW_CURSOR + "\r\n")
        self.finished.emit()

    def _write(self, s: str):
        self.out.write(s)
        self.out.flush()
