# core/chrono.py
import time

from PySide6.QtCore import QObject, QTimer, Signal


class TickClock(QObject):
    """One-shot second timer; the owner re-arms it after every tick."""
    ticked = Signal(float)  # wall-clock timestamp

    def __init__(self, interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_armed(self) -> bool:
        return self._timer.isActive()

    def schedule(self):
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def _on_timeout(self):
        self.ticked.emit(time.time())
