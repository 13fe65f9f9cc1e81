from typing import Callable

from PySide6 import QtCore


class QtTickSource(QtCore.QObject):
    """1 Hz tick source backed by a single QTimer."""

    def __init__(self, interval_ms: int = 1000, parent: QtCore.QObject | None = None):
        super().__init__(parent)
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(interval_ms)
        self._callback: Callable[[], None] | None = None
        self._timer.timeout.connect(self._fire)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        if self._timer.isActive():
            return
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self):
        if self._callback is not None:
            self._callback()
