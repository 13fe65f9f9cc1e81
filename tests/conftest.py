import os

import pytest


class FakeTickSource:
    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback):
        self.starts += 1
        self.callback = callback

    def stop(self):
        self.stops += 1
        self.callback = None

    def fire(self, times: int = 1):
        for _ in range(times):
            if self.callback is not None:
                self.callback()


@pytest.fixture
def ticks():
    return FakeTickSource()


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6 import QtWidgets

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
