import argparse
import logging
import sys

from PySide6 import QtCore, QtGui, QtWidgets

from . import __version__
from .config import APP_NAME, ORG_NAME, SettingsStore, TimerConfig
from .effects import EffectDispatcher, EffectType, notification_text
from .engine import CountdownTimer, Phase, TimerState
from .ticker import QtTickSource

logger = logging.getLogger(__name__)

WINDOW_SIZE = 180
RING_WIDTH = 8

EFFECT_LABELS = {
    EffectType.NOTIFIER: "Notification",
    EffectType.CARDS: "Cards",
    EffectType.SNOW: "Snow",
    EffectType.POPUP: "Popup message",
}


def set_windows_app_user_model_id(app_id: str):
    if sys.platform != "win32":
        return
    try:
        import ctypes

        ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(app_id)
    except Exception:
        logger.debug("could not set AppUserModelID", exc_info=True)


# -----------------------------
# Popup effect
# -----------------------------
class PopupOverlay(QtWidgets.QWidget):
    def __init__(self, duration_ms: int):
        super().__init__()
        self.setWindowFlags(
            QtCore.Qt.FramelessWindowHint | QtCore.Qt.WindowStaysOnTopHint | QtCore.Qt.Tool
        )
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, True)
        self.setAttribute(QtCore.Qt.WA_ShowWithoutActivating, True)
        self.duration_ms = duration_ms

        self.label = QtWidgets.QLabel("Time's up")
        self.label.setAlignment(QtCore.Qt.AlignCenter)
        self.label.setStyleSheet(
            """
            QLabel {
                color: #fff;
                background: rgba(20, 20, 20, 210);
                border-radius: 16px;
                padding: 24px 48px;
                font-family: Segoe UI;
                font-size: 36px;
            }
            """
        )
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.label)

        self._hide_timer = QtCore.QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.hide)

    def show_message(self, _total_seconds: int = 0):
        self.adjustSize()
        screen = QtGui.QGuiApplication.primaryScreen()
        if screen is not None:
            area = screen.availableGeometry()
            self.move(area.center() - self.rect().center())
        self.show()
        self.raise_()
        if self.duration_ms > 0:
            self._hide_timer.start(self.duration_ms)

    def mousePressEvent(self, event: QtGui.QMouseEvent):
        self.hide()
        event.accept()


# -----------------------------
# Timer window
# -----------------------------
class TimerWindow(QtWidgets.QWidget):
    def __init__(
        self,
        config: TimerConfig,
        store: SettingsStore | None = None,
        default_seconds: int | None = None,
        effect_type: EffectType | None = None,
    ):
        super().__init__()
        # saved on close; the keyword overrides only apply to this run
        self.config = config
        if default_seconds is None:
            default_seconds = config.default_seconds
        if effect_type is None:
            effect_type = config.effect_type
        self.store = store

        self.setWindowTitle(APP_NAME)
        self.setWindowFlags(QtCore.Qt.FramelessWindowHint | QtCore.Qt.WindowStaysOnTopHint)
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, True)
        self.setFixedSize(WINDOW_SIZE, WINDOW_SIZE)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)
        self.setContextMenuPolicy(QtCore.Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_menu)

        self._press_global = QtCore.QPoint()
        self._start_pos = QtCore.QPoint()
        self._dragging = False

        self.popup = PopupOverlay(config.popup_duration_ms)
        self.tray = None
        if QtWidgets.QSystemTrayIcon.isSystemTrayAvailable():
            icon = self.style().standardIcon(QtWidgets.QStyle.SP_MessageBoxInformation)
            self.tray = QtWidgets.QSystemTrayIcon(icon, self)
            self.tray.setToolTip(APP_NAME)
            self.tray.messageClicked.connect(self._bring_to_front)
            self.tray.show()

        self.effects = EffectDispatcher(effect_type)
        self.effects.register(EffectType.NOTIFIER, self._show_notification)
        self.effects.register(EffectType.POPUP, self.popup.show_message)

        self.ticker = QtTickSource(parent=self)
        self.timer = CountdownTimer(
            self.ticker,
            on_finished=self.effects.dispatch,
            on_change=self._refresh,
            default_seconds=max(0, int(default_seconds)),
        )

        self._time_text = ""
        self._ratio = 1.0
        self._finished = False
        self._refresh(self.timer.state)

        if config.window_x is not None and config.window_y is not None:
            self.move(config.window_x, config.window_y)

    # ---------------- Effects ----------------
    def _show_notification(self, total_seconds: int):
        title, body = notification_text(total_seconds)
        if self.tray is None:
            logger.warning("system tray unavailable, showing popup instead")
            self.popup.show_message(total_seconds)
            return
        self.tray.showMessage(title, body, QtWidgets.QSystemTrayIcon.Information, 5000)

    def _bring_to_front(self):
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def _set_effect(self, effect: EffectType):
        self.effects.effect_type = effect
        self.config.effect_type = effect

    # ---------------- Menu ----------------
    def _show_menu(self, pos: QtCore.QPoint):
        menu = QtWidgets.QMenu(self)
        effect_menu = menu.addMenu("Effect")
        group = QtGui.QActionGroup(effect_menu)
        for effect, label in EFFECT_LABELS.items():
            action = effect_menu.addAction(label)
            action.setCheckable(True)
            action.setChecked(effect is self.effects.effect_type)
            action.triggered.connect(lambda _checked=False, e=effect: self._set_effect(e))
            group.addAction(action)

        menu.addSeparator()
        menu.addAction("Start / Pause", self.timer.toggle)
        menu.addAction("Reset", self.timer.reset)
        menu.addSeparator()
        menu.addAction("Quit", self.close)
        menu.exec(self.mapToGlobal(pos))

    # ---------------- Draw ----------------
    def _refresh(self, _state: TimerState):
        info = self.timer.display()
        self._time_text = info.time_text
        self._ratio = float(info.ratio)
        self._finished = info.phase is Phase.FINISHED
        self.update()

    def paintEvent(self, event: QtGui.QPaintEvent):
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)

        margin = RING_WIDTH
        rect = QtCore.QRectF(margin, margin, self.width() - 2 * margin, self.height() - 2 * margin)

        p.setPen(QtCore.Qt.NoPen)
        p.setBrush(QtGui.QColor(20, 20, 20, 220))
        p.drawEllipse(rect)

        track = QtGui.QPen(QtGui.QColor(80, 80, 80), RING_WIDTH)
        p.setPen(track)
        p.setBrush(QtCore.Qt.NoBrush)
        p.drawEllipse(rect)

        # ratio is the undrawn share of the ring
        drawn = max(0.0, min(1.0, 1.0 - self._ratio))
        if drawn > 0:
            color = QtGui.QColor("#ff3b30") if self._finished else QtGui.QColor("#33ff66")
            ring = QtGui.QPen(color, RING_WIDTH)
            ring.setCapStyle(QtCore.Qt.RoundCap)
            p.setPen(ring)
            p.drawArc(rect, 90 * 16, -int(round(drawn * 360 * 16)))

        font = QtGui.QFont("Segoe UI", 28)
        p.setFont(font)
        p.setPen(QtGui.QColor("#ff3b30") if self._finished else QtGui.QColor("#ffffff"))
        p.drawText(rect, QtCore.Qt.AlignCenter, self._time_text)
        p.end()

    # ---------------- Input ----------------
    def keyPressEvent(self, event: QtGui.QKeyEvent):
        key = event.key()
        text = event.text()
        if key == QtCore.Qt.Key_Space:
            self.timer.toggle()
        elif key == QtCore.Qt.Key_R:
            self.timer.reset()
        elif len(text) == 1 and "0" <= text <= "9":
            self.timer.enter_digit(int(text))
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def mousePressEvent(self, event: QtGui.QMouseEvent):
        if event.button() == QtCore.Qt.LeftButton:
            self._press_global = event.globalPosition().toPoint()
            self._start_pos = self.pos()
            self._dragging = True
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent):
        if self._dragging:
            delta = event.globalPosition().toPoint() - self._press_global
            self.move(self._start_pos + delta)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent):
        self._dragging = False
        super().mouseReleaseEvent(event)

    # ---------------- Persistence ----------------
    def closeEvent(self, event: QtGui.QCloseEvent):
        self.timer.reset()
        self.config.window_x = self.x()
        self.config.window_y = self.y()
        if self.store is not None:
            try:
                self.store.save(self.config)
            except Exception:
                logger.exception("could not save settings")

        self.popup.close()
        if self.tray is not None:
            self.tray.hide()
        super().closeEvent(event)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="keytimer",
        description="Always-on-top countdown timer with digit-key entry",
        epilog="Keys: 0-9 enter MMSS, space start/pause, r reset. Right-click for the menu.",
    )
    parser.add_argument("--default-seconds", type=int, help="duration restored by reset")
    parser.add_argument("--effect", choices=[e.value for e in EffectType], help="end-of-timer effect")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--version", action="version", version=f"keytimer {__version__}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    set_windows_app_user_model_id("keytimer.KeyTimer")

    app = QtWidgets.QApplication(sys.argv[:1])
    QtCore.QCoreApplication.setOrganizationName(ORG_NAME)
    QtCore.QCoreApplication.setApplicationName(APP_NAME)

    store = SettingsStore()
    config = store.load()
    effect = EffectType(args.effect) if args.effect else None

    w = TimerWindow(config, store, default_seconds=args.default_seconds, effect_type=effect)
    w.show()
    return app.exec()
