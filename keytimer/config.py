import logging
from dataclasses import dataclass

from PySide6 import QtCore

from .effects import EffectType
from .engine import DEFAULT_TIMER_SECONDS

logger = logging.getLogger(__name__)

ORG_NAME = "keytimer"
APP_NAME = "keytimer"

DEFAULT_POPUP_DURATION_MS = 3000


@dataclass
class TimerConfig:
    default_seconds: int = DEFAULT_TIMER_SECONDS
    effect_type: EffectType = EffectType.POPUP
    popup_duration_ms: int = DEFAULT_POPUP_DURATION_MS

    window_x: int | None = None
    window_y: int | None = None


def _read_int(settings: QtCore.QSettings, key: str, default: int | None) -> int | None:
    raw = settings.value(key, None)
    if raw is None or raw == "":
        return default
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        logger.debug("ignoring bad %s value %r", key, raw)
        return default


class SettingsStore:
    def __init__(self, settings: QtCore.QSettings | None = None):
        if settings is None:
            settings = QtCore.QSettings(ORG_NAME, APP_NAME)
        self.settings = settings

    def load(self) -> TimerConfig:
        config = TimerConfig()

        secs = _read_int(self.settings, "config/default_seconds", config.default_seconds)
        config.default_seconds = max(0, secs)

        effect = self.settings.value("config/effect_type", config.effect_type.value)
        try:
            config.effect_type = EffectType(str(effect).strip().lower())
        except ValueError:
            logger.debug("unknown effect type %r, keeping %s", effect, config.effect_type.value)

        popup_ms = _read_int(self.settings, "config/popup_duration_ms", config.popup_duration_ms)
        config.popup_duration_ms = max(0, popup_ms)

        config.window_x = _read_int(self.settings, "window/x", None)
        config.window_y = _read_int(self.settings, "window/y", None)
        return config

    def save(self, config: TimerConfig) -> None:
        self.settings.setValue("config/default_seconds", int(config.default_seconds))
        self.settings.setValue("config/effect_type", EffectType(config.effect_type).value)
        self.settings.setValue("config/popup_duration_ms", int(config.popup_duration_ms))

        if config.window_x is not None and config.window_y is not None:
            self.settings.setValue("window/x", int(config.window_x))
            self.settings.setValue("window/y", int(config.window_y))

        self.settings.sync()
