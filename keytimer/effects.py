import logging
from enum import Enum
from typing import Callable, Dict

logger = logging.getLogger(__name__)

EffectHandler = Callable[[int], None]


class EffectType(str, Enum):
    NOTIFIER = "notifier"
    CARDS = "cards"
    SNOW = "snow"
    POPUP = "popup"


def describe_duration(total_seconds: int) -> str:
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    if minutes > 0 and seconds > 0:
        return f"{minutes} min {seconds} sec"
    if minutes > 0:
        return f"{minutes} min"
    return f"{seconds} sec"


def notification_text(total_seconds: int) -> tuple[str, str]:
    return "Timer finished", f"Your {describe_duration(total_seconds)} timer has finished"


class EffectDispatcher:
    """Runs the end-of-timer effect selected by ``effect_type``.

    Used as the countdown's ``on_finished`` collaborator. Dispatch is
    fire-and-forget: handler errors are logged, never raised to the timer.
    """

    def __init__(self, effect_type: EffectType = EffectType.POPUP, fallback: EffectType = EffectType.POPUP):
        self.effect_type = EffectType(effect_type)
        self.fallback = EffectType(fallback)
        self._handlers: Dict[EffectType, EffectHandler] = {}

    def register(self, effect_type: EffectType, handler: EffectHandler) -> None:
        self._handlers[EffectType(effect_type)] = handler

    def handler_for(self, effect_type: EffectType) -> EffectHandler | None:
        handler = self._handlers.get(effect_type)
        if handler is None and effect_type is not self.fallback:
            handler = self._handlers.get(self.fallback)
            if handler is not None:
                logger.info("no handler for %r effect, using %r", effect_type.value, self.fallback.value)
        return handler

    def dispatch(self, total_seconds: int) -> None:
        effect = self.effect_type
        handler = self.handler_for(effect)
        if handler is None:
            logger.warning("no effect handler available for %r", effect.value)
            return

        try:
            handler(total_seconds)
        except Exception:
            logger.exception("%r effect failed", effect.value)

    __call__ = dispatch
