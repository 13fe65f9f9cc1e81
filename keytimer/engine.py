import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Protocol

from .functions import (
    DEFAULT_STACK,
    calculate_progress_ratio,
    convert_stack_to_time,
    format_time,
    process_number_input,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMER_SECONDS = 3 * 60


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class TickSource(Protocol):
    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


# -----------------------------
# Timer model
# -----------------------------
@dataclass
class TimerState:
    total_seconds: int = DEFAULT_TIMER_SECONDS
    time_left: int = DEFAULT_TIMER_SECONDS
    phase: Phase = Phase.IDLE
    stack: str = DEFAULT_STACK


@dataclass(frozen=True)
class DisplayInfo:
    time_text: str
    ratio: float
    phase: Phase


class CountdownTimer:
    """Idle/Running/Paused/Finished countdown driven by an external 1 Hz tick.

    The timer never touches a rendering surface. It asks ``tick_source`` for a
    periodic ``tick()`` while running, calls ``on_finished(total_seconds)``
    once per completed countdown and ``on_change(state)`` after every
    effective state change.
    """

    def __init__(
        self,
        tick_source: TickSource,
        on_finished: Callable[[int], None],
        on_change: Callable[[TimerState], None] | None = None,
        default_seconds: int = DEFAULT_TIMER_SECONDS,
    ):
        self._tick_source = tick_source
        self._on_finished = on_finished
        self._on_change = on_change
        self.default_seconds = max(0, int(default_seconds))
        self._state = TimerState(total_seconds=self.default_seconds, time_left=self.default_seconds)
        self._ticking = False

    @property
    def state(self) -> TimerState:
        return replace(self._state)

    @property
    def is_running(self) -> bool:
        return self._state.phase is Phase.RUNNING

    def display(self) -> DisplayInfo:
        s = self._state
        return DisplayInfo(
            time_text=format_time(s.time_left),
            ratio=calculate_progress_ratio(s.total_seconds, s.time_left),
            phase=s.phase,
        )

    # ---------------- Input ----------------
    def enter_digit(self, digit: int) -> None:
        if self.is_running:
            return
        self._state.stack = process_number_input(self._state.stack, digit)
        minutes, seconds = convert_stack_to_time(self._state.stack)
        self.commit_duration(minutes, seconds)

    def commit_duration(self, minutes: int, seconds: int) -> None:
        if self.is_running:
            return
        total = minutes * 60 + seconds
        self._state.total_seconds = total
        self._state.time_left = total
        self._changed()

    # ---------------- Transitions ----------------
    def start(self) -> None:
        s = self._state
        if s.phase is Phase.RUNNING:
            return
        if s.total_seconds == 0 or s.time_left <= 0:
            return

        self._set_phase(Phase.RUNNING)
        self._start_ticking()
        self._changed()

    def pause(self) -> None:
        if not self.is_running:
            return
        self._stop_ticking()
        self._set_phase(Phase.PAUSED)
        self._changed()

    def toggle(self) -> None:
        if self.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._stop_ticking()
        self._state = TimerState(
            total_seconds=self.default_seconds,
            time_left=self.default_seconds,
            phase=Phase.IDLE,
            stack=DEFAULT_STACK,
        )
        logger.debug("timer reset to %ss", self.default_seconds)
        self._changed()

    def tick(self) -> None:
        # late delivery after pause/reset/finish
        if not self.is_running:
            return

        s = self._state
        s.time_left -= 1
        if s.time_left > 0:
            self._changed()
            return

        self._stop_ticking()
        s.time_left = 0
        self._set_phase(Phase.FINISHED)
        self._changed()
        self._on_finished(s.total_seconds)

    # ---------------- Helpers ----------------
    def _start_ticking(self) -> None:
        if self._ticking:
            return
        self._tick_source.start(self.tick)
        self._ticking = True

    def _stop_ticking(self) -> None:
        if not self._ticking:
            return
        self._tick_source.stop()
        self._ticking = False

    def _set_phase(self, phase: Phase) -> None:
        logger.debug("phase %s -> %s (left=%s)", self._state.phase.value, phase.value, self._state.time_left)
        self._state.phase = phase

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)
