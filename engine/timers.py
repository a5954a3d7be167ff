"""Exercise and rest countdowns.

Only one countdown runs at a time.  The end of a countdown is kept as an
absolute ``target_time`` so extending, pausing and resuming only move the
target; the scheduled callback re-arms itself when it fires early.  When a
countdown ends the orchestrator calls the ``on_finish`` function it was
started with.  That function is expected to read the engine's state at call
time instead of relying on values captured when the countdown began.
"""

from __future__ import annotations

from typing import Any, Callable, Optional
import logging
import time

from engine import PER_SIDE_SWITCH_SECONDS, TIMER_ADD_STEP

logger = logging.getLogger(__name__)

PHASE_EXERCISE = "exercise"
PHASE_REST = "rest"

# Remaining time below this counts as finished
_EPSILON = 1e-3


def exercise_duration(duration: float, per_side: bool = False) -> float:
    """Total countdown for a timed set, both sides included."""

    if per_side:
        return 2 * duration + PER_SIDE_SWITCH_SECONDS
    return duration


class TimerOrchestrator:
    """Arbitrates between the exercise timer and the rest timer.

    ``clock`` needs a ``schedule_once(callback, timeout)`` returning an event
    with ``cancel()``; it defaults to :data:`kivy.clock.Clock`.
    ``time_func`` must use the same time base as ``clock``.
    """

    def __init__(
        self,
        clock: Any = None,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        if clock is None:
            from kivy.clock import Clock

            clock = Clock
        self.clock = clock
        self.time_func = time_func
        self.phase: Optional[str] = None
        self.target_time = 0.0
        self.duration = 0.0
        self.upcoming_name: Optional[str] = None
        self._paused_remaining: Optional[float] = None
        self._on_finish: Optional[Callable[[], None]] = None
        self._event = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        return self.phase is not None

    @property
    def paused(self) -> bool:
        return self._paused_remaining is not None

    def remaining(self) -> float:
        """Seconds left on the running countdown, ``0`` when idle."""

        if self.phase is None:
            return 0.0
        if self._paused_remaining is not None:
            return self._paused_remaining
        return max(0.0, self.target_time - self.time_func())

    # ------------------------------------------------------------------
    # Starting and stopping
    # ------------------------------------------------------------------
    def start_exercise(
        self,
        duration: float,
        on_finish: Callable[[], None],
        *,
        per_side: bool = False,
    ) -> float:
        """Start the exercise countdown and return its length in seconds."""

        total = exercise_duration(duration, per_side)
        self._start(PHASE_EXERCISE, total, on_finish)
        return total

    def start_rest(
        self,
        duration: float,
        on_finish: Callable[[], None],
        upcoming_name: Optional[str] = None,
    ) -> None:
        self._start(PHASE_REST, duration, on_finish)
        self.upcoming_name = upcoming_name

    def _start(self, phase: str, duration: float, on_finish: Callable[[], None]) -> None:
        self.cancel()
        self.phase = phase
        self.duration = max(0.0, float(duration))
        self.target_time = self.time_func() + self.duration
        self._on_finish = on_finish
        self._arm(self.duration)
        logger.debug("Started %s timer for %.1fs", phase, self.duration)

    def cancel(self) -> None:
        """Stop the running countdown without calling its finish callback."""

        if self._event is not None:
            self._event.cancel()
        self._event = None
        self.phase = None
        self.upcoming_name = None
        self._paused_remaining = None
        self._on_finish = None

    def skip(self) -> None:
        """End the running countdown now, calling its finish callback."""

        if self.phase is None:
            return
        self._finish()

    # ------------------------------------------------------------------
    # Adjustments
    # ------------------------------------------------------------------
    def add_time(self, seconds: float = TIMER_ADD_STEP) -> float:
        """Move the end of the countdown by ``seconds`` and return the remaining time.

        Negative values shorten the countdown; it never ends in the past.
        """

        if self.phase is None:
            return 0.0
        if self._paused_remaining is not None:
            self._paused_remaining = max(0.0, self._paused_remaining + seconds)
            return self._paused_remaining
        now = self.time_func()
        self.target_time = max(now, self.target_time + seconds)
        if seconds < 0:
            # the armed event would fire too late
            self._rearm()
        return self.remaining()

    def pause(self) -> None:
        if self.phase is None or self._paused_remaining is not None:
            return
        self._paused_remaining = self.remaining()
        if self._event is not None:
            self._event.cancel()
            self._event = None

    def resume(self) -> None:
        if self._paused_remaining is None:
            return
        self.target_time = self.time_func() + self._paused_remaining
        self._paused_remaining = None
        self._rearm()

    # ------------------------------------------------------------------
    # Clock plumbing
    # ------------------------------------------------------------------
    def _arm(self, delay: float) -> None:
        self._event = self.clock.schedule_once(self._on_tick, max(0.0, delay))

    def _rearm(self) -> None:
        if self._event is not None:
            self._event.cancel()
        self._arm(self.target_time - self.time_func())

    def _on_tick(self, _dt: float) -> None:
        self._event = None
        if self.phase is None or self._paused_remaining is not None:
            return
        left = self.target_time - self.time_func()
        if left > _EPSILON:
            self._arm(left)
            return
        self._finish()

    def _finish(self) -> None:
        callback = self._on_finish
        phase = self.phase
        self.cancel()
        logger.debug("%s timer finished", phase)
        if callback is not None:
            callback()
