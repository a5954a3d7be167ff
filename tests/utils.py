from __future__ import annotations

from engine.models import MODE_REPS, ExerciseItem, SetDefinition


def make_item(
    item_id: str,
    sets: int = 1,
    *,
    cycle_id: str | None = None,
    cycle_order: int | None = None,
    mode: str = MODE_REPS,
    weight: float = 100,
    reps: float = 10,
    duration: float | None = None,
    per_side: bool = False,
    rest_seconds: int | None = None,
) -> ExerciseItem:
    """Return an item with ``sets`` identical set definitions."""
    definition = SetDefinition(reps=reps, duration=duration, weight=weight)
    return ExerciseItem(
        id=item_id,
        movement_id=f"m-{item_id}",
        mode=mode,
        sets=tuple(definition for _ in range(sets)),
        cycle_id=cycle_id,
        cycle_order=cycle_order,
        is_per_side=per_side,
        rest_seconds=rest_seconds,
    )


class FakeEvent:
    def __init__(self, callback, when: float) -> None:
        self.callback = callback
        self.when = when
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Deterministic stand-in for ``kivy.clock.Clock``.

    ``time`` is passed to the engine as its ``time_func`` so the countdown
    target and the scheduled events share one time base.
    """

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now
        self.events: list[FakeEvent] = []

    def time(self) -> float:
        return self.now

    def schedule_once(self, callback, timeout: float = 0) -> FakeEvent:
        event = FakeEvent(callback, self.now + timeout)
        self.events.append(event)
        return event

    @property
    def pending(self) -> list[FakeEvent]:
        return [e for e in self.events if not e.cancelled]

    def advance(self, seconds: float) -> None:
        """Move time forward by ``seconds`` firing every due event in order."""
        target = self.now + seconds
        while True:
            due = [e for e in self.pending if e.when <= target]
            if not due:
                break
            event = min(due, key=lambda e: e.when)
            self.events.remove(event)
            dt = max(0.0, event.when - self.now)
            self.now = max(self.now, event.when)
            event.callback(dt)
        self.now = target
