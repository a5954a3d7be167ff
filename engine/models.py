"""Value types shared by the execution engine.

Everything here is plain data.  Template items and groups are frozen so a
group list can be rebuilt from the item list at any time without anything
holding on to stale, mutable copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

MODE_REPS = "reps"
MODE_TIME = "time"

_SET_KEY_SEPARATOR = "-set-"


def set_key(exercise_id: str, round_index: int) -> str:
    """Return the completion token for ``exercise_id`` at ``round_index``."""

    return f"{exercise_id}{_SET_KEY_SEPARATOR}{round_index}"


def parse_set_key(token: str) -> Tuple[str, int] | None:
    """Split ``token`` back into ``(exercise_id, round_index)``.

    Exercise ids may themselves contain ``-set-`` so the token is split on the
    last separator.  ``None`` is returned for malformed tokens.
    """

    exercise_id, sep, index = token.rpartition(_SET_KEY_SEPARATOR)
    if not sep or not exercise_id or not index.isdigit():
        return None
    return exercise_id, int(index)


@dataclass(frozen=True)
class SetDefinition:
    """Template values for a single planned set."""

    reps: Optional[float] = None
    duration: Optional[float] = None
    weight: Optional[float] = None


@dataclass(frozen=True)
class ExerciseItem:
    """One exercise of a template section."""

    id: str
    movement_id: str
    mode: str = MODE_REPS
    sets: Tuple[SetDefinition, ...] = ()
    cycle_id: Optional[str] = None
    cycle_order: Optional[int] = None
    is_per_side: bool = False
    rest_seconds: Optional[int] = None
    source_id: Optional[str] = None

    @property
    def stable_id(self) -> str:
        """Template identity that survives an exercise swap."""
        return self.source_id or self.id

    def has_round(self, round_index: int) -> bool:
        return 0 <= round_index < len(self.sets)


@dataclass(frozen=True)
class ExerciseGroup:
    """A superset (``is_cycle``) or a standalone multi-round exercise."""

    id: str
    is_cycle: bool
    total_rounds: int
    exercises: Tuple[ExerciseItem, ...]


@dataclass(frozen=True)
class SetValue:
    weight: float = 0
    reps: float = 0


@dataclass(frozen=True)
class SectionKey:
    """Identifies one section (warmup/main/core) of a scheduled workout."""

    workout_key: str
    section: str


@dataclass(frozen=True)
class CompletionSummary:
    total_items: int
    completed_items: int
    percentage: int


@dataclass
class SessionSet:
    exercise_id: str
    set_index: int
    weight: float = 0
    reps: float = 0
    is_completed: bool = True
    section: str = "main"


@dataclass
class WorkoutSession:
    """Logged sets of one scheduled workout occurrence."""

    id: str
    template_id: Optional[str]
    workout_key: str
    date: str
    sets: List[SessionSet] = field(default_factory=list)
    started_at: Optional[float] = None
    ended_at: Optional[float] = None


@dataclass(frozen=True)
class PersonalRecord:
    movement_id: str
    weight: float
    reps: float
    date: str


@dataclass
class SetProgress:
    set_index: int
    weight: float = 0
    reps: float = 0
    completed: bool = False


@dataclass
class ExerciseProgress:
    """Detailed per-set progress for one template exercise."""

    exercise_id: str
    sets: List[SetProgress] = field(default_factory=list)
    skipped: bool = False

    def get_set(self, set_index: int) -> SetProgress | None:
        for entry in self.sets:
            if entry.set_index == set_index:
                return entry
        return None


@dataclass
class ScheduledWorkout:
    workout_key: str
    template_id: str
    date: str
    status: str = "planned"
    completed_at: Optional[float] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


@dataclass
class WorkoutTemplate:
    """Exercises of a template, split by section."""

    id: str
    name: str = ""
    warmup_items: List[ExerciseItem] = field(default_factory=list)
    items: List[ExerciseItem] = field(default_factory=list)
    accessory_items: List[ExerciseItem] = field(default_factory=list)

    def section_items(self, section: str) -> List[ExerciseItem]:
        """Return the items of ``section`` (``warmup``, ``main`` or ``core``)."""

        if section == "warmup":
            return list(self.warmup_items)
        if section == "core":
            return list(self.accessory_items)
        if section == "main":
            return list(self.items)
        raise KeyError(f"Unknown section '{section}'")


@dataclass(frozen=True)
class SetCompleted:
    """Event emitted whenever a single set is logged."""

    workout_key: str
    section: str
    exercise_id: str
    movement_id: str
    round_index: int
    mode: str
    weight: float
    reps: float
    date: str
