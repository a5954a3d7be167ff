"""State machine driving one section of a scheduled workout.

:class:`WorkoutExecution` keeps the completed set tokens, the completed round
count of every group and the active group/exercise pointer.  It consumes the
``select``/``start``/``complete`` events of the caller, persists every logged
set straight away and decides when a countdown runs between sets.

States:

``idle``
    no group is open yet.
``active``
    a group is open and the pointed exercise is waiting to be started.
``timer``
    an exercise or rest countdown is running (``timer_phase``).
``complete``
    every group of the section is done.

Only one transition is applied at a time.  User events arriving while a
transition runs are ignored; countdown events are queued and applied right
after it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Optional
import datetime
import json
import logging
import re
import time

from engine import DEFAULT_DB_PATH, REST_SECTION, SECTION_TYPES
from engine.completion import CompletionStore
from engine.exercises import ExerciseLibrary
from engine.grouping import (
    NEXT_EXERCISE,
    NEXT_GROUP,
    NEXT_ROUND,
    SECTION_COMPLETE,
    Advance,
    build_groups,
    compute_current_rounds,
    find_next_incomplete_group,
    find_resume_position,
    first_open_exercise,
    has_progress,
    is_group_complete,
    is_satisfied,
    plan_advance,
    planned_tokens,
    swap_item,
)
from engine.models import (
    MODE_TIME,
    CompletionSummary,
    ExerciseGroup,
    ExerciseItem,
    SectionKey,
    SessionSet,
    SetCompleted,
    SetValue,
    set_key,
)
from engine.progress import ProgressStore
from engine.records import PersonalRecordStore, PRDetector
from engine.schedule import ScheduleRepository
from engine.sessions import SessionRepository
from engine.settings import Settings
from engine.templates import TemplateRepository
from engine.timers import PHASE_EXERCISE, PHASE_REST, TimerOrchestrator
from engine.units import format_weight_for_load
from engine.values import SessionValueResolver

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_ACTIVE = "active"
STATE_TIMER = "timer"
STATE_COMPLETE = "complete"


@dataclass(frozen=True)
class ExecutionState:
    """Snapshot of the engine for rendering."""

    status: str
    section: str
    group_id: Optional[str] = None
    group_index: Optional[int] = None
    exercise_index: int = 0
    exercise_id: Optional[str] = None
    round_index: Optional[int] = None
    timer_phase: Optional[str] = None
    timer_remaining: float = 0.0
    upcoming_name: Optional[str] = None
    has_logged_any_set: bool = False
    current_value: Optional[SetValue] = None
    completed_sets: FrozenSet[str] = frozenset()
    current_rounds: Dict[str, int] = field(default_factory=dict)
    completion: Optional[CompletionSummary] = None


class WorkoutExecution:
    """Execute the ``section`` of the workout scheduled as ``workout_key``.

    Every collaborator defaults to its SQLite implementation on ``db_path``.
    ``clock``/``time_func`` are handed to the :class:`TimerOrchestrator`.
    """

    def __init__(
        self,
        workout_key: str,
        template_id: str,
        section: str,
        date: str | None = None,
        *,
        db_path: Path = DEFAULT_DB_PATH,
        templates: TemplateRepository | None = None,
        schedule: ScheduleRepository | None = None,
        completion: CompletionStore | None = None,
        sessions: SessionRepository | None = None,
        progress: ProgressStore | None = None,
        library: ExerciseLibrary | None = None,
        records: PersonalRecordStore | None = None,
        settings: Settings | None = None,
        clock: Any = None,
        time_func: Callable[[], float] = time.time,
        recovery_dir: Path | None = None,
    ) -> None:
        if section not in SECTION_TYPES:
            raise ValueError(f"Unknown section '{section}'")
        self.db_path = Path(db_path)
        self.templates = templates or TemplateRepository(self.db_path)
        template = self.templates.get_template(template_id)
        if template is None:
            raise ValueError(f"Template '{template_id}' not found")

        self.workout_key = workout_key
        self.template_id = template_id
        self.section = section
        self.date = date or datetime.date.today().isoformat()
        self.section_key = SectionKey(workout_key, section)

        self.schedule = schedule or ScheduleRepository(self.db_path)
        self.completion = completion or CompletionStore(
            self.db_path, templates=self.templates, schedule=self.schedule
        )
        self.sessions = sessions or SessionRepository(self.db_path)
        self.progress = progress or ProgressStore(self.db_path)
        self.library = library or ExerciseLibrary(self.db_path)
        self.records = records or PersonalRecordStore(self.db_path)
        self.settings = settings or Settings(self.db_path.parent / "settings.json")
        self.time_func = time_func
        self.timer = TimerOrchestrator(clock, time_func)
        self.resolver = SessionValueResolver(
            workout_key,
            section,
            progress=self.progress,
            sessions=self.sessions,
            default_duration=self.settings.exercise_duration,
        )

        self.recovery_dir = Path(recovery_dir) if recovery_dir else self.db_path.parent
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", workout_key)
        self.recovery_files = (
            self.recovery_dir / f"execution_{safe_key}_{section}_1.json",
            self.recovery_dir / f"execution_{safe_key}_{section}_2.json",
        )

        self.schedule.schedule(workout_key, template_id, self.date)

        self.items: List[ExerciseItem] = template.section_items(section)
        for old_id, new_id, movement_id in self.completion.swaps(self.section_key):
            swap_item(self.items, old_id, new_id, movement_id)
        self.groups: List[ExerciseGroup] = build_groups(self.items)

        self.completed: set[str] = set()
        self.current_rounds: Dict[str, int] = {}
        self.completion_timestamps: Dict[str, float] = {}
        self.active_group: Optional[int] = None
        self.exercise_index = 0
        self.has_logged_any_set = False
        self.status = STATE_IDLE
        self.timer_phase: Optional[str] = None

        self._busy = False
        self._queue: deque[Callable[[], Any]] = deque()
        self._listeners: List[Callable[[SetCompleted], None]] = []
        self.subscribe(PRDetector(self.records))

        self._restore()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _restore(self) -> None:
        """Rebuild progress from the completion store and recovery files."""

        # Tokens of items no longer in the section are left out
        self.completed = self.completion.completed_tokens(self.section_key) & planned_tokens(
            self.items
        )
        self.current_rounds = compute_current_rounds(self.groups, self.completed)

        recovered = self.load_recovery_state()
        if recovered:
            self.resolver.load_edits(recovered.get("edits", {}))
            group_ids = {g.id for g in self.groups}
            self.completion_timestamps = {
                gid: float(ts)
                for gid, ts in recovered.get("completion_timestamps", {}).items()
                if gid in group_ids
            }

        if not self.groups:
            self.status = STATE_COMPLETE
            return
        position = find_resume_position(self.groups, self.current_rounds, self.completed)
        if position is None:
            self.status = STATE_COMPLETE
            return

        if not self.completed:
            # Nothing logged yet: only a recovered selection opens a group
            index = self._group_index(recovered.get("active_group_id")) if recovered else None
            if index is not None and not is_group_complete(self.groups[index], self.current_rounds):
                self._open_group(index, recovered.get("exercise_index", 0))
            return

        self._open_group(*position)
        self.has_logged_any_set = has_progress(
            self.groups[self.active_group], self.current_rounds, self.completed
        )
        logger.debug(
            "Resumed %s/%s at group %s exercise %s",
            self.workout_key,
            self.section,
            self.active_group,
            self.exercise_index,
        )

    def _group_index(self, group_id: Optional[str]) -> Optional[int]:
        for index, group in enumerate(self.groups):
            if group.id == group_id:
                return index
        return None

    def _open_group(self, group_index: int, exercise_index: int = 0) -> None:
        group = self.groups[group_index]
        round_index = self.current_rounds.get(group.id, 0)
        if not 0 <= exercise_index < len(group.exercises) or is_satisfied(
            group.exercises[exercise_index], round_index, self.completed
        ):
            exercise_index = first_open_exercise(group, round_index, self.completed)
        self.active_group = group_index
        self.exercise_index = exercise_index
        self.status = STATE_ACTIVE

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, listener: Callable[[SetCompleted], None]) -> None:
        """Call ``listener`` with a :class:`SetCompleted` for every logged set."""

        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[SetCompleted], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: SetCompleted) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Event serialisation
    # ------------------------------------------------------------------
    def _dispatch(self, action: Callable[[], Any], *, from_timer: bool = False) -> Any:
        if self._busy:
            if from_timer:
                self._queue.append(action)
            else:
                logger.debug("Ignored user event while a transition is running")
            return None
        self._busy = True
        try:
            result = action()
        finally:
            self._busy = False
        self._drain()
        return result

    def _drain(self) -> None:
        while self._queue and not self._busy:
            action = self._queue.popleft()
            self._busy = True
            try:
                action()
            finally:
                self._busy = False

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    @property
    def current_group(self) -> Optional[ExerciseGroup]:
        if self.active_group is None:
            return None
        return self.groups[self.active_group]

    @property
    def current_exercise(self) -> Optional[ExerciseItem]:
        group = self.current_group
        if group is None or not 0 <= self.exercise_index < len(group.exercises):
            return None
        return group.exercises[self.exercise_index]

    @property
    def current_round(self) -> Optional[int]:
        group = self.current_group
        if group is None:
            return None
        return self.current_rounds.get(group.id, 0)

    def find_item(self, exercise_id: str) -> Optional[ExerciseItem]:
        for item in self.items:
            if item.id == exercise_id:
                return item
        return None

    def exercise_name(self, exercise_id: str) -> str:
        """Display name of ``exercise_id``, never empty."""

        item = self.find_item(exercise_id)
        return self.library.get_name(item.movement_id if item else None)

    def resolve_value(self, exercise_id: str, round_index: int) -> Optional[SetValue]:
        item = self.find_item(exercise_id)
        if item is None:
            return None
        return self.resolver.resolve(item, round_index)

    def display_value(self, exercise_id: str, round_index: int) -> Optional[dict]:
        """Resolved value formatted for the configured weight unit."""

        value = self.resolve_value(exercise_id, round_index)
        if value is None:
            return None
        reps = value.reps
        return {
            "weight": format_weight_for_load(value.weight, self.settings.use_kg),
            "unit": "kg" if self.settings.use_kg else "lb",
            "reps": str(int(reps)) if float(reps).is_integer() else str(reps),
        }

    def get_completion(self) -> CompletionSummary:
        return self.completion.get_completion(self.section_key)

    def completed_group_order(self) -> List[str]:
        """Ids of completed groups in the order they were finished."""

        done = [
            (index, group.id)
            for index, group in enumerate(self.groups)
            if is_group_complete(group, self.current_rounds)
        ]
        done.sort(key=lambda pair: (self.completion_timestamps.get(pair[1], float("inf")), pair[0]))
        return [gid for _index, gid in done]

    def state(self) -> ExecutionState:
        group = self.current_group
        exercise = self.current_exercise
        round_index = self.current_round
        value = None
        if exercise is not None and round_index is not None:
            value = self.resolver.resolve(exercise, round_index)
        return ExecutionState(
            status=self.status,
            section=self.section,
            group_id=group.id if group else None,
            group_index=self.active_group,
            exercise_index=self.exercise_index,
            exercise_id=exercise.id if exercise else None,
            round_index=round_index,
            timer_phase=self.timer_phase,
            timer_remaining=self.timer.remaining(),
            upcoming_name=self.timer.upcoming_name,
            has_logged_any_set=self.has_logged_any_set,
            current_value=value,
            completed_sets=frozenset(self.completed),
            current_rounds=dict(self.current_rounds),
            completion=self.get_completion(),
        )

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------
    def select(self, group_id: str) -> bool:
        """Open ``group_id``.  Refused once a set of the open group is logged."""

        return bool(self._dispatch(lambda: self._select(group_id)))

    def start(self) -> None:
        self._dispatch(self._start)

    def complete(self) -> None:
        self._dispatch(self._complete)

    def reset_section(self) -> None:
        self._dispatch(self._reset_section)

    def complete_all(self) -> None:
        self._dispatch(self._complete_all)

    def set_value(
        self, exercise_id: str, round_index: int, weight: Any = None, reps: Any = None
    ) -> Optional[SetValue]:
        """Edit the value of one set; invalid input leaves it unchanged."""

        return self._dispatch(lambda: self._set_value(exercise_id, round_index, weight, reps))

    def swap_exercise(self, old_id: str, new_id: str, movement_id: str | None = None) -> bool:
        """Replace exercise ``old_id`` with ``new_id`` keeping its progress."""

        return bool(self._dispatch(lambda: self._swap_exercise(old_id, new_id, movement_id)))

    def skip_timer(self) -> None:
        self._dispatch(self.timer.skip)

    def add_timer_time(self, seconds: float | None = None) -> float:
        if seconds is None:
            return self.timer.add_time()
        return self.timer.add_time(seconds)

    def pause_timer(self) -> None:
        self.timer.pause()

    def resume_timer(self) -> None:
        self.timer.resume()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _select(self, group_id: str) -> bool:
        if self.has_logged_any_set or self.status in (STATE_TIMER, STATE_COMPLETE):
            return False
        index = self._group_index(group_id)
        if index is None or is_group_complete(self.groups[index], self.current_rounds):
            return False
        self._open_group(index)
        self.save_recovery_state()
        logger.debug("Selected group %s", group_id)
        return True

    def _start(self) -> None:
        if self.status == STATE_COMPLETE or self.status == STATE_TIMER:
            return
        if self.active_group is None:
            index = find_next_incomplete_group(self.groups, self.current_rounds, -1)
            if index is None:
                return
            self._open_group(index)
        exercise = self.current_exercise
        round_index = self.current_round
        if exercise is None or not exercise.has_round(round_index):
            return
        if exercise.mode == MODE_TIME:
            duration = self.resolver.resolve(exercise, round_index).reps
            if not duration:
                duration = self.settings.exercise_duration
            self.status = STATE_TIMER
            self.timer_phase = PHASE_EXERCISE
            self.timer.start_exercise(
                duration, self._on_exercise_timer_finished, per_side=exercise.is_per_side
            )
            self.save_recovery_state()
        else:
            self._queue.append(self._complete)

    def _on_exercise_timer_finished(self) -> None:
        self._dispatch(self._complete, from_timer=True)

    def _on_rest_timer_finished(self) -> None:
        self._dispatch(self._advance_after_rest, from_timer=True)

    def _complete(self) -> None:
        if self.status not in (STATE_ACTIVE, STATE_TIMER) or self.timer_phase == PHASE_REST:
            return
        group = self.current_group
        exercise = self.current_exercise
        if group is None or exercise is None:
            return
        round_index = self.current_rounds.get(group.id, 0)
        if not exercise.has_round(round_index):
            return
        token = set_key(exercise.id, round_index)
        if token in self.completed:
            return

        self.timer.cancel()
        self.timer_phase = None
        value = self.resolver.resolve(exercise, round_index)
        self.completed.add(token)
        self.completion.mark_complete(self.section_key, token)
        self.progress.save_set(
            self.workout_key, exercise.stable_id, round_index, value, completed=True
        )
        self.has_logged_any_set = True
        self._persist_session()
        logger.debug("Logged %s (%s x %s)", token, value.weight, value.reps)

        plan = plan_advance(
            self.groups, self.current_rounds, self.completed, self.active_group, self.exercise_index
        )
        if plan.kind in (NEXT_GROUP, SECTION_COMPLETE):
            self.completion_timestamps[group.id] = self.time_func()
        if self.section == REST_SECTION and plan.kind != SECTION_COMPLETE:
            self.status = STATE_TIMER
            self.timer_phase = PHASE_REST
            self.timer.start_rest(
                exercise.rest_seconds or self.settings.rest_duration,
                self._on_rest_timer_finished,
                upcoming_name=self._upcoming_name(plan, exercise),
            )
        else:
            self._apply_advance(plan)
        self.save_recovery_state()

        self._emit(
            SetCompleted(
                workout_key=self.workout_key,
                section=self.section,
                exercise_id=exercise.id,
                movement_id=exercise.movement_id,
                round_index=round_index,
                mode=exercise.mode,
                weight=value.weight,
                reps=value.reps,
                date=self.date,
            )
        )

    def _upcoming_name(self, plan: Advance, exercise: ExerciseItem) -> Optional[str]:
        if plan.kind == SECTION_COMPLETE:
            return None
        upcoming = self.groups[plan.group_index].exercises[plan.exercise_index]
        if upcoming.id == exercise.id:
            return None
        return self.library.get_name(upcoming.movement_id)

    def _advance_after_rest(self) -> None:
        if self.status != STATE_TIMER or self.timer_phase != PHASE_REST:
            return
        if self.active_group is None:
            return
        self.timer_phase = None
        plan = plan_advance(
            self.groups, self.current_rounds, self.completed, self.active_group, self.exercise_index
        )
        self._apply_advance(plan)
        self.save_recovery_state()

    def _apply_advance(self, plan: Advance) -> None:
        group = self.groups[self.active_group]
        logged_round = self.current_rounds.get(group.id, 0)
        self.current_rounds = compute_current_rounds(self.groups, self.completed)

        if plan.kind == NEXT_EXERCISE:
            self.exercise_index = plan.exercise_index
            self.status = STATE_ACTIVE
        elif plan.kind == NEXT_ROUND:
            for exercise in group.exercises:
                self.resolver.seed_round(exercise, logged_round, plan.round_index)
            self.exercise_index = plan.exercise_index
            self.status = STATE_ACTIVE
        else:
            self.completion_timestamps.setdefault(group.id, self.time_func())
            logger.debug("Group %s complete", group.id)
            if plan.kind == NEXT_GROUP:
                self.active_group = plan.group_index
                self.exercise_index = plan.exercise_index
                self.has_logged_any_set = False
                self.status = STATE_ACTIVE
            else:
                self._finish_section()

    def _finish_section(self) -> None:
        self.timer.cancel()
        self.timer_phase = None
        self.active_group = None
        self.exercise_index = 0
        self.status = STATE_COMPLETE
        self._persist_session(finished=True)
        logger.info("Section %s of %s complete", self.section, self.workout_key)
        if self.completion.all_sections_complete(self.workout_key):
            if not self.schedule.is_completed(self.workout_key):
                self.schedule.complete_workout(self.workout_key)

    def _reset_section(self) -> None:
        self.timer.cancel()
        self.timer_phase = None
        self._queue.clear()

        stable_ids = {item.stable_id for item in self.items} | {item.id for item in self.items}
        self.completed = set()
        self.current_rounds = compute_current_rounds(self.groups, self.completed)
        self.completion_timestamps = {}
        self.has_logged_any_set = False
        self.resolver.reset()
        self.active_group = None
        self.exercise_index = 0
        self.status = STATE_IDLE if self.groups else STATE_COMPLETE

        self.sessions.save_section_sets(
            self.workout_key, self.template_id, self.date, self.section, []
        )
        self.completion.reset(self.section_key)
        self.progress.clear_exercises(self.workout_key, sorted(stable_ids))
        if self.schedule.is_completed(self.workout_key):
            self.schedule.uncomplete_workout(self.workout_key)
        self.clear_recovery_files()
        logger.info("Section %s of %s reset", self.section, self.workout_key)

    def _complete_all(self) -> None:
        self.timer.cancel()
        self.timer_phase = None
        self._queue.clear()

        tokens = []
        entries = []
        for group in self.groups:
            for exercise in group.exercises:
                for round_index in range(len(exercise.sets)):
                    token = set_key(exercise.id, round_index)
                    if token in self.completed:
                        continue
                    value = self.resolver.resolve(exercise, round_index)
                    entries.append((exercise.stable_id, round_index, value))
                    tokens.append(token)
        self.completion.mark_many(self.section_key, tokens)
        self.progress.save_completed_sets(self.workout_key, entries)
        self.completed.update(tokens)
        self.current_rounds = compute_current_rounds(self.groups, self.completed)
        now = self.time_func()
        for group in self.groups:
            self.completion_timestamps.setdefault(group.id, now)
        if tokens:
            self.has_logged_any_set = True
        self._finish_section()
        self.save_recovery_state()

    def _set_value(
        self, exercise_id: str, round_index: int, weight: Any, reps: Any
    ) -> Optional[SetValue]:
        item = self.find_item(exercise_id)
        if item is None or round_index < 0:
            return None
        value = self.resolver.set_value(item, round_index, weight=weight, reps=reps)
        if value is None:
            return None
        self.progress.save_set(self.workout_key, item.stable_id, round_index, value)
        if set_key(item.id, round_index) in self.completed:
            self._persist_session(finished=self.status == STATE_COMPLETE)
        self.save_recovery_state()
        return value

    def _swap_exercise(self, old_id: str, new_id: str, movement_id: str | None) -> bool:
        item = swap_item(self.items, old_id, new_id, movement_id)
        if item is None:
            return False
        self.groups = build_groups(self.items)

        mapping = {
            set_key(old_id, r): set_key(new_id, r)
            for r in range(len(item.sets))
            if set_key(old_id, r) in self.completed
        }
        self.completed = {mapping.get(t, t) for t in self.completed}
        self.completion.record_swap(self.section_key, old_id, new_id, movement_id, mapping)
        self.resolver.rekey(old_id, new_id)
        self.sessions.rekey_exercise(self.workout_key, self.section, old_id, new_id)
        if old_id in self.completion_timestamps:
            self.completion_timestamps[new_id] = self.completion_timestamps.pop(old_id)
        self.current_rounds = compute_current_rounds(self.groups, self.completed)
        self.save_recovery_state()
        logger.info("Swapped %s for %s (%d logged sets)", old_id, new_id, len(mapping))
        return True

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------
    def _persist_session(self, finished: bool = False) -> None:
        """Write this section's logged sets into the workout's session."""

        sets = []
        for group in self.groups:
            for exercise in group.exercises:
                for round_index in range(len(exercise.sets)):
                    if set_key(exercise.id, round_index) not in self.completed:
                        continue
                    value = self.resolver.resolve(exercise, round_index)
                    sets.append(
                        SessionSet(
                            exercise_id=exercise.id,
                            set_index=round_index,
                            weight=value.weight,
                            reps=value.reps,
                            is_completed=True,
                            section=self.section,
                        )
                    )
        self.sessions.save_section_sets(
            self.workout_key,
            self.template_id,
            self.date,
            self.section,
            sets,
            finished=finished,
        )

    # ------------------------------------------------------------------
    # Recovery files
    # ------------------------------------------------------------------
    def export_state(self) -> dict:
        """Return a JSON-serialisable representation of the in-memory state."""

        group = self.current_group
        return {
            "workout_key": self.workout_key,
            "section": self.section,
            "template_id": self.template_id,
            "date": self.date,
            "edits": self.resolver.export_edits(),
            "completion_timestamps": dict(self.completion_timestamps),
            "active_group_id": group.id if group else None,
            "exercise_index": self.exercise_index,
            "has_logged_any_set": self.has_logged_any_set,
            "saved_at": self.time_func(),
        }

    def save_recovery_state(self) -> None:
        """Persist the current state to both recovery files."""

        payload = json.dumps(self.export_state())
        try:
            self.recovery_dir.mkdir(parents=True, exist_ok=True)
            for path in self.recovery_files:
                path.write_text(payload)
        except OSError:
            logger.exception("Could not write recovery state for %s", self.workout_key)

    def load_recovery_state(self) -> Optional[dict]:
        """Return the first readable recovery payload of this section."""

        for path in self.recovery_files:
            try:
                if not path.exists():
                    continue
                text = path.read_text().strip()
                if not text:
                    continue
                data = json.loads(text)
            except (OSError, ValueError):
                logger.exception("Unreadable recovery file %s", path)
                continue
            if (
                isinstance(data, dict)
                and data.get("workout_key") == self.workout_key
                and data.get("section") == self.section
            ):
                return data
        return None

    def clear_recovery_files(self) -> None:
        """Remove any existing recovery files."""

        for path in self.recovery_files:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
