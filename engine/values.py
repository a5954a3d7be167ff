"""Resolve the weight and reps shown for every set of a section.

All reads of "what value does this set have" go through
:meth:`SessionValueResolver.resolve`, which consults, in order:

1. the in-memory edit map of this session, when the edit differs from the
   template default;
2. detailed per-set progress, keyed by the template's stable exercise id so
   it survives an exercise swap;
3. the persisted session's record of the set;
4. the template's own default.

For time based items ``reps`` carries the duration in seconds.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import logging
import math

from engine import DEFAULT_DB_PATH, DEFAULT_EXERCISE_DURATION
from engine.models import (
    MODE_TIME,
    ExerciseItem,
    SetDefinition,
    SetValue,
    parse_set_key,
    set_key,
)
from engine.progress import ProgressStore
from engine.sessions import SessionRepository
from engine.units import round_input_to_half

logger = logging.getLogger(__name__)


def parse_numeric_input(raw: Any, *, integral: bool = False) -> Optional[float]:
    """Return ``raw`` as a non-negative number or ``None`` if it is invalid.

    Empty strings, ``NaN``, infinities, negative values and anything that is
    not a number are rejected.  With ``integral`` only whole numbers pass and
    an ``int`` is returned.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    if integral:
        if not value.is_integer():
            return None
        return int(value)
    return value


class SessionValueResolver:
    """Prioritised ``SetValue`` lookup for one section of a workout."""

    def __init__(
        self,
        workout_key: str,
        section: str,
        *,
        progress: ProgressStore | None = None,
        sessions: SessionRepository | None = None,
        db_path: Path = DEFAULT_DB_PATH,
        default_duration: int = DEFAULT_EXERCISE_DURATION,
    ) -> None:
        self.workout_key = workout_key
        self.section = section
        self.progress = progress or ProgressStore(db_path)
        self.sessions = sessions or SessionRepository(db_path)
        self.default_duration = default_duration
        self.edits: Dict[str, SetValue] = {}

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def default_value(self, item: ExerciseItem, round_index: int) -> SetValue:
        """Template value of ``item`` for ``round_index``.

        Rounds past the item's own set list reuse its last definition.
        """

        if item.has_round(round_index):
            definition = item.sets[round_index]
        elif item.sets:
            definition = item.sets[-1]
        else:
            definition = SetDefinition()
        if item.mode == MODE_TIME:
            reps = definition.duration
            if reps is None:
                reps = definition.reps if definition.reps is not None else self.default_duration
        else:
            reps = definition.reps or 0
        return SetValue(weight=definition.weight or 0, reps=reps)

    def resolve(self, item: ExerciseItem, round_index: int) -> SetValue:
        default = self.default_value(item, round_index)

        edited = self.edits.get(set_key(item.id, round_index))
        if edited is not None and edited != default:
            return edited

        stored = self.progress.get_set_value(self.workout_key, item.stable_id, round_index)
        if stored is not None:
            return stored

        session = self.sessions.find_session_by_workout_key(self.workout_key)
        if session is not None:
            for entry in session.sets:
                if (
                    entry.section == self.section
                    and entry.exercise_id == item.id
                    and entry.set_index == round_index
                ):
                    return SetValue(weight=entry.weight, reps=entry.reps)

        return default

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def set_value(
        self,
        item: ExerciseItem,
        round_index: int,
        weight: Any = None,
        reps: Any = None,
    ) -> Optional[SetValue]:
        """Apply a user edit to ``(item, round_index)``.

        Each field is parsed independently; an invalid field keeps its prior
        value.  Weights snap to the nearest 0.5.  Returns the new value or
        ``None`` when nothing valid was given.
        """

        new_weight = parse_numeric_input(weight)
        new_reps = parse_numeric_input(reps, integral=True)
        if new_weight is None and new_reps is None:
            logger.debug("Ignored invalid input %r/%r for %s", weight, reps, item.id)
            return None
        current = self.resolve(item, round_index)
        value = SetValue(
            weight=round_input_to_half(new_weight) if new_weight is not None else current.weight,
            reps=new_reps if new_reps is not None else current.reps,
        )
        self.edits[set_key(item.id, round_index)] = value
        return value

    def seed_round(self, item: ExerciseItem, from_round: int, to_round: int) -> None:
        """Carry the value of ``from_round`` forward as ``to_round``'s default.

        An existing edit or stored progress for ``to_round`` is left alone.
        """

        if not item.has_round(to_round):
            return
        token = set_key(item.id, to_round)
        if token in self.edits:
            return
        if self.progress.get_set_value(self.workout_key, item.stable_id, to_round) is not None:
            return
        self.edits[token] = self.resolve(item, from_round)

    def rekey(self, old_id: str, new_id: str) -> None:
        """Move every edit of ``old_id`` over to ``new_id``."""

        for token in list(self.edits):
            parsed = parse_set_key(token)
            if parsed is None or parsed[0] != old_id:
                continue
            self.edits[set_key(new_id, parsed[1])] = self.edits.pop(token)

    def reset(self) -> None:
        self.edits.clear()

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------
    def export_edits(self) -> Dict[str, Dict[str, float]]:
        return {
            token: {"weight": value.weight, "reps": value.reps}
            for token, value in self.edits.items()
        }

    def load_edits(self, data: Dict[str, Dict[str, float]]) -> None:
        self.edits = {
            token: SetValue(weight=entry.get("weight", 0), reps=entry.get("reps", 0))
            for token, entry in data.items()
            if parse_set_key(token) is not None
        }
