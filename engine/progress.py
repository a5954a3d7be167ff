"""Detailed per-set progress for each template exercise of a workout.

Rows are keyed by ``(workout_key, exercise_id)`` where ``exercise_id`` is the
template's stable identity of the exercise, so progress survives an
exercise being swapped for another movement mid-session.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple
import sqlite3
import time

from engine import DEFAULT_DB_PATH
from engine.models import ExerciseProgress, SetProgress, SetValue


class ProgressStore:
    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def save_exercise_progress(self, workout_key: str, progress: ExerciseProgress) -> None:
        """Replace the stored progress of ``progress.exercise_id``."""

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                "DELETE FROM progress_sets WHERE workout_key = ? AND exercise_id = ?",
                (workout_key, progress.exercise_id),
            )
            conn.executemany(
                """
                INSERT INTO progress_sets
                    (workout_key, exercise_id, set_index, weight, reps, completed)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        workout_key,
                        progress.exercise_id,
                        s.set_index,
                        s.weight,
                        s.reps,
                        int(s.completed),
                    )
                    for s in progress.sets
                ],
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO progress_exercises
                    (workout_key, exercise_id, skipped, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (workout_key, progress.exercise_id, int(progress.skipped), time.time()),
            )

    def save_set(
        self,
        workout_key: str,
        exercise_id: str,
        set_index: int,
        value: SetValue,
        *,
        completed: bool | None = None,
    ) -> None:
        """Store ``value`` for one set.

        ``completed=None`` keeps the stored completion flag, which lets value
        edits on an already logged set leave it logged.
        """

        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                """
                SELECT completed FROM progress_sets
                 WHERE workout_key = ? AND exercise_id = ? AND set_index = ?
                """,
                (workout_key, exercise_id, set_index),
            ).fetchone()
            flag = bool(row[0]) if row and completed is None else bool(completed)
            conn.execute(
                """
                INSERT OR REPLACE INTO progress_sets
                    (workout_key, exercise_id, set_index, weight, reps, completed, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout_key,
                    exercise_id,
                    set_index,
                    value.weight,
                    value.reps,
                    int(flag),
                    time.time() if flag else None,
                ),
            )

    def save_completed_sets(
        self, workout_key: str, entries: Iterable[Tuple[str, int, SetValue]]
    ) -> None:
        """Store ``(exercise_id, set_index, value)`` entries as completed in one transaction."""

        now = time.time()
        rows = [
            (workout_key, exercise_id, set_index, value.weight, value.reps, 1, now)
            for exercise_id, set_index, value in entries
        ]
        if not rows:
            return
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO progress_sets
                    (workout_key, exercise_id, set_index, weight, reps, completed, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )

    def get_exercise_progress(self, workout_key: str, exercise_id: str) -> ExerciseProgress | None:
        with sqlite3.connect(str(self.db_path)) as conn:
            sets = conn.execute(
                """
                SELECT set_index, weight, reps, completed FROM progress_sets
                 WHERE workout_key = ? AND exercise_id = ?
                 ORDER BY set_index
                """,
                (workout_key, exercise_id),
            ).fetchall()
            meta = conn.execute(
                """
                SELECT skipped FROM progress_exercises
                 WHERE workout_key = ? AND exercise_id = ?
                """,
                (workout_key, exercise_id),
            ).fetchone()
        if not sets and meta is None:
            return None
        return ExerciseProgress(
            exercise_id=exercise_id,
            sets=[SetProgress(i, w, r, bool(c)) for i, w, r, c in sets],
            skipped=bool(meta[0]) if meta else False,
        )

    def get_set_value(self, workout_key: str, exercise_id: str, set_index: int) -> SetValue | None:
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                """
                SELECT weight, reps FROM progress_sets
                 WHERE workout_key = ? AND exercise_id = ? AND set_index = ?
                """,
                (workout_key, exercise_id, set_index),
            ).fetchone()
        if row is None:
            return None
        return SetValue(weight=row[0], reps=row[1])

    def skip_exercise(self, workout_key: str, exercise_id: str) -> None:
        """Mark the exercise as skipped and drop its sets."""

        self.save_exercise_progress(
            workout_key, ExerciseProgress(exercise_id=exercise_id, sets=[], skipped=True)
        )

    def clear_exercises(self, workout_key: str, exercise_ids: Iterable[str]) -> None:
        ids = list(exercise_ids)
        if not ids:
            return
        with sqlite3.connect(str(self.db_path)) as conn:
            for exercise_id in ids:
                conn.execute(
                    "DELETE FROM progress_sets WHERE workout_key = ? AND exercise_id = ?",
                    (workout_key, exercise_id),
                )
                conn.execute(
                    "DELETE FROM progress_exercises WHERE workout_key = ? AND exercise_id = ?",
                    (workout_key, exercise_id),
                )

    def clear_workout(self, workout_key: str) -> None:
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute("DELETE FROM progress_sets WHERE workout_key = ?", (workout_key,))
            conn.execute("DELETE FROM progress_exercises WHERE workout_key = ?", (workout_key,))
