"""Scheduled workout occurrences and their completion flag."""

from __future__ import annotations

from pathlib import Path
import logging
import sqlite3
import time

from engine import DEFAULT_DB_PATH
from engine.models import ScheduledWorkout

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """Store of ``workout_key`` -> scheduled occurrence."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def schedule(self, workout_key: str, template_id: str, date: str) -> ScheduledWorkout:
        """Create the occurrence if missing and return it."""

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO scheduled_workouts (workout_key, template_id, date)
                VALUES (?, ?, ?)
                """,
                (workout_key, template_id, date),
            )
        return self.get(workout_key)

    def get(self, workout_key: str) -> ScheduledWorkout | None:
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                """
                SELECT workout_key, template_id, date, status, completed_at
                  FROM scheduled_workouts WHERE workout_key = ?
                """,
                (workout_key,),
            ).fetchone()
        if row is None:
            return None
        return ScheduledWorkout(*row)

    def complete_workout(self, workout_key: str) -> None:
        """Mark the occurrence as completed."""

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                UPDATE scheduled_workouts SET status = 'completed', completed_at = ?
                 WHERE workout_key = ?
                """,
                (time.time(), workout_key),
            )
        logger.info("Workout %s completed", workout_key)

    def uncomplete_workout(self, workout_key: str) -> None:
        """Revert a completed occurrence to ``planned``."""

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                UPDATE scheduled_workouts SET status = 'planned', completed_at = NULL
                 WHERE workout_key = ?
                """,
                (workout_key,),
            )
        logger.info("Workout %s reverted to planned", workout_key)

    def is_completed(self, workout_key: str) -> bool:
        occurrence = self.get(workout_key)
        return bool(occurrence and occurrence.is_completed)
