"""Personal records per movement.

:class:`PRDetector` listens to set-completed events and forwards every
completed weighted set to :meth:`PersonalRecordStore.update_pr`.  The store
replaces records unconditionally; whether a record counts as *new* is decided
by callers comparing its date with a window start.
"""

from __future__ import annotations

from pathlib import Path
import logging
import sqlite3

from engine import DEFAULT_DB_PATH
from engine.models import MODE_REPS, PersonalRecord, SetCompleted

logger = logging.getLogger(__name__)


class PersonalRecordStore:
    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def update_pr(self, movement_id: str, weight: float, reps: float, date: str) -> None:
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO personal_records (movement_id, weight, reps, date)
                VALUES (?, ?, ?, ?)
                """,
                (movement_id, weight, reps, date),
            )
        logger.debug("Record for %s set to %s x %s", movement_id, weight, reps)

    def get_pr(self, movement_id: str) -> PersonalRecord | None:
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                "SELECT movement_id, weight, reps, date FROM personal_records WHERE movement_id = ?",
                (movement_id,),
            ).fetchone()
        return PersonalRecord(*row) if row else None

    def get_all(self) -> list[PersonalRecord]:
        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                "SELECT movement_id, weight, reps, date FROM personal_records ORDER BY movement_id"
            ).fetchall()
        return [PersonalRecord(*row) for row in rows]

    def is_new_record(self, movement_id: str, window_start: str) -> bool:
        """Return ``True`` if the record of ``movement_id`` dates from ``window_start`` on.

        Dates are ISO ``YYYY-MM-DD`` strings, so they compare lexically.
        """

        record = self.get_pr(movement_id)
        return record is not None and record.date >= window_start


class PRDetector:
    """Observer turning set-completed events into record updates."""

    def __init__(self, store: PersonalRecordStore) -> None:
        self.store = store

    def __call__(self, event: SetCompleted) -> None:
        self.on_set_completed(event)

    def on_set_completed(self, event: SetCompleted) -> None:
        if event.mode != MODE_REPS or not event.weight or event.weight < 0:
            return
        self.store.update_pr(event.movement_id, event.weight, event.reps, event.date)
