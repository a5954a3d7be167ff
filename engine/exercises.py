"""Movement library lookups."""

from __future__ import annotations

from pathlib import Path
import sqlite3

from engine import DEFAULT_DB_PATH, PLACEHOLDER_EXERCISE_NAME


class ExerciseLibrary:
    """Resolve movement ids to display names stored in ``library_movements``."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def add_movement(self, movement_id: str, name: str) -> None:
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO library_movements (id, name) VALUES (?, ?)",
                (movement_id, name),
            )

    def find_name(self, movement_id: str | None) -> str | None:
        """Return the stored name for ``movement_id`` or ``None``."""

        if not movement_id:
            return None
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                "SELECT name FROM library_movements WHERE id = ?", (movement_id,)
            ).fetchone()
        return row[0] if row and row[0] else None

    def get_name(self, movement_id: str | None) -> str:
        """Return a display name, falling back to a generic placeholder."""

        return self.find_name(movement_id) or PLACEHOLDER_EXERCISE_NAME

    def get_all(self) -> list[tuple[str, str]]:
        """Return ``(id, name)`` pairs ordered by name."""

        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                "SELECT id, name FROM library_movements ORDER BY name"
            ).fetchall()
        return [(r[0], r[1]) for r in rows]
