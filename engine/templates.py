"""Read and store workout templates.

Templates are read-only while a section is being executed; the engine takes
a snapshot of the section's items when it starts and works on that copy.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3

from engine import DEFAULT_DB_PATH
from engine.models import ExerciseItem, SetDefinition, WorkoutTemplate

_SECTION_ATTRS = {
    "warmup": "warmup_items",
    "main": "items",
    "core": "accessory_items",
}


class TemplateRepository:
    """SQLite backed template provider."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def add_template(self, template: WorkoutTemplate) -> None:
        """Insert ``template`` replacing any stored template with the same id."""

        with sqlite3.connect(str(self.db_path)) as conn:
            cursor = conn.cursor()
            self._delete_items(cursor, template.id)
            cursor.execute(
                "INSERT OR REPLACE INTO workout_templates (id, name) VALUES (?, ?)",
                (template.id, template.name),
            )
            for section, attr in _SECTION_ATTRS.items():
                for position, item in enumerate(getattr(template, attr)):
                    cursor.execute(
                        """
                        INSERT INTO template_items
                            (template_id, section, position, item_id, source_id,
                             movement_id, mode, cycle_id, cycle_order,
                             is_per_side, rest_seconds)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            template.id,
                            section,
                            position,
                            item.id,
                            item.source_id,
                            item.movement_id,
                            item.mode,
                            item.cycle_id,
                            item.cycle_order,
                            int(item.is_per_side),
                            item.rest_seconds,
                        ),
                    )
                    row_id = cursor.lastrowid
                    cursor.executemany(
                        """
                        INSERT INTO template_item_sets
                            (item_row_id, position, reps, duration, weight)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        [
                            (row_id, idx, s.reps, s.duration, s.weight)
                            for idx, s in enumerate(item.sets)
                        ],
                    )

    @staticmethod
    def _delete_items(cursor: sqlite3.Cursor, template_id: str) -> None:
        cursor.execute(
            """
            DELETE FROM template_item_sets WHERE item_row_id IN
                (SELECT row_id FROM template_items WHERE template_id = ?)
            """,
            (template_id,),
        )
        cursor.execute("DELETE FROM template_items WHERE template_id = ?", (template_id,))

    def get_template(self, template_id: str) -> WorkoutTemplate | None:
        """Return the template stored under ``template_id`` or ``None``."""

        with sqlite3.connect(str(self.db_path)) as conn:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT id, name FROM workout_templates WHERE id = ?", (template_id,)
            ).fetchone()
            if row is None:
                return None
            template = WorkoutTemplate(id=row[0], name=row[1] or "")
            cursor.execute(
                """
                SELECT row_id, section, item_id, source_id, movement_id, mode,
                       cycle_id, cycle_order, is_per_side, rest_seconds
                  FROM template_items
                 WHERE template_id = ?
                 ORDER BY section, position
                """,
                (template_id,),
            )
            for (
                row_id,
                section,
                item_id,
                source_id,
                movement_id,
                mode,
                cycle_id,
                cycle_order,
                per_side,
                rest,
            ) in cursor.fetchall():
                sets = conn.execute(
                    """
                    SELECT reps, duration, weight FROM template_item_sets
                     WHERE item_row_id = ? ORDER BY position
                    """,
                    (row_id,),
                ).fetchall()
                item = ExerciseItem(
                    id=item_id,
                    movement_id=movement_id,
                    mode=mode,
                    sets=tuple(SetDefinition(r, d, w) for r, d, w in sets),
                    cycle_id=cycle_id,
                    cycle_order=cycle_order,
                    is_per_side=bool(per_side),
                    rest_seconds=rest,
                    source_id=source_id,
                )
                attr = _SECTION_ATTRS.get(section)
                if attr:
                    getattr(template, attr).append(item)
        return template

    def get_section_items(self, template_id: str, section: str) -> list[ExerciseItem]:
        """Return the items of ``section`` or an empty list for unknown templates."""

        template = self.get_template(template_id)
        if template is None:
            return []
        return template.section_items(section)
