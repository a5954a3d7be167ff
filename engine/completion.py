"""Per-set completion flags and section completion summaries.

Each logged set is stored as a single ``SetKey`` token row.  Marking is
idempotent: the primary key makes a repeated mark a no-op.  Section totals
come from the template of the scheduled occurrence, so a section without
items reports 100%.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
import logging
import math
import sqlite3

from engine import DEFAULT_DB_PATH, SECTION_TYPES
from engine.grouping import planned_tokens, swap_item
from engine.models import CompletionSummary, ExerciseItem, SectionKey
from engine.schedule import ScheduleRepository
from engine.templates import TemplateRepository

logger = logging.getLogger(__name__)


def completion_percentage(completed: int, total: int) -> int:
    """Return ``completed / total`` as a whole percentage, halves rounded up.

    An empty section is complete.
    """

    if total <= 0 or completed >= total:
        return 100
    return int(math.floor(100 * completed / total + 0.5))


class CompletionStore:
    """SQLite completion adapter for warmup/main/core sections."""

    def __init__(
        self,
        db_path: Path = DEFAULT_DB_PATH,
        *,
        templates: TemplateRepository | None = None,
        schedule: ScheduleRepository | None = None,
    ) -> None:
        self.db_path = Path(db_path)
        self.templates = templates or TemplateRepository(self.db_path)
        self.schedule = schedule or ScheduleRepository(self.db_path)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def mark_complete(self, section_key: SectionKey, token: str) -> None:
        self.mark_many(section_key, [token])

    def mark_many(self, section_key: SectionKey, tokens: Iterable[str]) -> None:
        """Record every token of ``tokens`` in a single transaction."""

        rows = [(section_key.workout_key, section_key.section, t) for t in tokens]
        if not rows:
            return
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.executemany(
                """
                INSERT OR IGNORE INTO completion_items (workout_key, section, token)
                VALUES (?, ?, ?)
                """,
                rows,
            )

    def rekey(self, section_key: SectionKey, mapping: dict[str, str]) -> None:
        """Rename stored tokens according to ``mapping`` (old -> new)."""

        if not mapping:
            return
        with sqlite3.connect(str(self.db_path)) as conn:
            self._rekey_tokens(conn, section_key, mapping)

    def record_swap(
        self,
        section_key: SectionKey,
        old_id: str,
        new_id: str,
        movement_id: str | None,
        mapping: dict[str, str],
    ) -> None:
        """Store an exercise swap and move its tokens in one transaction.

        Swaps are replayed in insertion order by :meth:`swaps` so the section
        items can be rebuilt after a restart.
        """

        with sqlite3.connect(str(self.db_path)) as conn:
            self._rekey_tokens(conn, section_key, mapping)
            conn.execute(
                """
                INSERT INTO exercise_swaps (workout_key, section, old_id, new_id, movement_id)
                VALUES (?, ?, ?, ?, ?)
                """,
                (section_key.workout_key, section_key.section, old_id, new_id, movement_id),
            )

    @staticmethod
    def _rekey_tokens(
        conn: sqlite3.Connection, section_key: SectionKey, mapping: dict[str, str]
    ) -> None:
        for old, new in mapping.items():
            conn.execute(
                """
                DELETE FROM completion_items
                 WHERE workout_key = ? AND section = ? AND token = ?
                """,
                (section_key.workout_key, section_key.section, old),
            )
            conn.execute(
                """
                INSERT OR IGNORE INTO completion_items (workout_key, section, token)
                VALUES (?, ?, ?)
                """,
                (section_key.workout_key, section_key.section, new),
            )

    def reset(self, section_key: SectionKey) -> None:
        """Forget every token of the section. Resetting twice is harmless.

        Recorded swaps are kept.
        """

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                "DELETE FROM completion_items WHERE workout_key = ? AND section = ?",
                (section_key.workout_key, section_key.section),
            )
        logger.debug("Reset completion for %s/%s", section_key.workout_key, section_key.section)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def completed_tokens(self, section_key: SectionKey) -> set[str]:
        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                """
                SELECT token FROM completion_items
                 WHERE workout_key = ? AND section = ?
                """,
                (section_key.workout_key, section_key.section),
            ).fetchall()
        return {r[0] for r in rows}

    def swaps(self, section_key: SectionKey) -> list[tuple[str, str, str | None]]:
        """Recorded ``(old_id, new_id, movement_id)`` swaps, oldest first."""

        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                """
                SELECT old_id, new_id, movement_id FROM exercise_swaps
                 WHERE workout_key = ? AND section = ?
                 ORDER BY id
                """,
                (section_key.workout_key, section_key.section),
            ).fetchall()
        return [tuple(r) for r in rows]

    def section_items(self, section_key: SectionKey) -> list[ExerciseItem]:
        """Items of the scheduled template section with recorded swaps applied."""

        occurrence = self.schedule.get(section_key.workout_key)
        if occurrence is None:
            return []
        items = self.templates.get_section_items(occurrence.template_id, section_key.section)
        for old_id, new_id, movement_id in self.swaps(section_key):
            swap_item(items, old_id, new_id, movement_id)
        return items

    def total_items(self, section_key: SectionKey) -> int:
        """Number of planned sets in the section of the scheduled template."""

        return sum(len(item.sets) for item in self.section_items(section_key))

    def get_completion(self, section_key: SectionKey) -> CompletionSummary:
        """Summary of the section; tokens no current item plans are not counted."""

        planned = planned_tokens(self.section_items(section_key))
        total = len(planned)
        completed = len(self.completed_tokens(section_key) & planned)
        return CompletionSummary(
            total_items=total,
            completed_items=completed,
            percentage=completion_percentage(completed, total),
        )

    def all_sections_complete(self, workout_key: str) -> bool:
        """Return ``True`` when warmup, main and core all report 100%."""

        return all(
            self.get_completion(SectionKey(workout_key, section)).percentage == 100
            for section in SECTION_TYPES
        )
