"""Persisted workout sessions.

A session holds the logged sets of one scheduled occurrence.  There is never
more than one row per ``workout_key``: the first logged set creates it, later
saves update it, and a session whose last set goes away is deleted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
import logging
import sqlite3
import time
import uuid

from engine import DEFAULT_DB_PATH
from engine.models import SessionSet, WorkoutSession

logger = logging.getLogger(__name__)


class SessionRepository:
    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    # ------------------------------------------------------------------
    # Basic CRUD
    # ------------------------------------------------------------------
    def add_session(self, session: WorkoutSession) -> None:
        """Insert ``session``.

        Raises :class:`ValueError` if a session for the same ``workout_key``
        already exists; use :meth:`update_session` instead.
        """

        if self.find_session_by_workout_key(session.workout_key) is not None:
            raise ValueError(f"Session for '{session.workout_key}' already exists")
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                INSERT INTO session_sessions
                    (id, template_id, workout_key, date, started_at, ended_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    session.template_id,
                    session.workout_key,
                    session.date,
                    session.started_at,
                    session.ended_at,
                ),
            )
            self._insert_sets(conn, session.id, session.sets)
        logger.info(
            "Session %s created for %s with %d sets",
            session.id,
            session.workout_key,
            len(session.sets),
        )

    def update_session(self, session_id: str, session: WorkoutSession) -> None:
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                UPDATE session_sessions
                   SET template_id = ?, workout_key = ?, date = ?,
                       started_at = ?, ended_at = ?
                 WHERE id = ?
                """,
                (
                    session.template_id,
                    session.workout_key,
                    session.date,
                    session.started_at,
                    session.ended_at,
                    session_id,
                ),
            )
            conn.execute("DELETE FROM session_sets WHERE session_id = ?", (session_id,))
            self._insert_sets(conn, session_id, session.sets)
        logger.debug("Session %s updated (%d sets)", session_id, len(session.sets))

    def delete_session(self, session_id: str) -> None:
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute("DELETE FROM session_sets WHERE session_id = ?", (session_id,))
            conn.execute("DELETE FROM session_sessions WHERE id = ?", (session_id,))
        logger.info("Session %s deleted", session_id)

    def find_session_by_workout_key(self, workout_key: str) -> WorkoutSession | None:
        with sqlite3.connect(str(self.db_path)) as conn:
            row = conn.execute(
                """
                SELECT id, template_id, workout_key, date, started_at, ended_at
                  FROM session_sessions WHERE workout_key = ?
                """,
                (workout_key,),
            ).fetchone()
            if row is None:
                return None
            sets = self._load_sets(conn, row[0])
        session_id, template_id, key, date, started, ended = row
        return WorkoutSession(
            id=session_id,
            template_id=template_id,
            workout_key=key,
            date=date,
            sets=sets,
            started_at=started,
            ended_at=ended,
        )

    @staticmethod
    def _insert_sets(conn: sqlite3.Connection, session_id: str, sets: Iterable[SessionSet]) -> None:
        conn.executemany(
            """
            INSERT INTO session_sets
                (session_id, section, exercise_id, set_index, weight, reps, is_completed)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    session_id,
                    s.section,
                    s.exercise_id,
                    s.set_index,
                    s.weight,
                    s.reps,
                    int(s.is_completed),
                )
                for s in sets
            ],
        )

    @staticmethod
    def _load_sets(conn: sqlite3.Connection, session_id: str) -> list[SessionSet]:
        rows = conn.execute(
            """
            SELECT exercise_id, set_index, weight, reps, is_completed, section
              FROM session_sets WHERE session_id = ?
             ORDER BY id
            """,
            (session_id,),
        ).fetchall()
        return [SessionSet(e, i, w, r, bool(c), s) for e, i, w, r, c, s in rows]

    # ------------------------------------------------------------------
    # Section level helpers used by the execution engine
    # ------------------------------------------------------------------
    def save_section_sets(
        self,
        workout_key: str,
        template_id: str | None,
        date: str,
        section: str,
        sets: list[SessionSet],
        *,
        finished: bool = False,
    ) -> WorkoutSession | None:
        """Replace the sets of ``section`` in the session of ``workout_key``.

        Creates the session on the first set and deletes it once it holds no
        sets at all.  Returns the stored session or ``None`` when no row
        exists afterwards.
        """

        for entry in sets:
            entry.section = section
        existing = self.find_session_by_workout_key(workout_key)
        if existing is None:
            if not sets:
                return None
            now = time.time()
            session = WorkoutSession(
                id=uuid.uuid4().hex,
                template_id=template_id,
                workout_key=workout_key,
                date=date,
                sets=list(sets),
                started_at=now,
                ended_at=now if finished else None,
            )
            self.add_session(session)
            return session

        kept = [s for s in existing.sets if s.section != section]
        existing.sets = kept + list(sets)
        if not existing.sets:
            self.delete_session(existing.id)
            return None
        if finished:
            existing.ended_at = time.time()
        self.update_session(existing.id, existing)
        return existing

    def rekey_exercise(self, workout_key: str, section: str, old_id: str, new_id: str) -> None:
        """Move logged sets of ``old_id`` to ``new_id`` within ``section``."""

        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                UPDATE session_sets SET exercise_id = ?
                 WHERE exercise_id = ? AND section = ? AND session_id IN
                       (SELECT id FROM session_sessions WHERE workout_key = ?)
                """,
                (new_id, old_id, section, workout_key),
            )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_session_history(self, limit: int | None = None) -> list[dict]:
        """Return ``workout_key``/``date`` pairs, newest date first."""

        query = (
            "SELECT workout_key, date, template_id FROM session_sessions "
            "ORDER BY date DESC, started_at DESC"
        )
        with sqlite3.connect(str(self.db_path)) as conn:
            if limit is not None:
                rows = conn.execute(query + " LIMIT ?", (limit,)).fetchall()
            else:
                rows = conn.execute(query).fetchall()
        return [
            {"workout_key": key, "date": date, "template_id": tid}
            for key, date, tid in rows
        ]

    def get_exercise_history(self, exercise_id: str) -> list[dict]:
        """Return completed sets of ``exercise_id`` grouped by date, newest first.

        Each item has ``date`` and ``sets`` keys; every set entry exposes
        ``set_index``, ``weight`` and ``reps``.
        """

        with sqlite3.connect(str(self.db_path)) as conn:
            rows = conn.execute(
                """
                SELECT s.date, ss.set_index, ss.weight, ss.reps
                  FROM session_sets ss
                  JOIN session_sessions s ON s.id = ss.session_id
                 WHERE ss.exercise_id = ? AND ss.is_completed = 1
                 ORDER BY s.date DESC, ss.set_index
                """,
                (exercise_id,),
            ).fetchall()
        history: list[dict] = []
        for date, set_index, weight, reps in rows:
            if not history or history[-1]["date"] != date:
                history.append({"date": date, "sets": []})
            history[-1]["sets"].append(
                {"set_index": set_index, "weight": weight, "reps": reps}
            )
        return history
