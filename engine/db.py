"""SQLite schema and connection helpers for the execution engine."""

from __future__ import annotations

from pathlib import Path
import logging
import sqlite3

from engine import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

# Minimal set of tables expected to exist in any valid engine database.
REQUIRED_TABLES = [
    "library_movements",
    "workout_templates",
    "template_items",
    "template_item_sets",
    "scheduled_workouts",
    "completion_items",
    "progress_sets",
    "progress_exercises",
    "session_sessions",
    "session_sets",
    "personal_records",
    "exercise_swaps",
]

SCHEMA = """
CREATE TABLE IF NOT EXISTS library_movements (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS workout_templates (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS template_items (
    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
    template_id TEXT NOT NULL REFERENCES workout_templates(id),
    section TEXT NOT NULL,
    position INTEGER NOT NULL,
    item_id TEXT NOT NULL,
    source_id TEXT,
    movement_id TEXT NOT NULL,
    mode TEXT NOT NULL DEFAULT 'reps',
    cycle_id TEXT,
    cycle_order INTEGER,
    is_per_side INTEGER NOT NULL DEFAULT 0,
    rest_seconds INTEGER
);

CREATE TABLE IF NOT EXISTS template_item_sets (
    item_row_id INTEGER NOT NULL REFERENCES template_items(row_id),
    position INTEGER NOT NULL,
    reps REAL,
    duration REAL,
    weight REAL,
    PRIMARY KEY (item_row_id, position)
);

CREATE TABLE IF NOT EXISTS scheduled_workouts (
    workout_key TEXT PRIMARY KEY,
    template_id TEXT NOT NULL,
    date TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'planned',
    completed_at REAL
);

CREATE TABLE IF NOT EXISTS completion_items (
    workout_key TEXT NOT NULL,
    section TEXT NOT NULL,
    token TEXT NOT NULL,
    PRIMARY KEY (workout_key, section, token)
);

CREATE TABLE IF NOT EXISTS progress_sets (
    workout_key TEXT NOT NULL,
    exercise_id TEXT NOT NULL,
    set_index INTEGER NOT NULL,
    weight REAL NOT NULL DEFAULT 0,
    reps REAL NOT NULL DEFAULT 0,
    completed INTEGER NOT NULL DEFAULT 0,
    completed_at REAL,
    PRIMARY KEY (workout_key, exercise_id, set_index)
);

CREATE TABLE IF NOT EXISTS progress_exercises (
    workout_key TEXT NOT NULL,
    exercise_id TEXT NOT NULL,
    skipped INTEGER NOT NULL DEFAULT 0,
    updated_at REAL,
    PRIMARY KEY (workout_key, exercise_id)
);

CREATE TABLE IF NOT EXISTS session_sessions (
    id TEXT PRIMARY KEY,
    template_id TEXT,
    workout_key TEXT NOT NULL UNIQUE,
    date TEXT NOT NULL,
    started_at REAL,
    ended_at REAL
);

CREATE TABLE IF NOT EXISTS session_sets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id TEXT NOT NULL REFERENCES session_sessions(id),
    section TEXT NOT NULL DEFAULT 'main',
    exercise_id TEXT NOT NULL,
    set_index INTEGER NOT NULL,
    weight REAL NOT NULL DEFAULT 0,
    reps REAL NOT NULL DEFAULT 0,
    is_completed INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS personal_records (
    movement_id TEXT PRIMARY KEY,
    weight REAL NOT NULL,
    reps REAL NOT NULL,
    date TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS exercise_swaps (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    workout_key TEXT NOT NULL,
    section TEXT NOT NULL,
    old_id TEXT NOT NULL,
    new_id TEXT NOT NULL,
    movement_id TEXT
);
"""


def init_db(db_path: Path = DEFAULT_DB_PATH) -> Path:
    """Create any missing engine tables in ``db_path`` and return the path."""

    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(str(path)) as conn:
        conn.executescript(SCHEMA)
    logger.debug("Initialised engine schema in %s", path)
    return path


def missing_tables(db_path: Path = DEFAULT_DB_PATH) -> list[str]:
    """Return the names of :data:`REQUIRED_TABLES` absent from ``db_path``."""

    with sqlite3.connect(str(db_path)) as conn:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
    present = {r[0] for r in rows}
    return [t for t in REQUIRED_TABLES if t not in present]
