"""Shared constants for the workout execution engine."""

from __future__ import annotations

from pathlib import Path

# Sections of a scheduled workout, in the order they are usually performed
SECTION_TYPES = ("warmup", "main", "core")

# Only this section pauses for a rest countdown between logged sets
REST_SECTION = "main"

# Default rest duration between sets in seconds
DEFAULT_REST_DURATION = 120

# Default countdown for time based exercises without their own duration
DEFAULT_EXERCISE_DURATION = 30

# Pause between the two sides of a per-side exercise
PER_SIDE_SWITCH_SECONDS = 10

# Seconds added by a single "+" tap on a running countdown
TIMER_ADD_STEP = 5

# Name shown when a movement id cannot be resolved
PLACEHOLDER_EXERCISE_NAME = "Exercise"

# Path to the bundled SQLite database
DEFAULT_DB_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "engine.db"
)

__all__ = [
    "SECTION_TYPES",
    "REST_SECTION",
    "DEFAULT_REST_DURATION",
    "DEFAULT_EXERCISE_DURATION",
    "PER_SIDE_SWITCH_SECONDS",
    "TIMER_ADD_STEP",
    "PLACEHOLDER_EXERCISE_NAME",
    "DEFAULT_DB_PATH",
]
