"""Weight display helpers.

Weights are stored in pounds.  Conversion only happens when a value is shown
to or read back from the user.
"""

from __future__ import annotations

import math

LB_PER_KG = 2.2046226218


def lbs_to_kg(lbs: float) -> float:
    return lbs / LB_PER_KG


def kg_to_lbs(kg: float) -> float:
    return kg * LB_PER_KG


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def _format(value: float) -> str:
    if value % 1 == 0:
        return str(int(value))
    return f"{value:.1f}"


def to_display_weight(weight_lbs: float, use_kg: bool) -> float:
    return lbs_to_kg(weight_lbs) if use_kg else weight_lbs


def from_display_weight(weight: float, use_kg: bool) -> float:
    return kg_to_lbs(weight) if use_kg else weight


def format_weight(weight_lbs: float, use_kg: bool) -> str:
    """Return ``weight_lbs`` in the display unit, rounded to one decimal."""

    value = to_display_weight(weight_lbs, use_kg)
    return _format(_round_half_up(value * 10) / 10)


def format_weight_for_load(weight_lbs: float, use_kg: bool) -> str:
    """Return ``weight_lbs`` in the display unit snapped to the nearest 0.5."""

    value = to_display_weight(weight_lbs, use_kg)
    return _format(_round_half_up(value / 0.5) * 0.5)


def round_input_to_half(value: float) -> float:
    """Snap a typed weight to the nearest 0.5."""

    return _round_half_up(value * 2) / 2
