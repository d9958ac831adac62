"""
Colour palette for workouts and templates.

Only the palette id is persisted; clients map ids to their own styling.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class WorkoutColor:
    id: str
    name: str


WORKOUT_COLORS: List[WorkoutColor] = [
    WorkoutColor(id="green", name="Green"),
    WorkoutColor(id="blue", name="Blue"),
    WorkoutColor(id="purple", name="Purple"),
    WorkoutColor(id="orange", name="Orange"),
    WorkoutColor(id="pink", name="Pink"),
]

DEFAULT_COLOR_ID = "green"

_BY_ID = {color.id: color for color in WORKOUT_COLORS}


def is_valid_color(color_id: Optional[str]) -> bool:
    return color_id in _BY_ID


def get_color_by_id(color_id: Optional[str]) -> WorkoutColor:
    """Look up a palette entry, falling back to the default for unknown ids."""
    if color_id and color_id in _BY_ID:
        return _BY_ID[color_id]
    return _BY_ID[DEFAULT_COLOR_ID]
