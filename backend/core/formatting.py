"""
Display formatting for weights, reps and dates.
"""
import datetime as dt
from typing import Optional

from domain.models import WorkoutSet


def format_weight(weight: Optional[float]) -> str:
    if weight is None:
        return "-"
    return f"{weight:.1f} kg"


def format_reps(reps: Optional[int]) -> str:
    if reps is None:
        return "-"
    return str(reps)


def format_set(workout_set: WorkoutSet) -> str:
    """e.g. ``80.0 kg x 10``"""
    return f"{format_weight(workout_set.weight)} x {format_reps(workout_set.reps)}"


def format_relative_time(day: dt.date, today: dt.date) -> str:
    """
    Human relative age of ``day`` as seen from ``today``.

    Weeks, months and years are whole 7, 30 and 365 day spans.
    """
    diff = (today - day).days
    if diff <= 0:
        return "Today"
    if diff == 1:
        return "Yesterday"
    if diff < 7:
        return f"{diff} days ago"
    if diff < 30:
        return f"{diff // 7} weeks ago"
    if diff < 365:
        return f"{diff // 30} months ago"
    return f"{diff // 365} years ago"
