"""
Workout calendar and template list helpers.
"""
import datetime as dt
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from domain.models import Workout, WorkoutTemplate


def month_key(day: dt.date) -> str:
    """``YYYY-MM`` bucket for a date."""
    return f"{day.year:04d}-{day.month:02d}"


def group_workouts_by_month(workouts: Sequence[Workout]) -> Dict[str, List[Workout]]:
    """Bucket workouts by month, preserving input order within and across buckets."""
    groups: Dict[str, List[Workout]] = OrderedDict()
    for workout in workouts:
        groups.setdefault(month_key(workout.date), []).append(workout)
    return groups


def filter_workouts_by_date_range(
    workouts: Sequence[Workout],
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
) -> List[Workout]:
    """Workouts with start <= date <= end. Either bound may be omitted."""
    return [
        w for w in workouts
        if (start is None or w.date >= start) and (end is None or w.date <= end)
    ]


def sort_workouts(workouts: Sequence[Workout]) -> List[Workout]:
    """Newest first; same-day workouts ordered by creation time, newest first."""
    epoch = dt.datetime.min.replace(tzinfo=dt.timezone.utc)

    def created(w: Workout) -> dt.datetime:
        if w.created_at is None:
            return epoch
        if w.created_at.tzinfo is None:
            return w.created_at.replace(tzinfo=dt.timezone.utc)
        return w.created_at

    return sorted(workouts, key=lambda w: (w.date, created(w)), reverse=True)


def sort_templates_by_name(templates: Sequence[WorkoutTemplate]) -> List[WorkoutTemplate]:
    return sorted(templates, key=lambda t: t.name.casefold())


def filter_templates_by_name(
    templates: Sequence[WorkoutTemplate], search_term: str
) -> List[WorkoutTemplate]:
    needle = search_term.casefold()
    return [t for t in templates if needle in t.name.casefold()]
