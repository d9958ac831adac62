"""
Default set seeding for newly added workout exercises.

A new workout exercise starts with as many empty sets as the exercise had
filled sets the last time it was logged, so the editor is pre-sized to the
usual routine.
"""
from typing import List, Optional, Sequence

from domain.models import WorkoutSet

DEFAULT_SET_COUNT = 3


def count_filled_sets(sets: Optional[Sequence[WorkoutSet]]) -> int:
    if not sets:
        return 0
    return sum(1 for s in sets if s.has_data)


def create_default_sets(previous_sets: Optional[Sequence[WorkoutSet]]) -> List[WorkoutSet]:
    """
    Seed empty sets from the most recent previous record.

    Args:
        previous_sets: Sets of the most recently created workout exercise
            for the same exercise, or None if it was never logged

    Returns:
        Empty sets numbered from 1. DEFAULT_SET_COUNT of them when there is
        no previous record or it had no filled sets.

    Examples:
        >>> len(create_default_sets(None))
        3
    """
    count = count_filled_sets(previous_sets) or DEFAULT_SET_COUNT
    return [WorkoutSet.empty(i + 1) for i in range(count)]
