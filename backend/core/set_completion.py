"""
Set completion rules.

A set is "complete" when weight and reps are both recorded or both blank.
Half-filled sets (only one of the two) block a commit; fully blank sets are
dropped when the edit is committed.

All functions are pure and return new lists; input sets are never mutated.
"""
from enum import Enum
from typing import List, Optional, Sequence

from domain.models import WorkoutSet

# Sets below this rep count are not considered for max-weight figures
BEST_SET_MIN_REPS = 6


class CompletionStatus(str, Enum):
    """Aggregate completion of a workout exercise's sets."""
    NONE = "none"
    PARTIAL = "partial"
    COMPLETE = "complete"


def is_set_complete(workout_set: WorkoutSet) -> bool:
    """True iff weight and reps are both present or both absent."""
    return workout_set.has_weight == workout_set.has_reps


def is_set_empty(workout_set: WorkoutSet) -> bool:
    return not workout_set.has_weight and not workout_set.has_reps


def has_set_data(workout_set: WorkoutSet) -> bool:
    """True when weight or reps has been recorded (``reps=0`` counts)."""
    return workout_set.has_data


def remove_empty_sets(sets: Sequence[WorkoutSet]) -> List[WorkoutSet]:
    """
    Drop sets with neither weight nor reps, renumbering the survivors.

    Order is preserved and ``set_number`` is rewritten to 1..N so the
    committed list has no gaps.

    Args:
        sets: Sets as edited

    Returns:
        New list containing only sets with data
    """
    kept = [s for s in sets if not is_set_empty(s)]
    return [s.with_number(i + 1) for i, s in enumerate(kept)]


def find_incomplete_sets(sets: Sequence[WorkoutSet]) -> List[WorkoutSet]:
    """Return the half-filled sets, in order."""
    return [s for s in sets if not is_set_complete(s)]


def complete_sets(sets: Sequence[WorkoutSet]) -> List[WorkoutSet]:
    """Sets safe to autosave. Blank sets are complete and are kept."""
    return [s for s in sets if is_set_complete(s)]


def incomplete_sets_message(exercise_name: str) -> str:
    return (
        f'Some sets in "{exercise_name}" have only weight or reps filled in. '
        "Please complete both fields or leave both empty."
    )


def get_completion_status(sets: Sequence[WorkoutSet]) -> CompletionStatus:
    """
    Classify a set list for list/calendar badges.

    A set counts as done once it has a weight or a rep count. NONE when no
    set is done, COMPLETE when every set is, PARTIAL otherwise.
    """
    if not sets:
        return CompletionStatus.NONE

    done = sum(1 for s in sets if has_set_data(s))
    if done == 0:
        return CompletionStatus.NONE
    if done == len(sets):
        return CompletionStatus.COMPLETE
    return CompletionStatus.PARTIAL


def format_sets_summary(sets: Sequence[WorkoutSet]) -> str:
    done = sum(1 for s in sets if has_set_data(s))
    if done == 0:
        return "No sets completed"
    if done == 1:
        return "1 set completed"
    return f"{done} sets completed"


def add_new_set(sets: Sequence[WorkoutSet]) -> List[WorkoutSet]:
    """Append an empty set numbered after the current last one."""
    return list(sets) + [WorkoutSet.empty(len(sets) + 1)]


def delete_last_set(sets: Sequence[WorkoutSet]) -> List[WorkoutSet]:
    """Remove the last set. At least one set always remains."""
    if len(sets) <= 1:
        return list(sets)
    return list(sets[:-1])


def update_set(
    sets: Sequence[WorkoutSet],
    index: int,
    weight: Optional[float] = None,
    reps: Optional[int] = None,
) -> List[WorkoutSet]:
    """
    Replace weight/reps of the set at ``index`` (0-based).

    Raises:
        IndexError: If ``index`` is out of range.
    """
    if index < 0 or index >= len(sets):
        raise IndexError(f"Set index {index} out of range")
    updated = list(sets)
    updated[index] = WorkoutSet(set_number=sets[index].set_number, weight=weight, reps=reps)
    return updated


def calculate_max_weight(sets: Sequence[WorkoutSet]) -> float:
    """Heaviest weight among sets with at least BEST_SET_MIN_REPS reps, 0 if none."""
    qualifying = [
        s.weight for s in sets
        if s.weight is not None and s.reps is not None and s.reps >= BEST_SET_MIN_REPS
    ]
    return max(qualifying) if qualifying else 0
