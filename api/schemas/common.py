"""
Shared request/response models and result-to-HTTP mapping.

Use cases report failures through flags on their result dataclasses
(``not_found``, ``conflict``, ``validation_errors``). Routers hand those
results to ``raise_for_failure`` so every endpoint maps them the same way.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from application.exceptions import PersistenceError
from backend.core.formatting import format_set
from backend.core.set_completion import (
    calculate_max_weight,
    format_sets_summary,
    get_completion_status,
)
from domain.models import Exercise, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)


# =============================================================================
# Requests
# =============================================================================


class ReorderRequest(BaseModel):
    """Move one exercise from one display position to another."""
    from_index: int = Field(..., ge=0, description="Current position")
    to_index: int = Field(..., ge=0, description="Target position")


class SwapRequest(BaseModel):
    """Swap the exercise at ``index`` with the one after it."""
    index: int = Field(..., ge=0)


class SetsPayload(BaseModel):
    sets: List[WorkoutSet] = Field(default_factory=list)


# =============================================================================
# Responses
# =============================================================================


class WorkoutExerciseView(BaseModel):
    """A workout exercise with its display summary."""
    id: Optional[str]
    workout_id: str
    exercise_id: str
    exercise_name: str
    order_index: int
    sets: List[WorkoutSet]
    has_draft: bool
    completion_status: str
    sets_summary: str
    max_weight: float
    exercise: Optional[Exercise] = None
    workout_name: Optional[str] = None
    workout_date: Optional[str] = None

    @classmethod
    def from_workout_exercise(cls, we: WorkoutExercise) -> "WorkoutExerciseView":
        return cls(
            id=we.id,
            workout_id=we.workout_id,
            exercise_id=we.exercise_id,
            exercise_name=we.exercise_name,
            order_index=we.order_index,
            sets=we.sets,
            has_draft=we.has_draft,
            completion_status=get_completion_status(we.sets).value,
            sets_summary=format_sets_summary(we.sets),
            max_weight=calculate_max_weight(we.sets),
            exercise=we.exercise,
            workout_name=we.workout_name,
            workout_date=we.workout_date.isoformat() if we.workout_date else None,
        )


class SetView(BaseModel):
    """A set together with its display label."""
    set_number: int
    weight: Optional[float] = None
    reps: Optional[int] = None
    label: str

    @classmethod
    def from_set(cls, workout_set: WorkoutSet) -> "SetView":
        return cls(**workout_set.model_dump(), label=format_set(workout_set))


# =============================================================================
# Error mapping
# =============================================================================


def raise_for_failure(result: Any) -> None:
    """
    Raise the HTTPException matching a failed use case result.

    Successful results pass through untouched.
    """
    if result.success:
        return
    error = result.error or "Request failed"
    if getattr(result, "not_found", False):
        raise HTTPException(status_code=404, detail=error)
    if getattr(result, "conflict", False):
        raise HTTPException(status_code=409, detail=error)
    validation_errors = getattr(result, "validation_errors", None)
    if validation_errors:
        raise HTTPException(
            status_code=400,
            detail={"message": error, "errors": validation_errors},
        )
    raise HTTPException(status_code=500, detail=error)


@contextmanager
def persistence_errors(action: str) -> Iterator[None]:
    """Turn a PersistenceError raised by a direct repository call into a 500."""
    try:
        yield
    except PersistenceError as e:
        logger.error(f"Failed to {action}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to {action}")
