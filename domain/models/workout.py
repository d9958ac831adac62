"""
Workout aggregate and its workout exercises.

A Workout is a named session pinned to a calendar day. It exclusively owns
an ordered collection of WorkoutExercise records; deleting the workout
deletes them too.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise
from domain.models.workout_set import WorkoutSet

DEFAULT_WORKOUT_NAME = "Workout"


class Workout(BaseModel):
    """
    Aggregate root for a logged (or planned) training session.

    ``date`` has day granularity; two workouts on the same day are ordered
    by ``created_at`` only.

    Examples:
        >>> import datetime as dt
        >>> workout = Workout(name="Push Day", date=dt.date(2024, 3, 4))
        >>> workout.exercise_count
        0
    """

    id: Optional[str] = Field(
        default=None,
        description="Unique identifier (UUID). None for new, unsaved workouts.",
    )
    name: str = Field(default=DEFAULT_WORKOUT_NAME, min_length=1, max_length=200)
    date: dt.date = Field(..., description="Calendar day of the session")
    color: Optional[str] = Field(default=None, description="Palette colour id")

    workout_exercises: List["WorkoutExercise"] = Field(
        default_factory=list,
        description="Exercises in display order (ascending order_index)",
    )

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @property
    def exercise_count(self) -> int:
        return len(self.workout_exercises)


class WorkoutExercise(BaseModel):
    """
    One exercise's performance within one workout.

    ``order_index`` values across a workout form a dense 0..N-1 sequence.
    ``draft_snapshot`` is only populated while the record is being edited;
    it holds the sets as they were when editing began so a cancel can put
    them back.
    """

    id: Optional[str] = None
    workout_id: str
    exercise_id: str
    order_index: int = Field(default=0, ge=0)

    sets: List[WorkoutSet] = Field(default_factory=list)
    draft_snapshot: Optional[List[WorkoutSet]] = None

    # Joined data (present when loaded with the exercise/workout embedded)
    exercise: Optional[Exercise] = None
    workout_name: Optional[str] = None
    workout_date: Optional[dt.date] = None

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @property
    def exercise_name(self) -> str:
        if self.exercise is not None:
            return self.exercise.name
        return self.exercise_id

    @property
    def has_draft(self) -> bool:
        return self.draft_snapshot is not None


Workout.model_rebuild()
