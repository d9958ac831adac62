"""
Domain models for the Liftbook API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Exercise: A catalog entry with open-ended classification tags
- Workout: A dated session owning an ordered list of WorkoutExercises
- WorkoutExercise: One exercise performed within a workout, with its sets
- WorkoutSet: A set number, a weight and a rep count
- WorkoutTemplate / TemplateExercise: Reusable exercise lists
- HistoricalSession: Past sets for an exercise, keyed by workout date

Usage:
    >>> import datetime as dt
    >>> from domain.models import Workout, WorkoutExercise, WorkoutSet

    >>> workout = Workout(name="Leg Day", date=dt.date(2024, 5, 1))
    >>> we = WorkoutExercise(
    ...     workout_id="w-1",
    ...     exercise_id="ex-1",
    ...     sets=[WorkoutSet(set_number=1, weight=100, reps=5)],
    ... )
"""

from domain.models.exercise import UNKNOWN_CLASSIFICATION, Exercise
from domain.models.history import HistoricalSession
from domain.models.template import TemplateExercise, WorkoutTemplate
from domain.models.workout import DEFAULT_WORKOUT_NAME, Workout, WorkoutExercise
from domain.models.workout_set import WorkoutSet

__all__ = [
    # Main entities
    "Exercise",
    "Workout",
    "WorkoutExercise",
    "WorkoutTemplate",
    "TemplateExercise",
    # Value objects
    "WorkoutSet",
    "HistoricalSession",
    # Constants
    "DEFAULT_WORKOUT_NAME",
    "UNKNOWN_CLASSIFICATION",
]
