"""
Domain layer for the Liftbook API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Exercise,
    HistoricalSession,
    TemplateExercise,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutTemplate,
)

__all__ = [
    "Exercise",
    "HistoricalSession",
    "TemplateExercise",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutTemplate",
]
