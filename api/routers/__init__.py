"""
Router package for the Liftbook API.

This package contains all API routers organized by domain:
- health: Liveness and readiness checks
- exercises: Exercise library, usage and history
- workouts: Workout CRUD and workout exercise ordering
- workout_exercises: Set editing (draft, autosave, commit, cancel)
- templates: Workout templates and logging them as workouts
"""

from api.routers.health import router as health_router
from api.routers.exercises import router as exercises_router
from api.routers.workouts import router as workouts_router
from api.routers.workout_exercises import router as workout_exercises_router
from api.routers.templates import router as templates_router

__all__ = [
    "health_router",
    "exercises_router",
    "workouts_router",
    "workout_exercises_router",
    "templates_router",
]
