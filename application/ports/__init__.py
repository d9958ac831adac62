"""
Repository Interfaces (Ports) for the Liftbook API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository

    class DraftService:
        def __init__(self, workout_repo: WorkoutRepository):
            self.workout_repo = workout_repo
"""

# Workouts and workout exercises
from application.ports.workout_repository import OrderIndexWriter, WorkoutRepository

# Exercise catalog
from application.ports.exercises_repository import ExercisesRepository

# Templates
from application.ports.template_repository import TemplateRepository

__all__ = [
    "OrderIndexWriter",
    "WorkoutRepository",
    "ExercisesRepository",
    "TemplateRepository",
]
