"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into use cases
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseWorkoutRepository,
        SupabaseExercisesRepository,
        SupabaseTemplateRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    workout_repo = SupabaseWorkoutRepository(client)
    exercises_repo = SupabaseExercisesRepository(client)
    template_repo = SupabaseTemplateRepository(client)
"""

from infrastructure.db.workout_repository import SupabaseWorkoutRepository
from infrastructure.db.exercises_repository import SupabaseExercisesRepository
from infrastructure.db.template_repository import SupabaseTemplateRepository

__all__ = [
    # Workouts and workout exercises
    "SupabaseWorkoutRepository",

    # Exercise catalog
    "SupabaseExercisesRepository",

    # Templates
    "SupabaseTemplateRepository",
]
