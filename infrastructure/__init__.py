"""
Infrastructure Layer for the Liftbook API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseWorkoutRepository,
    SupabaseExercisesRepository,
    SupabaseTemplateRepository,
)

__all__ = [
    "SupabaseWorkoutRepository",
    "SupabaseExercisesRepository",
    "SupabaseTemplateRepository",
]
