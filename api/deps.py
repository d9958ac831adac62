"""
FastAPI Dependency Providers for the Liftbook API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Use case providers wire repositories into use cases per-request

Usage in routers:
    from api.deps import get_workout_repo
    from application.ports import WorkoutRepository

    @router.get("/workouts")
    def list_workouts(
        workout_repo: WorkoutRepository = Depends(get_workout_repo),
    ):
        return workout_repo.list_workouts()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    WorkoutRepository,
    ExercisesRepository,
    TemplateRepository,
)

# Use cases
from application.use_cases import (
    AddExerciseToTemplateUseCase,
    AddExerciseToWorkoutUseCase,
    CreateWorkoutFromTemplateUseCase,
    ExerciseHistoryUseCase,
    ManageExercisesUseCase,
    WorkoutExerciseDraftUseCase,
)

# Concrete implementations
from infrastructure import (
    SupabaseWorkoutRepository,
    SupabaseExercisesRepository,
    SupabaseTemplateRepository,
)

from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutRepository:
    """
    Get WorkoutRepository implementation.

    Returns a SupabaseWorkoutRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.

    Args:
        client: Supabase client (injected)

    Returns:
        WorkoutRepository: Repository for workouts and workout exercises
    """
    return SupabaseWorkoutRepository(client)


def get_exercises_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExercisesRepository:
    """
    Get ExercisesRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ExercisesRepository: Repository for the exercise catalog
    """
    return SupabaseExercisesRepository(client)


def get_template_repo(
    client: Client = Depends(get_supabase_client_required),
) -> TemplateRepository:
    """
    Get TemplateRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        TemplateRepository: Repository for workout templates
    """
    return SupabaseTemplateRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_add_exercise_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
) -> AddExerciseToWorkoutUseCase:
    return AddExerciseToWorkoutUseCase(workout_repo=workout_repo, exercises_repo=exercises_repo)


def get_add_template_exercise_use_case(
    template_repo: TemplateRepository = Depends(get_template_repo),
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
) -> AddExerciseToTemplateUseCase:
    return AddExerciseToTemplateUseCase(template_repo=template_repo, exercises_repo=exercises_repo)


def get_exercise_history_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    settings: Settings = Depends(get_settings),
) -> ExerciseHistoryUseCase:
    """History lookups limited to ``history_session_limit`` previous sessions."""
    return ExerciseHistoryUseCase(
        workout_repo=workout_repo,
        history_limit=settings.history_session_limit,
    )


def get_draft_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
) -> WorkoutExerciseDraftUseCase:
    return WorkoutExerciseDraftUseCase(workout_repo=workout_repo, exercises_repo=exercises_repo)


def get_create_from_template_use_case(
    template_repo: TemplateRepository = Depends(get_template_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> CreateWorkoutFromTemplateUseCase:
    return CreateWorkoutFromTemplateUseCase(template_repo=template_repo, workout_repo=workout_repo)


def get_manage_exercises_use_case(
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> ManageExercisesUseCase:
    return ManageExercisesUseCase(exercises_repo=exercises_repo, workout_repo=workout_repo)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_workout_repo",
    "get_exercises_repo",
    "get_template_repo",
    # Use cases
    "get_add_exercise_use_case",
    "get_add_template_exercise_use_case",
    "get_exercise_history_use_case",
    "get_draft_use_case",
    "get_create_from_template_use_case",
    "get_manage_exercises_use_case",
]
