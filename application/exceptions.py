"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Repositories raise PersistenceError; use cases catch it and turn it into a
failed result so that routers never see an unhandled store fault.
"""

from typing import List, Optional


class PersistenceError(Exception):
    """Error talking to the datastore.

    Wraps whatever the Supabase client raised. ``code`` carries the
    PostgreSQL/PostgREST error code when the store reported one
    (e.g. ``"23505"`` for a unique violation).
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def is_unique_violation(self) -> bool:
        return self.code == "23505"


class SetValidationError(Exception):
    """Raised when sets cannot be committed because some are half-filled."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class DraftNotFoundError(Exception):
    """Raised when a cancel finds no draft snapshot to restore."""

    def __init__(self, workout_exercise_id: Optional[str] = None):
        super().__init__("No draft to restore")
        self.message = "No draft to restore"
        self.workout_exercise_id = workout_exercise_id


class InvalidEditStateError(Exception):
    """Raised when a draft transition is requested from the wrong state."""


class ExerciseInUseError(Exception):
    """Raised when deleting an exercise that workouts or templates still reference."""

    def __init__(self, workout_count: int, template_count: int):
        self.workout_count = workout_count
        self.template_count = template_count
        parts = []
        if workout_count > 0:
            parts.append(f"{workout_count} workout{'s' if workout_count > 1 else ''}")
        if template_count > 0:
            parts.append(f"{template_count} template{'s' if template_count > 1 else ''}")
        self.message = (
            f"Cannot delete exercise. It is used in {' and '.join(parts)}. "
            "Remove it from all workouts and templates first."
        )
        super().__init__(self.message)


class DuplicateExerciseError(Exception):
    """Raised when an exercise name collides with an existing one (case-insensitive)."""

    def __init__(self, name: str):
        self.name = name
        self.message = "An exercise with this name already exists"
        super().__init__(self.message)
