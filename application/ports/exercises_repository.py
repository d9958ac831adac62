"""
Exercises Repository Interface (Port).

Abstract interface for the exercise catalog. The catalog is user-editable;
names are unique case-insensitively.
"""
from typing import Protocol, Optional, List, Dict, Any


class ExercisesRepository(Protocol):
    """
    Abstract interface for exercise catalog persistence.

    Implementations raise PersistenceError on store failures. A unique
    violation on ``name`` is reported with code ``23505``.
    """

    def list_all(self) -> List[Dict[str, Any]]:
        """
        Get every exercise.

        Returns:
            Exercise rows ordered by name
        """
        ...

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single exercise by ID.

        Returns:
            Exercise row or None if not found
        """
        ...

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Find an exercise whose name equals ``name`` ignoring case.

        Returns:
            Exercise row or None
        """
        ...

    def create(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert an exercise.

        Returns:
            The created row
        """
        ...

    def update(self, exercise_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update exercise columns.

        Returns:
            Updated row, or None if the exercise does not exist
        """
        ...

    def delete(self, exercise_id: str) -> bool:
        """Delete an exercise. True if a row was deleted."""
        ...

    def get_usage_counts(self, exercise_id: str) -> Dict[str, int]:
        """
        Count references to an exercise.

        Returns:
            ``{"workout_count": int, "template_count": int}``
        """
        ...

    def get_usage_details(self, exercise_id: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        List the workouts and templates that reference an exercise.

        Returns:
            ``{"workouts": [{id, name, date}], "templates": [{id, name}]}``,
            one entry per distinct workout/template
        """
        ...

    def update_last_used(
        self,
        exercise_id: str,
        last_used_date: str,
        last_performed_sets: List[Dict[str, Any]],
    ) -> None:
        """Record the date and sets of the latest workout using the exercise."""
        ...
