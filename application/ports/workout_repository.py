"""
Workout Repository Interface (Port).

This module defines the abstract interface for persisting workouts and the
workout exercises they own. Implementations may use Supabase, in-memory
storage, or other backends.

Rows are plain dicts in the database shape; use cases convert them with
``domain.converters``. Implementations raise
``application.exceptions.PersistenceError`` when the store fails and return
None / empty lists when nothing matches.
"""
from typing import Protocol, Optional, List, Dict, Any


class OrderIndexWriter(Protocol):
    """Anything that can persist a batch of ``{id, order_index}`` updates."""

    def bulk_update_order_index(self, updates: List[Dict[str, Any]]) -> None:
        ...


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout and workout-exercise persistence.

    Implementations must provide all methods defined here.
    """

    # =========================================================================
    # Workouts
    # =========================================================================

    def list_workouts(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List workouts, optionally restricted to an inclusive date range.

        Args:
            start_date: ISO date lower bound (inclusive)
            end_date: ISO date upper bound (inclusive)

        Returns:
            Workout rows ordered by date desc, then created_at desc
        """
        ...

    def get_workout(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a workout with its workout exercises (and their exercises) embedded.

        Returns:
            Workout row with ``workout_exercises`` ordered by order_index,
            or None if not found
        """
        ...

    def create_workout(
        self,
        name: str,
        date: str,
        *,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a workout.

        Args:
            name: Display name
            date: ISO date of the session
            color: Optional palette colour id

        Returns:
            The created workout row (with generated id)
        """
        ...

    def update_workout(
        self,
        workout_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Update workout columns (name, date, color).

        Returns:
            Updated row, or None if the workout does not exist
        """
        ...

    def delete_workout(self, workout_id: str) -> bool:
        """
        Delete a workout. Its workout exercises are removed with it.

        Returns:
            True if a row was deleted, False if not found
        """
        ...

    # =========================================================================
    # Workout exercises
    # =========================================================================

    def get_workout_exercise(self, workout_exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get one workout exercise with ``exercise`` and ``workout`` embedded.

        Returns:
            Row or None if not found
        """
        ...

    def list_workout_exercises(self, workout_id: str) -> List[Dict[str, Any]]:
        """
        List the workout exercises of a workout.

        Returns:
            Rows ordered by order_index ascending, with ``exercise`` embedded
        """
        ...

    def get_max_order_index(self, workout_id: str) -> Optional[int]:
        """Highest order_index in the workout, or None if it has no exercises."""
        ...

    def create_workout_exercises(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert one or more workout exercises.

        Args:
            rows: Dicts with workout_id, exercise_id, order_index and sets

        Returns:
            Created rows in insertion order
        """
        ...

    def delete_workout_exercise(self, workout_exercise_id: str) -> bool:
        """Delete a workout exercise. True if a row was deleted."""
        ...

    def get_latest_workout_exercise_sets(
        self,
        exercise_id: str,
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Get the sets of the most recently *created* workout exercise for an exercise.

        Ordering is by record creation time, not by workout date, across
        all workouts.

        Returns:
            Set dicts, or None if the exercise was never added to a workout
        """
        ...

    def get_workout_exercises_for_exercise(
        self,
        exercise_id: str,
        *,
        on_or_before: Optional[str] = None,
        before: Optional[str] = None,
        exclude_workout_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get every recorded session of an exercise.

        Args:
            exercise_id: Exercise UUID
            on_or_before: Only workouts dated on or before this ISO date
            before: Only workouts dated strictly before this ISO date
            exclude_workout_id: Skip this workout

        Returns:
            Dicts of ``{sets, workout_date, workout_id}``, newest workout first
        """
        ...

    def update_sets(
        self,
        workout_exercise_id: str,
        sets: List[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """
        Overwrite the live sets of a workout exercise.

        Returns:
            Updated row, or None if not found
        """
        ...

    def update_draft_snapshot(
        self,
        workout_exercise_id: str,
        snapshot: Optional[List[Dict[str, Any]]],
    ) -> bool:
        """
        Store (or clear, with None) the draft snapshot.

        Returns:
            True if the row exists and was updated
        """
        ...

    def bulk_update_order_index(self, updates: List[Dict[str, Any]]) -> None:
        """
        Persist new positions for sibling workout exercises.

        Args:
            updates: ``[{id, order_index}]``
        """
        ...

    def get_next_by_order_index(
        self,
        workout_id: str,
        after_index: int,
    ) -> Optional[Dict[str, Any]]:
        """
        Get the first workout exercise positioned after ``after_index``.

        Returns:
            Row with the smallest order_index greater than after_index, or None
        """
        ...

    def list_exercise_sets(self) -> List[Dict[str, Any]]:
        """
        Get ``{exercise_id, sets}`` for every workout exercise.

        Used to flag which catalog exercises have ever been performed.
        """
        ...
