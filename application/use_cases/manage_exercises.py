"""
ManageExercises Use Case.

Catalog operations that carry business rules beyond a single row write:
- Names are unique ignoring case (checked up front, and via the store's
  unique constraint as a backstop)
- Exercises still referenced by a workout or template cannot be deleted
- Listing applies search/filters and flags exercises that have been done
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from application.exceptions import DuplicateExerciseError, ExerciseInUseError, PersistenceError
from application.ports import ExercisesRepository, WorkoutRepository
from backend.core.exercise_catalog import (
    ExerciseFilters,
    FilterOptions,
    apply_filters_with_search_fallback,
    get_filter_options,
    sort_by_last_used,
    sort_by_name,
)
from domain.converters import db_row_to_exercise, exercise_to_db_row, parse_sets
from domain.models import Exercise

logger = logging.getLogger(__name__)

SORT_BY_NAME = "name"
SORT_BY_LAST_USED = "last_used"

# Columns a client may change through update()
UPDATABLE_FIELDS = (
    "name",
    "video_url",
    "movement_type",
    "pattern",
    "primary_body_part",
    "secondary_body_part",
    "equipment",
    "notes",
    "is_mastered",
)


@dataclass
class ExerciseResult:
    """Result of a single-exercise operation."""

    success: bool
    exercise: Optional[Exercise] = None
    error: Optional[str] = None
    not_found: bool = False
    conflict: bool = False
    validation_errors: List[str] = field(default_factory=list)


@dataclass
class ExerciseListResult:
    """Result of listing the catalog."""

    success: bool
    exercises: List[Exercise] = field(default_factory=list)
    search_only_matches: List[Exercise] = field(default_factory=list)
    done_exercise_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class FilterOptionsResult:
    success: bool
    options: Optional[FilterOptions] = None
    error: Optional[str] = None


@dataclass
class ExerciseUsageResult:
    """Where an exercise is used."""

    success: bool
    workout_count: int = 0
    template_count: int = 0
    workouts: List[Dict[str, Any]] = field(default_factory=list)
    templates: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    not_found: bool = False

    @property
    def is_used(self) -> bool:
        return self.workout_count > 0 or self.template_count > 0


class ManageExercisesUseCase:
    """
    Use case for exercise catalog management.

    Usage:
        >>> use_case = ManageExercisesUseCase(
        ...     exercises_repo=exercises_repo,
        ...     workout_repo=workout_repo,
        ... )
        >>> use_case.create(Exercise(name="Bench Press")).success
        True
        >>> use_case.create(Exercise(name="bench press")).error
        'An exercise with this name already exists'
    """

    def __init__(
        self,
        exercises_repo: ExercisesRepository,
        workout_repo: WorkoutRepository,
    ) -> None:
        self._exercises_repo = exercises_repo
        self._workout_repo = workout_repo

    # =========================================================================
    # Queries
    # =========================================================================

    def list_exercises(
        self,
        filters: Optional[ExerciseFilters] = None,
        *,
        sort: str = SORT_BY_NAME,
        include_done_status: bool = False,
    ) -> ExerciseListResult:
        """
        List the catalog with filters applied.

        Args:
            filters: Search and attribute filters (none by default)
            sort: ``name`` or ``last_used``
            include_done_status: Also compute which exercises have any set with reps > 0

        Returns:
            ExerciseListResult with matches and search-only matches
        """
        filters = filters or ExerciseFilters()
        try:
            exercises = [db_row_to_exercise(row) for row in self._exercises_repo.list_all()]
            filtered = apply_filters_with_search_fallback(exercises, filters)

            sorter = sort_by_last_used if sort == SORT_BY_LAST_USED else sort_by_name
            done_ids: List[str] = []
            if include_done_status:
                done_ids = self._done_exercise_ids()

            return ExerciseListResult(
                success=True,
                exercises=sorter(filtered.results),
                search_only_matches=sort_by_name(filtered.search_only_matches),
                done_exercise_ids=done_ids,
            )
        except PersistenceError as e:
            logger.exception(f"Listing exercises failed: {e}")
            return ExerciseListResult(success=False, error=e.message)

    def _done_exercise_ids(self) -> List[str]:
        done = set()
        for row in self._workout_repo.list_exercise_sets():
            if any(s.reps is not None and s.reps > 0 for s in parse_sets(row.get("sets"))):
                done.add(row.get("exercise_id"))
        return sorted(done)

    def filter_options(self) -> FilterOptionsResult:
        try:
            exercises = [db_row_to_exercise(row) for row in self._exercises_repo.list_all()]
            return FilterOptionsResult(success=True, options=get_filter_options(exercises))
        except PersistenceError as e:
            logger.exception(f"Loading filter options failed: {e}")
            return FilterOptionsResult(success=False, error=e.message)

    def get(self, exercise_id: str) -> ExerciseResult:
        try:
            row = self._exercises_repo.get_by_id(exercise_id)
        except PersistenceError as e:
            logger.exception(f"Loading exercise {exercise_id} failed: {e}")
            return ExerciseResult(success=False, error=e.message)
        if row is None:
            return ExerciseResult(
                success=False, error=f"Exercise {exercise_id} not found", not_found=True
            )
        return ExerciseResult(success=True, exercise=db_row_to_exercise(row))

    def usage(self, exercise_id: str) -> ExerciseUsageResult:
        """Counts and the distinct workouts/templates referencing the exercise."""
        try:
            if self._exercises_repo.get_by_id(exercise_id) is None:
                return ExerciseUsageResult(
                    success=False, error=f"Exercise {exercise_id} not found", not_found=True
                )
            counts = self._exercises_repo.get_usage_counts(exercise_id)
            details = self._exercises_repo.get_usage_details(exercise_id)
        except PersistenceError as e:
            logger.exception(f"Loading usage of exercise {exercise_id} failed: {e}")
            return ExerciseUsageResult(success=False, error=e.message)

        return ExerciseUsageResult(
            success=True,
            workout_count=counts.get("workout_count", 0),
            template_count=counts.get("template_count", 0),
            workouts=details.get("workouts", []),
            templates=details.get("templates", []),
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def create(self, exercise: Exercise) -> ExerciseResult:
        """Insert a new exercise. Duplicate names (ignoring case) are a conflict."""
        try:
            if self._exercises_repo.find_by_name(exercise.name) is not None:
                raise DuplicateExerciseError(exercise.name)

            row = self._exercises_repo.create(exercise_to_db_row(exercise))
            created = db_row_to_exercise(row)
            logger.info(f"Created exercise {created.id}: {created.name}")
            return ExerciseResult(success=True, exercise=created)

        except DuplicateExerciseError as e:
            logger.warning(f"Duplicate exercise name rejected: {e.name}")
            return ExerciseResult(success=False, error=e.message, conflict=True)

        except PersistenceError as e:
            if e.is_unique_violation:
                return ExerciseResult(
                    success=False, error=DuplicateExerciseError(exercise.name).message, conflict=True
                )
            logger.exception(f"Creating exercise failed: {e}")
            return ExerciseResult(success=False, error=e.message)

    def update(self, exercise_id: str, fields: Dict[str, Any]) -> ExerciseResult:
        """
        Update the given columns only.

        Unknown keys are ignored. A new name is trimmed and must stay unique.
        Empty video_url/notes are stored as null.
        """
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                return ExerciseResult(
                    success=False,
                    error="Exercise name cannot be blank",
                    validation_errors=["name: cannot be blank"],
                )
        for nullable in ("video_url", "notes"):
            if nullable in changes and not changes[nullable]:
                changes[nullable] = None

        try:
            if "name" in changes:
                existing = self._exercises_repo.find_by_name(changes["name"])
                if existing is not None and existing.get("id") != exercise_id:
                    raise DuplicateExerciseError(changes["name"])

            if not changes:
                return self.get(exercise_id)

            row = self._exercises_repo.update(exercise_id, changes)
            if row is None:
                return ExerciseResult(
                    success=False, error=f"Exercise {exercise_id} not found", not_found=True
                )
            logger.info(f"Updated exercise {exercise_id}: {sorted(changes)}")
            return ExerciseResult(success=True, exercise=db_row_to_exercise(row))

        except DuplicateExerciseError as e:
            logger.warning(f"Duplicate exercise name rejected: {e.name}")
            return ExerciseResult(success=False, error=e.message, conflict=True)

        except PersistenceError as e:
            if e.is_unique_violation:
                return ExerciseResult(
                    success=False,
                    error=DuplicateExerciseError(changes.get("name", "")).message,
                    conflict=True,
                )
            logger.exception(f"Updating exercise {exercise_id} failed: {e}")
            return ExerciseResult(success=False, error=e.message)

    def update_notes(self, exercise_id: str, notes: Optional[str]) -> ExerciseResult:
        return self.update(exercise_id, {"notes": notes})

    def set_mastered(self, exercise_id: str, is_mastered: bool) -> ExerciseResult:
        return self.update(exercise_id, {"is_mastered": is_mastered})

    def delete(self, exercise_id: str) -> ExerciseResult:
        """Delete an exercise that no workout or template references."""
        try:
            if self._exercises_repo.get_by_id(exercise_id) is None:
                return ExerciseResult(
                    success=False, error=f"Exercise {exercise_id} not found", not_found=True
                )

            counts = self._exercises_repo.get_usage_counts(exercise_id)
            workout_count = counts.get("workout_count", 0)
            template_count = counts.get("template_count", 0)
            if workout_count or template_count:
                raise ExerciseInUseError(workout_count, template_count)

            self._exercises_repo.delete(exercise_id)
            logger.info(f"Deleted exercise {exercise_id}")
            return ExerciseResult(success=True)

        except ExerciseInUseError as e:
            logger.warning(f"Refusing to delete exercise {exercise_id}: {e.message}")
            return ExerciseResult(success=False, error=e.message, conflict=True)

        except PersistenceError as e:
            logger.exception(f"Deleting exercise {exercise_id} failed: {e}")
            return ExerciseResult(success=False, error=e.message)
