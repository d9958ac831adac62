"""
AddExercise Use Cases.

Appends an exercise to a workout or a template. Workout exercises are
seeded with empty sets sized from the last time the exercise was logged.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from application.exceptions import PersistenceError
from application.ports import ExercisesRepository, TemplateRepository, WorkoutRepository
from backend.core.ordering import next_order_index
from backend.core.set_seeding import create_default_sets
from domain.converters import (
    db_row_to_template_exercise,
    db_row_to_workout_exercise,
    parse_sets,
    sets_to_db,
)
from domain.models import TemplateExercise, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)


@dataclass
class AddExerciseResult:
    """Result of adding an exercise to a workout."""

    success: bool
    workout_exercise: Optional[WorkoutExercise] = None
    error: Optional[str] = None
    not_found: bool = False


@dataclass
class AddTemplateExerciseResult:
    """Result of adding an exercise to a template."""

    success: bool
    template_exercise: Optional[TemplateExercise] = None
    error: Optional[str] = None
    not_found: bool = False


def seed_sets_for_exercise(
    workout_repo: WorkoutRepository,
    exercise_id: str,
) -> List[WorkoutSet]:
    """Empty sets sized from the most recently created record of the exercise."""
    previous = workout_repo.get_latest_workout_exercise_sets(exercise_id)
    return create_default_sets(parse_sets(previous) if previous is not None else None)


class AddExerciseToWorkoutUseCase:
    """
    Use case for appending an exercise to a workout.

    Orchestrates the following workflow:
    1. Check the workout and exercise exist
    2. Seed default sets (unless explicit sets are given)
    3. Place the new record after the current last one
    4. Persist via repository

    Usage:
        >>> use_case = AddExerciseToWorkoutUseCase(
        ...     workout_repo=workout_repo,
        ...     exercises_repo=exercises_repo,
        ... )
        >>> result = use_case.execute(workout_id="w-1", exercise_id="ex-1")
        >>> len(result.workout_exercise.sets)
        3
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        exercises_repo: ExercisesRepository,
    ) -> None:
        self._workout_repo = workout_repo
        self._exercises_repo = exercises_repo

    def execute(
        self,
        workout_id: str,
        exercise_id: str,
        *,
        sets: Optional[List[WorkoutSet]] = None,
    ) -> AddExerciseResult:
        """
        Add ``exercise_id`` to the end of ``workout_id``.

        Args:
            workout_id: Target workout
            exercise_id: Exercise to add
            sets: Explicit initial sets; bypasses seeding when given

        Returns:
            AddExerciseResult with the created workout exercise
        """
        try:
            # Step 1: Both sides of the link must exist
            if self._workout_repo.get_workout(workout_id) is None:
                return AddExerciseResult(
                    success=False, error=f"Workout {workout_id} not found", not_found=True
                )
            if self._exercises_repo.get_by_id(exercise_id) is None:
                return AddExerciseResult(
                    success=False, error=f"Exercise {exercise_id} not found", not_found=True
                )

            # Step 2: Seed sets
            if sets is None:
                sets = seed_sets_for_exercise(self._workout_repo, exercise_id)

            # Step 3: Append position
            order_index = next_order_index(self._workout_repo.get_max_order_index(workout_id))

            # Step 4: Persist
            created = self._workout_repo.create_workout_exercises([
                {
                    "workout_id": workout_id,
                    "exercise_id": exercise_id,
                    "order_index": order_index,
                    "sets": sets_to_db(sets),
                }
            ])
            workout_exercise = db_row_to_workout_exercise(created[0])

            logger.info(
                "Added exercise %s to workout %s at position %d with %d sets",
                exercise_id,
                workout_id,
                order_index,
                len(workout_exercise.sets),
            )
            return AddExerciseResult(success=True, workout_exercise=workout_exercise)

        except PersistenceError as e:
            logger.exception(f"AddExerciseToWorkout failed: {e}")
            return AddExerciseResult(success=False, error=e.message)


class AddExerciseToTemplateUseCase:
    """Use case for appending an exercise slot to a template."""

    def __init__(
        self,
        template_repo: TemplateRepository,
        exercises_repo: ExercisesRepository,
    ) -> None:
        self._template_repo = template_repo
        self._exercises_repo = exercises_repo

    def execute(self, template_id: str, exercise_id: str) -> AddTemplateExerciseResult:
        try:
            if self._template_repo.get_template(template_id) is None:
                return AddTemplateExerciseResult(
                    success=False, error=f"Template {template_id} not found", not_found=True
                )
            if self._exercises_repo.get_by_id(exercise_id) is None:
                return AddTemplateExerciseResult(
                    success=False, error=f"Exercise {exercise_id} not found", not_found=True
                )

            order_index = next_order_index(self._template_repo.get_max_order_index(template_id))
            row = self._template_repo.add_template_exercise(template_id, exercise_id, order_index)

            logger.info("Added exercise %s to template %s", exercise_id, template_id)
            return AddTemplateExerciseResult(
                success=True, template_exercise=db_row_to_template_exercise(row)
            )

        except PersistenceError as e:
            logger.exception(f"AddExerciseToTemplate failed: {e}")
            return AddTemplateExerciseResult(success=False, error=e.message)
