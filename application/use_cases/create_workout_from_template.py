"""
CreateWorkoutFromTemplate Use Case.

Logs a template: creates a workout named after it on the given day, with one
seeded workout exercise per template exercise, in template order. If the
exercises cannot be inserted the half-created workout is deleted again.
"""

import datetime as dt
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from application.exceptions import PersistenceError
from application.ports import TemplateRepository, WorkoutRepository
from application.use_cases.add_exercise import seed_sets_for_exercise
from domain.converters import db_row_to_template, db_row_to_workout, sets_to_db
from domain.models import Workout

logger = logging.getLogger(__name__)


@dataclass
class CreateWorkoutFromTemplateResult:
    """Result of the CreateWorkoutFromTemplate use case execution."""

    success: bool
    workout: Optional[Workout] = None
    workout_id: Optional[str] = None
    error: Optional[str] = None
    not_found: bool = False


class CreateWorkoutFromTemplateUseCase:
    """
    Use case for instantiating a template as a new workout.

    Orchestrates the following workflow:
    1. Load the template and its exercises
    2. Create the workout (template name and colour)
    3. Seed sets for each exercise from its latest record
    4. Insert the workout exercises, deleting the workout on failure
    5. Return the new workout with its exercises

    Usage:
        >>> use_case = CreateWorkoutFromTemplateUseCase(
        ...     template_repo=template_repo,
        ...     workout_repo=workout_repo,
        ... )
        >>> result = use_case.execute("t-1", dt.date(2024, 3, 4))
        >>> result.workout.name
        'Push Day'
    """

    def __init__(
        self,
        template_repo: TemplateRepository,
        workout_repo: WorkoutRepository,
        *,
        max_workers: int = 4,
    ) -> None:
        self._template_repo = template_repo
        self._workout_repo = workout_repo
        self._max_workers = max_workers

    def execute(
        self,
        template_id: str,
        date: dt.date,
        *,
        name: Optional[str] = None,
    ) -> CreateWorkoutFromTemplateResult:
        """
        Create a workout from ``template_id`` dated ``date``.

        Args:
            template_id: Template to instantiate
            date: Day of the new workout
            name: Override for the workout name (defaults to the template name)

        Returns:
            CreateWorkoutFromTemplateResult with the created workout
        """
        # Step 1: Load template
        try:
            template_row = self._template_repo.get_template(template_id)
        except PersistenceError as e:
            logger.exception(f"Loading template {template_id} failed: {e}")
            return CreateWorkoutFromTemplateResult(success=False, error=e.message)

        if template_row is None:
            return CreateWorkoutFromTemplateResult(
                success=False, error=f"Template {template_id} not found", not_found=True
            )
        template = db_row_to_template(template_row)

        # Step 2: Create workout
        try:
            workout_row = self._workout_repo.create_workout(
                name or template.name, date.isoformat(), color=template.color
            )
        except PersistenceError as e:
            logger.exception(f"Creating workout from template {template_id} failed: {e}")
            return CreateWorkoutFromTemplateResult(success=False, error=e.message)
        workout_id = workout_row["id"]

        try:
            # Step 3: Seed sets (independent lookups)
            exercise_ids = [te.exercise_id for te in template.template_exercises]
            if exercise_ids:
                with ThreadPoolExecutor(
                    max_workers=min(self._max_workers, len(exercise_ids)),
                    thread_name_prefix="template_seed_",
                ) as executor:
                    seeded = list(executor.map(
                        lambda exercise_id: seed_sets_for_exercise(self._workout_repo, exercise_id),
                        exercise_ids,
                    ))

                # Step 4: Insert exercises in template order
                self._workout_repo.create_workout_exercises([
                    {
                        "workout_id": workout_id,
                        "exercise_id": exercise_id,
                        "order_index": index,
                        "sets": sets_to_db(sets),
                    }
                    for index, (exercise_id, sets) in enumerate(zip(exercise_ids, seeded))
                ])

            # Step 5: Read back
            created = self._workout_repo.get_workout(workout_id) or workout_row

        except PersistenceError as e:
            logger.exception(f"Populating workout {workout_id} from template failed: {e}")
            self._discard_workout(workout_id)
            return CreateWorkoutFromTemplateResult(success=False, error=e.message)

        logger.info(
            "Created workout %s from template %s with %d exercises",
            workout_id,
            template_id,
            template.exercise_count,
        )
        return CreateWorkoutFromTemplateResult(
            success=True,
            workout=db_row_to_workout(created),
            workout_id=workout_id,
        )

    def _discard_workout(self, workout_id: str) -> None:
        try:
            self._workout_repo.delete_workout(workout_id)
        except PersistenceError as e:
            logger.exception(f"Cleanup of workout {workout_id} failed: {e}")
