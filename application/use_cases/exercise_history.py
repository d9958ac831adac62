"""
ExerciseHistory Use Case.

Gathers everything the set editor shows about an exercise's past: best set,
the sets from last time, the last few sessions and chart data. The three
repository reads are independent and run in parallel.
"""

import datetime as dt
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import PersistenceError
from application.ports import WorkoutRepository
from backend.core.history_resolver import (
    DEFAULT_HISTORY_LIMIT,
    ProgressPoint,
    build_historical_sessions,
    build_progress_points,
    find_best_set,
    find_most_recent_with_data,
    has_exercise_been_done,
)
from domain.converters import db_rows_to_historical_sessions, parse_date
from domain.models import HistoricalSession, WorkoutSet

logger = logging.getLogger(__name__)


@dataclass
class ExerciseHistoryResult:
    """Result of the ExerciseHistory use case execution."""

    success: bool
    exercise_id: Optional[str] = None
    reference_date: Optional[dt.date] = None
    best_set: Optional[WorkoutSet] = None
    previous_sets: Optional[List[WorkoutSet]] = None
    historical_sessions: List[HistoricalSession] = field(default_factory=list)
    progress_points: List[ProgressPoint] = field(default_factory=list)
    has_been_done: bool = False
    error: Optional[str] = None
    not_found: bool = False


class ExerciseHistoryUseCase:
    """
    Use case for resolving an exercise's history relative to a workout.

    The reference point is explicit: either a date, a workout id, or both.
    When only the workout id is given its date is looked up. With neither,
    every recorded session counts as history.

    Usage:
        >>> use_case = ExerciseHistoryUseCase(workout_repo=workout_repo)
        >>> result = use_case.execute("ex-1", reference_workout_id="w-9")
        >>> result.best_set
        WorkoutSet(set_number=2, weight=60.0, reps=8)
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        max_workers: int = 3,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for workout exercise history
            history_limit: Number of previous sessions to return
            max_workers: Thread pool size for the parallel reads
        """
        self._workout_repo = workout_repo
        self._history_limit = history_limit
        self._max_workers = max_workers

    def execute(
        self,
        exercise_id: str,
        *,
        reference_date: Optional[dt.date] = None,
        reference_workout_id: Optional[str] = None,
        progress_since: Optional[dt.date] = None,
    ) -> ExerciseHistoryResult:
        """
        Resolve history for ``exercise_id``.

        Args:
            exercise_id: Exercise to look up
            reference_date: Date of the workout being viewed
            reference_workout_id: Workout being viewed (excluded from "last time")
            progress_since: Lower bound for chart points

        Returns:
            ExerciseHistoryResult with best set, previous sets, sessions and points
        """
        try:
            # Step 1: Resolve the reference date from the workout if needed
            if reference_date is None and reference_workout_id is not None:
                workout = self._workout_repo.get_workout(reference_workout_id)
                if workout is None:
                    return ExerciseHistoryResult(
                        success=False,
                        error=f"Workout {reference_workout_id} not found",
                        not_found=True,
                    )
                reference_date = parse_date(workout.get("date"))

            iso_date = reference_date.isoformat() if reference_date else None

            # Step 2: Fan out the independent reads
            with ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="history_"
            ) as executor:
                all_future = executor.submit(
                    self._workout_repo.get_workout_exercises_for_exercise, exercise_id
                )
                previous_future = executor.submit(
                    self._workout_repo.get_workout_exercises_for_exercise,
                    exercise_id,
                    on_or_before=iso_date,
                    exclude_workout_id=reference_workout_id,
                )
                history_future = executor.submit(
                    self._workout_repo.get_workout_exercises_for_exercise,
                    exercise_id,
                    before=iso_date,
                )
                all_sessions = db_rows_to_historical_sessions(all_future.result())
                previous_candidates = db_rows_to_historical_sessions(previous_future.result())
                history_candidates = db_rows_to_historical_sessions(history_future.result())

            # Step 3: Resolve
            best_set = find_best_set(s for session in all_sessions for s in session.sets)
            previous_sets = find_most_recent_with_data(
                previous_candidates, reference_date, reference_workout_id
            )
            historical = build_historical_sessions(
                history_candidates, reference_date, self._history_limit
            )
            points = build_progress_points(all_sessions, since=progress_since)

            logger.info(
                "Resolved history for exercise %s: %d sessions, best=%s",
                exercise_id,
                len(all_sessions),
                best_set,
            )
            return ExerciseHistoryResult(
                success=True,
                exercise_id=exercise_id,
                reference_date=reference_date,
                best_set=best_set,
                previous_sets=previous_sets,
                historical_sessions=historical,
                progress_points=points,
                has_been_done=has_exercise_been_done(all_sessions),
            )

        except PersistenceError as e:
            logger.exception(f"ExerciseHistory use case failed: {e}")
            return ExerciseHistoryResult(success=False, exercise_id=exercise_id, error=e.message)
