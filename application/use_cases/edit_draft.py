"""
Draft editing of workout exercise sets.

Editing a workout exercise follows a view -> edit -> commit/cancel cycle:

- Entering edit mode stores the current sets as a draft snapshot.
- While editing, complete sets are autosaved to the live ``sets`` column
  after a short debounce.
- Commit validates every set, strips blank ones, persists and clears the
  snapshot.
- Cancel writes the snapshot back over ``sets`` and clears it.

A superset edits two workout exercises together; every transition applies
to both members or to neither.

``WorkoutExerciseDraftUseCase`` holds the persistent half of each
transition so stateless callers (HTTP) can drive it. ``DraftEditSession``
adds the local editing state and the autosave timer on top of it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import Dict, List, Optional, Sequence, Tuple

from application.exceptions import (
    DraftNotFoundError,
    InvalidEditStateError,
    PersistenceError,
    SetValidationError,
)
from application.ports import ExercisesRepository, WorkoutRepository
from backend.core import set_completion
from backend.core.autosave import AutosaveDebouncer
from backend.core.set_completion import (
    complete_sets,
    find_incomplete_sets,
    incomplete_sets_message,
    remove_empty_sets,
)
from domain.converters import db_row_to_workout_exercise, sets_to_db
from domain.models import WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)

MAX_SESSION_MEMBERS = 2


class EditState(str, Enum):
    """Editing state of a draft session."""
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass
class DraftResult:
    """Result of a draft transition."""

    success: bool
    workout_exercises: List[WorkoutExercise] = field(default_factory=list)
    error: Optional[str] = None
    not_found: bool = False
    conflict: bool = False


@dataclass
class CommitResult:
    """Result of committing a draft."""

    success: bool
    workout_exercises: List[WorkoutExercise] = field(default_factory=list)
    next_workout_exercise: Optional[WorkoutExercise] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)
    not_found: bool = False


class _MissingWorkoutExercise(Exception):
    def __init__(self, workout_exercise_id: str):
        super().__init__(f"Workout exercise {workout_exercise_id} not found")
        self.message = str(self)


class WorkoutExerciseDraftUseCase:
    """
    Persistent draft transitions for one or more workout exercises.

    Reads for multiple members run in parallel; writes are issued member
    by member so a failure stops before touching the rest.

    Usage:
        >>> use_case = WorkoutExerciseDraftUseCase(
        ...     workout_repo=workout_repo,
        ...     exercises_repo=exercises_repo,
        ... )
        >>> use_case.enter_edit(["we-1"]).success
        True
        >>> use_case.commit([("we-1", sets)]).workout_exercises[0].draft_snapshot is None
        True
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        exercises_repo: ExercisesRepository,
    ) -> None:
        self._workout_repo = workout_repo
        self._exercises_repo = exercises_repo

    # =========================================================================
    # Reads
    # =========================================================================

    def _fetch(self, workout_exercise_ids: Sequence[str]) -> List[WorkoutExercise]:
        """Fetch members in parallel. Raises _MissingWorkoutExercise or PersistenceError."""
        if len(workout_exercise_ids) == 1:
            rows = [self._workout_repo.get_workout_exercise(workout_exercise_ids[0])]
        else:
            with ThreadPoolExecutor(
                max_workers=len(workout_exercise_ids), thread_name_prefix="draft_"
            ) as executor:
                rows = list(executor.map(self._workout_repo.get_workout_exercise, workout_exercise_ids))

        members = []
        for workout_exercise_id, row in zip(workout_exercise_ids, rows):
            if row is None:
                raise _MissingWorkoutExercise(workout_exercise_id)
            members.append(db_row_to_workout_exercise(row))
        return members

    def get(self, workout_exercise_id: str) -> Optional[WorkoutExercise]:
        """Get one workout exercise, or None. Raises PersistenceError."""
        row = self._workout_repo.get_workout_exercise(workout_exercise_id)
        return db_row_to_workout_exercise(row) if row is not None else None

    def next_workout_exercise(self, workout_exercise_id: str) -> Optional[WorkoutExercise]:
        """The workout exercise after this one in its workout, or None."""
        current = self.get(workout_exercise_id)
        if current is None:
            return None
        row = self._workout_repo.get_next_by_order_index(current.workout_id, current.order_index)
        return db_row_to_workout_exercise(row) if row is not None else None

    # =========================================================================
    # Transitions
    # =========================================================================

    def load(self, workout_exercise_ids: Sequence[str]) -> DraftResult:
        """
        Fetch members for viewing and clear any leftover draft snapshot.

        A snapshot still present on load belongs to an edit that was never
        committed or cancelled; reopening abandons it.
        """
        try:
            members = self._fetch(workout_exercise_ids)
            for member in members:
                self._workout_repo.update_draft_snapshot(member.id, None)
            return DraftResult(
                success=True,
                workout_exercises=[m.model_copy(update={"draft_snapshot": None}) for m in members],
            )
        except _MissingWorkoutExercise as e:
            return DraftResult(success=False, error=e.message, not_found=True)
        except PersistenceError as e:
            logger.exception(f"Loading draft members failed: {e}")
            return DraftResult(success=False, error=e.message)

    def enter_edit(self, workout_exercise_ids: Sequence[str]) -> DraftResult:
        """Store each member's current sets verbatim as its draft snapshot."""
        try:
            members = self._fetch(workout_exercise_ids)
            for member in members:
                if not self._workout_repo.update_draft_snapshot(member.id, sets_to_db(member.sets)):
                    raise _MissingWorkoutExercise(member.id)
            logger.info("Entered edit mode for %s", ", ".join(workout_exercise_ids))
            return DraftResult(
                success=True,
                workout_exercises=[
                    m.model_copy(update={"draft_snapshot": list(m.sets)}) for m in members
                ],
            )
        except _MissingWorkoutExercise as e:
            return DraftResult(success=False, error=e.message, not_found=True)
        except PersistenceError as e:
            logger.exception(f"Entering edit mode failed: {e}")
            return DraftResult(success=False, error=e.message)

    def autosave(self, workout_exercise_id: str, sets: Sequence[WorkoutSet]) -> DraftResult:
        """Write only the complete sets to the live ``sets`` column."""
        try:
            row = self._workout_repo.update_sets(workout_exercise_id, sets_to_db(complete_sets(sets)))
            if row is None:
                raise _MissingWorkoutExercise(workout_exercise_id)
            return DraftResult(success=True, workout_exercises=[db_row_to_workout_exercise(row)])
        except _MissingWorkoutExercise as e:
            return DraftResult(success=False, error=e.message, not_found=True)
        except PersistenceError as e:
            logger.exception(f"Autosave failed for {workout_exercise_id}: {e}")
            return DraftResult(success=False, error=e.message)

    def commit(self, edits: Sequence[Tuple[str, Sequence[WorkoutSet]]]) -> CommitResult:
        """
        Validate, clean and persist the edited sets of every member.

        Orchestrates the following workflow:
        1. Fetch members (names for messages, positions for "next")
        2. Reject the whole commit if any member has half-filled sets
        3. Strip blank sets and persist the rest
        4. Clear the draft snapshots
        5. Refresh the exercises' last-used data
        6. Look up the exercise after the last member

        Args:
            edits: ``(workout_exercise_id, sets)`` per member, in display order

        Returns:
            CommitResult with the saved members and the next workout exercise
        """
        ids = [workout_exercise_id for workout_exercise_id, _ in edits]
        try:
            # Step 1: Fetch
            members = self._fetch(ids)

            # Step 2: Validate every member before writing anything
            for member, (_, sets) in zip(members, edits):
                incomplete = find_incomplete_sets(sets)
                if incomplete:
                    raise SetValidationError(
                        incomplete_sets_message(member.exercise_name),
                        errors=[
                            f"Set {s.set_number} of {member.exercise_name} is incomplete"
                            for s in incomplete
                        ],
                    )

            # Step 3: Persist cleaned sets
            saved: List[WorkoutExercise] = []
            for member, (_, sets) in zip(members, edits):
                cleaned = remove_empty_sets(sets)
                row = self._workout_repo.update_sets(member.id, sets_to_db(cleaned))
                if row is None:
                    raise _MissingWorkoutExercise(member.id)
                saved.append(member.model_copy(update={"sets": cleaned}))

            # Step 4: Clear snapshots
            for member in saved:
                self._workout_repo.update_draft_snapshot(member.id, None)
            saved = [m.model_copy(update={"draft_snapshot": None}) for m in saved]

            # Step 5: Last-used tracking
            for member in saved:
                self._record_last_used(member)

            # Step 6: Next exercise after the last member
            last = saved[-1]
            next_row = self._workout_repo.get_next_by_order_index(last.workout_id, last.order_index)

            logger.info("Committed sets for %s", ", ".join(ids))
            return CommitResult(
                success=True,
                workout_exercises=saved,
                next_workout_exercise=(
                    db_row_to_workout_exercise(next_row) if next_row is not None else None
                ),
            )

        except SetValidationError as e:
            logger.warning(f"Commit rejected: {e.message}")
            return CommitResult(success=False, error=e.message, validation_errors=e.errors)

        except _MissingWorkoutExercise as e:
            return CommitResult(success=False, error=e.message, not_found=True)

        except PersistenceError as e:
            logger.exception(f"Commit failed: {e}")
            return CommitResult(success=False, error=e.message)

    def _record_last_used(self, member: WorkoutExercise) -> None:
        """Update the exercise's last-used data if this workout is its latest use."""
        if member.workout_date is None or not member.sets:
            return
        exercise = member.exercise
        if (
            exercise is not None
            and exercise.last_used_date is not None
            and exercise.last_used_date > member.workout_date
        ):
            return
        try:
            self._exercises_repo.update_last_used(
                member.exercise_id,
                member.workout_date.isoformat(),
                sets_to_db(member.sets),
            )
        except PersistenceError as e:
            # The sets are already committed; last-used data is refreshed on the next commit
            logger.exception(f"Updating last used data for {member.exercise_id} failed: {e}")

    def cancel(self, workout_exercise_ids: Sequence[str]) -> DraftResult:
        """
        Restore every member's sets from its draft snapshot.

        Fails with "No draft to restore" without writing anything if any
        member has no snapshot. Snapshots are cleared only after every
        member is restored, so a failed cancel can be retried.
        """
        try:
            members = self._fetch(workout_exercise_ids)
            for member in members:
                if member.draft_snapshot is None:
                    raise DraftNotFoundError(member.id)

            for member in members:
                row = self._workout_repo.update_sets(member.id, sets_to_db(member.draft_snapshot))
                if row is None:
                    raise _MissingWorkoutExercise(member.id)

            restored: List[WorkoutExercise] = []
            for member in members:
                self._workout_repo.update_draft_snapshot(member.id, None)
                restored.append(
                    member.model_copy(update={"sets": list(member.draft_snapshot), "draft_snapshot": None})
                )

            logger.info("Cancelled edit for %s", ", ".join(workout_exercise_ids))
            return DraftResult(success=True, workout_exercises=restored)

        except DraftNotFoundError as e:
            logger.warning(f"Cancel failed for {e.workout_exercise_id}: {e.message}")
            return DraftResult(success=False, error=e.message, conflict=True)

        except _MissingWorkoutExercise as e:
            return DraftResult(success=False, error=e.message, not_found=True)

        except PersistenceError as e:
            logger.exception(f"Cancel failed: {e}")
            return DraftResult(success=False, error=e.message)


class DraftEditSession:
    """
    Stateful editor over one workout exercise, or two for a superset.

    Local edits are kept in memory and autosaved through a debouncer. All
    persistent transitions go through WorkoutExerciseDraftUseCase.

    Args:
        use_case: Persistent draft transitions
        workout_exercise_ids: One or two members, in display order
        debouncer: Autosave debouncer (one is created if omitted)
    """

    def __init__(
        self,
        use_case: WorkoutExerciseDraftUseCase,
        workout_exercise_ids: Sequence[str],
        *,
        debouncer: Optional[AutosaveDebouncer] = None,
    ) -> None:
        if not 1 <= len(workout_exercise_ids) <= MAX_SESSION_MEMBERS:
            raise ValueError(
                f"A draft session edits 1 to {MAX_SESSION_MEMBERS} workout exercises"
            )
        if len(set(workout_exercise_ids)) != len(workout_exercise_ids):
            raise ValueError("Draft session members must be distinct")

        self._use_case = use_case
        self._ids = list(workout_exercise_ids)
        self._debouncer = debouncer or AutosaveDebouncer()
        self._state = EditState.VIEWING
        self._members: Dict[str, WorkoutExercise] = {}
        self._sets: Dict[str, List[WorkoutSet]] = {}
        self._lock = Lock()
        # Held across every store write; taken before _lock
        self._write_lock = Lock()

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def workout_exercise_ids(self) -> List[str]:
        return list(self._ids)

    def member(self, workout_exercise_id: str) -> WorkoutExercise:
        return self._members[workout_exercise_id]

    def sets(self, workout_exercise_id: str) -> List[WorkoutSet]:
        """Current local sets of a member."""
        with self._lock:
            return list(self._sets[workout_exercise_id])

    def _require(self, state: EditState) -> None:
        if self._state != state:
            raise InvalidEditStateError(
                f"Operation requires {state.value} state, session is {self._state.value}"
            )

    def _apply(self, members: Sequence[WorkoutExercise]) -> None:
        with self._lock:
            for member in members:
                self._members[member.id] = member
                self._sets[member.id] = list(member.sets)

    # =========================================================================
    # Persistent transitions
    # =========================================================================

    def load(self) -> DraftResult:
        """Fetch members and discard any abandoned draft. Always ends in viewing."""
        self._debouncer.cancel()
        with self._write_lock:
            result = self._use_case.load(self._ids)
            if result.success:
                self._apply(result.workout_exercises)
                self._state = EditState.VIEWING
        return result

    def enter_edit(self) -> DraftResult:
        with self._write_lock:
            self._require(EditState.VIEWING)
            result = self._use_case.enter_edit(self._ids)
            if result.success:
                self._apply(result.workout_exercises)
                self._state = EditState.EDITING
        return result

    def commit(self) -> CommitResult:
        """
        Persist the edit. On any failure the session stays in editing.

        Waits for an autosave that is already writing, so its sets cannot
        land on top of the committed ones.
        """
        self._require(EditState.EDITING)
        self._debouncer.cancel()
        with self._write_lock:
            self._require(EditState.EDITING)
            with self._lock:
                edits = [(member_id, list(self._sets[member_id])) for member_id in self._ids]
            result = self._use_case.commit(edits)
            if result.success:
                self._apply(result.workout_exercises)
                self._state = EditState.VIEWING
        return result

    def cancel(self) -> DraftResult:
        """Restore the snapshot. On failure the session stays in editing."""
        self._require(EditState.EDITING)
        self._debouncer.cancel()
        with self._write_lock:
            self._require(EditState.EDITING)
            result = self._use_case.cancel(self._ids)
            if result.success:
                self._apply(result.workout_exercises)
                self._state = EditState.VIEWING
        return result

    def close(self) -> None:
        """Stop any pending autosave. The session is unusable afterwards."""
        self._debouncer.close()

    # =========================================================================
    # Local edits
    # =========================================================================

    def update_set(
        self,
        workout_exercise_id: str,
        index: int,
        *,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
    ) -> List[WorkoutSet]:
        self._require(EditState.EDITING)
        with self._lock:
            self._sets[workout_exercise_id] = set_completion.update_set(
                self._sets[workout_exercise_id], index, weight=weight, reps=reps
            )
            updated = list(self._sets[workout_exercise_id])
        self._schedule_autosave(workout_exercise_id)
        return updated

    def add_set(self, workout_exercise_id: str) -> List[WorkoutSet]:
        self._require(EditState.EDITING)
        with self._lock:
            self._sets[workout_exercise_id] = set_completion.add_new_set(
                self._sets[workout_exercise_id]
            )
            updated = list(self._sets[workout_exercise_id])
        self._schedule_autosave(workout_exercise_id)
        return updated

    def delete_last_set(self, workout_exercise_id: str) -> List[WorkoutSet]:
        self._require(EditState.EDITING)
        with self._lock:
            self._sets[workout_exercise_id] = set_completion.delete_last_set(
                self._sets[workout_exercise_id]
            )
            updated = list(self._sets[workout_exercise_id])
        self._schedule_autosave(workout_exercise_id)
        return updated

    def _schedule_autosave(self, workout_exercise_id: str) -> None:
        self._debouncer.schedule(
            workout_exercise_id, lambda: self._autosave(workout_exercise_id)
        )

    def _autosave(self, workout_exercise_id: str) -> None:
        with self._write_lock:
            if self._state != EditState.EDITING:
                return
            with self._lock:
                current = list(self._sets[workout_exercise_id])
            result = self._use_case.autosave(workout_exercise_id, current)
        if not result.success:
            logger.warning(f"Autosave of {workout_exercise_id} failed: {result.error}")
