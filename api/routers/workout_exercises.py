"""
Workout exercises router for set editing.

Editing a workout exercise's sets is a draft cycle driven by the client:

- POST   /{id}/draft     enter edit mode (snapshot the current sets)
- PUT    /{id}/autosave  persist complete sets while editing
- POST   /{id}/commit    validate, clean and persist; returns the next exercise
- POST   /{id}/cancel    restore the snapshot
- DELETE /{id}/draft     abandon a leftover draft when reopening

Pass ``superset_with`` (or a ``superset`` body on commit) to apply a
transition to two workout exercises at once.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_draft_use_case
from api.schemas import SetsPayload, WorkoutExerciseView, persistence_errors, raise_for_failure
from application.use_cases import WorkoutExerciseDraftUseCase
from domain.models import WorkoutSet

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workout-exercises",
    tags=["Workout Exercises"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class SupersetMemberSets(BaseModel):
    workout_exercise_id: str
    sets: List[WorkoutSet] = Field(default_factory=list)


class CommitRequest(BaseModel):
    """Edited sets for the exercise, and for its superset partner if any."""
    sets: List[WorkoutSet] = Field(default_factory=list)
    superset: Optional[SupersetMemberSets] = None


class DraftResponse(BaseModel):
    workout_exercises: List[WorkoutExerciseView]


class CommitResponse(BaseModel):
    workout_exercises: List[WorkoutExerciseView]
    next_workout_exercise: Optional[WorkoutExerciseView] = Field(
        None, description="The exercise after the committed one(s), if any"
    )


def _member_ids(workout_exercise_id: str, superset_with: Optional[str]) -> List[str]:
    if superset_with is None:
        return [workout_exercise_id]
    if superset_with == workout_exercise_id:
        raise HTTPException(status_code=400, detail="A superset needs two different exercises")
    return [workout_exercise_id, superset_with]


def _views(result) -> List[WorkoutExerciseView]:
    return [WorkoutExerciseView.from_workout_exercise(we) for we in result.workout_exercises]


# =============================================================================
# Read Endpoints
# =============================================================================


@router.get("/{workout_exercise_id}", response_model=WorkoutExerciseView)
def get_workout_exercise(
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> WorkoutExerciseView:
    with persistence_errors("load workout exercise"):
        we = use_case.get(workout_exercise_id)
    if we is None:
        raise HTTPException(
            status_code=404, detail=f"Workout exercise {workout_exercise_id} not found"
        )
    return WorkoutExerciseView.from_workout_exercise(we)


@router.get("/{workout_exercise_id}/next", response_model=Optional[WorkoutExerciseView])
def get_next_workout_exercise(
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> Optional[WorkoutExerciseView]:
    """The next exercise in the same workout, or null at the end."""
    with persistence_errors("load next workout exercise"):
        nxt = use_case.next_workout_exercise(workout_exercise_id)
    return WorkoutExerciseView.from_workout_exercise(nxt) if nxt else None


# =============================================================================
# Draft Endpoints
# =============================================================================


@router.post("/{workout_exercise_id}/draft", response_model=DraftResponse)
def enter_edit(
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    superset_with: Optional[str] = Query(None, description="Superset partner ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> DraftResponse:
    """Enter edit mode: the current sets are stored as the draft snapshot."""
    result = use_case.enter_edit(_member_ids(workout_exercise_id, superset_with))
    raise_for_failure(result)
    return DraftResponse(workout_exercises=_views(result))


@router.delete("/{workout_exercise_id}/draft", response_model=DraftResponse)
def discard_draft(
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    superset_with: Optional[str] = Query(None, description="Superset partner ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> DraftResponse:
    """Reopen for viewing, dropping any draft left by an unfinished edit."""
    result = use_case.load(_member_ids(workout_exercise_id, superset_with))
    raise_for_failure(result)
    return DraftResponse(workout_exercises=_views(result))


@router.put("/{workout_exercise_id}/autosave", response_model=WorkoutExerciseView)
def autosave(
    request: SetsPayload,
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> WorkoutExerciseView:
    """Persist the sets that have both weight and reps; the snapshot is untouched."""
    result = use_case.autosave(workout_exercise_id, request.sets)
    raise_for_failure(result)
    return _views(result)[0]


@router.post("/{workout_exercise_id}/commit", response_model=CommitResponse)
def commit(
    request: CommitRequest,
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> CommitResponse:
    """
    Save the edited sets.

    Any set with only one of weight/reps rejects the whole commit with 400
    and nothing is written. Blank sets are dropped and the rest renumbered.
    """
    edits = [(workout_exercise_id, request.sets)]
    if request.superset is not None:
        _member_ids(workout_exercise_id, request.superset.workout_exercise_id)
        edits.append((request.superset.workout_exercise_id, request.superset.sets))

    result = use_case.commit(edits)
    raise_for_failure(result)
    return CommitResponse(
        workout_exercises=_views(result),
        next_workout_exercise=(
            WorkoutExerciseView.from_workout_exercise(result.next_workout_exercise)
            if result.next_workout_exercise
            else None
        ),
    )


@router.post("/{workout_exercise_id}/cancel", response_model=DraftResponse)
def cancel(
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    superset_with: Optional[str] = Query(None, description="Superset partner ID"),
    use_case: WorkoutExerciseDraftUseCase = Depends(get_draft_use_case),
) -> DraftResponse:
    """Restore the sets saved when editing began. 409 if there is no draft."""
    result = use_case.cancel(_member_ids(workout_exercise_id, superset_with))
    raise_for_failure(result)
    return DraftResponse(workout_exercises=_views(result))
