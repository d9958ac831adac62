"""
Workouts router for logged training sessions.

This router provides endpoints for:
- Listing workouts (optionally by date range and grouped by month)
- Creating, renaming, re-dating and deleting workouts
- Adding, removing and reordering the exercises of a workout
"""

import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_add_exercise_use_case, get_workout_repo
from api.schemas import (
    ReorderRequest,
    SwapRequest,
    WorkoutExerciseView,
    persistence_errors,
    raise_for_failure,
)
from application.ports import WorkoutRepository
from application.use_cases import AddExerciseToWorkoutUseCase, ReorderExercisesUseCase
from backend.core.colors import (
    DEFAULT_COLOR_ID,
    WORKOUT_COLORS,
    get_color_by_id,
    is_valid_color,
)
from backend.core.ordering import sort_by_order
from backend.core.workout_calendar import group_workouts_by_month, sort_workouts
from domain.converters import db_row_to_workout, db_row_to_workout_exercise
from domain.models import DEFAULT_WORKOUT_NAME, Workout, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateWorkoutRequest(BaseModel):
    """Request model for a new workout."""
    name: str = Field(DEFAULT_WORKOUT_NAME, min_length=1, max_length=200)
    date: dt.date
    color: Optional[str] = Field(None, description="Palette colour id")


class UpdateWorkoutRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[dt.date] = None
    color: Optional[str] = None


class AddWorkoutExerciseRequest(BaseModel):
    """Append an exercise; sets are seeded from its last record unless given."""
    exercise_id: str
    sets: Optional[List[WorkoutSet]] = None


class WorkoutView(BaseModel):
    id: Optional[str]
    name: str
    date: dt.date
    color: str
    color_name: str
    exercise_count: int
    workout_exercises: List[WorkoutExerciseView] = Field(default_factory=list)
    created_at: Optional[dt.datetime] = None

    @classmethod
    def from_workout(cls, workout: Workout) -> "WorkoutView":
        color = get_color_by_id(workout.color)
        return cls(
            id=workout.id,
            name=workout.name,
            date=workout.date,
            color=color.id,
            color_name=color.name,
            exercise_count=workout.exercise_count,
            workout_exercises=[
                WorkoutExerciseView.from_workout_exercise(we) for we in workout.workout_exercises
            ],
            created_at=workout.created_at,
        )


class WorkoutListResponse(BaseModel):
    workouts: List[WorkoutView]
    count: int
    months: Optional[Dict[str, List[WorkoutView]]] = Field(
        None, description="Workouts bucketed by YYYY-MM when group_by_month is set"
    )


class WorkoutExerciseListResponse(BaseModel):
    workout_exercises: List[WorkoutExerciseView]


def _validate_color(color: Optional[str]) -> None:
    if color is not None and not is_valid_color(color):
        raise HTTPException(status_code=400, detail=f"Unknown color: {color}")


def _load_workout(workout_repo: WorkoutRepository, workout_id: str) -> Workout:
    with persistence_errors("load workout"):
        row = workout_repo.get_workout(workout_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    return db_row_to_workout(row)


def _load_siblings(workout_repo: WorkoutRepository, workout_id: str) -> List[WorkoutExercise]:
    with persistence_errors("load workout exercises"):
        rows = workout_repo.list_workout_exercises(workout_id)
    return sort_by_order([db_row_to_workout_exercise(row) for row in rows])


# =============================================================================
# Workout Endpoints
# =============================================================================


@router.get("", response_model=WorkoutListResponse)
def list_workouts(
    start_date: Optional[dt.date] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[dt.date] = Query(None, description="Inclusive upper bound"),
    group_by_month: bool = Query(False),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutListResponse:
    """List workouts, newest first."""
    with persistence_errors("list workouts"):
        rows = workout_repo.list_workouts(
            start_date=start_date.isoformat() if start_date else None,
            end_date=end_date.isoformat() if end_date else None,
        )
    workouts = sort_workouts([db_row_to_workout(row) for row in rows])
    views = [WorkoutView.from_workout(w) for w in workouts]

    months = None
    if group_by_month:
        months = {
            month: [WorkoutView.from_workout(w) for w in grouped]
            for month, grouped in group_workouts_by_month(workouts).items()
        }
    return WorkoutListResponse(workouts=views, count=len(views), months=months)


@router.get("/colors")
def list_colors():
    """The colour palette available to workouts and templates."""
    return {
        "colors": [{"id": c.id, "name": c.name} for c in WORKOUT_COLORS],
        "default": DEFAULT_COLOR_ID,
    }


@router.post("", response_model=WorkoutView, status_code=201)
def create_workout(
    request: CreateWorkoutRequest,
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutView:
    _validate_color(request.color)
    with persistence_errors("create workout"):
        row = workout_repo.create_workout(
            request.name.strip() or DEFAULT_WORKOUT_NAME,
            request.date.isoformat(),
            color=request.color,
        )
    logger.info(f"Created workout {row.get('id')} on {request.date}")
    return WorkoutView.from_workout(db_row_to_workout(row))


@router.get("/{workout_id}", response_model=WorkoutView)
def get_workout(
    workout_id: str = Path(..., description="Workout ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutView:
    """A workout with its exercises in display order and their completion status."""
    return WorkoutView.from_workout(_load_workout(workout_repo, workout_id))


@router.patch("/{workout_id}", response_model=WorkoutView)
def update_workout(
    request: UpdateWorkoutRequest,
    workout_id: str = Path(..., description="Workout ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutView:
    _validate_color(request.color)
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    if "date" in fields:
        fields["date"] = fields["date"].isoformat()
    if "name" in fields:
        fields["name"] = fields["name"].strip() or DEFAULT_WORKOUT_NAME
    if fields:
        with persistence_errors("update workout"):
            row = workout_repo.update_workout(workout_id, fields)
        if row is None:
            raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    return WorkoutView.from_workout(_load_workout(workout_repo, workout_id))


@router.delete("/{workout_id}")
def delete_workout(
    workout_id: str = Path(..., description="Workout ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Delete a workout and all of its workout exercises."""
    with persistence_errors("delete workout"):
        deleted = workout_repo.delete_workout(workout_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    return {"success": True, "message": "Workout deleted"}


# =============================================================================
# Workout Exercise Endpoints
# =============================================================================


@router.post("/{workout_id}/exercises", response_model=WorkoutExerciseView, status_code=201)
def add_exercise(
    request: AddWorkoutExerciseRequest,
    workout_id: str = Path(..., description="Workout ID"),
    use_case: AddExerciseToWorkoutUseCase = Depends(get_add_exercise_use_case),
) -> WorkoutExerciseView:
    """
    Append an exercise to the workout.

    Without explicit sets, the new record gets as many empty sets as the
    exercise's most recent record had filled sets (3 if none).
    """
    result = use_case.execute(workout_id, request.exercise_id, sets=request.sets)
    raise_for_failure(result)
    return WorkoutExerciseView.from_workout_exercise(result.workout_exercise)


@router.delete("/{workout_id}/exercises/{workout_exercise_id}", response_model=WorkoutExerciseListResponse)
def remove_exercise(
    workout_id: str = Path(..., description="Workout ID"),
    workout_exercise_id: str = Path(..., description="Workout exercise ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutExerciseListResponse:
    """Remove an exercise from the workout and close the gap in the ordering."""
    siblings = _load_siblings(workout_repo, workout_id)
    if not any(we.id == workout_exercise_id for we in siblings):
        raise HTTPException(
            status_code=404,
            detail=f"Workout exercise {workout_exercise_id} not found in workout {workout_id}",
        )

    with persistence_errors("remove workout exercise"):
        workout_repo.delete_workout_exercise(workout_exercise_id)

    remaining = [we for we in siblings if we.id != workout_exercise_id]
    result = ReorderExercisesUseCase(store=workout_repo).compact(remaining)
    raise_for_failure(result)
    return WorkoutExerciseListResponse(
        workout_exercises=[WorkoutExerciseView.from_workout_exercise(we) for we in result.items]
    )


@router.post("/{workout_id}/exercises/reorder", response_model=WorkoutExerciseListResponse)
def reorder_exercises(
    request: ReorderRequest,
    workout_id: str = Path(..., description="Workout ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutExerciseListResponse:
    """Move one exercise to a new position. Out-of-range positions are a 400."""
    siblings = _load_siblings(workout_repo, workout_id)
    result = ReorderExercisesUseCase(store=workout_repo).move(
        siblings, request.from_index, request.to_index
    )
    raise_for_failure(result)
    return WorkoutExerciseListResponse(
        workout_exercises=[WorkoutExerciseView.from_workout_exercise(we) for we in result.items]
    )


@router.post("/{workout_id}/exercises/swap", response_model=WorkoutExerciseListResponse)
def swap_exercises(
    request: SwapRequest,
    workout_id: str = Path(..., description="Workout ID"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutExerciseListResponse:
    """Swap an exercise with the one after it (superset pairing)."""
    siblings = _load_siblings(workout_repo, workout_id)
    result = ReorderExercisesUseCase(store=workout_repo).swap(siblings, request.index)
    raise_for_failure(result)
    return WorkoutExerciseListResponse(
        workout_exercises=[WorkoutExerciseView.from_workout_exercise(we) for we in result.items]
    )
