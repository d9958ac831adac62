"""
Exercises router for the exercise library.

This router provides endpoints for:
- Listing, searching and filtering the catalog
- Creating, editing and deleting exercises (deletion refused while in use)
- Notes and mastered flags
- Usage lookups and per-exercise history (best set, last time, chart data)
"""
import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_exercise_history_use_case, get_manage_exercises_use_case
from api.schemas import SetView, raise_for_failure
from application.use_cases import ExerciseHistoryUseCase, ManageExercisesUseCase
from application.use_cases.manage_exercises import SORT_BY_LAST_USED, SORT_BY_NAME
from backend.core.exercise_catalog import ExerciseFilters, group_by_body_part
from backend.core.formatting import format_relative_time
from backend.core.history_resolver import progress_window_start
from domain.models import UNKNOWN_CLASSIFICATION, Exercise

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class ExerciseCreateRequest(BaseModel):
    """Request model for a new catalog entry."""
    name: str = Field(..., min_length=1, max_length=200)
    movement_type: str = UNKNOWN_CLASSIFICATION
    pattern: str = UNKNOWN_CLASSIFICATION
    primary_body_part: str = UNKNOWN_CLASSIFICATION
    secondary_body_part: str = ""
    equipment: str = UNKNOWN_CLASSIFICATION
    video_url: Optional[str] = None
    notes: Optional[str] = None
    is_mastered: bool = False


class ExerciseUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are changed."""
    name: Optional[str] = Field(None, max_length=200)
    movement_type: Optional[str] = None
    pattern: Optional[str] = None
    primary_body_part: Optional[str] = None
    secondary_body_part: Optional[str] = None
    equipment: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    is_mastered: Optional[bool] = None


class NotesRequest(BaseModel):
    notes: Optional[str] = Field(None, max_length=5000)


class MasteredRequest(BaseModel):
    is_mastered: bool


class ExerciseListResponse(BaseModel):
    """Response model for the filtered catalog."""
    exercises: List[Exercise]
    search_only_matches: List[Exercise] = Field(
        default_factory=list,
        description="Name matches hidden by the attribute filters",
    )
    done_exercise_ids: List[str] = Field(default_factory=list)
    count: int


class FilterOptionsResponse(BaseModel):
    movement_types: List[str]
    patterns: List[str]
    primary_body_parts: List[str]
    secondary_body_parts: List[str]
    equipment: List[str]


class UsageResponse(BaseModel):
    exercise_id: str
    is_used: bool
    workout_count: int
    template_count: int
    workouts: List[Dict] = Field(default_factory=list)
    templates: List[Dict] = Field(default_factory=list)


class HistoricalSessionView(BaseModel):
    date: dt.date
    relative_date: str
    workout_id: Optional[str] = None
    sets: List[SetView]


class ProgressPointView(BaseModel):
    date: dt.date
    total_volume: float
    avg_power: Optional[int] = None
    max_weight: float


class ExerciseHistoryResponse(BaseModel):
    """Everything the set editor shows next to an exercise."""
    exercise_id: str
    reference_date: Optional[dt.date] = None
    has_been_done: bool
    best_set: Optional[SetView] = None
    previous_sets: Optional[List[SetView]] = None
    historical_sessions: List[HistoricalSessionView] = Field(default_factory=list)
    progress: List[ProgressPointView] = Field(default_factory=list)


# =============================================================================
# Catalog Endpoints
# =============================================================================


@router.get("", response_model=ExerciseListResponse)
def list_exercises(
    search: str = Query("", description="Words that must all appear in the name"),
    movement_type: str = Query(""),
    pattern: str = Query(""),
    primary_body_part: str = Query(""),
    secondary_body_part: str = Query(""),
    equipment: str = Query(""),
    is_mastered: Optional[bool] = Query(None),
    sort: str = Query(SORT_BY_NAME, pattern=f"^({SORT_BY_NAME}|{SORT_BY_LAST_USED})$"),
    include_done: bool = Query(False, description="Include ids of exercises ever performed"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> ExerciseListResponse:
    """
    List the exercise catalog.

    When a text search is combined with attribute filters, exercises that
    match the search but not the filters are reported separately in
    ``search_only_matches``.
    """
    filters = ExerciseFilters(
        search_term=search,
        movement_type=movement_type,
        pattern=pattern,
        primary_body_part=primary_body_part,
        secondary_body_part=secondary_body_part,
        equipment=equipment,
        is_mastered=is_mastered,
    )
    result = use_case.list_exercises(filters, sort=sort, include_done_status=include_done)
    raise_for_failure(result)
    return ExerciseListResponse(
        exercises=result.exercises,
        search_only_matches=result.search_only_matches,
        done_exercise_ids=result.done_exercise_ids,
        count=len(result.exercises),
    )


@router.get("/filters", response_model=FilterOptionsResponse)
def get_filter_options(
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> FilterOptionsResponse:
    """Distinct classification values present in the catalog."""
    result = use_case.filter_options()
    raise_for_failure(result)
    options = result.options
    return FilterOptionsResponse(
        movement_types=options.movement_types,
        patterns=options.patterns,
        primary_body_parts=options.primary_body_parts,
        secondary_body_parts=options.secondary_body_parts,
        equipment=options.equipment,
    )


@router.get("/grouped")
def list_exercises_grouped(
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    """The catalog sorted by name and grouped by primary body part."""
    result = use_case.list_exercises()
    raise_for_failure(result)
    groups = group_by_body_part(result.exercises)
    return {
        "groups": [
            {"body_part": body_part, "exercises": exercises}
            for body_part, exercises in groups.items()
        ],
        "count": len(result.exercises),
    }


@router.post("", response_model=Exercise, status_code=201)
def create_exercise(
    request: ExerciseCreateRequest,
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> Exercise:
    """Create an exercise. Names are unique ignoring case (409 otherwise)."""
    try:
        exercise = Exercise(**request.model_dump())
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Invalid exercise", "errors": [str(e)]},
        )
    result = use_case.create(exercise)
    raise_for_failure(result)
    return result.exercise


# =============================================================================
# Single Exercise Endpoints
# =============================================================================


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> Exercise:
    result = use_case.get(exercise_id)
    raise_for_failure(result)
    return result.exercise


@router.patch("/{exercise_id}", response_model=Exercise)
def update_exercise(
    request: ExerciseUpdateRequest,
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> Exercise:
    """Update the fields present in the request body."""
    result = use_case.update(exercise_id, request.model_dump(exclude_unset=True))
    raise_for_failure(result)
    return result.exercise


@router.delete("/{exercise_id}")
def delete_exercise(
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    """Delete an exercise. Refused with 409 while any workout or template uses it."""
    result = use_case.delete(exercise_id)
    raise_for_failure(result)
    return {"success": True, "message": "Exercise deleted"}


@router.put("/{exercise_id}/notes", response_model=Exercise)
def update_notes(
    request: NotesRequest,
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> Exercise:
    result = use_case.update_notes(exercise_id, request.notes)
    raise_for_failure(result)
    return result.exercise


@router.put("/{exercise_id}/mastered", response_model=Exercise)
def set_mastered(
    request: MasteredRequest,
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> Exercise:
    result = use_case.set_mastered(exercise_id, request.is_mastered)
    raise_for_failure(result)
    return result.exercise


@router.get("/{exercise_id}/usage", response_model=UsageResponse)
def get_usage(
    exercise_id: str = Path(..., description="Exercise ID"),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
) -> UsageResponse:
    """Workouts and templates that reference the exercise."""
    result = use_case.usage(exercise_id)
    raise_for_failure(result)
    return UsageResponse(
        exercise_id=exercise_id,
        is_used=result.is_used,
        workout_count=result.workout_count,
        template_count=result.template_count,
        workouts=result.workouts,
        templates=result.templates,
    )


@router.get("/{exercise_id}/history", response_model=ExerciseHistoryResponse)
def get_history(
    exercise_id: str = Path(..., description="Exercise ID"),
    workout_id: Optional[str] = Query(None, description="Workout being viewed"),
    date: Optional[dt.date] = Query(None, description="Reference date (defaults to the workout's)"),
    months: int = Query(12, ge=1, le=120, description="Progress chart window"),
    use_case: ExerciseHistoryUseCase = Depends(get_exercise_history_use_case),
) -> ExerciseHistoryResponse:
    """
    Resolve an exercise's history relative to a workout.

    - ``best_set``: heaviest set with at least 6 reps, across all time
    - ``previous_sets``: sets from the latest earlier session with data
    - ``historical_sessions``: the most recent sessions strictly before the reference date
    - ``progress``: chart points for the trailing ``months`` window
    """
    today = dt.date.today()
    result = use_case.execute(
        exercise_id,
        reference_date=date,
        reference_workout_id=workout_id,
        progress_since=progress_window_start(date or today, months),
    )
    raise_for_failure(result)

    return ExerciseHistoryResponse(
        exercise_id=exercise_id,
        reference_date=result.reference_date,
        has_been_done=result.has_been_done,
        best_set=SetView.from_set(result.best_set) if result.best_set else None,
        previous_sets=(
            [SetView.from_set(s) for s in result.previous_sets]
            if result.previous_sets is not None
            else None
        ),
        historical_sessions=[
            HistoricalSessionView(
                date=session.date,
                relative_date=format_relative_time(session.date, today),
                workout_id=session.workout_id,
                sets=[SetView.from_set(s) for s in session.sets],
            )
            for session in result.historical_sessions
        ],
        progress=[
            ProgressPointView(
                date=point.date,
                total_volume=point.total_volume,
                avg_power=point.avg_power,
                max_weight=point.max_weight,
            )
            for point in result.progress_points
        ],
    )
