"""
Templates router for reusable workout plans.

This router provides endpoints for:
- Listing, searching, creating, renaming and deleting templates
- Adding, removing and reordering template exercises
- Logging a template as a new workout
"""

import datetime as dt
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_add_template_exercise_use_case,
    get_create_from_template_use_case,
    get_template_repo,
)
from api.routers.workouts import WorkoutView
from api.schemas import ReorderRequest, SwapRequest, persistence_errors, raise_for_failure
from application.ports import TemplateRepository
from application.use_cases import (
    AddExerciseToTemplateUseCase,
    CreateWorkoutFromTemplateUseCase,
    ReorderExercisesUseCase,
)
from backend.core.colors import get_color_by_id, is_valid_color
from backend.core.ordering import sort_by_order
from backend.core.workout_calendar import filter_templates_by_name, sort_templates_by_name
from domain.converters import db_row_to_template, db_row_to_template_exercise
from domain.models import TemplateExercise, WorkoutTemplate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/templates",
    tags=["Templates"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    color: Optional[str] = None


class UpdateTemplateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    color: Optional[str] = None


class AddTemplateExerciseRequest(BaseModel):
    exercise_id: str


class LogTemplateRequest(BaseModel):
    """Start a workout from the template on ``date``."""
    date: dt.date
    name: Optional[str] = Field(None, min_length=1, max_length=200)


class TemplateView(BaseModel):
    id: Optional[str]
    name: str
    color: str
    color_name: str
    exercise_count: int
    template_exercises: List[TemplateExercise] = Field(default_factory=list)

    @classmethod
    def from_template(cls, template: WorkoutTemplate) -> "TemplateView":
        color = get_color_by_id(template.color)
        return cls(
            id=template.id,
            name=template.name,
            color=color.id,
            color_name=color.name,
            exercise_count=template.exercise_count,
            template_exercises=template.template_exercises,
        )


class TemplateListResponse(BaseModel):
    templates: List[TemplateView]
    count: int


class TemplateExerciseListResponse(BaseModel):
    template_exercises: List[TemplateExercise]


def _validate_color(color: Optional[str]) -> None:
    if color is not None and not is_valid_color(color):
        raise HTTPException(status_code=400, detail=f"Unknown color: {color}")


def _load_template(template_repo: TemplateRepository, template_id: str) -> WorkoutTemplate:
    with persistence_errors("load template"):
        row = template_repo.get_template(template_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return db_row_to_template(row)


def _load_siblings(template_repo: TemplateRepository, template_id: str) -> List[TemplateExercise]:
    with persistence_errors("load template exercises"):
        rows = template_repo.list_template_exercises(template_id)
    return sort_by_order([db_row_to_template_exercise(row) for row in rows])


# =============================================================================
# Template Endpoints
# =============================================================================


@router.get("", response_model=TemplateListResponse)
def list_templates(
    search: str = Query("", description="Case-insensitive name filter"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateListResponse:
    """List templates by name."""
    with persistence_errors("list templates"):
        rows = template_repo.list_templates()
    templates = sort_templates_by_name([db_row_to_template(row) for row in rows])
    if search.strip():
        templates = filter_templates_by_name(templates, search.strip())
    return TemplateListResponse(
        templates=[TemplateView.from_template(t) for t in templates],
        count=len(templates),
    )


@router.post("", response_model=TemplateView, status_code=201)
def create_template(
    request: CreateTemplateRequest,
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateView:
    _validate_color(request.color)
    name = request.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Template name cannot be blank")
    with persistence_errors("create template"):
        row = template_repo.create_template(name, color=request.color)
    logger.info(f"Created template {row.get('id')}: {name}")
    return TemplateView.from_template(db_row_to_template(row))


@router.get("/{template_id}", response_model=TemplateView)
def get_template(
    template_id: str = Path(..., description="Template ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateView:
    return TemplateView.from_template(_load_template(template_repo, template_id))


@router.patch("/{template_id}", response_model=TemplateView)
def update_template(
    request: UpdateTemplateRequest,
    template_id: str = Path(..., description="Template ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateView:
    _validate_color(request.color)
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in fields:
        fields["name"] = fields["name"].strip()
        if not fields["name"]:
            raise HTTPException(status_code=400, detail="Template name cannot be blank")
    if fields:
        with persistence_errors("update template"):
            row = template_repo.update_template(template_id, fields)
        if row is None:
            raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return TemplateView.from_template(_load_template(template_repo, template_id))


@router.delete("/{template_id}")
def delete_template(
    template_id: str = Path(..., description="Template ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
):
    """Delete a template. Workouts already logged from it are unaffected."""
    with persistence_errors("delete template"):
        deleted = template_repo.delete_template(template_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return {"success": True, "message": "Template deleted"}


@router.post("/{template_id}/log", response_model=WorkoutView, status_code=201)
def log_template(
    request: LogTemplateRequest,
    template_id: str = Path(..., description="Template ID"),
    use_case: CreateWorkoutFromTemplateUseCase = Depends(get_create_from_template_use_case),
) -> WorkoutView:
    """
    Create a workout from the template.

    Each template exercise becomes a workout exercise in the same order,
    seeded with empty sets sized from its last record.
    """
    result = use_case.execute(template_id, request.date, name=request.name)
    raise_for_failure(result)
    return WorkoutView.from_workout(result.workout)


# =============================================================================
# Template Exercise Endpoints
# =============================================================================


@router.post("/{template_id}/exercises", response_model=TemplateExercise, status_code=201)
def add_template_exercise(
    request: AddTemplateExerciseRequest,
    template_id: str = Path(..., description="Template ID"),
    use_case: AddExerciseToTemplateUseCase = Depends(get_add_template_exercise_use_case),
) -> TemplateExercise:
    result = use_case.execute(template_id, request.exercise_id)
    raise_for_failure(result)
    return result.template_exercise


@router.delete(
    "/{template_id}/exercises/{template_exercise_id}",
    response_model=TemplateExerciseListResponse,
)
def remove_template_exercise(
    template_id: str = Path(..., description="Template ID"),
    template_exercise_id: str = Path(..., description="Template exercise ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateExerciseListResponse:
    """Remove an exercise from the template and close the gap in the ordering."""
    siblings = _load_siblings(template_repo, template_id)
    if not any(te.id == template_exercise_id for te in siblings):
        raise HTTPException(
            status_code=404,
            detail=f"Template exercise {template_exercise_id} not found in template {template_id}",
        )

    with persistence_errors("remove template exercise"):
        template_repo.delete_template_exercise(template_exercise_id)

    remaining = [te for te in siblings if te.id != template_exercise_id]
    result = ReorderExercisesUseCase(store=template_repo).compact(remaining)
    raise_for_failure(result)
    return TemplateExerciseListResponse(template_exercises=result.items)


@router.post("/{template_id}/exercises/reorder", response_model=TemplateExerciseListResponse)
def reorder_template_exercises(
    request: ReorderRequest,
    template_id: str = Path(..., description="Template ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateExerciseListResponse:
    siblings = _load_siblings(template_repo, template_id)
    result = ReorderExercisesUseCase(store=template_repo).move(
        siblings, request.from_index, request.to_index
    )
    raise_for_failure(result)
    return TemplateExerciseListResponse(template_exercises=result.items)


@router.post("/{template_id}/exercises/swap", response_model=TemplateExerciseListResponse)
def swap_template_exercises(
    request: SwapRequest,
    template_id: str = Path(..., description="Template ID"),
    template_repo: TemplateRepository = Depends(get_template_repo),
) -> TemplateExerciseListResponse:
    siblings = _load_siblings(template_repo, template_id)
    result = ReorderExercisesUseCase(store=template_repo).swap(siblings, request.index)
    raise_for_failure(result)
    return TemplateExerciseListResponse(template_exercises=result.items)
