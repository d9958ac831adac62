"""
Workout templates: reusable, performance-free exercise lists.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise


class TemplateExercise(BaseModel):
    """An exercise slot in a template. Carries no set data."""

    id: Optional[str] = None
    template_id: str
    exercise_id: str
    order_index: int = Field(default=0, ge=0)

    exercise: Optional[Exercise] = None

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class WorkoutTemplate(BaseModel):
    """
    A named, ordered list of exercises used to start new workouts.

    Instantiating a template creates a workout named after it, with one
    workout exercise per template exercise in the same order.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    color: Optional[str] = None

    template_exercises: List[TemplateExercise] = Field(default_factory=list)

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @property
    def exercise_count(self) -> int:
        return len(self.template_exercises)

    @property
    def has_exercises(self) -> bool:
        return self.exercise_count > 0
