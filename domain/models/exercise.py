"""
Exercise catalog entry.

Classification fields (movement type, pattern, body parts, equipment) are
free-text tags rather than enums: the catalog is user-extensible, and the
set of valid values is whatever the catalog currently contains.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.workout_set import WorkoutSet

UNKNOWN_CLASSIFICATION = "Unknown"


class Exercise(BaseModel):
    """
    Entity representing one exercise in the library.

    Exercises are referenced (never embedded) by workout exercises and
    template exercises. The name is unique across the catalog, compared
    case-insensitively.

    Examples:
        >>> exercise = Exercise(
        ...     name="Barbell Bench Press",
        ...     movement_type="Compound",
        ...     pattern="Push",
        ...     primary_body_part="Chest",
        ...     equipment="Barbell",
        ... )
        >>> exercise.is_mastered
        False
    """

    # Identity
    id: Optional[str] = Field(
        default=None,
        description="Unique identifier (UUID). None for new, unsaved exercises.",
    )
    name: str = Field(..., min_length=1, max_length=200, description="Exercise name")

    # Classification (open string sets)
    movement_type: str = Field(default=UNKNOWN_CLASSIFICATION)
    pattern: str = Field(default=UNKNOWN_CLASSIFICATION)
    primary_body_part: str = Field(default=UNKNOWN_CLASSIFICATION)
    secondary_body_part: str = Field(default="")
    equipment: str = Field(default=UNKNOWN_CLASSIFICATION)

    # User state
    is_mastered: bool = Field(default=False, description="Technique has been mastered")
    notes: Optional[str] = Field(default=None, max_length=5000)
    video_url: Optional[str] = Field(default=None, description="Demo video reference")

    # Usage tracking
    last_used_date: Optional[dt.date] = Field(
        default=None, description="Date of the most recent workout using this exercise"
    )
    last_performed_sets: Optional[List[WorkoutSet]] = Field(
        default=None, description="Sets committed in the most recent workout"
    )

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Names are stored trimmed; a blank name is rejected."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Exercise name cannot be blank")
        return stripped

    @property
    def name_key(self) -> str:
        """Case-insensitive comparison key for uniqueness checks."""
        return self.name.casefold()
