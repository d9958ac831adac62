"""
Historical performance value objects.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.workout_set import WorkoutSet


class HistoricalSession(BaseModel):
    """
    The sets recorded for one exercise in one past workout.

    ``workout_id`` is kept so callers can exclude the workout currently
    being edited from history lookups.
    """

    date: dt.date = Field(..., description="Date of the workout the sets belong to")
    sets: List[WorkoutSet] = Field(default_factory=list)
    workout_id: Optional[str] = None
