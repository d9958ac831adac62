"""
Pydantic schemas for API requests and responses.

Shared across routers:
- common: reorder requests, workout exercise views, failure mapping
"""

from api.schemas.common import (
    ReorderRequest,
    SetsPayload,
    SetView,
    SwapRequest,
    WorkoutExerciseView,
    persistence_errors,
    raise_for_failure,
)

__all__ = [
    "ReorderRequest",
    "SetsPayload",
    "SetView",
    "SwapRequest",
    "WorkoutExerciseView",
    "persistence_errors",
    "raise_for_failure",
]
