"""
WorkoutSet value object.

One recorded attempt at an exercise: a 1-based set number, a weight and a
repetition count. Sets are stored as a JSONB array on each workout exercise
row, so this model is also the wire shape for that column.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkoutSet(BaseModel):
    """
    Value object representing a single set.

    Weight and reps are independently optional: a freshly seeded set has
    neither, a finished set has both. A set with ``reps=0`` explicitly
    recorded still counts as data, it is not blank.

    Sets are immutable; edits produce a new instance via ``model_copy``.

    Examples:
        >>> WorkoutSet(set_number=1, weight=80, reps=10).has_data
        True

        >>> WorkoutSet.empty(2)
        WorkoutSet(set_number=2, weight=None, reps=None)
    """

    model_config = ConfigDict(frozen=True)

    set_number: int = Field(..., ge=1, description="1-based position within the set list")
    weight: Optional[float] = Field(
        default=None, ge=0, description="Weight lifted (kg), None when not recorded"
    )
    reps: Optional[int] = Field(
        default=None, ge=0, description="Repetitions completed, None when not recorded"
    )

    @classmethod
    def empty(cls, set_number: int) -> "WorkoutSet":
        """Create a placeholder set with neither weight nor reps."""
        return cls(set_number=set_number)

    @property
    def has_weight(self) -> bool:
        return self.weight is not None

    @property
    def has_reps(self) -> bool:
        return self.reps is not None

    @property
    def has_data(self) -> bool:
        """True when weight or reps has been recorded."""
        return self.has_weight or self.has_reps

    def with_number(self, set_number: int) -> "WorkoutSet":
        """Return a copy renumbered to ``set_number``."""
        return self.model_copy(update={"set_number": set_number})
