"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Supports fail_on() to make a method raise PersistenceError, optionally
  only after some calls succeed (after=) and for a limited number (times=)
- Factory functions for common test scenarios

Usage:
    from tests.fakes import create_linked_repos

    repos = create_linked_repos()
    repos.workouts.seed_workouts([{"id": "w1", "name": "Push", "date": "2024-03-04"}])
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tests.fakes.exercises_repository import FakeExercisesRepository
from tests.fakes.template_repository import FakeTemplateRepository
from tests.fakes.workout_repository import FakeWorkoutRepository


@dataclass
class FakeRepos:
    workouts: FakeWorkoutRepository
    exercises: FakeExercisesRepository
    templates: FakeTemplateRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_linked_repos(
    exercises: Optional[List[Dict[str, Any]]] = None,
) -> FakeRepos:
    """
    Create the three fakes wired to each other.

    Workout and template reads embed exercise rows; exercise usage lookups
    see workout and template exercises.

    Args:
        exercises: Catalog rows, or None for the default catalog
    """
    exercises_repo = FakeExercisesRepository(exercises)
    workout_repo = FakeWorkoutRepository(exercises_repo=exercises_repo)
    template_repo = FakeTemplateRepository(exercises_repo=exercises_repo)
    exercises_repo.workout_repo = workout_repo
    exercises_repo.template_repo = template_repo
    return FakeRepos(workouts=workout_repo, exercises=exercises_repo, templates=template_repo)


def sets_rows(*pairs) -> List[Dict[str, Any]]:
    """``sets_rows((80, 10), (None, None))`` -> numbered JSONB set rows."""
    return [
        {"set_number": i, "weight": weight, "reps": reps}
        for i, (weight, reps) in enumerate(pairs, start=1)
    ]


__all__ = [
    "FakeExercisesRepository",
    "FakeRepos",
    "FakeTemplateRepository",
    "FakeWorkoutRepository",
    "create_linked_repos",
    "sets_rows",
]
