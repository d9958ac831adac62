"""
Application Use Cases for the Liftbook API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import (
        AddExerciseToWorkoutUseCase,
        WorkoutExerciseDraftUseCase,
    )

    # Add an exercise with seeded sets
    add_use_case = AddExerciseToWorkoutUseCase(
        workout_repo=workout_repo,
        exercises_repo=exercises_repo,
    )
    result = add_use_case.execute(workout_id="w-1", exercise_id="ex-1")

    # Edit and commit its sets
    draft_use_case = WorkoutExerciseDraftUseCase(
        workout_repo=workout_repo,
        exercises_repo=exercises_repo,
    )
    draft_use_case.enter_edit([result.workout_exercise.id])
    draft_use_case.commit([(result.workout_exercise.id, sets)])
"""

from application.use_cases.add_exercise import (
    AddExerciseResult,
    AddExerciseToTemplateUseCase,
    AddExerciseToWorkoutUseCase,
    AddTemplateExerciseResult,
)
from application.use_cases.create_workout_from_template import (
    CreateWorkoutFromTemplateResult,
    CreateWorkoutFromTemplateUseCase,
)
from application.use_cases.edit_draft import (
    CommitResult,
    DraftEditSession,
    DraftResult,
    EditState,
    WorkoutExerciseDraftUseCase,
)
from application.use_cases.exercise_history import (
    ExerciseHistoryResult,
    ExerciseHistoryUseCase,
)
from application.use_cases.manage_exercises import (
    ExerciseListResult,
    ExerciseResult,
    ExerciseUsageResult,
    FilterOptionsResult,
    ManageExercisesUseCase,
)
from application.use_cases.reorder_exercises import (
    ReorderExercisesUseCase,
    ReorderResult,
)

__all__ = [
    # AddExercise
    "AddExerciseResult",
    "AddExerciseToTemplateUseCase",
    "AddExerciseToWorkoutUseCase",
    "AddTemplateExerciseResult",
    # CreateWorkoutFromTemplate
    "CreateWorkoutFromTemplateResult",
    "CreateWorkoutFromTemplateUseCase",
    # Draft editing
    "CommitResult",
    "DraftEditSession",
    "DraftResult",
    "EditState",
    "WorkoutExerciseDraftUseCase",
    # ExerciseHistory
    "ExerciseHistoryResult",
    "ExerciseHistoryUseCase",
    # ManageExercises
    "ExerciseListResult",
    "ExerciseResult",
    "ExerciseUsageResult",
    "FilterOptionsResult",
    "ManageExercisesUseCase",
    # Reorder
    "ReorderExercisesUseCase",
    "ReorderResult",
]
