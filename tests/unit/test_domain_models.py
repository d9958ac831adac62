"""
Unit tests for domain models.

These tests verify:
- Model validation
- Computed properties
- Immutability of sets
"""

import datetime as dt

import pytest
from pydantic import ValidationError


@pytest.mark.unit
class TestWorkoutSet:
    """Tests for the WorkoutSet value object."""

    def test_empty_set(self):
        from domain.models import WorkoutSet

        s = WorkoutSet.empty(2)
        assert s.set_number == 2
        assert s.has_data is False

    def test_zero_reps_is_data(self):
        from domain.models import WorkoutSet

        assert WorkoutSet(set_number=1, reps=0).has_data is True

    def test_rejects_negative_values(self):
        from domain.models import WorkoutSet

        with pytest.raises(ValidationError):
            WorkoutSet(set_number=1, weight=-1)
        with pytest.raises(ValidationError):
            WorkoutSet(set_number=1, reps=-1)
        with pytest.raises(ValidationError):
            WorkoutSet(set_number=0)

    def test_is_frozen(self):
        from domain.models import WorkoutSet

        s = WorkoutSet(set_number=1, weight=80, reps=10)
        with pytest.raises(ValidationError):
            s.weight = 90

    def test_with_number(self):
        from domain.models import WorkoutSet

        s = WorkoutSet(set_number=3, weight=80, reps=10).with_number(1)
        assert s == WorkoutSet(set_number=1, weight=80, reps=10)


@pytest.mark.unit
class TestExercise:
    """Tests for the Exercise entity."""

    def test_name_is_trimmed(self):
        from domain.models import Exercise

        assert Exercise(name="  Squat ").name == "Squat"

    def test_blank_name_rejected(self):
        from domain.models import Exercise

        with pytest.raises(ValidationError):
            Exercise(name="   ")

    def test_defaults(self):
        from domain.models import UNKNOWN_CLASSIFICATION, Exercise

        exercise = Exercise(name="Squat")
        assert exercise.movement_type == UNKNOWN_CLASSIFICATION
        assert exercise.secondary_body_part == ""
        assert exercise.is_mastered is False
        assert exercise.name_key == "squat"


@pytest.mark.unit
class TestWorkout:
    """Tests for the Workout aggregate."""

    def test_default_name(self):
        from domain.models import DEFAULT_WORKOUT_NAME, Workout

        workout = Workout(date=dt.date(2024, 3, 4))
        assert workout.name == DEFAULT_WORKOUT_NAME
        assert workout.exercise_count == 0

    def test_workout_exercise_name_falls_back_to_id(self):
        from domain.models import Exercise, WorkoutExercise

        bare = WorkoutExercise(workout_id="w1", exercise_id="ex-1")
        assert bare.exercise_name == "ex-1"
        joined = bare.model_copy(update={"exercise": Exercise(name="Squat")})
        assert joined.exercise_name == "Squat"

    def test_has_draft(self):
        from domain.models import WorkoutExercise

        we = WorkoutExercise(workout_id="w1", exercise_id="ex-1")
        assert we.has_draft is False
        assert we.model_copy(update={"draft_snapshot": []}).has_draft is True

    def test_template_has_exercises(self):
        from domain.models import TemplateExercise, WorkoutTemplate

        template = WorkoutTemplate(name="Push")
        assert template.has_exercises is False
        template = template.model_copy(update={
            "template_exercises": [TemplateExercise(template_id="t", exercise_id="e")]
        })
        assert template.exercise_count == 1
