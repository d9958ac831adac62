"""
Tests for ManageExercisesUseCase.
"""
import pytest

from application.use_cases.manage_exercises import SORT_BY_LAST_USED, ManageExercisesUseCase
from backend.core.exercise_catalog import ExerciseFilters
from domain.models import Exercise
from tests.fakes import create_linked_repos, sets_rows


@pytest.fixture
def repos():
    return create_linked_repos()


@pytest.fixture
def use_case(repos):
    return ManageExercisesUseCase(exercises_repo=repos.exercises, workout_repo=repos.workouts)


@pytest.mark.unit
class TestListExercises:
    def test_sorted_by_name(self, use_case):
        result = use_case.list_exercises()

        names = [e.name for e in result.exercises]
        assert names == sorted(names, key=str.casefold)
        assert len(names) == 6

    def test_search_only_matches(self, use_case):
        filters = ExerciseFilters(search_term="bench", equipment="Dumbbell")

        result = use_case.list_exercises(filters)

        assert [e.id for e in result.exercises] == ["dumbbell-press"]
        assert [e.id for e in result.search_only_matches] == ["bench-press"]

    def test_sort_by_last_used(self, use_case, repos):
        repos.exercises.update("pull-up", {"last_used_date": "2024-03-01"})

        result = use_case.list_exercises(sort=SORT_BY_LAST_USED)

        assert result.exercises[0].id == "pull-up"

    def test_done_status(self, use_case, repos):
        repos.workouts.seed_workouts([{"id": "w1", "date": "2024-03-04"}])
        repos.workouts.seed_workout_exercises([
            {"workout_id": "w1", "exercise_id": "bench-press", "sets": sets_rows((80, 10))},
            {"workout_id": "w1", "exercise_id": "pull-up", "sets": sets_rows((None, 0))},
        ])

        result = use_case.list_exercises(include_done_status=True)

        assert result.done_exercise_ids == ["bench-press"]

    def test_filter_options(self, use_case):
        options = use_case.filter_options().options
        assert "Barbell" in options.equipment
        assert options.primary_body_parts == sorted(set(options.primary_body_parts))


@pytest.mark.unit
class TestCreateAndUpdate:
    def test_create(self, use_case):
        result = use_case.create(Exercise(name="Cable Fly", equipment="Cable"))

        assert result.success is True
        assert result.exercise.id is not None

    def test_duplicate_name_ignoring_case(self, use_case):
        result = use_case.create(Exercise(name="pull-up"))

        assert result.success is False
        assert result.conflict is True
        assert result.error == "An exercise with this name already exists"

    def test_unique_constraint_backstop(self, use_case, repos):
        repos.exercises.fail_on("create", message="duplicate key", code="23505")

        result = use_case.create(Exercise(name="Cable Fly"))

        assert result.conflict is True

    def test_update_only_given_fields(self, use_case, repos):
        result = use_case.update("pull-up", {"notes": "Full hang", "id": "hijack"})

        assert result.success is True
        assert result.exercise.notes == "Full hang"
        assert result.exercise.id == "pull-up"

    def test_rename_to_existing_name(self, use_case):
        result = use_case.update("pull-up", {"name": "  conventional deadlift "})
        assert result.conflict is True

    def test_rename_keeps_own_name(self, use_case):
        result = use_case.update("pull-up", {"name": "PULL-UP"})

        assert result.success is True
        assert result.exercise.name == "PULL-UP"

    def test_blank_name(self, use_case):
        result = use_case.update("pull-up", {"name": "   "})

        assert result.success is False
        assert result.validation_errors == ["name: cannot be blank"]

    def test_blank_notes_become_null(self, use_case, repos):
        use_case.update_notes("pull-up", "x")
        use_case.update_notes("pull-up", "")

        assert repos.exercises.get_by_id("pull-up")["notes"] is None

    def test_set_mastered(self, use_case):
        assert use_case.set_mastered("pull-up", True).exercise.is_mastered is True

    def test_update_missing(self, use_case):
        assert use_case.update("nope", {"notes": "x"}).not_found is True


@pytest.mark.unit
class TestDeleteAndUsage:
    @pytest.fixture
    def in_use(self, repos):
        repos.workouts.seed_workouts([
            {"id": "w1", "name": "Mon", "date": "2024-03-04"},
            {"id": "w2", "name": "Thu", "date": "2024-03-07"},
        ])
        repos.workouts.seed_workout_exercises([
            {"workout_id": "w1", "exercise_id": "bench-press"},
            {"workout_id": "w2", "exercise_id": "bench-press"},
        ])
        repos.templates.seed_templates([{"id": "t1", "name": "Push"}])
        repos.templates.seed_template_exercises([{"template_id": "t1", "exercise_id": "bench-press"}])
        return repos

    def test_delete_unused(self, use_case, repos):
        assert use_case.delete("pull-up").success is True
        assert repos.exercises.get_by_id("pull-up") is None

    def test_delete_in_use_is_refused(self, use_case, in_use):
        result = use_case.delete("bench-press")

        assert result.success is False
        assert result.conflict is True
        assert result.error == (
            "Cannot delete exercise. It is used in 2 workouts and 1 template. "
            "Remove it from all workouts and templates first."
        )
        assert in_use.exercises.get_by_id("bench-press") is not None

    def test_usage_lists_workouts_newest_first(self, use_case, in_use):
        result = use_case.usage("bench-press")

        assert result.is_used is True
        assert result.workout_count == 2
        assert [w["id"] for w in result.workouts] == ["w2", "w1"]
        assert [t["name"] for t in result.templates] == ["Push"]

    def test_delete_missing(self, use_case):
        assert use_case.delete("nope").not_found is True
