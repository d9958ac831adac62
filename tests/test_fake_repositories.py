"""
Unit tests for fake repository implementations.

These tests verify that fake repositories:
- Behave like the Supabase tables they stand in for (ordering, cascades,
  unique names, embedded rows)
- Support seeding and reset for test isolation
- Raise PersistenceError on demand via fail_on()
"""
import pytest

from application.exceptions import PersistenceError
from tests.fakes import create_linked_repos, sets_rows

# All tests in this module are pure logic tests (no TestClient) - mark as unit
pytestmark = pytest.mark.unit


@pytest.fixture
def repos():
    return create_linked_repos()


class TestFakeExercisesRepository:
    def test_default_catalog(self, repos):
        names = [e["name"] for e in repos.exercises.list_all()]

        assert len(names) == 6
        assert names == sorted(names)

    def test_unique_names_case_insensitive(self, repos):
        with pytest.raises(PersistenceError) as exc_info:
            repos.exercises.create({"name": "pull-up"})
        assert exc_info.value.is_unique_violation

    def test_find_by_name(self, repos):
        assert repos.exercises.find_by_name("  PULL-UP ")["id"] == "pull-up"

    def test_usage_counts_see_linked_repos(self, repos):
        repos.workouts.seed_workouts([{"id": "w1", "date": "2024-03-04"}])
        repos.workouts.seed_workout_exercises([{"workout_id": "w1", "exercise_id": "pull-up"}])
        repos.templates.seed_templates([{"id": "t1", "name": "Pull"}])
        repos.templates.seed_template_exercises([{"template_id": "t1", "exercise_id": "pull-up"}])

        assert repos.exercises.get_usage_counts("pull-up") == {"workout_count": 1, "template_count": 1}

    def test_reset(self, repos):
        repos.exercises.fail_on("list_all")
        repos.exercises.reset()

        assert repos.exercises.list_all() == []


class TestFakeWorkoutRepository:
    def test_list_newest_first(self, repos):
        repos.workouts.seed_workouts([
            {"id": "old", "date": "2024-01-01"},
            {"id": "new", "date": "2024-02-01"},
        ])

        assert [w["id"] for w in repos.workouts.list_workouts()] == ["new", "old"]

    def test_get_workout_embeds_exercises(self, repos):
        repos.workouts.seed_workouts([{"id": "w1", "date": "2024-03-04"}])
        repos.workouts.seed_workout_exercises([
            {"id": "b", "workout_id": "w1", "exercise_id": "pull-up", "order_index": 1},
            {"id": "a", "workout_id": "w1", "exercise_id": "bench-press", "order_index": 0},
        ])

        row = repos.workouts.get_workout("w1")

        assert [we["id"] for we in row["workout_exercises"]] == ["a", "b"]
        assert row["workout_exercises"][0]["exercise"]["name"] == "Barbell Bench Press"

    def test_delete_cascades(self, repos):
        repos.workouts.seed_workouts([{"id": "w1", "date": "2024-03-04"}])
        repos.workouts.seed_workout_exercises([{"id": "a", "workout_id": "w1", "exercise_id": "pull-up"}])

        assert repos.workouts.delete_workout("w1") is True
        assert repos.workouts.workout_exercise_row("a") is None

    def test_history_excludes_workout(self, repos):
        repos.workouts.seed_workouts([
            {"id": "w1", "date": "2024-01-01"},
            {"id": "w2", "date": "2024-02-01"},
        ])
        repos.workouts.seed_workout_exercises([
            {"workout_id": "w1", "exercise_id": "pull-up", "sets": sets_rows((0, 8))},
            {"workout_id": "w2", "exercise_id": "pull-up", "sets": sets_rows((0, 10))},
        ])

        sessions = repos.workouts.get_workout_exercises_for_exercise("pull-up", exclude_workout_id="w2")

        assert [s["workout_id"] for s in sessions] == ["w1"]
        assert sessions[0]["workout_date"] == "2024-01-01"

    def test_fail_on_uses_given_code(self, repos):
        repos.workouts.fail_on("update_sets", message="boom", code="57014")

        with pytest.raises(PersistenceError) as exc_info:
            repos.workouts.update_sets("a", [])
        assert (exc_info.value.message, exc_info.value.code) == ("boom", "57014")

        repos.workouts.clear_failures()
        assert repos.workouts.update_sets("a", []) is None


class TestFakeTemplateRepository:
    def test_max_order_index(self, repos):
        repos.templates.seed_templates([{"id": "t1", "name": "Push"}])
        assert repos.templates.get_max_order_index("t1") is None

        repos.templates.add_template_exercise("t1", "bench-press", 0)
        repos.templates.add_template_exercise("t1", "dumbbell-press", 1)

        assert repos.templates.get_max_order_index("t1") == 1
