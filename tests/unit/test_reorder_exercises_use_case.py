"""
Tests for ReorderExercisesUseCase.
"""
import pytest

from application.use_cases.reorder_exercises import ReorderExercisesUseCase
from domain.models import TemplateExercise, WorkoutExercise
from tests.fakes import create_linked_repos


@pytest.fixture
def repos():
    repos = create_linked_repos()
    repos.workouts.seed_workouts([{"id": "w1", "date": "2024-03-04"}])
    repos.workouts.seed_workout_exercises([
        {"id": "a", "workout_id": "w1", "exercise_id": "bench-press", "order_index": 0},
        {"id": "b", "workout_id": "w1", "exercise_id": "pull-up", "order_index": 1},
        {"id": "c", "workout_id": "w1", "exercise_id": "back-squat", "order_index": 2},
    ])
    return repos


@pytest.fixture
def items():
    return [
        WorkoutExercise(id=we_id, workout_id="w1", exercise_id="x", order_index=i)
        for i, we_id in enumerate(["a", "b", "c"])
    ]


@pytest.fixture
def use_case(repos):
    return ReorderExercisesUseCase(store=repos.workouts)


def stored_order(repos):
    rows = repos.workouts.list_workout_exercises("w1")
    return [row["id"] for row in rows]


@pytest.mark.unit
class TestReorderExercisesUseCase:
    """Tests for ReorderExercisesUseCase."""

    def test_move_persists_dense_order(self, use_case, items, repos):
        result = use_case.move(items, from_index=2, to_index=0)

        assert result.success is True
        assert [i.id for i in result.items] == ["c", "a", "b"]
        assert [i.order_index for i in result.items] == [0, 1, 2]
        assert stored_order(repos) == ["c", "a", "b"]
        assert repos.workouts.order_updates == [[
            {"id": "c", "order_index": 0},
            {"id": "a", "order_index": 1},
            {"id": "b", "order_index": 2},
        ]]

    def test_swap_with_next(self, use_case, items, repos):
        result = use_case.swap(items, 0)

        assert [i.id for i in result.items] == ["b", "a", "c"]
        assert stored_order(repos) == ["b", "a", "c"]

    def test_swap_last_item_is_rejected(self, use_case, items, repos):
        result = use_case.swap(items, 2)

        assert result.success is False
        assert result.validation_errors
        assert result.items == items
        assert repos.workouts.order_updates == []

    def test_store_failure_returns_original(self, use_case, items, repos):
        """A failed bulk write hands back the untouched sequence for rollback."""
        repos.workouts.fail_on("bulk_update_order_index")

        result = use_case.move(items, from_index=0, to_index=2)

        assert result.success is False
        assert result.error == "Simulated database failure"
        assert result.items == items
        assert result.validation_errors == []
        assert stored_order(repos) == ["a", "b", "c"]

    def test_partial_write_is_restored(self, use_case, items, repos):
        """The first row lands, the second times out: stored order is put back."""
        repos.workouts.fail_on("bulk_update_order_index", message="timeout", after=1, times=1)

        result = use_case.move(items, from_index=2, to_index=0)

        assert result.success is False
        assert result.error == "timeout"
        assert result.items == items
        assert stored_order(repos) == ["a", "b", "c"]
        rows = repos.workouts.list_workout_exercises("w1")
        assert [row["order_index"] for row in rows] == [0, 1, 2]
        assert repos.workouts.order_updates == [[
            {"id": "a", "order_index": 0},
            {"id": "b", "order_index": 1},
            {"id": "c", "order_index": 2},
        ]]

    def test_failed_restore_still_reports_first_error(self, use_case, items, repos):
        repos.workouts.fail_on("bulk_update_order_index", message="timeout", after=1)

        result = use_case.move(items, from_index=2, to_index=0)

        assert result.success is False
        assert result.error == "timeout"
        assert result.items == items

    def test_compact_partial_write_restores_gapped_indices(self, use_case, repos):
        repos.workouts.seed_workout_exercises([
            {"id": "d", "workout_id": "w1", "exercise_id": "deadlift", "order_index": 5},
        ])
        remaining = [
            WorkoutExercise(id="a", workout_id="w1", exercise_id="x", order_index=0),
            WorkoutExercise(id="c", workout_id="w1", exercise_id="x", order_index=2),
            WorkoutExercise(id="d", workout_id="w1", exercise_id="x", order_index=5),
        ]
        repos.workouts.fail_on("bulk_update_order_index", after=1, times=1)

        result = use_case.compact(remaining)

        assert result.success is False
        rows = {row["id"]: row["order_index"] for row in repos.workouts.list_workout_exercises("w1")}
        assert rows["c"] == 2
        assert rows["d"] == 5

    def test_compact_writes_only_moved_rows(self, use_case, repos):
        remaining = [
            WorkoutExercise(id="a", workout_id="w1", exercise_id="x", order_index=0),
            WorkoutExercise(id="c", workout_id="w1", exercise_id="x", order_index=2),
        ]

        result = use_case.compact(remaining)

        assert [i.order_index for i in result.items] == [0, 1]
        assert repos.workouts.order_updates == [[{"id": "c", "order_index": 1}]]

    def test_compact_dense_sequence_is_a_no_op(self, use_case, items, repos):
        result = use_case.compact(items)

        assert result.success is True
        assert repos.workouts.order_updates == []

    def test_templates_use_the_same_rules(self):
        repos = create_linked_repos()
        repos.templates.seed_templates([{"id": "t1", "name": "Push"}])
        repos.templates.seed_template_exercises([
            {"id": "x", "template_id": "t1", "exercise_id": "bench-press", "order_index": 0},
            {"id": "y", "template_id": "t1", "exercise_id": "pull-up", "order_index": 1},
        ])
        siblings = [
            TemplateExercise(id="x", template_id="t1", exercise_id="bench-press", order_index=0),
            TemplateExercise(id="y", template_id="t1", exercise_id="pull-up", order_index=1),
        ]

        result = ReorderExercisesUseCase(store=repos.templates).move(siblings, 1, 0)

        assert result.success is True
        assert [row["id"] for row in repos.templates.list_template_exercises("t1")] == ["y", "x"]
