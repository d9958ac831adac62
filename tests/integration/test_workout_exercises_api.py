"""
Integration tests for the set editing endpoints.

Tests the /workout-exercises/* draft, autosave, commit and cancel flow with
fake repository dependencies.
"""
import pytest

from tests.fakes import sets_rows


@pytest.fixture
def workout(repos):
    repos.workouts.seed_workouts([{"id": "w1", "name": "Push", "date": "2024-03-04"}])
    repos.workouts.seed_workout_exercises([
        {"id": "a", "workout_id": "w1", "exercise_id": "bench-press", "order_index": 0,
         "sets": sets_rows((60, 10), (None, None), (None, None))},
        {"id": "b", "workout_id": "w1", "exercise_id": "dumbbell-curl", "order_index": 1,
         "sets": sets_rows((None, None))},
        {"id": "c", "workout_id": "w1", "exercise_id": "pull-up", "order_index": 2},
    ])
    return repos


@pytest.mark.integration
class TestReadEndpoints:
    def test_get_joins_workout(self, client, workout):
        response = client.get("/workout-exercises/a")

        assert response.status_code == 200
        data = response.json()
        assert data["workout_name"] == "Push"
        assert data["workout_date"] == "2024-03-04"
        assert data["has_draft"] is False

    def test_get_missing_is_404(self, client):
        assert client.get("/workout-exercises/nope").status_code == 404

    def test_next(self, client, workout):
        assert client.get("/workout-exercises/a/next").json()["id"] == "b"
        assert client.get("/workout-exercises/c/next").json() is None


@pytest.mark.integration
class TestDraftFlow:
    def test_enter_edit_snapshots_sets(self, client, workout):
        response = client.post("/workout-exercises/a/draft")

        assert response.status_code == 200
        assert response.json()["workout_exercises"][0]["has_draft"] is True
        assert workout.workouts.workout_exercise_row("a")["draft_snapshot"] == sets_rows(
            (60, 10), (None, None), (None, None)
        )

    def test_autosave_writes_complete_sets_only(self, client, workout):
        client.post("/workout-exercises/a/draft")

        response = client.put(
            "/workout-exercises/a/autosave",
            json={"sets": sets_rows((80, 10), (80, None))},
        )

        assert response.status_code == 200
        assert workout.workouts.workout_exercise_row("a")["sets"] == sets_rows((80, 10))
        assert workout.workouts.workout_exercise_row("a")["draft_snapshot"] is not None

    def test_autosave_rejects_negative_weight(self, client, workout):
        response = client.put(
            "/workout-exercises/a/autosave",
            json={"sets": [{"set_number": 1, "weight": -5, "reps": 5}]},
        )
        assert response.status_code == 422

    def test_commit_cleans_and_returns_next(self, client, workout):
        client.post("/workout-exercises/a/draft")

        response = client.post(
            "/workout-exercises/a/commit",
            json={"sets": sets_rows((None, None), (80, 10), (85, 8))},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["workout_exercises"][0]["sets"] == sets_rows((80, 10), (85, 8))
        assert data["workout_exercises"][0]["has_draft"] is False
        assert data["next_workout_exercise"]["id"] == "b"
        assert workout.exercises.get_by_id("bench-press")["last_used_date"] == "2024-03-04"

    def test_commit_with_half_filled_set_is_400(self, client, workout):
        client.post("/workout-exercises/a/draft")

        response = client.post(
            "/workout-exercises/a/commit",
            json={"sets": sets_rows((80, 10), (None, 8))},
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert "Barbell Bench Press" in detail["message"]
        assert detail["errors"] == ["Set 2 of Barbell Bench Press is incomplete"]
        assert workout.workouts.workout_exercise_row("a")["sets"] == sets_rows(
            (60, 10), (None, None), (None, None)
        )

    def test_cancel_restores_snapshot(self, client, workout):
        client.post("/workout-exercises/a/draft")
        client.put("/workout-exercises/a/autosave", json={"sets": sets_rows((100, 2))})

        response = client.post("/workout-exercises/a/cancel")

        assert response.status_code == 200
        row = workout.workouts.workout_exercise_row("a")
        assert row["sets"] == sets_rows((60, 10), (None, None), (None, None))
        assert row["draft_snapshot"] is None

    def test_cancel_without_draft_is_409(self, client, workout):
        response = client.post("/workout-exercises/a/cancel")

        assert response.status_code == 409
        assert response.json()["detail"] == "No draft to restore"

    def test_discard_draft_on_reopen(self, client, workout):
        client.post("/workout-exercises/a/draft")

        response = client.delete("/workout-exercises/a/draft")

        assert response.status_code == 200
        assert workout.workouts.workout_exercise_row("a")["draft_snapshot"] is None

    def test_draft_for_missing_is_404(self, client):
        assert client.post("/workout-exercises/nope/draft").status_code == 404


@pytest.mark.integration
class TestSupersetFlow:
    def test_enter_edit_both(self, client, workout):
        response = client.post("/workout-exercises/a/draft", params={"superset_with": "b"})

        assert [we["id"] for we in response.json()["workout_exercises"]] == ["a", "b"]
        assert workout.workouts.workout_exercise_row("b")["draft_snapshot"] == sets_rows((None, None))

    def test_superset_with_itself_is_400(self, client, workout):
        response = client.post("/workout-exercises/a/draft", params={"superset_with": "a"})
        assert response.status_code == 400

    def test_commit_both(self, client, workout):
        client.post("/workout-exercises/a/draft", params={"superset_with": "b"})

        response = client.post(
            "/workout-exercises/a/commit",
            json={
                "sets": sets_rows((80, 10)),
                "superset": {"workout_exercise_id": "b", "sets": sets_rows((12, 12), (None, None))},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert [we["id"] for we in data["workout_exercises"]] == ["a", "b"]
        assert workout.workouts.workout_exercise_row("b")["sets"] == sets_rows((12, 12))
        assert data["next_workout_exercise"]["id"] == "c"

    def test_partner_error_blocks_both(self, client, workout):
        response = client.post(
            "/workout-exercises/a/commit",
            json={
                "sets": sets_rows((80, 10)),
                "superset": {"workout_exercise_id": "b", "sets": sets_rows((12, None))},
            },
        )

        assert response.status_code == 400
        assert workout.workouts.workout_exercise_row("a")["sets"] == sets_rows(
            (60, 10), (None, None), (None, None)
        )

    def test_cancel_both(self, client, workout):
        client.post("/workout-exercises/a/draft", params={"superset_with": "b"})
        client.put("/workout-exercises/b/autosave", json={"sets": sets_rows((10, 10))})

        response = client.post("/workout-exercises/a/cancel", params={"superset_with": "b"})

        assert response.status_code == 200
        assert workout.workouts.workout_exercise_row("b")["sets"] == sets_rows((None, None))
