"""
Integration tests for Exercises API endpoints.

Tests the /exercises/* API endpoints with fake repository dependencies.
"""
import pytest

from tests.fakes import sets_rows


@pytest.fixture
def history(repos):
    """Three bench press sessions and a workout being viewed."""
    repos.workouts.seed_workouts([
        {"id": "w-jan", "name": "Push", "date": "2024-01-10"},
        {"id": "w-feb", "name": "Push", "date": "2024-02-10"},
        {"id": "w-mar", "name": "Push", "date": "2024-03-10"},
    ])
    repos.workouts.seed_workout_exercises([
        {"workout_id": "w-jan", "exercise_id": "bench-press", "sets": sets_rows((80, 5), (60, 8))},
        {"workout_id": "w-feb", "exercise_id": "bench-press", "sets": sets_rows((65, 6), (65, 6))},
        {"workout_id": "w-mar", "exercise_id": "bench-press", "sets": sets_rows((None, None))},
    ])
    return repos


# =============================================================================
# Catalog Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestListExercises:
    """Tests for GET /exercises."""

    def test_list_returns_catalog_sorted_by_name(self, client):
        response = client.get("/exercises")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 6
        names = [e["name"] for e in data["exercises"]]
        assert names == sorted(names, key=str.casefold)

    def test_search_matches_all_words(self, client):
        response = client.get("/exercises", params={"search": "press bench"})

        ids = {e["id"] for e in response.json()["exercises"]}
        assert ids == {"bench-press", "dumbbell-press"}

    def test_filtered_out_search_hits_reported(self, client):
        response = client.get("/exercises", params={"search": "bench", "equipment": "Barbell"})

        data = response.json()
        assert [e["id"] for e in data["exercises"]] == ["bench-press"]
        assert [e["id"] for e in data["search_only_matches"]] == ["dumbbell-press"]

    def test_mastered_filter(self, client):
        response = client.get("/exercises", params={"is_mastered": "true"})
        assert [e["id"] for e in response.json()["exercises"]] == ["deadlift"]

    def test_invalid_sort_rejected(self, client):
        response = client.get("/exercises", params={"sort": "random"})
        assert response.status_code == 422

    def test_include_done(self, client, history):
        response = client.get("/exercises", params={"include_done": "true"})
        assert response.json()["done_exercise_ids"] == ["bench-press"]

    def test_store_failure_is_500(self, client, repos):
        repos.exercises.fail_on("list_all")

        response = client.get("/exercises")

        assert response.status_code == 500

    def test_filters(self, client):
        response = client.get("/exercises/filters")

        assert response.status_code == 200
        data = response.json()
        assert data["equipment"] == sorted(data["equipment"])
        assert "Barbell" in data["equipment"]

    def test_grouped_by_body_part(self, client):
        response = client.get("/exercises/grouped")

        groups = response.json()["groups"]
        # Groups appear in the order of the name-sorted catalog
        assert [g["body_part"] for g in groups] == ["Legs", "Chest", "Back", "Biceps"]
        assert response.json()["count"] == 6
        chest = next(g for g in groups if g["body_part"] == "Chest")
        assert [e["id"] for e in chest["exercises"]] == ["bench-press", "dumbbell-press"]


@pytest.mark.integration
class TestCreateExercise:
    """Tests for POST /exercises."""

    def test_create_returns_201(self, client):
        response = client.post(
            "/exercises",
            json={"name": "  Cable Fly ", "equipment": "Cable", "primary_body_part": "Chest"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Cable Fly"
        assert data["id"]
        assert data["is_mastered"] is False

    def test_duplicate_name_is_409(self, client):
        response = client.post("/exercises", json={"name": "PULL-UP"})

        assert response.status_code == 409
        assert response.json()["detail"] == "An exercise with this name already exists"

    def test_blank_name_is_400(self, client):
        response = client.post("/exercises", json={"name": "   "})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Invalid exercise"

    def test_missing_name_is_422(self, client):
        response = client.post("/exercises", json={"equipment": "Cable"})
        assert response.status_code == 422


# =============================================================================
# Single Exercise Endpoint Tests
# =============================================================================


@pytest.mark.integration
class TestSingleExercise:
    def test_get(self, client):
        response = client.get("/exercises/pull-up")

        assert response.status_code == 200
        assert response.json()["name"] == "Pull-Up"

    def test_get_missing_is_404(self, client):
        assert client.get("/exercises/nope").status_code == 404

    def test_patch_only_sent_fields(self, client, repos):
        response = client.patch("/exercises/pull-up", json={"pattern": "Vertical Pull"})

        assert response.status_code == 200
        data = response.json()
        assert data["pattern"] == "Vertical Pull"
        assert data["equipment"] == "Bodyweight"

    def test_patch_blank_name_is_400(self, client):
        response = client.patch("/exercises/pull-up", json={"name": "  "})

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == ["name: cannot be blank"]

    def test_notes(self, client):
        response = client.put("/exercises/pull-up/notes", json={"notes": "Dead hang start"})

        assert response.status_code == 200
        assert response.json()["notes"] == "Dead hang start"

    def test_mastered(self, client):
        response = client.put("/exercises/pull-up/mastered", json={"is_mastered": True})
        assert response.json()["is_mastered"] is True

    def test_delete_unused(self, client):
        response = client.delete("/exercises/pull-up")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Exercise deleted"}
        assert client.get("/exercises/pull-up").status_code == 404

    def test_delete_in_use_is_409(self, client, history):
        response = client.delete("/exercises/bench-press")

        assert response.status_code == 409
        assert "3 workouts" in response.json()["detail"]

    def test_usage(self, client, history):
        response = client.get("/exercises/bench-press/usage")

        data = response.json()
        assert data["is_used"] is True
        assert data["workout_count"] == 3
        assert [w["id"] for w in data["workouts"]] == ["w-mar", "w-feb", "w-jan"]


@pytest.mark.integration
class TestExerciseHistory:
    """Tests for GET /exercises/{id}/history."""

    def test_history_relative_to_workout(self, client, history):
        response = client.get("/exercises/bench-press/history", params={"workout_id": "w-mar"})

        assert response.status_code == 200
        data = response.json()
        assert data["reference_date"] == "2024-03-10"
        assert data["has_been_done"] is True
        assert data["best_set"]["weight"] == 65.0
        assert data["best_set"]["label"] == "65.0 kg x 6"
        assert [s["reps"] for s in data["previous_sets"]] == [6, 6]
        assert [s["date"] for s in data["historical_sessions"]] == ["2024-02-10", "2024-01-10"]

    def test_progress_window(self, client, history):
        response = client.get(
            "/exercises/bench-press/history",
            params={"date": "2024-03-10", "months": 1},
        )

        progress = response.json()["progress"]
        assert [p["date"] for p in progress] == ["2024-02-10"]
        assert progress[0]["total_volume"] == 780.0
        assert progress[0]["avg_power"] == 390

    def test_never_done(self, client):
        data = client.get("/exercises/pull-up/history").json()

        assert data["has_been_done"] is False
        assert data["best_set"] is None
        assert data["previous_sets"] is None

    def test_unknown_workout_is_404(self, client):
        response = client.get("/exercises/bench-press/history", params={"workout_id": "nope"})
        assert response.status_code == 404
