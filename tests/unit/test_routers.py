"""
Router tests for templates, workouts and exercise weights.

The app is wired to in-memory fakes through ``app.dependency_overrides``
(see tests/conftest.py).
"""

import pytest

from application.exceptions import StorageError, StorageErrorCategory
from api.errors import user_error_message
from backend.settings import Settings

pytestmark = pytest.mark.unit


def _workout_body(**overrides):
    body = {
        "exercises": [
            {
                "id": "exercise-1",
                "name": "Bench Press",
                "sets": [{"id": "s1", "weight": 60, "reps": 8, "done": True}],
            }
        ],
        "date": "2024-05-06",
    }
    body.update(overrides)
    return body


# =============================================================================
# Templates
# =============================================================================


class TestTemplatesRouter:
    def test_list_templates(self, client, template_repo):
        response = client.get("/templates")

        assert response.status_code == 200
        push, pull = template_repo.list_templates()
        assert response.json() == [
            {"id": push.id, "label": "Push Day"},
            {"id": pull.id, "label": "Pull Day"},
        ]

    def test_template_exercises(self, client, template_repo):
        push = template_repo.list_templates()[0]
        first = template_repo.get_exercises(push.id)[0]

        response = client.get(f"/templates/{push.id}/exercises")

        assert response.status_code == 200
        data = response.json()
        assert data["exercises"][0] == {
            "id": f"exercise-{first.id}",
            "name": "Bench Press",
            "sets": [],
        }
        assert data["template_exercise_map"][f"exercise-{first.id}"] == first.id

    def test_invalid_template_id(self, client, template_repo):
        response = client.get("/templates/push-day/exercises")

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid template ID format."}
        assert template_repo.exercise_calls == []

    def test_storage_failure(self, client, template_repo):
        template_repo.simulate_failure(StorageError(
            "Database is not set up correctly.",
            category=StorageErrorCategory.MISSING_SCHEMA,
            detail='relation "workout_templates" does not exist',
        ))

        response = client.get("/templates")

        assert response.status_code == 502
        assert response.json() == {
            "detail": "Database is not set up correctly.",
            "category": "missing_schema",
        }


# =============================================================================
# Workouts
# =============================================================================


class TestValidateWorkout:
    def test_valid(self, client):
        response = client.post("/workouts/validate", json=_workout_body())
        assert response.json() == {"valid": True, "errors": [], "message": ""}

    def test_invalid_values_are_reported_not_rejected(self, client):
        body = _workout_body(exercises=[{
            "id": "e1",
            "name": "Squat",
            "sets": [{"id": "s1", "weight": "heavy", "reps": None}],
        }])

        response = client.post("/workouts/validate", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert [e["field"] for e in data["errors"]] == ["reps", "weight"]
        assert data["message"].splitlines()[0] == "Squat — Set 1: reps must be between 1 and 1000"


class TestSaveWorkout:
    def test_save(self, client, workout_repo):
        response = client.post("/workouts", json=_workout_body())

        assert response.status_code == 201
        workout_id = response.json()["workout_id"]
        saved = workout_repo.get_all()[0]
        assert saved["id"] == workout_id
        assert saved["date"] == "2024-05-06"
        assert saved["exercises"][0]["sets"] == [{"weight": 60, "reps": 8}]

    def test_save_with_template(self, client, template_repo, workout_repo):
        push = template_repo.list_templates()[0]
        first = template_repo.get_exercises(push.id)[0]
        body = _workout_body(
            template_id=push.id,
            template_exercise_map={"exercise-1": first.id},
        )

        response = client.post("/workouts", json=body)

        assert response.status_code == 201
        saved = workout_repo.get_all()[0]
        assert saved["template_id"] == push.id
        assert saved["exercises"][0]["template_exercise_id"] == first.id

    def test_empty_workout(self, client, workout_repo):
        response = client.post("/workouts", json=_workout_body(exercises=[]))

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot save workout: at least one exercise is required."
        assert workout_repo.call_count == 0

    def test_validation_failure(self, client, workout_repo):
        body = _workout_body(exercises=[{
            "id": "e1", "name": "Squat", "sets": [{"id": "s1", "weight": 100, "reps": 0}],
        }])

        response = client.post("/workouts", json=body)

        assert response.status_code == 400
        assert response.json()["errors"] == [{
            "exercise_name": "Squat",
            "set_index": 1,
            "field": "reps",
            "message": "reps must be between 1 and 1000",
        }]
        assert workout_repo.call_count == 0

    def test_invalid_date(self, client):
        response = client.post("/workouts", json=_workout_body(date="2024-02-30"))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid date string: 2024-02-30"

    def test_cooldown(self, client, workout_repo):
        assert client.post("/workouts", json=_workout_body()).status_code == 201

        response = client.post("/workouts", json=_workout_body())

        assert response.status_code == 429
        assert response.json() == {"detail": "Please wait before saving again."}
        assert workout_repo.call_count == 1

    def test_storage_error_hides_detail_outside_development(self, client, workout_repo):
        workout_repo.simulate_failure(StorageError(
            "Duplicate entry.",
            category=StorageErrorCategory.DUPLICATE,
            code="23505",
            detail="duplicate key value violates unique constraint",
        ))

        response = client.post("/workouts", json=_workout_body())

        assert response.status_code == 502
        assert response.json()["detail"] == "Duplicate entry."

    @pytest.mark.parametrize("test_settings", [Settings(environment="development", _env_file=None)])
    def test_storage_error_shows_detail_in_development(self, client, workout_repo, test_settings):
        workout_repo.simulate_failure(StorageError(
            "Duplicate entry.", detail="duplicate key value violates unique constraint",
        ))

        response = client.post("/workouts", json=_workout_body())

        assert response.json()["detail"] == "duplicate key value violates unique constraint"

    def test_unset_environment_hides_detail(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        error = StorageError("Duplicate entry.", detail="duplicate key value")

        message = user_error_message(error, "Failed to save workout.", Settings(_env_file=None))

        assert message == "Failed to save workout."


# =============================================================================
# Exercise weights
# =============================================================================


class TestExerciseWeights:
    def test_single_lookup(self, client, weight_repo):
        weight_repo.seed_sets([{
            "weight": 100, "reps": 5, "created_at": "2024-01-01T10:01:00Z", "exercise_id": "e1",
            "exercises": {"id": "e1", "name": "Squat", "created_at": "2024-01-01T10:00:00Z"},
        }])

        response = client.get("/exercises/last-weights", params={"name": "  Squat "})

        assert response.status_code == 200
        assert response.json() == {
            "exercise_name": "Squat",
            "working_weight": 100,
            "max_weight": 100,
            "last_reps": 5,
        }

    def test_single_lookup_without_history(self, client):
        response = client.get("/exercises/last-weights", params={"name": "Deadlift"})
        assert response.json() == {
            "exercise_name": "Deadlift",
            "working_weight": None,
            "max_weight": None,
            "last_reps": None,
        }

    def test_batch_lookup(self, client, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "Squat", "working_weight": 100, "max_weight": 110, "last_reps": 5},
        ])

        response = client.post(
            "/exercises/last-weights", json={"names": ["Squat", " squat", "Row"]}
        )

        assert response.status_code == 200
        assert response.json() == {
            "weights": {"Squat": {"working_weight": 100, "max_weight": 110, "last_reps": 5}},
        }
        assert weight_repo.batch_calls == [["Squat", "squat", "Row"]]

    def test_batch_lookup_bad_response(self, client, weight_repo):
        weight_repo.set_batch_response("nope")
        response = client.post("/exercises/last-weights", json={"names": ["Squat"]})

        assert response.status_code == 502
        assert response.json()["detail"] == (
            "Unexpected response format while loading exercise weights."
        )
