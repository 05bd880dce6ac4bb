"""
Unit tests for WorkoutSession.

Tests for:
- Template loading and stale-result discard
- Set editing rules (add copies the previous set, the last set cannot go)
- Weight cache and in-flight de-duplication
- Guarded saving
"""

import asyncio

import pytest
import pytest_asyncio

from application.exceptions import (
    LastSetRemovalError,
    NoTemplatesError,
    SaveCooldownError,
    StorageError,
    WorkoutValidationFailed,
)
from application.save_gate import SaveGate
from application.session import WorkoutSession
from domain.models import ExerciseWeights


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(service, clock) -> WorkoutSession:
    return WorkoutSession(
        service,
        save_gate=SaveGate(cooldown_ms=2000, clock=clock),
        id_factory=iter(f"uuid-{i}" for i in range(1000)).__next__,
    )


@pytest_asyncio.fixture
async def loaded_session(session) -> WorkoutSession:
    await session.load_templates()
    return session


# =============================================================================
# Templates
# =============================================================================


@pytest.mark.unit
class TestTemplates:
    @pytest.mark.asyncio
    async def test_load_templates_selects_first(self, session):
        options = await session.load_templates()

        assert [o.label for o in options] == ["Push Day", "Pull Day"]
        assert session.selected_template_id == options[0].id
        assert [e.name for e in session.exercises] == [
            "Bench Press", "Overhead Press", "Triceps Extension",
        ]
        assert set(session.template_exercise_map) == {e.id for e in session.exercises}

    @pytest.mark.asyncio
    async def test_no_templates(self, template_repo, session):
        template_repo.reset()
        with pytest.raises(NoTemplatesError):
            await session.load_templates()

    @pytest.mark.asyncio
    async def test_select_template_replaces_exercises(self, loaded_session):
        session = loaded_session
        session.add_set(session.exercises[0].id)

        pull = session.workout_options[1]
        assert await session.select_template(pull.id) is True

        assert [e.name for e in session.exercises] == ["Deadlift", "Bent-Over Row"]
        assert all(e.sets == [] for e in session.exercises)
        assert session.focus_set_id is None
        assert set(session.template_exercise_map) == {e.id for e in session.exercises}

    @pytest.mark.asyncio
    async def test_stale_template_load_is_discarded(self, template_repo, loaded_session):
        session = loaded_session
        push, pull = session.workout_options

        release = template_repo.hold(push.id)
        first = asyncio.create_task(session.select_template(push.id))
        await asyncio.sleep(0)

        assert await session.select_template(pull.id) is True
        release.set()

        assert await first is False
        assert session.selected_template_id == pull.id
        assert [e.name for e in session.exercises] == ["Deadlift", "Bent-Over Row"]

    @pytest.mark.asyncio
    async def test_failure_of_current_load_propagates(self, template_repo, loaded_session):
        template_repo.simulate_failure(StorageError("Failed to load workout template exercises."))
        with pytest.raises(StorageError):
            await loaded_session.select_template(loaded_session.workout_options[1].id)


# =============================================================================
# Sets
# =============================================================================


@pytest.mark.unit
class TestSets:
    @pytest.mark.asyncio
    async def test_add_first_set_uses_defaults(self, loaded_session):
        exercise = loaded_session.exercises[0]

        new_set = loaded_session.add_set(exercise.id)

        assert new_set.id == f"{exercise.id}-set-uuid-0"
        assert (new_set.weight, new_set.reps, new_set.done) == (0, 8, False)
        assert loaded_session.focus_set_id == new_set.id

    @pytest.mark.asyncio
    async def test_add_set_with_given_defaults(self, loaded_session):
        exercise = loaded_session.exercises[0]
        new_set = loaded_session.add_set(exercise.id, 40, 12)
        assert (new_set.weight, new_set.reps) == (40, 12)

    @pytest.mark.asyncio
    async def test_add_set_copies_previous_set(self, loaded_session):
        exercise = loaded_session.exercises[0]
        first = loaded_session.add_set(exercise.id)
        loaded_session.update_set(exercise.id, first.id, "weight", 70)
        loaded_session.update_set(exercise.id, first.id, "reps", 6)
        loaded_session.set_done(exercise.id, first.id, True)

        second = loaded_session.add_set(exercise.id, 999, 999)

        assert (second.weight, second.reps, second.done) == (70, 6, False)
        assert [s.id for s in exercise.sets] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update_unknown_field(self, loaded_session):
        exercise = loaded_session.exercises[0]
        new_set = loaded_session.add_set(exercise.id)
        with pytest.raises(ValueError):
            loaded_session.update_set(exercise.id, new_set.id, "done", True)

    @pytest.mark.asyncio
    async def test_remove_set(self, loaded_session):
        exercise = loaded_session.exercises[0]
        first = loaded_session.add_set(exercise.id)
        second = loaded_session.add_set(exercise.id)

        loaded_session.remove_set(exercise.id, first.id)

        assert [s.id for s in exercise.sets] == [second.id]

    @pytest.mark.asyncio
    async def test_cannot_remove_last_set(self, loaded_session):
        exercise = loaded_session.exercises[0]
        only = loaded_session.add_set(exercise.id)

        with pytest.raises(LastSetRemovalError) as exc_info:
            loaded_session.remove_set(exercise.id, only.id)

        assert exc_info.value.message == (
            "Cannot remove the last set. Each exercise must have at least one set."
        )
        assert [s.id for s in exercise.sets] == [only.id]

    @pytest.mark.asyncio
    async def test_remove_unknown_set(self, loaded_session):
        exercise = loaded_session.exercises[0]
        loaded_session.add_set(exercise.id)
        loaded_session.add_set(exercise.id)

        with pytest.raises(KeyError):
            loaded_session.remove_set(exercise.id, "set-missing")

        assert len(exercise.sets) == 2

    @pytest.mark.asyncio
    async def test_remove_unknown_set_on_single_set_exercise(self, loaded_session):
        exercise = loaded_session.exercises[0]
        loaded_session.add_set(exercise.id)

        with pytest.raises(KeyError):
            loaded_session.remove_set(exercise.id, "set-missing")

    @pytest.mark.asyncio
    async def test_unknown_exercise(self, loaded_session):
        with pytest.raises(KeyError):
            loaded_session.add_set("exercise-missing")


# =============================================================================
# Weight history
# =============================================================================


@pytest.mark.unit
class TestWeights:
    @pytest.mark.asyncio
    async def test_load_weights_is_cached(self, loaded_session, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "Bench Press", "working_weight": 60, "max_weight": 65, "last_reps": 8},
        ])
        exercise = loaded_session.exercises[0]

        first = await loaded_session.load_weights(exercise.id)
        second = await loaded_session.load_weights(exercise.id)

        assert first == second == ExerciseWeights(60, 65, 8)
        assert len(weight_repo.batch_calls) == 1
        assert loaded_session.cached_weights(exercise.id) == first

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_request(self, loaded_session, weight_repo):
        exercise = loaded_session.exercises[0]

        results = await asyncio.gather(
            loaded_session.load_weights(exercise.id),
            loaded_session.load_weights(exercise.id),
        )

        assert results[0] == results[1] == ExerciseWeights.empty()
        assert weight_repo.batch_calls == [["Bench Press"]]

    @pytest.mark.asyncio
    async def test_failed_lookup_caches_empty(self, loaded_session, weight_repo):
        weight_repo.simulate_failure(StorageError("Failed to load exercise weights."))
        exercise = loaded_session.exercises[0]

        assert await loaded_session.load_weights(exercise.id) == ExerciseWeights.empty()
        assert await loaded_session.load_weights(exercise.id) == ExerciseWeights.empty()
        assert len(weight_repo.batch_calls) == 1

    @pytest.mark.asyncio
    async def test_prefetch_uses_one_batch(self, loaded_session, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "Overhead Press", "working_weight": 40, "max_weight": 40, "last_reps": 6},
        ])

        weights = await loaded_session.prefetch_weights()

        assert weight_repo.batch_calls == [["Bench Press", "Overhead Press", "Triceps Extension"]]
        assert weights["Overhead Press"] == ExerciseWeights(40, 40, 6)
        assert weights["Bench Press"] == ExerciseWeights.empty()

        await loaded_session.prefetch_weights()
        assert len(weight_repo.batch_calls) == 1

    @pytest.mark.asyncio
    async def test_add_set_with_last_weights(self, loaded_session, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "Bench Press", "working_weight": 60, "max_weight": 65, "last_reps": 8},
        ])
        exercise = loaded_session.exercises[0]

        new_set = await loaded_session.add_set_with_last_weights(exercise.id)

        assert (new_set.weight, new_set.reps) == (60, 8)

    @pytest.mark.asyncio
    async def test_history_logged_in_different_case_is_found(self, loaded_session, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "bench press", "working_weight": 60, "max_weight": 65, "last_reps": 8},
        ])
        exercise = loaded_session.exercises[0]

        weights = await loaded_session.load_weights(exercise.id)
        new_set = await loaded_session.add_set_with_last_weights(exercise.id)

        assert weights == ExerciseWeights(60, 65, 8)
        assert (new_set.weight, new_set.reps) == (60, 8)

    @pytest.mark.asyncio
    async def test_prefetch_matches_names_case_insensitively(self, loaded_session, weight_repo):
        weight_repo.seed_summaries([
            {"exercise_name": "OVERHEAD PRESS", "working_weight": 40, "max_weight": 42.5, "last_reps": 6},
        ])

        weights = await loaded_session.prefetch_weights()

        assert weights["Overhead Press"] == ExerciseWeights(40, 42.5, 6)

    @pytest.mark.asyncio
    async def test_add_set_without_history_uses_defaults(self, loaded_session):
        exercise = loaded_session.exercises[0]
        new_set = await loaded_session.add_set_with_last_weights(exercise.id)
        assert (new_set.weight, new_set.reps) == (0, 8)


# =============================================================================
# Save
# =============================================================================


@pytest.mark.unit
class TestSave:
    @pytest.mark.asyncio
    async def test_save(self, loaded_session, workout_repo):
        exercise = loaded_session.exercises[0]
        loaded_session.add_set(exercise.id, 60, 8)

        workout_id = await loaded_session.save("2024-06-01")

        saved = workout_repo.get_all()[0]
        assert saved["id"] == workout_id
        assert saved["date"] == "2024-06-01"
        assert saved["template_id"] == loaded_session.selected_template_id
        assert saved["exercises"][0]["sets"] == [{"weight": 60, "reps": 8}]
        assert saved["exercises"][0]["template_exercise_id"] == (
            loaded_session.template_exercise_map[exercise.id]
        )
        assert loaded_session.focus_set_id is None
        assert loaded_session.is_saving is False

    @pytest.mark.asyncio
    async def test_second_save_within_cooldown_rejected(self, loaded_session, workout_repo, clock):
        loaded_session.add_set(loaded_session.exercises[0].id, 60, 8)
        await loaded_session.save()

        clock.now += 1
        with pytest.raises(SaveCooldownError, match="Please wait before saving again."):
            await loaded_session.save()
        assert workout_repo.call_count == 1

        clock.now += 1
        await loaded_session.save()
        assert workout_repo.call_count == 2

    @pytest.mark.asyncio
    async def test_failed_save_keeps_state(self, loaded_session, workout_repo):
        exercise = loaded_session.exercises[0]
        loaded_session.add_set(exercise.id, 60, 0)

        with pytest.raises(WorkoutValidationFailed):
            await loaded_session.save()

        assert len(exercise.sets) == 1
        assert workout_repo.call_count == 0
        assert loaded_session.is_saving is False

