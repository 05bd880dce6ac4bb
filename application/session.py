"""
Workout Session.

Holds the state of one in-progress workout: the template picker, the
exercises and sets being entered, a weight history cache, and the guarded
save flow.

All methods run on one event loop. Repository-backed calls are awaited in
the threadpool because the storage client is synchronous; state is only
touched on the loop, so no locking is needed.

Superseded template loads are not aborted. Each ``select_template`` call
takes a new generation number and its result is dropped if a newer call
started while it was waiting.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional

from starlette.concurrency import run_in_threadpool

from application.exceptions import LastSetRemovalError, NoTemplatesError, WorkoutError
from application.save_gate import SaveGate
from application.services import WorkoutService
from domain.constants import DEFAULT_REPS
from domain.models import (
    ExerciseEntry,
    ExerciseWeights,
    SetEntry,
    TemplateOption,
    UUIDString,
)
from domain.normalize import normalize_exercise_name

logger = logging.getLogger(__name__)

SetField = Literal["weight", "reps"]


class WorkoutSession:
    """
    State holder for one workout logging flow.

    Usage:
        session = WorkoutSession(service)
        await session.load_templates()
        exercise = session.exercises[0]
        await session.add_set_with_last_weights(exercise.id)
        workout_id = await session.save()
    """

    def __init__(
        self,
        service: WorkoutService,
        *,
        save_gate: Optional[SaveGate] = None,
        id_factory: Callable[[], Any] = uuid.uuid4,
    ) -> None:
        self._service = service
        self._save_gate = save_gate or SaveGate()
        self._id_factory = id_factory

        self.workout_options: List[TemplateOption] = []
        self.selected_template_id: Optional[str] = None
        self.exercises: List[ExerciseEntry] = []
        self.template_exercise_map: Dict[str, str] = {}
        self.focus_set_id: Optional[str] = None

        self._generation = 0
        self._weights: Dict[str, ExerciseWeights] = {}
        self._in_flight: Dict[str, "asyncio.Future[None]"] = {}

    @property
    def is_saving(self) -> bool:
        return self._save_gate.is_saving

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    async def load_templates(self) -> List[TemplateOption]:
        """
        Load template options and select the first one.

        Raises:
            NoTemplatesError: If storage has no templates
        """
        options = await run_in_threadpool(self._service.load_workout_template_options)
        self.workout_options = list(options)

        if not self.workout_options:
            raise NoTemplatesError(
                "No workout templates found. Please ensure database migrations are applied."
            )

        await self.select_template(self.workout_options[0].id)
        return self.workout_options

    async def select_template(self, template_id: str) -> bool:
        """
        Switch to a template and replace the session exercises with its exercises.

        Returns:
            True if the loaded exercises were applied, False if a newer
            selection superseded this one while it was loading
        """
        self._generation += 1
        generation = self._generation
        self.selected_template_id = template_id

        try:
            seeded = await run_in_threadpool(self._service.load_template_exercises, template_id)
        except Exception:
            if generation != self._generation:
                logger.debug("Ignoring failed load for superseded template %s", template_id)
                return False
            raise

        if generation != self._generation:
            logger.debug("Discarding stale exercises for template %s", template_id)
            return False

        self.exercises = list(seeded.exercises)
        self.template_exercise_map = dict(seeded.template_exercise_map)
        self.focus_set_id = None
        return True

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    def _exercise(self, exercise_id: str) -> ExerciseEntry:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        raise KeyError(f"Unknown exercise: {exercise_id}")

    def _set(self, exercise_id: str, set_id: str) -> SetEntry:
        set_entry = self._exercise(exercise_id).find_set(set_id)
        if set_entry is None:
            raise KeyError(f"Unknown set: {set_id}")
        return set_entry

    def add_set(
        self,
        exercise_id: str,
        default_weight: Any = 0,
        default_reps: Any = None,
    ) -> SetEntry:
        """
        Append a set to an exercise and focus it.

        The new set copies weight and reps from the exercise's last set;
        without one it uses the given defaults (reps fall back to 8).
        """
        exercise = self._exercise(exercise_id)
        last_set = exercise.sets[-1] if exercise.sets else None

        new_set = SetEntry(
            id=f"{exercise_id}-set-{self._id_factory()}",
            weight=last_set.weight if last_set else default_weight,
            reps=(
                last_set.reps if last_set
                else default_reps if default_reps is not None
                else DEFAULT_REPS
            ),
            done=False,
        )
        exercise.sets.append(new_set)
        self.focus_set_id = new_set.id
        return new_set

    async def add_set_with_last_weights(self, exercise_id: str) -> SetEntry:
        """Append a set prefilled from the exercise's weight history."""
        weights = await self.load_weights(exercise_id)
        return self.add_set(
            exercise_id,
            weights.working_weight if weights.working_weight is not None else 0,
            weights.last_reps,
        )

    def update_set(self, exercise_id: str, set_id: str, field: SetField, value: Any) -> None:
        if field not in ("weight", "reps"):
            raise ValueError(f"Unknown set field: {field}")
        setattr(self._set(exercise_id, set_id), field, value)

    def set_done(self, exercise_id: str, set_id: str, done: bool) -> None:
        self._set(exercise_id, set_id).done = done

    def remove_set(self, exercise_id: str, set_id: str) -> None:
        """
        Remove a set from an exercise.

        Raises:
            KeyError: If the exercise or set is unknown
            LastSetRemovalError: If it is the exercise's only set; the set
                list is left unchanged
        """
        self._set(exercise_id, set_id)
        exercise = self._exercise(exercise_id)
        if len(exercise.sets) == 1:
            raise LastSetRemovalError(
                "Cannot remove the last set. Each exercise must have at least one set."
            )
        exercise.sets = [set_entry for set_entry in exercise.sets if set_entry.id != set_id]

    # -------------------------------------------------------------------------
    # Weight history
    # -------------------------------------------------------------------------

    def cached_weights(self, exercise_id: str) -> Optional[ExerciseWeights]:
        key = normalize_exercise_name(self._exercise(exercise_id).name)
        return self._weights.get(key)

    async def load_weights(self, exercise_id: str) -> ExerciseWeights:
        """
        Get the weight history for an exercise, using the cache.

        Concurrent calls for the same exercise name share one storage request.
        """
        key = normalize_exercise_name(self._exercise(exercise_id).name)
        if not key:
            return ExerciseWeights.empty()
        if key in self._weights:
            return self._weights[key]

        pending = self._in_flight.get(key)
        if pending is None:
            pending = self._start_fetch([key])
        await pending
        return self._weights.get(key, ExerciseWeights.empty())

    async def prefetch_weights(self) -> Dict[str, ExerciseWeights]:
        """Load weights for every uncached exercise name in one batched request."""
        keys = self._uncached_keys(exercise.name for exercise in self.exercises)
        if keys:
            self._start_fetch(keys)
        pending = set(self._in_flight.values())
        if pending:
            await asyncio.gather(*pending)
        return dict(self._weights)

    def _uncached_keys(self, names: Iterable[str]) -> List[str]:
        keys: Dict[str, None] = {}
        for name in names:
            key = normalize_exercise_name(name)
            if key and key not in self._weights and key not in self._in_flight:
                keys.setdefault(key, None)
        return list(keys)

    def _start_fetch(self, keys: List[str]) -> "asyncio.Future[None]":
        task = asyncio.ensure_future(self._fetch_weights(keys))
        for key in keys:
            self._in_flight[key] = task
        return task

    async def _fetch_weights(self, keys: List[str]) -> None:
        try:
            found = await run_in_threadpool(self._service.get_last_weights_batch, keys)
        except WorkoutError as e:
            logger.warning(f"Failed to load exercise weights: {e}")
            found = {}
        finally:
            for key in keys:
                self._in_flight.pop(key, None)

        # storage matches names case-insensitively and returns its own spelling
        by_folded = {name.casefold(): weights for name, weights in found.items()}
        for key in keys:
            self._weights[key] = by_folded.get(key.casefold(), ExerciseWeights.empty())

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    async def save(self, date: Optional[str] = None) -> UUIDString:
        """
        Save the current session.

        Raises:
            SaveCooldownError: If called within the cooldown of the previous save
            SaveInProgressError: If another save is still running
            WorkoutError: Any failure reported by the save use case
        """
        with self._save_gate.saving():
            workout_id = await run_in_threadpool(
                self._service.save_workout,
                self.selected_template_id,
                list(self.exercises),
                dict(self.template_exercise_map),
                date,
            )
        self.focus_set_id = None
        return workout_id
