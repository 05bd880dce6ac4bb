"""
GetLastWeights Use Case.

Looks up the weights a user logged last time for one or many exercises,
used to prefill new sets.

The batched lookup is the primary path: one storage round-trip for all
names instead of one query per exercise. The single-exercise lookup reads
raw set history and aggregates it locally.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping

from application.exceptions import WeightHistoryFormatError
from application.ports import WeightHistoryRepository
from domain.models import ExerciseWeights
from domain.normalize import normalize_exercise_name
from domain.numbers import to_nullable_number
from domain.weights import summarize_weights

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("working_weight", "max_weight", "last_reps")


def normalize_names(names: Iterable[str]) -> List[str]:
    """Normalize names, drop blanks and de-duplicate, keeping first-seen order."""
    unique: Dict[str, None] = {}
    for name in names:
        normalized = normalize_exercise_name(name)
        if normalized:
            unique.setdefault(normalized, None)
    return list(unique)


def is_weights_row(row: Any) -> bool:
    """Check a batch row: string name, numeric fields null/missing or finite."""
    if not isinstance(row, Mapping):
        return False
    if not isinstance(row.get("exercise_name"), str):
        return False
    for key in _NUMERIC_FIELDS:
        value = row.get(key)
        if value is not None and to_nullable_number(value) is None:
            return False
    return True


class GetLastWeightsUseCase:
    """
    Use case for weight history lookups.

    Usage:
        >>> use_case = GetLastWeightsUseCase(weight_repo=weight_repo)
        >>> use_case.execute_batch(["Bench Press", "  bench   press", "Squat"])
        {'Bench Press': ExerciseWeights(...), 'Squat': ExerciseWeights(...)}
    """

    def __init__(self, weight_repo: WeightHistoryRepository) -> None:
        self._weight_repo = weight_repo

    def execute_batch(self, names: Iterable[str]) -> Dict[str, ExerciseWeights]:
        """
        Get weight summaries for many exercises with a single storage call.

        Args:
            names: Raw exercise names (normalized and de-duplicated here)

        Returns:
            Mapping of normalized exercise name -> ExerciseWeights for every
            name storage knows about. Empty input returns ``{}`` without
            touching storage.

        Raises:
            WeightHistoryFormatError: If storage returns anything other than
                a list of well-formed rows
        """
        normalized = normalize_names(names)
        if not normalized:
            return {}

        data = self._weight_repo.get_last_weights_batch(normalized)

        if not isinstance(data, list):
            logger.error("Weight lookup returned %s instead of a list", type(data).__name__)
            raise WeightHistoryFormatError(
                "Unexpected response format while loading exercise weights."
            )

        if not all(is_weights_row(row) for row in data):
            logger.error("Weight lookup returned malformed rows: %r", data)
            raise WeightHistoryFormatError(
                "Unexpected row format while loading exercise weights."
            )

        by_name: Dict[str, ExerciseWeights] = {}
        for row in data:
            name = normalize_exercise_name(row["exercise_name"])
            if not name:
                continue
            by_name[name] = ExerciseWeights(
                working_weight=to_nullable_number(row.get("working_weight")),
                max_weight=to_nullable_number(row.get("max_weight")),
                last_reps=to_nullable_number(row.get("last_reps")),
            )

        logger.debug("Loaded weights for %d of %d exercise(s)", len(by_name), len(normalized))
        return by_name

    def execute(self, name: str) -> ExerciseWeights:
        """
        Get the weight summary for one exercise from its raw set history.

        Only the most recently created exercise instance with that name is
        considered.

        Args:
            name: Raw exercise name

        Returns:
            ExerciseWeights (all None when there is no history)
        """
        normalized = normalize_exercise_name(name)
        if not normalized:
            return ExerciseWeights.empty()

        rows = self._weight_repo.get_exercise_sets(normalized, exact=True)
        return summarize_weights(rows)

    def execute_each(self, names: Iterable[str]) -> Dict[str, ExerciseWeights]:
        """
        Single-exercise lookup for several names, one query per name.

        Fallback for backends without the batched lookup.
        """
        return {name: self.execute(name) for name in normalize_names(names)}
