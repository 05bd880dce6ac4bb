"""
Weight history aggregation.

Pure functions that turn historical set rows into an ``ExerciseWeights``
summary. The same exercise name can map to many exercise records (one per
logged workout); only the most recent record counts.

- working weight: statistical mode of the weights in that session, ties
  broken in favour of the larger weight
- max weight: largest weight in that session
- last reps: reps of the set with the latest creation timestamp
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from domain.models.workout import ExerciseWeights
from domain.numbers import to_nullable_number

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a storage timestamp for ordering.

    Naive timestamps are treated as UTC. Missing or unparseable values sort
    before everything else.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _EPOCH
    else:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def working_weight(weights: Iterable[float]) -> Optional[float]:
    """
    Most frequent weight; on a frequency tie the larger weight wins.

    Examples:
        >>> working_weight([60, 60, 65])
        60
        >>> working_weight([60, 65])
        65
    """
    counts = Counter(weights)
    if not counts:
        return None
    return max(counts.items(), key=lambda item: (item[1], item[0]))[0]


def _exercise_of(row: Mapping[str, Any]) -> Dict[str, Any]:
    exercise = row.get("exercises")
    # PostgREST embeds many-to-one relations as an object, older clients as a list
    if isinstance(exercise, list):
        exercise = exercise[0] if exercise else None
    return exercise if isinstance(exercise, dict) else {}


def latest_session_sets(rows: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """
    Restrict set rows to the most recently created exercise instance.

    Each row is ``{weight, reps, created_at, exercise_id, exercises: {id, created_at}}``.
    """
    rows = list(rows)
    if not rows:
        return []

    latest_id = None
    latest_key = None
    for row in rows:
        exercise = _exercise_of(row)
        exercise_id = exercise.get("id", row.get("exercise_id"))
        # equal timestamps fall back to the larger id so row order never matters
        key = (parse_timestamp(exercise.get("created_at")), str(exercise_id))
        if latest_key is None or key > latest_key:
            latest_id, latest_key = exercise_id, key

    return [
        row for row in rows
        if _exercise_of(row).get("id", row.get("exercise_id")) == latest_id
    ]


def summarize_weights(rows: Iterable[Mapping[str, Any]]) -> ExerciseWeights:
    """
    Compute working weight, max weight and last reps from historical set rows.

    Args:
        rows: Set rows joined with their exercise, for a single exercise name

    Returns:
        ExerciseWeights; all fields None when there is no history
    """
    session = latest_session_sets(rows)
    if not session:
        return ExerciseWeights.empty()

    weights = [
        weight for weight in (to_nullable_number(row.get("weight")) for row in session)
        if weight is not None
    ]
    last_set = max(session, key=lambda row: parse_timestamp(row.get("created_at")))

    return ExerciseWeights(
        working_weight=working_weight(weights),
        max_weight=max(weights) if weights else None,
        last_reps=to_nullable_number(last_set.get("reps")),
    )
