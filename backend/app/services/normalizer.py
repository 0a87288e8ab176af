"""
Validation and repair of raw interpreter output.

The interpreter hands back loosely-typed JSON. Everything downstream only
ever sees the shapes defined here: a NormalizedWorkout holding
NormalizedExercise entries that already satisfy the storage invariants
(sets >= 1, weight/reps strictly positive and finite or None, counts no
larger than MAX_COUNT, a non-blank name no longer than MAX_NAME_LENGTH).

Nothing in this module raises on bad input.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class WorkoutType(str, Enum):
    UPPER = "UPPER"
    LOWER = "LOWER"
    PUSH = "PUSH"
    PULL = "PULL"
    LEGS = "LEGS"
    FULL_BODY = "FULL_BODY"


class WeightPolicy(str, Enum):
    """How a compound weight expression such as "45+25+10" is resolved."""
    SUM = "sum"
    LEADING = "leading"


@dataclass(frozen=True, slots=True)
class NormalizedExercise:
    name: str
    weight: float | None = None
    reps: int | None = None
    sets: int = 1
    notes: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "exercise_name": self.name,
            "weight": self.weight,
            "reps": self.reps,
            "sets": self.sets,
            "notes": self.notes,
        }


@dataclass(frozen=True, slots=True)
class RejectedExercise:
    reason: str
    raw: Any = None


@dataclass(frozen=True, slots=True)
class NormalizedWorkout:
    workout_type: WorkoutType | None = None
    exercises: tuple[NormalizedExercise, ...] = ()
    failed: bool = False
    rejected_count: int = field(default=0, compare=False)

    @classmethod
    def failure(cls) -> "NormalizedWorkout":
        return cls(workout_type=None, exercises=(), failed=True)

    def to_payload(self) -> dict[str, Any]:
        return {
            "workout_type": self.workout_type.value if self.workout_type else None,
            "exercises": [e.to_payload() for e in self.exercises],
        }


_NUMBER = re.compile(r"\d+(?:\.\d+)?")

# Largest rep or set count kept; anything above is treated as unreadable.
MAX_COUNT = 10_000
MAX_NAME_LENGTH = 200


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _as_float(value: Any) -> float | None:
    # bool is an int subclass; true/false is never a quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return _finite(float(value))
    except OverflowError:
        return None


def _parse_number(value: Any) -> float | None:
    if isinstance(value, str):
        try:
            return _finite(float(value.strip()))
        except ValueError:
            return None
    return _as_float(value)


def _positive_int(value: Any) -> int | None:
    n = _parse_number(value)
    if n is None:
        return None
    n = math.floor(n)
    return n if 1 <= n <= MAX_COUNT else None


def _weight(value: Any, policy: WeightPolicy) -> float | None:
    if not isinstance(value, str):
        n = _as_float(value)
        return n if n is not None and n > 0 else None
    plain = _parse_number(value)
    if plain is not None:
        return plain if plain > 0 else None
    numbers = [n for n in (float(m) for m in _NUMBER.findall(value)) if math.isfinite(n)]
    if not numbers:
        return None
    total = sum(numbers) if policy is WeightPolicy.SUM else numbers[0]
    return total if math.isfinite(total) and total > 0 else None


def _workout_type(value: Any) -> WorkoutType | None:
    if isinstance(value, WorkoutType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return WorkoutType(value)
    except ValueError:
        return None


def normalize_exercise(
    raw: Any,
    *,
    weight_policy: WeightPolicy = WeightPolicy.SUM,
) -> NormalizedExercise | RejectedExercise:
    """Normalize one exercise entry, or say why it was dropped."""
    if isinstance(raw, NormalizedExercise):
        raw = raw.to_payload()
    if not isinstance(raw, Mapping):
        return RejectedExercise("not an object", raw)

    name = raw.get("exercise_name")
    if name is None:
        name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return RejectedExercise("missing exercise name", raw)

    notes = raw.get("notes")
    notes = (notes.strip() or None) if isinstance(notes, str) else None

    return NormalizedExercise(
        name=name.strip()[:MAX_NAME_LENGTH].rstrip(),
        weight=_weight(raw.get("weight"), weight_policy),
        reps=_positive_int(raw.get("reps")),
        sets=_positive_int(raw.get("sets")) or 1,
        notes=notes,
    )


def normalize_workout(
    raw: Any,
    *,
    weight_policy: WeightPolicy = WeightPolicy.SUM,
) -> NormalizedWorkout:
    """
    Turn an arbitrary parsed payload into a NormalizedWorkout.

    A payload that is not an object is a failure. Bad exercise entries are
    dropped one by one; a missing or non-list `exercises` gives no exercises.
    """
    if isinstance(raw, NormalizedWorkout):
        raw = raw.to_payload()
    if not isinstance(raw, Mapping):
        return NormalizedWorkout.failure()

    entries = raw.get("exercises")
    if not isinstance(entries, (list, tuple)):
        entries = []

    kept: list[NormalizedExercise] = []
    rejected = 0
    for entry in entries:
        result = normalize_exercise(entry, weight_policy=weight_policy)
        if isinstance(result, RejectedExercise):
            rejected += 1
            logger.debug("dropping exercise entry: %s (%r)", result.reason, result.raw)
            continue
        kept.append(result)

    return NormalizedWorkout(
        workout_type=_workout_type(raw.get("workout_type")),
        exercises=tuple(kept),
        failed=False,
        rejected_count=rejected,
    )
