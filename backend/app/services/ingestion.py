"""Free text in, stored workout out."""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from app.errors import InvalidQueryError, UnauthorizedSubmitterError
from app.models import Workout
from app.models.workout import PHONE_MAX_LENGTH
from app.repositories.workout_repo import WorkoutRepository
from app.services.interpreter import Interpreter
from app.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IngestionConfig:
    # empty = anyone may submit
    allowed_submitters: frozenset[str] = frozenset()

    @classmethod
    def from_settings(cls, s: Settings) -> "IngestionConfig":
        return cls(allowed_submitters=s.allowed_phones)


@dataclass(slots=True)
class IngestionResult:
    workout: Workout
    exercise_count: int
    parse_failed: bool


def confirmation_message(exercise_count: int) -> str:
    noun = "exercise" if exercise_count == 1 else "exercises"
    return f"Workout saved! Parsed {exercise_count} {noun}."


class IngestionService:
    def __init__(self, repo: WorkoutRepository, interpreter: Interpreter, config: IngestionConfig):
        self.repo = repo
        self.interpreter = interpreter
        self.config = config

    def is_allowed(self, submitter: str | None) -> bool:
        allowed = self.config.allowed_submitters
        return not allowed or submitter in allowed

    def submit(
        self,
        raw_text: str,
        submitter: str | None = None,
        *,
        today: dt.date | None = None,
    ) -> IngestionResult:
        """
        Interpret `raw_text` and store it as today's workout.

        The text is stored even when interpretation fails (no type, no
        exercises) so nothing a user sends is lost. Storage errors propagate.
        """
        if not self.is_allowed(submitter):
            logger.warning("rejected submission from unauthorized submitter %s", submitter)
            raise UnauthorizedSubmitterError(submitter)
        if not raw_text or not raw_text.strip():
            raise InvalidQueryError("workout text is required")

        parsed = self.interpreter.interpret(raw_text)
        phone_number = submitter
        if phone_number is not None and len(phone_number) > PHONE_MAX_LENGTH:
            logger.warning("submitter id longer than %d characters, storing it truncated", PHONE_MAX_LENGTH)
            phone_number = phone_number[:PHONE_MAX_LENGTH]
        workout = self.repo.create_workout(
            workout_type=parsed.workout_type,
            date=today or dt.date.today(),
            raw_text=raw_text,
            phone_number=phone_number,
            exercises=parsed.exercises,
        )
        count = len(workout.exercises)
        logger.info(
            "stored workout %s type=%s exercises=%d parse_failed=%s",
            workout.id,
            workout.workout_type.value if workout.workout_type else None,
            count,
            parsed.failed,
        )
        return IngestionResult(workout=workout, exercise_count=count, parse_failed=parsed.failed)
