from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.errors import InvalidQueryError, UnauthorizedSubmitterError
from app.models.workout import PHONE_MAX_LENGTH
from app.services.ingestion import (
    IngestionConfig,
    IngestionService,
    confirmation_message,
)
from app.services.interpreter import InterpretationGateway, InterpreterConfig
from app.services.normalizer import MAX_NAME_LENGTH, NormalizedExercise as Ex, NormalizedWorkout, WorkoutType
from app.settings import Settings
from conftest import StubInterpreter

PARSED = NormalizedWorkout(
    workout_type=WorkoutType.PUSH,
    exercises=(Ex("Bench Press", 185, 5, 5), Ex("Dips", None, 12, 3, "bodyweight")),
)


def service(repo, result=PARSED, allowed=()):
    stub = StubInterpreter(result)
    return IngestionService(repo, stub, IngestionConfig(frozenset(allowed))), stub


def test_submit_stores_interpreted_workout(repo):
    svc, stub = service(repo)
    result = svc.submit("bench 5x5 185, dips 3x12", "+15550001", today=date(2024, 5, 10))

    assert stub.calls == ["bench 5x5 185, dips 3x12"]
    assert result.exercise_count == 2
    assert result.parse_failed is False
    w = repo.get_workout(result.workout.id)
    assert w.workout_type is WorkoutType.PUSH
    assert w.date == date(2024, 5, 10)
    assert w.raw_text == "bench 5x5 185, dips 3x12"
    assert w.phone_number == "+15550001"
    assert [(e.name, e.order_in_workout) for e in w.exercises] == [("Bench Press", 0), ("Dips", 1)]


def test_submit_defaults_to_today(repo):
    svc, _ = service(repo)
    assert svc.submit("bench").workout.date == date.today()


def test_failed_interpretation_is_still_stored(repo):
    svc, _ = service(repo, NormalizedWorkout.failure())
    result = svc.submit("asdf qwerty")

    assert result.parse_failed is True
    assert result.exercise_count == 0
    stored = repo.get_workout(result.workout.id)
    assert stored.workout_type is None
    assert stored.exercises == []
    assert stored.raw_text == "asdf qwerty"
    assert confirmation_message(result.exercise_count) == "Workout saved! Parsed 0 exercises."


def test_missing_api_key_end_to_end_stores_empty_workout(repo):
    client = MagicMock()
    gateway = InterpretationGateway(InterpreterConfig(api_key=None), client=client)
    svc = IngestionService(repo, gateway, IngestionConfig())

    result = svc.submit("squat 5x5 275")

    client.messages.create.assert_not_called()
    assert result.parse_failed
    assert repo.get_workout(result.workout.id).exercises == []


def test_empty_allow_list_accepts_anyone(repo):
    svc, _ = service(repo)
    assert svc.is_allowed("+15550001")
    assert svc.is_allowed(None)


def test_allow_list_rejects_unknown_submitter_before_interpreting(repo):
    svc, stub = service(repo, allowed={"+15550001"})
    with pytest.raises(UnauthorizedSubmitterError):
        svc.submit("bench", "+15559999")
    assert stub.calls == []
    assert repo.list_workouts().total == 0
    assert svc.submit("bench", "+15550001").exercise_count == 2


def test_blank_text_is_rejected(repo):
    svc, stub = service(repo)
    with pytest.raises(InvalidQueryError):
        svc.submit("   ")
    assert stub.calls == []


@pytest.mark.parametrize("count,message", [
    (0, "Workout saved! Parsed 0 exercises."),
    (1, "Workout saved! Parsed 1 exercise."),
    (7, "Workout saved! Parsed 7 exercises."),
])
def test_confirmation_message(count, message):
    assert confirmation_message(count) == message


def test_config_from_settings_splits_phone_list():
    cfg = IngestionConfig.from_settings(Settings(ALLOWED_PHONES=" +15550001, ,+15550002 "))
    assert cfg.allowed_submitters == frozenset({"+15550001", "+15550002"})


def test_out_of_range_numbers_do_not_lose_the_submission(repo):
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(content=[SimpleNamespace(
        type="text",
        text='{"workout_type": "PUSH", "exercises": [{"exercise_name": "%s", "weight": 135, '
             '"reps": 1e20, "sets": 1e20}]}' % ("Bench Press " * 30),
    )])
    gateway = InterpretationGateway(InterpreterConfig(api_key="test-key"), client=client)
    svc = IngestionService(repo, gateway, IngestionConfig())

    result = svc.submit("bench 1e20 reps")

    assert repo.list_workouts().total == 1
    [ex] = repo.get_workout(result.workout.id).exercises
    assert ex.reps is None
    assert ex.sets == 1
    assert ex.weight == 135
    assert len(ex.name) <= MAX_NAME_LENGTH


def test_long_submitter_id_is_stored_truncated(repo):
    svc, _ = service(repo)
    submitter = "whatsapp:+1555" + "0" * 100
    result = svc.submit("bench", submitter)
    stored = repo.get_workout(result.workout.id).phone_number
    assert stored == submitter[:PHONE_MAX_LENGTH]
