from fastapi.testclient import TestClient
from app.main import app
from app.db import SessionLocal
from app.deps.services import get_ingestion
from app.routers.webhook import twiml
from app.repositories.workout_repo import WorkoutRepository
from app.services.normalizer import NormalizedExercise as Ex, NormalizedWorkout, WorkoutType
from app.settings import get_settings

client = TestClient(app)

def stored_workouts():
    with SessionLocal() as db:
        return WorkoutRepository(db).list_workouts().items

def test_sms_creates_workout_and_confirms(use_interpreter):
    stub = use_interpreter(NormalizedWorkout(
        workout_type=WorkoutType.LEGS,
        exercises=(Ex("Squat", 275, 5, 5), Ex("Leg Press", 495, 10, 3)),
    ))
    r = client.post("/webhook/sms", data={"Body": "squat 5x5 275, leg press 3x10 495", "From": "+15550001"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/xml")
    assert "<Message>Workout saved! Parsed 2 exercises.</Message>" in r.text
    assert stub.calls == ["squat 5x5 275, leg press 3x10 495"]

    [w] = stored_workouts()
    assert w.phone_number == "+15550001"
    assert w.workout_type is WorkoutType.LEGS

def test_sms_with_failed_parse_still_saves():
    # no API key configured in tests, so the real gateway falls back
    r = client.post("/webhook/sms", data={"Body": "did some stuff", "From": "+15550001"})
    assert "Workout saved! Parsed 0 exercises." in r.text
    [w] = stored_workouts()
    assert w.workout_type is None
    assert w.exercises == []
    assert w.raw_text == "did some stuff"

def test_sms_missing_fields():
    r = client.post("/webhook/sms", data={"From": "+15550001"})
    assert r.status_code == 200
    assert "<Message>Invalid request</Message>" in r.text
    r = client.post("/webhook/sms", data={"Body": "bench"})
    assert "<Message>Invalid request</Message>" in r.text
    assert stored_workouts() == []

def test_sms_from_unlisted_phone_is_rejected(monkeypatch, use_interpreter):
    stub = use_interpreter(NormalizedWorkout.failure())
    monkeypatch.setattr(get_settings(), "ALLOWED_PHONES", "+15550001,+15550002")
    r = client.post("/webhook/sms", data={"Body": "bench", "From": "+15559999"})
    assert "<Message>Not authorized</Message>" in r.text
    assert stub.calls == []
    assert stored_workouts() == []

    r = client.post("/webhook/sms", data={"Body": "bench", "From": "+15550002"})
    assert "Workout saved!" in r.text

def test_sms_storage_error_is_reported():
    class Broken:
        def submit(self, raw_text, submitter=None):
            raise RuntimeError("disk full")
    app.dependency_overrides[get_ingestion] = lambda: Broken()
    try:
        r = client.post("/webhook/sms", data={"Body": "bench", "From": "+15550001"})
    finally:
        app.dependency_overrides.pop(get_ingestion, None)
    assert r.status_code == 200
    assert "Error processing workout. Please try again." in r.text

def test_raw_text_with_markup_is_stored_verbatim(use_interpreter):
    use_interpreter(NormalizedWorkout(exercises=(Ex("Curl", 30, 10, 3),)))
    r = client.post("/webhook/sms", data={"Body": "curls <3 & more", "From": "+15550001"})
    assert "Parsed 1 exercise." in r.text
    [w] = stored_workouts()
    assert w.raw_text == "curls <3 & more"

def test_twiml_escapes_message():
    body = twiml('Lifted <heavy> & "fast"').body.decode()
    assert "<Message>Lifted &lt;heavy&gt; &amp; \"fast\"</Message>" in body
    assert body.startswith('<?xml version="1.0" encoding="UTF-8"?>')
