"""
Point the app at a throwaway SQLite file and switch off the real
interpreter key. Runs before any test module imports the app.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["ALLOWED_PHONES"] = ""

import pytest
from sqlalchemy import delete

from app.db import SessionLocal, engine, init_db
from app.deps.services import get_interpreter
from app.main import app
from app.models import Exercise, Workout
from app.repositories.workout_repo import WorkoutRepository

init_db()


class StubInterpreter:
    """Returns a canned NormalizedWorkout and records what it was asked."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def interpret(self, raw_text):
        self.calls.append(raw_text)
        return self.result


@pytest.fixture(autouse=True)
def _empty_tables():
    yield
    with engine.begin() as conn:
        conn.execute(delete(Exercise))
        conn.execute(delete(Workout))


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def repo(db):
    return WorkoutRepository(db)


@pytest.fixture
def use_interpreter():
    """Install a StubInterpreter behind the API for the duration of a test."""
    def _install(result):
        stub = StubInterpreter(result)
        app.dependency_overrides[get_interpreter] = lambda: stub
        return stub
    yield _install
    app.dependency_overrides.pop(get_interpreter, None)
