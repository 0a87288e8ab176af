import datetime as dt
from dataclasses import dataclass
from pydantic import BaseModel

# Plain rows built by WorkoutRepository; the *Read models below serialize them.

@dataclass(slots=True)
class ProgressPoint:
    date: dt.date
    weight: float | None
    reps: int | None
    sets: int
    notes: str | None

@dataclass(slots=True)
class WeeklyStats:
    week_start: dt.date
    total_workouts: int
    total_exercises: int
    total_volume: int

@dataclass(slots=True)
class CatalogueEntry:
    name: str
    count: int

class ProgressPointRead(BaseModel):
    date: dt.date
    weight: float | None = None
    reps: int | None = None
    sets: int
    notes: str | None = None

    model_config = {"from_attributes": True}

class CatalogueEntryRead(BaseModel):
    name: str
    count: int

    model_config = {"from_attributes": True}

class WeeklyStatsRead(BaseModel):
    week_start: dt.date
    total_workouts: int
    total_exercises: int
    total_volume: int

    model_config = {"from_attributes": True}
