import datetime as dt
from pydantic import BaseModel, Field, computed_field
from app.services.normalizer import WorkoutType

class ExerciseRead(BaseModel):
    id: str
    name: str
    weight: float | None = None
    reps: int | None = None
    sets: int
    notes: str | None = None
    order_in_workout: int

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: str
    type: WorkoutType | None = Field(default=None, validation_alias="workout_type")
    date: dt.date
    raw_text: str
    created_at: dt.datetime
    exercises: list[ExerciseRead] = []

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def exercise_count(self) -> int:
        return len(self.exercises)
