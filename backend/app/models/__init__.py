from app.models.workout import Workout
from app.models.exercise import Exercise

__all__ = ["Workout", "Exercise"]
