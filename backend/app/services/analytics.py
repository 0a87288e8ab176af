"""Read-only dashboard queries with parameter validation."""
from __future__ import annotations

from app.errors import InvalidQueryError, NotFoundError
from app.models import Workout
from app.repositories.base import Page, clamp_page
from app.repositories.workout_repo import WorkoutRepository
from app.schemas.analytics import CatalogueEntry, ProgressPoint, WeeklyStats

DEFAULT_PAGE_SIZE = 20
DEFAULT_WINDOW_DAYS = 90
MAX_WINDOW_DAYS = 3650


def clamp_days(days: int | None) -> int:
    if days is None or days < 1:
        return DEFAULT_WINDOW_DAYS
    return min(days, MAX_WINDOW_DAYS)


class AnalyticsService:
    def __init__(self, repo: WorkoutRepository):
        self.repo = repo

    def recent_workouts(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> Page[Workout]:
        limit, offset = clamp_page(limit, offset, default=DEFAULT_PAGE_SIZE)
        return self.repo.list_workouts(limit=limit, offset=offset)

    def workout_detail(self, workout_id: str) -> Workout:
        workout = self.repo.get_workout(workout_id)
        if workout is None:
            raise NotFoundError(f"workout {workout_id} not found")
        return workout

    def exercise_progress(self, name: str | None, days: int | None = DEFAULT_WINDOW_DAYS) -> list[ProgressPoint]:
        if not name or not name.strip():
            raise InvalidQueryError("Exercise name is required")
        return self.repo.get_exercise_progress(name, days=clamp_days(days))

    def exercise_catalogue(self) -> list[CatalogueEntry]:
        return self.repo.get_exercise_catalogue()

    def weekly_stats(self) -> WeeklyStats:
        return self.repo.get_weekly_stats()
