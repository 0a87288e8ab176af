# app/repositories/workout_repo.py
from __future__ import annotations
import datetime as dt
import logging
from typing import Iterable, Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session, selectinload

from app.models import Exercise, Workout
from app.repositories.base import BaseRepository, Page
from app.schemas.analytics import CatalogueEntry, ProgressPoint, WeeklyStats
from app.services.normalizer import NormalizedExercise, WorkoutType

log = logging.getLogger(__name__)

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def _hydrated(self):
        return select(Workout).options(selectinload(Workout.exercises))

    # READS
    def get_workout(self, workout_id: str) -> Optional[Workout]:
        stmt = self._hydrated().where(Workout.id == workout_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_workouts(self, *, limit: int = 20, offset: int = 0) -> Page[Workout]:
        # paginate whole workouts; exercises come from one selectin query per page
        stmt = self._hydrated().order_by(Workout.date.desc(), Workout.created_at.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def get_exercise_progress(
        self, name: str, *, days: int = 90, today: dt.date | None = None
    ) -> list[ProgressPoint]:
        today = today or dt.date.today()
        since = today - dt.timedelta(days=days)
        stmt = (
            select(Workout.date, Exercise.weight, Exercise.reps, Exercise.sets, Exercise.notes)
            .select_from(Exercise)
            .join(Workout, Exercise.workout_id == Workout.id)
            .where(
                func.lower(Exercise.name) == name.strip().lower(),
                Workout.date >= since,
                Workout.date <= today,
            )
            .order_by(Workout.date.asc(), Workout.created_at.asc(), Exercise.order_in_workout.asc())
        )
        return [ProgressPoint(*row) for row in self.db.execute(stmt).all()]

    def get_weekly_stats(self, *, today: dt.date | None = None) -> WeeklyStats:
        """Totals for Monday of the current week through `today`, inclusive."""
        today = today or dt.date.today()
        week_start = today - dt.timedelta(days=today.weekday())
        volume = func.coalesce(Exercise.weight, 0) * func.coalesce(Exercise.reps, 0) * Exercise.sets
        stmt = (
            select(
                func.count(distinct(Workout.id)),
                func.count(distinct(Exercise.id)),
                func.coalesce(func.sum(volume), 0),
            )
            .select_from(Workout)
            .outerjoin(Exercise, Exercise.workout_id == Workout.id)
            .where(Workout.date >= week_start, Workout.date <= today)
        )
        workouts, exercises, total_volume = self.db.execute(stmt).one()
        return WeeklyStats(
            week_start=week_start,
            total_workouts=workouts,
            total_exercises=exercises,
            total_volume=round(float(total_volume)),
        )

    def get_exercise_catalogue(self) -> list[CatalogueEntry]:
        key = func.lower(Exercise.name)
        n = func.count(Exercise.id)
        stmt = select(func.min(Exercise.name), n).group_by(key).order_by(n.desc(), key.asc())
        return [CatalogueEntry(name=name, count=count) for name, count in self.db.execute(stmt).all()]

    # WRITES
    def create_workout(
        self,
        *,
        workout_type: WorkoutType | None,
        date: dt.date,
        raw_text: str,
        phone_number: str | None = None,
        exercises: Iterable[NormalizedExercise] = (),
    ) -> Workout:
        """
        Insert a workout and all of its exercises in one transaction.

        Exercises keep the order they are given in (order_in_workout = index).
        On any failure the whole unit is rolled back and the error re-raised,
        so readers never see a workout with only some of its exercises.
        """
        workout = Workout(workout_type=workout_type, date=date, raw_text=raw_text, phone_number=phone_number)
        try:
            self.db.add(workout)
            self.db.flush()
            workout_id = workout.id
            for index, ex in enumerate(exercises):
                self.db.add(Exercise(
                    workout_id=workout_id,
                    name=ex.name,
                    weight=ex.weight,
                    reps=ex.reps,
                    sets=ex.sets,
                    notes=ex.notes,
                    order_in_workout=index,
                ))
            self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            log.warning("rolled back workout insert (date=%s)", date)
            raise
        return self.get_workout(workout_id)

    def delete_workout(self, workout_id: str) -> bool:
        workout = self.db.get(Workout, workout_id)
        if not workout:
            return False
        self.db.delete(workout)
        self.db.commit()
        return True
