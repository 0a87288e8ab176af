from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint,
)
from app.db import Base
from app.models.workout import new_id, utcnow
from app.services.normalizer import MAX_NAME_LENGTH

class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        CheckConstraint("sets >= 1", name="ck_exercises_sets_positive"),
        CheckConstraint("weight IS NULL OR weight > 0", name="ck_exercises_weight_positive"),
        CheckConstraint("reps IS NULL OR reps > 0", name="ck_exercises_reps_positive"),
        UniqueConstraint("workout_id", "order_in_workout", name="uq_exercises_workout_order"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    workout_id: Mapped[str] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column("exercise_name", String(MAX_NAME_LENGTH), nullable=False, index=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_in_workout: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    workout = relationship("Workout", back_populates="exercises")
