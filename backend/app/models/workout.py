import uuid
import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Date, DateTime, Text, Enum as SAEnum
from app.db import Base
from app.services.normalizer import WorkoutType

PHONE_MAX_LENGTH = 64

def new_id() -> str:
    return str(uuid.uuid4())

def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

class Workout(Base):
    __tablename__ = "workouts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    workout_type: Mapped[WorkoutType | None] = mapped_column(
        SAEnum(WorkoutType, name="workout_type", native_enum=False, create_constraint=True, length=16),
        nullable=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    raw_text: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(PHONE_MAX_LENGTH), nullable=True)
    # set in Python so same-second inserts still order deterministically
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Exercise.order_in_workout",
    )
