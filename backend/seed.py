"""
Populate the database with about a month of sample workouts.

Run: cd backend && python seed.py [--clear]
"""
import argparse
from datetime import date, timedelta

from sqlalchemy import delete

from app.db import SessionLocal, init_db
from app.models import Workout
from app.repositories.workout_repo import WorkoutRepository
from app.services.normalizer import NormalizedExercise as Ex, WorkoutType

#(days ago, type, raw text, exercises)
SEED_WORKOUTS = [
    (28, WorkoutType.UPPER,
     "Upper day - 5x5 bench at 185, 4x10 incline DB, 5x5 rows at 225, lat pulldowns, face pulls",
     [Ex("Bench Press", 185, 8, 5), Ex("Incline Dumbbell Press", 70, 10, 4),
      Ex("Barbell Row", 225, 6, 5), Ex("Lat Pulldown", 180, 10, 3),
      Ex("Face Pull", 90, 15, 3, "light, good pump")]),
    (26, WorkoutType.LOWER,
     "Leg day - 5x5 squats @ 275, 4x6 RDLs, leg press, hamstring curls, calves",
     [Ex("Squat", 275, 6, 5), Ex("Romanian Deadlift", 315, 6, 4),
      Ex("Leg Press", 495, 10, 3), Ex("Leg Curl", 150, 12, 3), Ex("Calf Raise", 405, 15, 3)]),
    (24, WorkoutType.PUSH,
     "Push day - incline bench, OHP 4x6, laterals, pushdowns",
     [Ex("Incline Bench Press", 185, 6, 4), Ex("Overhead Press", 155, 6, 4),
      Ex("Dumbbell Lateral Raise", 30, 12, 4), Ex("Tricep Rope Pushdown", 100, 12, 3)]),
    (22, WorkoutType.PULL,
     "Pull - deadlift 3x5 405, pullups AMRAP, cable rows, curls",
     [Ex("Deadlift", 405, 5, 3), Ex("Pull Up", None, None, 3, "AMRAP"),
      Ex("Seated Cable Row", 160, 10, 3), Ex("Barbell Curl", 85, 10, 3)]),
    (21, WorkoutType.UPPER,
     "Upper - bench 5x5 190, rows 5x5 230, dips",
     [Ex("Bench Press", 190, 5, 5), Ex("Barbell Row", 230, 5, 5), Ex("Dips", None, 12, 3, "bodyweight")]),
    (19, WorkoutType.LOWER,
     "Legs - squat 5x5 285, RDL, walking lunges",
     [Ex("Squat", 285, 5, 5), Ex("Romanian Deadlift", 320, 6, 4), Ex("Walking Lunge", 50, 12, 3)]),
    (14, WorkoutType.UPPER,
     "Upper - bench 5x5 195, pulldowns, laterals",
     [Ex("Bench Press", 195, 5, 5), Ex("Lat Pulldown", 185, 10, 3), Ex("Lateral Raise", 25, 15, 3)]),
    (12, WorkoutType.LEGS,
     "Legs - squat 3x3 305, leg press, calves",
     [Ex("Squat", 305, 3, 3), Ex("Leg Press", 515, 10, 3), Ex("Calf Raise", 415, 15, 3)]),
    (7, WorkoutType.FULL_BODY,
     "Full body - deadlift 1x5 425, bench 3x8 175, chinups",
     [Ex("Deadlift", 425, 5, 1), Ex("Bench Press", 175, 8, 3), Ex("Chin Up", None, 8, 3)]),
    (5, WorkoutType.PUSH,
     "Push - bench 5x5 200, OHP 3x5 160, skullcrushers",
     [Ex("Bench Press", 200, 5, 5), Ex("Overhead Press", 160, 5, 3), Ex("Skullcrusher", 95, 10, 3)]),
    (2, WorkoutType.PULL,
     "Pull - rows 4x8 205 (135+35 each side), curls, face pulls",
     [Ex("Barbell Row", 205, 8, 4, "135+35 each side"), Ex("Hammer Curl", 40, 12, 3),
      Ex("Face Pull", 95, 15, 3)]),
    (1, WorkoutType.LOWER,
     "Lower - squat 5x5 290, leg curl, calves",
     [Ex("Squat", 290, 5, 5), Ex("Leg Curl", 155, 12, 3), Ex("Calf Raise", 405, 15, 4)]),
]

def seed(clear: bool = False) -> int:
    init_db()
    today = date.today()
    with SessionLocal() as db:
        if clear:
            db.execute(delete(Workout))
            db.commit()
        repo = WorkoutRepository(db)
        for days_ago, workout_type, raw_text, exercises in SEED_WORKOUTS:
            repo.create_workout(
                workout_type=workout_type,
                date=today - timedelta(days=days_ago),
                raw_text=raw_text,
                exercises=exercises,
            )
    return len(SEED_WORKOUTS)

def main():
    parser = argparse.ArgumentParser(description="Seed sample workouts")
    parser.add_argument("--clear", action="store_true", help="delete existing workouts first")
    args = parser.parse_args()
    n = seed(clear=args.clear)
    print(f"Seeded {n} workouts")

if __name__ == "__main__":
    main()
