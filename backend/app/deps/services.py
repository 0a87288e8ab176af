# app/deps/services.py
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.repositories.workout_repo import WorkoutRepository
from app.services.analytics import AnalyticsService
from app.services.ingestion import IngestionConfig, IngestionService
from app.services.interpreter import InterpretationGateway, Interpreter, InterpreterConfig
from app.settings import get_settings

@lru_cache
def get_interpreter() -> Interpreter:
    # one gateway (and one HTTP client) per process
    return InterpretationGateway(InterpreterConfig.from_settings(get_settings()))

def get_workout_repo(db: Session = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)

def get_analytics(repo: WorkoutRepository = Depends(get_workout_repo)) -> AnalyticsService:
    return AnalyticsService(repo)

def get_ingestion(
    repo: WorkoutRepository = Depends(get_workout_repo),
    interpreter: Interpreter = Depends(get_interpreter),
) -> IngestionService:
    return IngestionService(repo, interpreter, IngestionConfig.from_settings(get_settings()))
