from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.deps.services import get_analytics
from app.errors import InvalidQueryError
from app.schemas.analytics import CatalogueEntryRead, ProgressPointRead
from app.services.analytics import AnalyticsService, DEFAULT_WINDOW_DAYS

router = APIRouter(prefix="/api/exercises", tags=["exercises"])

@router.get("/progress", response_model=list[ProgressPointRead])
def exercise_progress(
    analytics: AnalyticsService = Depends(get_analytics),
    name: str | None = Query(None),
    days: int = Query(DEFAULT_WINDOW_DAYS),
):
    try:
        return analytics.exercise_progress(name, days)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/names", response_model=list[CatalogueEntryRead])
def exercise_names(analytics: AnalyticsService = Depends(get_analytics)):
    return analytics.exercise_catalogue()
