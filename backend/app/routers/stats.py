from fastapi import APIRouter, Depends
from app.deps.services import get_analytics
from app.schemas.analytics import WeeklyStatsRead
from app.services.analytics import AnalyticsService

router = APIRouter(prefix="/api/stats", tags=["stats"])

@router.get("/weekly", response_model=WeeklyStatsRead)
def weekly_stats(analytics: AnalyticsService = Depends(get_analytics)):
    return analytics.weekly_stats()
