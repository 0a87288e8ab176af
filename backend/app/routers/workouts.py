from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.deps.services import get_analytics
from app.errors import NotFoundError
from app.schemas.workout import WorkoutRead
from app.services.analytics import AnalyticsService, DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/api/workouts", tags=["workouts"])

@router.get("", response_model=list[WorkoutRead])
def list_workouts(
    analytics: AnalyticsService = Depends(get_analytics),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    offset: int = Query(0),
):
    # out-of-range values are clamped by the service, not rejected
    return analytics.recent_workouts(limit=limit, offset=offset).items

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: str, analytics: AnalyticsService = Depends(get_analytics)):
    try:
        return analytics.workout_detail(workout_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
