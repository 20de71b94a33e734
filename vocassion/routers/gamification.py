"""
Gamification router.

GET  /api/gamification          — points, level, achievements, streaks
POST /api/gamification          — record an activity and credit its points
GET  /api/gamification/ledger   — reward / penalty history
GET  /api/achievements/recent   — latest achievements with category emoji
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.gamification import (
    AchievementResponse,
    ActivityRequest,
    ActivityResponse,
    LedgerEntryResponse,
    LedgerResponse,
    ProgressResponse,
    StreakResponse,
    StreakUpdateResponse,
)
from vocassion.services.achievements import list_achievements
from vocassion.services.gamification import get_progress, record_activity
from vocassion.services.ledger import get_history, get_level, get_total_points

router = APIRouter(prefix="/api/gamification", tags=["gamification"])
achievements_router = APIRouter(prefix="/api/achievements", tags=["gamification"])


@router.get("", response_model=ProgressResponse, summary="Progress summary")
def read_progress(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    progress = get_progress(db, profile.id)
    return ProgressResponse(
        points=progress.points,
        level=progress.level,
        achievements=[AchievementResponse.from_achievement(a) for a in progress.achievements],
        streaks=[StreakResponse.model_validate(s) for s in progress.streaks],
    )


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an activity",
    responses={201: {"description": "Points credited."}, 422: {"description": "Validation error."}},
)
def post_activity(
    payload: ActivityRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """
    Credit `points` for a client-reported activity. An activity of type
    `daily_reflection` also checks in the daily reflection streak.
    """
    result = record_activity(db, profile.id, payload.type, payload.points)
    return ActivityResponse(
        points_awarded=result.points_awarded,
        total_points=result.total_points,
        streak=StreakUpdateResponse.from_update(result.streak) if result.streak else None,
    )


@router.get("/ledger", response_model=LedgerResponse, summary="Points history, newest first")
def read_ledger(
    limit: int = Query(default=50, ge=1, le=200, description="Page size."),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    total = get_total_points(db, profile.id)
    return LedgerResponse(
        total_points=total,
        level=get_level(total),
        entries=[LedgerEntryResponse.model_validate(e) for e in get_history(db, profile.id, limit)],
    )


@achievements_router.get(
    "/recent",
    response_model=list[AchievementResponse],
    summary="Most recent achievements",
)
def recent_achievements(
    limit: int = Query(default=5, ge=1, le=50),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return [
        AchievementResponse.from_achievement(a)
        for a in list_achievements(db, profile.id, limit=limit)
    ]
