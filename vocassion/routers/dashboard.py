"""
Dashboard router.

GET /api/dashboard — profile, Ikigai map, latest activity and headline stats
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.challenge import ChallengeResponse
from vocassion.schemas.dashboard import DashboardResponse, DashboardStatsResponse
from vocassion.schemas.gamification import AchievementResponse
from vocassion.schemas.goal import GoalResponse
from vocassion.schemas.ikigai import IkigaiResponse
from vocassion.schemas.profile import ProfileResponse
from vocassion.services.gamification import get_dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse, summary="Dashboard summary")
def read_dashboard(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    dash = get_dashboard(db, profile)
    stats = dash.stats
    return DashboardResponse(
        profile=ProfileResponse.model_validate(dash.profile),
        ikigai=IkigaiResponse.from_map(dash.ikigai) if dash.ikigai else None,
        goals=[GoalResponse.model_validate(g) for g in dash.goals],
        challenges=[ChallengeResponse.model_validate(c) for c in dash.challenges],
        achievements=[AchievementResponse.from_achievement(a) for a in dash.achievements],
        stats=DashboardStatsResponse(
            completed_challenges=stats.completed_challenges,
            completed_goals=stats.completed_goals,
            total_achievements=stats.total_achievements,
            current_points=stats.current_points,
            level=stats.level,
            streak_count=stats.streak_count,
        ),
    )
