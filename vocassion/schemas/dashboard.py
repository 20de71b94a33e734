from typing import Optional

from pydantic import BaseModel

from vocassion.schemas.challenge import ChallengeResponse
from vocassion.schemas.gamification import AchievementResponse
from vocassion.schemas.goal import GoalResponse
from vocassion.schemas.ikigai import IkigaiResponse
from vocassion.schemas.profile import ProfileResponse


class DashboardStatsResponse(BaseModel):
    completed_challenges: int
    completed_goals: int
    total_achievements: int
    current_points: int
    level: int
    streak_count: int


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    ikigai: Optional[IkigaiResponse] = None
    goals: list[GoalResponse]
    challenges: list[ChallengeResponse]
    achievements: list[AchievementResponse]
    stats: DashboardStatsResponse
