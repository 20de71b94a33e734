"""
Goal request / response schemas.

POST /api/goals                 → GoalCreateRequest   → GoalDetailResponse
POST /api/goals/{id}/unlock     →                       UnlockResponse
PUT  /api/goals/{id}            → GoalProgressRequest → GoalProgressResponse
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.models.goal import GoalStatus, IkigaiCategory
from vocassion.schemas.common import strip_required


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class MilestoneCreate(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256)]
    description: Optional[str] = None
    points_reward: int = Field(default=0, ge=0)


class SubGoalCreate(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256)]
    description: Optional[str] = None
    points_reward: int = Field(default=0, ge=0)
    milestones: list[MilestoneCreate] = Field(default_factory=list)


class GoalCreateRequest(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256)]
    description: str = ""
    category: IkigaiCategory
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    points_cost: int = Field(
        default=0, ge=0,
        description="Points spent to unlock. A positive cost creates the goal locked.",
    )
    points_reward: int = Field(default=0, ge=0, description="Credited once on completion.")
    deadline: Optional[date] = None
    sub_goals: list[SubGoalCreate] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v):
        return strip_required(v, "title")


class GoalProgressRequest(BaseModel):
    progress: int = Field(description="New progress, clamped to 0..100.", examples=[50])


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MilestoneResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    is_completed: bool
    points_reward: int
    completed_at: Optional[datetime] = None


class SubGoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    order: int
    progress: int
    status: GoalStatus
    points_reward: int
    milestones: list[MilestoneResponse] = Field(default_factory=list)


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    type: str
    created_at: datetime


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: IkigaiCategory
    difficulty: str
    status: GoalStatus
    progress: int
    points_cost: int
    points_reward: int
    deadline: Optional[date] = None
    completed_at: Optional[datetime] = None
    created_at: datetime


class GoalDetailResponse(GoalResponse):
    sub_goals: list[SubGoalResponse] = Field(default_factory=list)
    feedback: list[FeedbackResponse] = Field(default_factory=list)


class UnlockResponse(BaseModel):
    goal: GoalDetailResponse
    points_spent: int
    points_remaining: int


class GoalProgressResponse(BaseModel):
    goal: GoalDetailResponse
    points_awarded: int = 0
    milestone_completed: bool = False
    sub_goal_completed: bool = False
    goal_completed: bool = False
