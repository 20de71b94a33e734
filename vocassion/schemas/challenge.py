from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.models.challenge import ChallengeStatus, ChallengeType
from vocassion.models.goal import IkigaiCategory
from vocassion.schemas.common import strip_required
from vocassion.schemas.gamification import StreakUpdateResponse


class ChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    type: ChallengeType
    category: Optional[IkigaiCategory] = None
    points: int
    status: ChallengeStatus
    start_date: date
    end_date: Optional[date] = None
    completed_at: Optional[datetime] = None


class CompleteChallengeRequest(BaseModel):
    challenge_id: int = Field(gt=0, examples=[1])


class ChallengeCompletionResponse(BaseModel):
    challenge: ChallengeResponse
    points_awarded: int
    total_points: int
    streak: StreakUpdateResponse
    achievements_unlocked: list[str] = Field(default_factory=list)


class ChallengeCreateRequest(BaseModel):
    """A personal weekly or special challenge. Daily ones come from the templates."""
    title: Annotated[str, Field(min_length=1, max_length=256)]
    description: str = ""
    points: int = Field(default=0, ge=0, le=1000)
    type: Literal["weekly", "special"] = "special"
    category: Optional[IkigaiCategory] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v):
        return strip_required(v, "title")
