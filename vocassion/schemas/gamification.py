"""
Gamification request / response schemas.

GET  /api/gamification          → ProgressResponse
POST /api/gamification          → ActivityRequest → ActivityResponse
GET  /api/gamification/ledger   → LedgerResponse
GET  /api/achievements/recent   → list[AchievementResponse]
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.models.achievement import Achievement
from vocassion.schemas.common import strip_required
from vocassion.services.achievements import category_emoji
from vocassion.services.streaks import StreakUpdate


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: str
    points: int = Field(description="Informational; not credited to the ledger.")
    unlocked_at: datetime
    emoji: Optional[str] = None

    @classmethod
    def from_achievement(cls, achievement: Achievement) -> "AchievementResponse":
        return cls.model_validate(achievement).model_copy(
            update={"emoji": category_emoji(achievement.category)}
        )


class StreakResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str = Field(description='Activity type, e.g. "daily_challenges".')
    current_count: int
    longest_count: int
    last_checkin: date


class StreakUpdateResponse(BaseModel):
    streak: StreakResponse
    outcome: str = Field(description='"created" | "continued" | "unchanged" | "reset"')
    achievements_unlocked: list[str] = Field(default_factory=list)

    @classmethod
    def from_update(cls, update: StreakUpdate) -> "StreakUpdateResponse":
        return cls(
            streak=StreakResponse.model_validate(update.streak),
            outcome=update.outcome.value,
            achievements_unlocked=list(update.achievements_unlocked),
        )


class ProgressResponse(BaseModel):
    points: int = Field(description="Sum of rewards minus sum of penalties.")
    level: int
    achievements: list[AchievementResponse]
    streaks: list[StreakResponse]


class ActivityRequest(BaseModel):
    type: Annotated[str, Field(
        min_length=1,
        max_length=64,
        description='Activity name. "daily_reflection" also checks in that streak.',
        examples=["daily_reflection", "ikigai_quiz"],
    )]
    points: int = Field(ge=0, le=1000, description="Points to credit.")

    @field_validator("type", mode="before")
    @classmethod
    def type_not_blank(cls, v):
        return strip_required(v, "type")


class ActivityResponse(BaseModel):
    points_awarded: int
    total_points: int
    streak: Optional[StreakUpdateResponse] = None


class LedgerEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: str = Field(description='"reward" or "penalty".')
    points: int = Field(description="Signed: negative for penalties.")
    description: str
    created_at: datetime


class LedgerResponse(BaseModel):
    total_points: int
    level: int
    entries: list[LedgerEntryResponse]
