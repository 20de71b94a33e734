from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.schemas.common import strip_required
from vocassion.schemas.gamification import StreakUpdateResponse


class ReflectionCreateRequest(BaseModel):
    mood: Annotated[str, Field(min_length=1, max_length=64, examples=["grateful"])]
    gratitude: str = ""
    challenges: str = ""
    wins: str = ""
    content: Annotated[str, Field(min_length=1, max_length=10_000)]

    @field_validator("mood", "content", mode="before")
    @classmethod
    def not_blank(cls, v, info):
        return strip_required(v, info.field_name)


class ReflectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: date
    mood: str
    gratitude: str
    challenges: str
    wins: str
    content: str
    created_at: datetime


class ReflectionCreateResponse(BaseModel):
    reflection: ReflectionResponse
    streak: StreakUpdateResponse
