"""
Community request / response schemas.

GET  /api/community/posts                     → FeedResponse
POST /api/community/posts                     → PostCreateRequest → PostResponse
POST /api/community/posts/{id}/like           → LikeResponse
POST /api/community/posts/{id}/comments       → CommentCreateRequest → CommentResponse
GET  /api/community/challenges                → list[TeamChallengeResponse]
POST /api/community/challenges                → TeamChallengeCreateRequest → TeamChallengeResponse
POST /api/community/challenges/{id}/join      → ParticipantResponse
PUT  /api/community/challenges/{id}/progress  → TeamProgressRequest → TeamProgressResponse
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.schemas.common import strip_required


class PostCreateRequest(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256)]
    content: Annotated[str, Field(min_length=1, max_length=10_000)]
    type: str = Field(
        default="reflection",
        description='"achievement" | "challenge" | "reflection" | "map"',
    )

    @field_validator("title", "content", mode="before")
    @classmethod
    def not_blank(cls, v, info):
        return strip_required(v, info.field_name)


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    community_id: str
    title: str
    content: str
    type: str
    created_at: datetime
    author_name: Optional[str] = None
    author_image: Optional[str] = None
    likes: int = 0
    comments: int = 0


class FeedResponse(BaseModel):
    total: int
    items: list[PostResponse]


class LikeResponse(BaseModel):
    post_id: int
    liked: bool
    likes: int


class CommentCreateRequest(BaseModel):
    content: Annotated[str, Field(min_length=1, max_length=2_000)]

    @field_validator("content", mode="before")
    @classmethod
    def content_not_blank(cls, v):
        return strip_required(v, "content")


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    user_id: str
    content: str
    created_at: datetime


class TeamChallengeCreateRequest(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256)]
    description: str = ""
    category: str = Field(description='"skills" | "mission" | "vocation" | "passion"')
    reward_points: int = Field(default=0, ge=0)
    end_date: date

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v):
        return strip_required(v, "title")


class TeamChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    creator_id: str
    title: str
    description: str
    category: str
    reward_points: int
    end_date: date
    created_at: datetime
    participants: int = 0


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    challenge_id: int
    user_id: str
    progress: int
    status: str
    joined_at: datetime


class TeamProgressRequest(BaseModel):
    progress: int = Field(description="Clamped to 0..100.")


class TeamProgressResponse(BaseModel):
    participant: ParticipantResponse
    points_awarded: int
