from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocassion.schemas.common import strip_required
from vocassion.schemas.ikigai import IkigaiResponse


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Opaque user id forwarded by the auth proxy.")
    name: str
    username: str
    slug: str
    email: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=256)
    image_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v):
        return None if v is None else strip_required(v, "name")


class PublicProfileResponse(BaseModel):
    """Another user's profile as shown to the community. Email is withheld."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    username: str
    slug: str
    image_url: Optional[str] = None
    created_at: datetime
    ikigai: Optional[IkigaiResponse] = None
