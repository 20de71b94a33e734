from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from vocassion.models.ikigai import IkigaiMap, SECTIONS
from vocassion.schemas.common import strip_required

SectionValues = Annotated[list[str], Field(default_factory=list, max_length=50)]


class IkigaiRequest(BaseModel):
    """The four Ikigai sections. Blank entries are dropped."""
    passion: SectionValues
    mission: SectionValues
    profession: SectionValues
    vocation: SectionValues


class IkigaiResponse(BaseModel):
    user_id: str
    passion: list[str]
    mission: list[str]
    profession: list[str]
    vocation: list[str]
    is_complete: bool = Field(description="True when every section has at least one entry.")
    updated_at: Optional[datetime] = None

    @classmethod
    def from_map(cls, ikigai: IkigaiMap) -> "IkigaiResponse":
        return cls(
            user_id=ikigai.user_id,
            is_complete=ikigai.is_complete,
            updated_at=ikigai.updated_at,
            **{name: ikigai.section(name) for name in SECTIONS},
        )


class IkigaiSaveResponse(BaseModel):
    ikigai: IkigaiResponse
    created: bool
    points_awarded: int
    achievements_unlocked: list[str] = Field(default_factory=list)


class SectionProgressRequest(BaseModel):
    section: str = Field(examples=["passion"])

    @field_validator("section", mode="before")
    @classmethod
    def section_not_blank(cls, v):
        return strip_required(v, "section")


class SectionProgressResponse(BaseModel):
    section: str
    points_awarded: int
    is_complete: bool
    achievements_unlocked: list[str] = Field(default_factory=list)
