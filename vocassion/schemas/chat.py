from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from vocassion.schemas.common import strip_required


class ChatMessageRequest(BaseModel):
    message: Annotated[str, Field(min_length=1, max_length=2_000)]

    @field_validator("message", mode="before")
    @classmethod
    def message_not_blank(cls, v):
        return strip_required(v, "message")


class ChatMessageResponse(BaseModel):
    message: str
    user_id: str
    delivered: bool = Field(description="False when realtime broadcast is disabled or failed.")
