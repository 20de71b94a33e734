"""
Chat router.

POST /api/chat — broadcast a message to the shared chat channel
"""
from fastapi import APIRouter, Depends

from vocassion.core.auth import get_current_user_id
from vocassion.schemas.chat import ChatMessageRequest, ChatMessageResponse
from vocassion.services.realtime import Broadcaster, get_broadcaster, publish_chat_message

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatMessageResponse, summary="Send a chat message")
def post_message(
    payload: ChatMessageRequest,
    user_id: str = Depends(get_current_user_id),
    broadcaster: Broadcaster = Depends(get_broadcaster),
):
    """
    Messages are not stored. Delivery is best effort: `delivered` is false
    when broadcasting is disabled or the push service rejected the event.
    """
    delivered = publish_chat_message(broadcaster, user_id, payload.message)
    return ChatMessageResponse(message=payload.message, user_id=user_id, delivered=delivered)
