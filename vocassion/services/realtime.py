"""
Best-effort realtime broadcast over Pusher Channels.

Publishing never fails a request: an unconfigured client or a delivery error
is logged and reported back as `False`.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import pusher

from vocassion.core.config import settings

logger = logging.getLogger(__name__)


class Broadcaster:
    def __init__(self, client: Optional[pusher.Pusher] = None) -> None:
        self.client = client

    @classmethod
    def from_settings(cls) -> "Broadcaster":
        if not settings.pusher_enabled:
            logger.info("Pusher credentials not set; realtime broadcast disabled.")
            return cls(client=None)
        return cls(client=pusher.Pusher(
            app_id=settings.PUSHER_APP_ID,
            key=settings.PUSHER_KEY,
            secret=settings.PUSHER_SECRET,
            cluster=settings.PUSHER_CLUSTER,
            ssl=True,
        ))

    @property
    def is_enabled(self) -> bool:
        return self.client is not None

    def publish(self, channel: str, event: str, payload: dict[str, Any]) -> bool:
        if self.client is None:
            logger.debug("broadcast skipped channel=%s event=%s", channel, event)
            return False
        try:
            self.client.trigger(channel, event, payload)
        except Exception as exc:
            logger.warning("broadcast failed channel=%s event=%s: %s", channel, event, exc)
            return False
        return True


_broadcaster: Optional[Broadcaster] = None


def get_broadcaster() -> Broadcaster:
    """FastAPI dependency; builds the client lazily from settings."""
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = Broadcaster.from_settings()
    return _broadcaster


def publish_chat_message(broadcaster: Broadcaster, sender_id: str, message: str) -> bool:
    return broadcaster.publish(
        settings.CHAT_CHANNEL,
        "new-message",
        {"message": message, "userId": sender_id},
    )


def publish_leaderboard_update(broadcaster: Broadcaster, user_id: str, message: str) -> bool:
    return broadcaster.publish(
        settings.LEADERBOARD_CHANNEL,
        "update",
        {"userId": user_id, "message": message},
    )
