"""
Daily reflections: one per user per UTC day, each one a check-in on the
"daily_reflection" streak.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vocassion.core.errors import ReflectionAlreadySubmittedError
from vocassion.db.base import atomic
from vocassion.models.reflection import DailyReflection
from vocassion.services.streaks import StreakUpdate, update_streak

logger = logging.getLogger(__name__)

STREAK_TYPE = "daily_reflection"


@dataclass
class ReflectionResult:
    reflection: DailyReflection
    streak: StreakUpdate


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def create_reflection(
    db: Session,
    user_id: str,
    mood: str,
    gratitude: str,
    challenges: str,
    wins: str,
    content: str,
    today: Optional[date] = None,
) -> ReflectionResult:
    today = today or _today()
    with atomic(db):
        already = (
            db.query(DailyReflection.id)
            .filter(DailyReflection.user_id == user_id, DailyReflection.day == today)
            .first()
        )
        if already is not None:
            raise ReflectionAlreadySubmittedError(today)

        reflection = DailyReflection(
            user_id=user_id,
            day=today,
            mood=mood,
            gratitude=gratitude,
            challenges=challenges,
            wins=wins,
            content=content,
        )
        db.add(reflection)
        db.flush()
        streak = update_streak(db, user_id, STREAK_TYPE, today=today)

    db.refresh(reflection)
    logger.info("reflection saved user=%s day=%s", user_id, today)
    return ReflectionResult(reflection=reflection, streak=streak)


def list_reflections(db: Session, user_id: str, limit: int = 30) -> list[DailyReflection]:
    return (
        db.query(DailyReflection)
        .filter(DailyReflection.user_id == user_id)
        .order_by(DailyReflection.day.desc())
        .limit(limit)
        .all()
    )
