"""
Daily streaks per (user, activity type).

Check-in rules, comparing the stored last check-in date with today:
  no record        → create with current = longest = 1
  same day         → nothing changes
  exactly 1 day    → current + 1, longest = max(longest, current)
  anything else    → current = 1 (longest kept)

Reaching exactly 7 or 30 on a continuation unlocks a streak achievement.
"Today" is the server's UTC date; there is no per-user timezone.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vocassion.models.streak import Streak
from vocassion.services.achievements import award_achievement

logger = logging.getLogger(__name__)


class StreakOutcome(str, enum.Enum):
    CREATED   = "created"
    CONTINUED = "continued"
    UNCHANGED = "unchanged"
    RESET     = "reset"


# current_count → (title, description, points)
STREAK_ACHIEVEMENTS = {
    7:  ("Week Warrior", "Maintained a 7-day streak", 50),
    30: ("Monthly Master", "Maintained a 30-day streak", 200),
}


@dataclass
class StreakUpdate:
    streak: Streak
    outcome: StreakOutcome
    achievements_unlocked: list[str] = field(default_factory=list)


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def get_streak(db: Session, user_id: str, activity_type: str) -> Optional[Streak]:
    return (
        db.query(Streak)
        .filter(Streak.user_id == user_id, Streak.type == activity_type)
        .first()
    )


def list_streaks(db: Session, user_id: str) -> list[Streak]:
    return db.query(Streak).filter(Streak.user_id == user_id).order_by(Streak.type).all()


def update_streak(
    db: Session,
    user_id: str,
    activity_type: str,
    today: Optional[date] = None,
) -> StreakUpdate:
    today = today or _today()
    streak = get_streak(db, user_id, activity_type)

    if streak is None:
        streak = Streak(
            user_id=user_id,
            type=activity_type,
            current_count=1,
            longest_count=1,
            last_checkin=today,
        )
        db.add(streak)
        db.flush()
        logger.info("streak started user=%s type=%s", user_id, activity_type)
        return StreakUpdate(streak=streak, outcome=StreakOutcome.CREATED)

    gap = (today - streak.last_checkin).days

    # Same day, or a check-in stamped later than today: keep as is.
    if gap <= 0:
        return StreakUpdate(streak=streak, outcome=StreakOutcome.UNCHANGED)

    if gap == 1:
        streak.current_count += 1
        streak.longest_count = max(streak.longest_count, streak.current_count)
        streak.last_checkin = today
        db.flush()
        result = StreakUpdate(streak=streak, outcome=StreakOutcome.CONTINUED)
        reward = STREAK_ACHIEVEMENTS.get(streak.current_count)
        if reward is not None:
            title, description, points = reward
            if award_achievement(db, user_id, title, description, "development", points):
                result.achievements_unlocked.append(title)
        logger.info(
            "streak continued user=%s type=%s current=%d",
            user_id, activity_type, streak.current_count,
        )
        return result

    streak.current_count = 1
    streak.last_checkin = today
    db.flush()
    logger.info("streak reset user=%s type=%s gap=%d", user_id, activity_type, gap)
    return StreakUpdate(streak=streak, outcome=StreakOutcome.RESET)
