"""
Achievement awarding.

Achievements are additive only: there is no revoke path. Awarding is keyed
on (user_id, title); a second award of the same title is a no-op that
returns False. The unique constraint on `achievements` backs this up when
two requests race, in which case the losing transaction fails with an
IntegrityError and the API answers 409.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from vocassion.models.achievement import Achievement
from vocassion.models.challenge import Challenge, ChallengeStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementRule:
    title: str
    description: str
    threshold: int
    category: str = "CHALLENGES"

    @property
    def points(self) -> int:
        return self.threshold * 10


CHALLENGE_RULES = (
    AchievementRule("Challenge Beginner", "Complete your first challenge", 1),
    AchievementRule("Challenge Explorer", "Complete 5 challenges", 5),
    AchievementRule("Challenge Master", "Complete 20 challenges", 20),
)

_CATEGORY_EMOJI = {
    "passion": "❤️",
    "skills": "⭐",
    "mission": "🌍",
    "vocation": "💰",
    "milestone": "🏆",
}


def category_emoji(category: str) -> str:
    return _CATEGORY_EMOJI.get((category or "").lower(), "🎯")


def has_achievement(db: Session, user_id: str, title: str) -> bool:
    return (
        db.query(Achievement.id)
        .filter(Achievement.user_id == user_id, Achievement.title == title)
        .first()
        is not None
    )


def award_achievement(
    db: Session,
    user_id: str,
    title: str,
    description: str,
    category: str,
    points: int = 0,
) -> bool:
    """Insert the achievement unless the user already has it. Returns True if inserted."""
    if has_achievement(db, user_id, title):
        return False
    db.add(Achievement(
        user_id=user_id,
        title=title,
        description=description,
        category=category,
        points=points,
    ))
    db.flush()
    logger.info("achievement unlocked user=%s title=%r", user_id, title)
    return True


def count_completed_challenges(db: Session, user_id: str) -> int:
    return (
        db.query(func.count(Challenge.id))
        .filter(
            Challenge.user_id == user_id,
            Challenge.status == ChallengeStatus.completed,
        )
        .scalar()
        or 0
    )


def check_and_award_achievements(db: Session, user_id: str) -> list[str]:
    """
    Recount completed challenges and award every threshold that is met.
    Safe to re-run: already held achievements are skipped.
    Returns the titles unlocked by this call.
    """
    completed = count_completed_challenges(db, user_id)
    unlocked = []
    for rule in CHALLENGE_RULES:
        if completed < rule.threshold:
            continue
        if award_achievement(
            db, user_id,
            title=rule.title,
            description=rule.description,
            category=rule.category,
            points=rule.points,
        ):
            unlocked.append(rule.title)
    return unlocked


def list_achievements(db: Session, user_id: str, limit: int | None = None) -> list[Achievement]:
    q = (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id)
        .order_by(Achievement.unlocked_at.desc(), Achievement.id.desc())
    )
    if limit is not None:
        q = q.limit(limit)
    return q.all()
