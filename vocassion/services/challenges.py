"""
Daily challenges.

Four templates, one per Ikigai section, are instantiated for a user the
first time their challenges are requested on a given day. Descriptions are
personalised from the user's Ikigai map when it has entries.

Completing a challenge is one transaction:
  1. pending → completed via a conditional UPDATE (a repeat is rejected)
  2. challenge points credited to the ledger
  3. "daily_challenges" streak checked in
  4. completed-challenge achievements re-evaluated
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vocassion.core.errors import ChallengeAlreadyCompletedError, ChallengeNotFoundError
from vocassion.db.base import atomic
from vocassion.models.challenge import Challenge, ChallengeStatus, ChallengeType
from vocassion.models.goal import IkigaiCategory
from vocassion.models.ikigai import IkigaiMap
from vocassion.services.achievements import check_and_award_achievements
from vocassion.services.ledger import add_points
from vocassion.services.streaks import StreakUpdate, update_streak

logger = logging.getLogger(__name__)

STREAK_TYPE = "daily_challenges"


@dataclass(frozen=True)
class ChallengeTemplate:
    title: str
    description: str
    category: IkigaiCategory
    points: int


DAILY_TEMPLATES = (
    ChallengeTemplate(
        "Research Your Passion",
        "Spend 10 minutes researching careers related to your passion",
        IkigaiCategory.PASSION, 50,
    ),
    ChallengeTemplate(
        "Network for Growth",
        "Talk to one person about what drives you",
        IkigaiCategory.PROFESSION, 30,
    ),
    ChallengeTemplate(
        "Mission Reflection",
        "Write down three ways you can help others with your skills",
        IkigaiCategory.MISSION, 40,
    ),
    ChallengeTemplate(
        "Skill Development",
        "Learn something new related to your vocation",
        IkigaiCategory.VOCATION, 60,
    ),
)


@dataclass
class CompletionResult:
    challenge: Challenge
    points_awarded: int
    total_points: int
    streak: StreakUpdate
    achievements_unlocked: list[str] = field(default_factory=list)


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def personalize_description(template: ChallengeTemplate, ikigai: Optional[IkigaiMap]) -> str:
    if ikigai is None:
        return template.description
    if template.category == IkigaiCategory.PASSION:
        passion = ikigai.section("passion")
        if passion:
            return f"Research careers related to {passion[0]}"
    if template.category == IkigaiCategory.PROFESSION:
        profession = ikigai.section("profession")
        if profession:
            return f"Connect with someone in the {profession[0]} field"
    return template.description


def get_daily_challenges(
    db: Session,
    user_id: str,
    today: Optional[date] = None,
) -> list[Challenge]:
    """Return today's daily challenges, creating them on the first request of the day."""
    today = today or _today()
    existing = (
        db.query(Challenge)
        .filter(
            Challenge.user_id == user_id,
            Challenge.type == ChallengeType.daily,
            Challenge.start_date == today,
        )
        .order_by(Challenge.id)
        .all()
    )
    if existing:
        return existing

    ikigai = db.query(IkigaiMap).filter(IkigaiMap.user_id == user_id).first()
    created = [
        Challenge(
            user_id=user_id,
            title=t.title,
            description=personalize_description(t, ikigai),
            type=ChallengeType.daily,
            category=t.category,
            points=t.points,
            status=ChallengeStatus.pending,
            start_date=today,
            end_date=today,
        )
        for t in DAILY_TEMPLATES
    ]
    with atomic(db):
        db.add_all(created)
    for c in created:
        db.refresh(c)
    logger.info("daily challenges issued user=%s day=%s count=%d", user_id, today, len(created))
    return created


def create_challenge(
    db: Session,
    user_id: str,
    title: str,
    description: str,
    points: int,
    challenge_type: str = ChallengeType.special,
    category: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Challenge:
    challenge = Challenge(
        user_id=user_id,
        title=title,
        description=description,
        type=challenge_type,
        category=category,
        points=points,
        status=ChallengeStatus.pending,
        start_date=start_date or _today(),
        end_date=end_date,
    )
    with atomic(db):
        db.add(challenge)
    db.refresh(challenge)
    return challenge


def list_challenges(
    db: Session,
    user_id: str,
    status: Optional[str] = None,
    challenge_type: Optional[str] = None,
    limit: int = 50,
) -> list[Challenge]:
    q = db.query(Challenge).filter(Challenge.user_id == user_id)
    if status:
        q = q.filter(Challenge.status == status)
    if challenge_type:
        q = q.filter(Challenge.type == challenge_type)
    return q.order_by(Challenge.start_date.desc(), Challenge.id.desc()).limit(limit).all()


def complete_challenge(
    db: Session,
    user_id: str,
    challenge_id: int,
    today: Optional[date] = None,
) -> CompletionResult:
    with atomic(db):
        challenge = (
            db.query(Challenge)
            .filter(Challenge.id == challenge_id, Challenge.user_id == user_id)
            .first()
        )
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)

        flipped = (
            db.query(Challenge)
            .filter(
                Challenge.id == challenge.id,
                Challenge.status == ChallengeStatus.pending,
            )
            .update(
                {
                    Challenge.status: ChallengeStatus.completed,
                    Challenge.completed_at: datetime.now(tz=timezone.utc),
                },
                synchronize_session="fetch",
            )
        )
        if not flipped:
            raise ChallengeAlreadyCompletedError(str(challenge_id))

        total = add_points(
            db, user_id, challenge.points,
            description=f"Completed {ChallengeType(challenge.type).value} challenge: {challenge.title}",
        )
        streak = update_streak(db, user_id, STREAK_TYPE, today=today)
        unlocked = list(streak.achievements_unlocked)
        unlocked += check_and_award_achievements(db, user_id)

    db.refresh(challenge)
    logger.info(
        "challenge completed user=%s challenge=%s points=%d unlocked=%s",
        user_id, challenge.id, challenge.points, unlocked,
    )
    return CompletionResult(
        challenge=challenge,
        points_awarded=challenge.points,
        total_points=total,
        streak=streak,
        achievements_unlocked=unlocked,
    )
