"""
Read-side summaries built on top of the ledger, streaks and achievements.

get_progress      achievements, streaks, points and level for one user
record_activity   credit points for a client-reported activity
get_dashboard     profile, Ikigai map, latest items and headline stats
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vocassion.db.base import atomic
from vocassion.models.achievement import Achievement
from vocassion.models.challenge import Challenge
from vocassion.models.goal import Goal, GoalStatus
from vocassion.models.ikigai import IkigaiMap
from vocassion.models.profile import Profile
from vocassion.models.streak import Streak
from vocassion.services.achievements import count_completed_challenges, list_achievements
from vocassion.services.ikigai import get_ikigai_map
from vocassion.services.ledger import add_points, get_level, get_total_points
from vocassion.services.reflections import STREAK_TYPE as REFLECTION_STREAK
from vocassion.services.streaks import StreakUpdate, list_streaks, update_streak

logger = logging.getLogger(__name__)

DASHBOARD_LIMIT = 5


@dataclass
class Progress:
    points: int
    level: int
    achievements: list[Achievement]
    streaks: list[Streak]


@dataclass
class ActivityResult:
    points_awarded: int
    total_points: int
    streak: Optional[StreakUpdate] = None


@dataclass
class DashboardStats:
    completed_challenges: int
    completed_goals: int
    total_achievements: int
    current_points: int
    level: int
    streak_count: int


@dataclass
class Dashboard:
    profile: Profile
    ikigai: Optional[IkigaiMap]
    goals: list[Goal] = field(default_factory=list)
    challenges: list[Challenge] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)
    stats: Optional[DashboardStats] = None


def get_progress(db: Session, user_id: str) -> Progress:
    points = get_total_points(db, user_id)
    return Progress(
        points=points,
        level=get_level(points),
        achievements=list_achievements(db, user_id),
        streaks=list_streaks(db, user_id),
    )


def record_activity(
    db: Session,
    user_id: str,
    activity_type: str,
    points: int,
    today: Optional[date] = None,
) -> ActivityResult:
    with atomic(db):
        total = add_points(db, user_id, points, description=f"Completed {activity_type}")
        streak = None
        if activity_type == REFLECTION_STREAK:
            streak = update_streak(db, user_id, activity_type, today=today)
    logger.info("activity recorded user=%s type=%s points=%d", user_id, activity_type, points)
    return ActivityResult(points_awarded=points, total_points=total, streak=streak)


def get_dashboard(db: Session, profile: Profile) -> Dashboard:
    user_id = profile.id
    goals = (
        db.query(Goal)
        .filter(Goal.user_id == user_id)
        .order_by(Goal.created_at.desc(), Goal.id.desc())
        .limit(DASHBOARD_LIMIT)
        .all()
    )
    challenges = (
        db.query(Challenge)
        .filter(Challenge.user_id == user_id)
        .order_by(Challenge.created_at.desc(), Challenge.id.desc())
        .limit(DASHBOARD_LIMIT)
        .all()
    )
    total_achievements = (
        db.query(func.count(Achievement.id)).filter(Achievement.user_id == user_id).scalar() or 0
    )
    best_streak = (
        db.query(func.max(Streak.current_count)).filter(Streak.user_id == user_id).scalar() or 0
    )
    completed_goals = (
        db.query(func.count(Goal.id))
        .filter(Goal.user_id == user_id, Goal.status == GoalStatus.completed)
        .scalar() or 0
    )
    points = get_total_points(db, user_id)
    return Dashboard(
        profile=profile,
        ikigai=get_ikigai_map(db, user_id),
        goals=goals,
        challenges=challenges,
        achievements=list_achievements(db, user_id, limit=DASHBOARD_LIMIT),
        stats=DashboardStats(
            completed_challenges=count_completed_challenges(db, user_id),
            completed_goals=completed_goals,
            total_achievements=total_achievements,
            current_points=points,
            level=get_level(points),
            streak_count=best_streak,
        ),
    )
