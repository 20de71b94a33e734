"""
Goal progression and the unlock economy.

Lifecycle
---------
  locked  --unlock (spend points_cost)-->  active  --progress 100-->  completed

  * A goal created with points_cost > 0 starts locked, otherwise active.
  * Unlocking records a Penalty for the cost. It fails with
    InsufficientPointsError when the ledger balance is below the cost.
  * Completing a milestone credits its reward and recomputes progress
    bottom-up: sub-goal = share of completed milestones, goal = mean of
    sub-goals.
  * Completion credits points_reward exactly once per goal / sub-goal.

Status flips that pay out or charge points go through conditional UPDATEs
(`... WHERE status = <expected>`), so a repeated or concurrent request
cannot charge or reward twice. Each public action is one transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vocassion.core.errors import (
    GoalLockedError,
    GoalNotFoundError,
    GoalNotLockedError,
    InsufficientPointsError,
    MilestoneNotFoundError,
    SubGoalNotFoundError,
)
from vocassion.db.base import atomic
from vocassion.models.goal import Goal, GoalFeedback, GoalStatus, Milestone, SubGoal
from vocassion.services.ledger import add_points, deduct_points, get_total_points

logger = logging.getLogger(__name__)

UNLOCK_FEEDBACK = "You've taken the first step! Let's achieve this goal together!"
FEEDBACK_LIMIT = 5


# ---------------------------------------------------------------------------
# Input / result types
# ---------------------------------------------------------------------------

@dataclass
class MilestoneSpec:
    title: str
    description: Optional[str] = None
    points_reward: int = 0


@dataclass
class SubGoalSpec:
    title: str
    description: Optional[str] = None
    points_reward: int = 0
    milestones: list[MilestoneSpec] = field(default_factory=list)


@dataclass
class UnlockResult:
    goal: Goal
    points_spent: int
    points_remaining: int


@dataclass
class ProgressResult:
    goal: Goal
    points_awarded: int = 0
    milestone_completed: bool = False
    sub_goal_completed: bool = False
    goal_completed: bool = False


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _clamp(progress: int) -> int:
    return max(0, min(100, progress))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_owned_goal(db: Session, user_id: str, goal_id: int) -> Goal:
    goal = (
        db.query(Goal)
        .filter(Goal.id == goal_id, Goal.user_id == user_id)
        .first()
    )
    if goal is None:
        raise GoalNotFoundError(goal_id)
    return goal


def list_goals(db: Session, user_id: str, status: Optional[str] = None) -> list[Goal]:
    q = db.query(Goal).filter(Goal.user_id == user_id)
    if status:
        q = q.filter(Goal.status == status)
    return q.order_by(Goal.created_at.desc(), Goal.id.desc()).all()


def latest_feedback(db: Session, goal_id: int, limit: int = FEEDBACK_LIMIT) -> list[GoalFeedback]:
    return (
        db.query(GoalFeedback)
        .filter(GoalFeedback.goal_id == goal_id)
        .order_by(GoalFeedback.created_at.desc(), GoalFeedback.id.desc())
        .limit(limit)
        .all()
    )


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def create_goal(
    db: Session,
    user_id: str,
    title: str,
    description: str,
    category: str,
    difficulty: str = "medium",
    points_cost: int = 0,
    points_reward: int = 0,
    deadline: Optional[date] = None,
    sub_goals: Optional[list[SubGoalSpec]] = None,
) -> Goal:
    goal = Goal(
        user_id=user_id,
        title=title,
        description=description,
        category=category,
        difficulty=difficulty,
        status=GoalStatus.locked if points_cost > 0 else GoalStatus.active,
        progress=0,
        points_cost=points_cost,
        points_reward=points_reward,
        deadline=deadline,
    )
    for order, sub_spec in enumerate(sub_goals or []):
        sub_goal = SubGoal(
            title=sub_spec.title,
            description=sub_spec.description,
            order=order,
            progress=0,
            status=GoalStatus.active,
            points_reward=sub_spec.points_reward,
        )
        sub_goal.milestones = [
            Milestone(
                title=m.title,
                description=m.description,
                points_reward=m.points_reward,
                is_completed=False,
            )
            for m in sub_spec.milestones
        ]
        goal.sub_goals.append(sub_goal)

    with atomic(db):
        db.add(goal)
    db.refresh(goal)
    logger.info("goal created user=%s goal=%s status=%s", user_id, goal.id, goal.status)
    return goal


# ---------------------------------------------------------------------------
# Unlock
# ---------------------------------------------------------------------------

def unlock_goal(db: Session, user_id: str, goal_id: int) -> UnlockResult:
    with atomic(db):
        goal = get_owned_goal(db, user_id, goal_id)
        if goal.status != GoalStatus.locked:
            raise GoalNotLockedError(str(goal_id), GoalStatus(goal.status).value)

        available = get_total_points(db, user_id)
        if available < goal.points_cost:
            raise InsufficientPointsError(required=goal.points_cost, available=available)

        flipped = (
            db.query(Goal)
            .filter(Goal.id == goal.id, Goal.status == GoalStatus.locked)
            .update({Goal.status: GoalStatus.active}, synchronize_session="fetch")
        )
        if not flipped:
            raise GoalNotLockedError(str(goal_id), GoalStatus.active.value)

        remaining = deduct_points(
            db, user_id, goal.points_cost, reason=f"Unlocked goal: {goal.title}"
        )
        db.add(GoalFeedback(
            goal_id=goal.id,
            user_id=user_id,
            content=UNLOCK_FEEDBACK,
            type="encouragement",
        ))

    db.refresh(goal)
    logger.info("goal unlocked user=%s goal=%s cost=%d", user_id, goal.id, goal.points_cost)
    return UnlockResult(goal=goal, points_spent=goal.points_cost, points_remaining=remaining)


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def _complete_goal(db: Session, goal: Goal) -> int:
    """Flip an active goal to completed and pay its reward. Returns points paid."""
    flipped = (
        db.query(Goal)
        .filter(Goal.id == goal.id, Goal.status == GoalStatus.active)
        .update(
            {
                Goal.status: GoalStatus.completed,
                Goal.progress: 100,
                Goal.completed_at: _now(),
            },
            synchronize_session="fetch",
        )
    )
    if not flipped or goal.points_reward <= 0:
        return 0
    add_points(db, goal.user_id, goal.points_reward, description=f"Completed goal: {goal.title}")
    return goal.points_reward


def _ensure_progressable(goal: Goal) -> None:
    if goal.status == GoalStatus.locked:
        raise GoalLockedError(str(goal.id))


def update_goal_progress(db: Session, user_id: str, goal_id: int, progress: int) -> ProgressResult:
    with atomic(db):
        goal = get_owned_goal(db, user_id, goal_id)
        _ensure_progressable(goal)
        result = ProgressResult(goal=goal)
        if goal.status == GoalStatus.completed:
            return result

        new_progress = _clamp(progress)
        if new_progress >= 100:
            result.points_awarded = _complete_goal(db, goal)
            result.goal_completed = True
        else:
            goal.progress = new_progress

    db.refresh(goal)
    return result


def complete_milestone(
    db: Session,
    user_id: str,
    goal_id: int,
    sub_goal_id: int,
    milestone_id: int,
) -> ProgressResult:
    with atomic(db):
        goal = get_owned_goal(db, user_id, goal_id)
        _ensure_progressable(goal)

        sub_goal = next((s for s in goal.sub_goals if s.id == sub_goal_id), None)
        if sub_goal is None:
            raise SubGoalNotFoundError(sub_goal_id)
        milestone = next((m for m in sub_goal.milestones if m.id == milestone_id), None)
        if milestone is None:
            raise MilestoneNotFoundError(milestone_id)

        result = ProgressResult(goal=goal)
        flipped = (
            db.query(Milestone)
            .filter(Milestone.id == milestone.id, Milestone.is_completed.is_(False))
            .update(
                {Milestone.is_completed: True, Milestone.completed_at: _now()},
                synchronize_session="fetch",
            )
        )
        if not flipped:
            return result
        result.milestone_completed = True

        if milestone.points_reward > 0:
            add_points(db, user_id, milestone.points_reward,
                       description=f"Completed milestone: {milestone.title}")
            result.points_awarded += milestone.points_reward

        done = sum(1 for m in sub_goal.milestones if m.is_completed)
        sub_goal.progress = done * 100 // len(sub_goal.milestones)
        if sub_goal.progress >= 100 and sub_goal.status != GoalStatus.completed:
            sub_goal.status = GoalStatus.completed
            result.sub_goal_completed = True
            if sub_goal.points_reward > 0:
                add_points(db, user_id, sub_goal.points_reward,
                           description=f"Completed sub-goal: {sub_goal.title}")
                result.points_awarded += sub_goal.points_reward

        if goal.status == GoalStatus.active:
            overall = sum(s.progress for s in goal.sub_goals) // len(goal.sub_goals)
            if overall >= 100:
                result.points_awarded += _complete_goal(db, goal)
                result.goal_completed = True
            else:
                goal.progress = overall

    db.refresh(goal)
    return result
