"""
Goals router.

GET  /api/goals                     — list (optionally by status)
POST /api/goals                     — create, locked when it has a points cost
GET  /api/goals/{goal_id}           — detail with sub-goals, milestones, feedback
POST /api/goals/{goal_id}/unlock    — spend points_cost to activate
PUT  /api/goals/{goal_id}           — set progress
POST /api/goals/{goal_id}/subgoals/{sub_goal_id}/milestones/{milestone_id}/complete
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.goal import Goal, GoalStatus
from vocassion.models.profile import Profile
from vocassion.schemas.goal import (
    FeedbackResponse,
    GoalCreateRequest,
    GoalDetailResponse,
    GoalProgressRequest,
    GoalProgressResponse,
    GoalResponse,
    UnlockResponse,
)
from vocassion.services.goals import (
    MilestoneSpec,
    ProgressResult,
    SubGoalSpec,
    complete_milestone,
    create_goal,
    get_owned_goal,
    latest_feedback,
    list_goals,
    unlock_goal,
    update_goal_progress,
)

router = APIRouter(prefix="/api/goals", tags=["goals"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _goal_detail(db: Session, goal: Goal) -> GoalDetailResponse:
    return GoalDetailResponse.model_validate(goal).model_copy(update={
        "feedback": [FeedbackResponse.model_validate(f) for f in latest_feedback(db, goal.id)],
    })


def _progress_response(db: Session, result: ProgressResult) -> GoalProgressResponse:
    return GoalProgressResponse(
        goal=_goal_detail(db, result.goal),
        points_awarded=result.points_awarded,
        milestone_completed=result.milestone_completed,
        sub_goal_completed=result.sub_goal_completed,
        goal_completed=result.goal_completed,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("", response_model=list[GoalResponse], summary="List goals, newest first")
def get_goals(
    status: Optional[GoalStatus] = Query(default=None, description="Filter by status."),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return list_goals(db, profile.id, status=status)


@router.post(
    "",
    response_model=GoalDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a goal",
)
def post_goal(
    payload: GoalCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """A goal with `points_cost > 0` starts **locked**; otherwise it starts active."""
    goal = create_goal(
        db,
        profile.id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        difficulty=payload.difficulty,
        points_cost=payload.points_cost,
        points_reward=payload.points_reward,
        deadline=payload.deadline,
        sub_goals=[
            SubGoalSpec(
                title=s.title,
                description=s.description,
                points_reward=s.points_reward,
                milestones=[
                    MilestoneSpec(title=m.title, description=m.description, points_reward=m.points_reward)
                    for m in s.milestones
                ],
            )
            for s in payload.sub_goals
        ],
    )
    return _goal_detail(db, goal)


@router.get(
    "/{goal_id}",
    response_model=GoalDetailResponse,
    summary="Goal detail",
    responses={404: {"description": "Goal not found."}},
)
def get_goal(
    goal_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return _goal_detail(db, get_owned_goal(db, profile.id, goal_id))


@router.post(
    "/{goal_id}/unlock",
    response_model=UnlockResponse,
    summary="Unlock a goal by spending its points cost",
    responses={
        200: {"description": "Goal unlocked; cost recorded as a penalty."},
        400: {"description": "Insufficient points."},
        404: {"description": "Goal not found."},
        409: {"description": "Goal is not locked."},
    },
)
def post_unlock(
    goal_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """
    Fails with **400 INSUFFICIENT_POINTS** when the ledger balance is below the
    goal's cost. On success the cost is deducted exactly once and the goal
    becomes active.
    """
    result = unlock_goal(db, profile.id, goal_id)
    return UnlockResponse(
        goal=_goal_detail(db, result.goal),
        points_spent=result.points_spent,
        points_remaining=result.points_remaining,
    )


@router.put(
    "/{goal_id}",
    response_model=GoalProgressResponse,
    summary="Set goal progress",
    responses={409: {"description": "Goal is locked."}},
)
def put_progress(
    goal_id: int,
    payload: GoalProgressRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Progress is clamped to 0..100. Reaching 100 completes the goal and pays its reward once."""
    return _progress_response(db, update_goal_progress(db, profile.id, goal_id, payload.progress))


@router.post(
    "/{goal_id}/subgoals/{sub_goal_id}/milestones/{milestone_id}/complete",
    response_model=GoalProgressResponse,
    summary="Complete a milestone",
    responses={404: {"description": "Goal, sub-goal or milestone not found."}},
)
def post_milestone(
    goal_id: int,
    sub_goal_id: int,
    milestone_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    result = complete_milestone(db, profile.id, goal_id, sub_goal_id, milestone_id)
    return _progress_response(db, result)
