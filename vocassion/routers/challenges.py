"""
Challenges router.

GET  /api/challenges          — today's daily challenges (issued on first call)
POST /api/challenges          — complete a challenge
GET  /api/challenges/history  — past challenges, filterable
POST /api/challenges/custom   — personal weekly or special challenge
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.challenge import ChallengeStatus, ChallengeType
from vocassion.models.profile import Profile
from vocassion.schemas.challenge import (
    ChallengeCompletionResponse,
    ChallengeCreateRequest,
    ChallengeResponse,
    CompleteChallengeRequest,
)
from vocassion.schemas.gamification import StreakUpdateResponse
from vocassion.services.challenges import (
    complete_challenge,
    create_challenge,
    get_daily_challenges,
    list_challenges,
)

router = APIRouter(prefix="/api/challenges", tags=["challenges"])


@router.get("", response_model=list[ChallengeResponse], summary="Today's daily challenges")
def daily_challenges(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """
    One challenge per Ikigai section. The first request of the (UTC) day
    creates them; later requests return the same rows with their status.
    """
    return get_daily_challenges(db, profile.id)


@router.post(
    "",
    response_model=ChallengeCompletionResponse,
    summary="Complete a challenge",
    responses={
        200: {"description": "Challenge completed, points credited."},
        404: {"description": "Challenge not found."},
        409: {"description": "Challenge already completed."},
    },
)
def post_complete_challenge(
    payload: CompleteChallengeRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """
    In one transaction: mark the challenge completed, credit its points,
    check in the `daily_challenges` streak and re-evaluate achievements.
    """
    result = complete_challenge(db, profile.id, payload.challenge_id)
    return ChallengeCompletionResponse(
        challenge=ChallengeResponse.model_validate(result.challenge),
        points_awarded=result.points_awarded,
        total_points=result.total_points,
        streak=StreakUpdateResponse.from_update(result.streak),
        achievements_unlocked=result.achievements_unlocked,
    )


@router.get("/history", response_model=list[ChallengeResponse], summary="Challenge history")
def challenge_history(
    status: Optional[ChallengeStatus] = Query(default=None),
    type: Optional[ChallengeType] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return list_challenges(db, profile.id, status=status, challenge_type=type, limit=limit)


@router.post(
    "/custom",
    response_model=ChallengeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a weekly or special challenge",
)
def post_custom_challenge(
    payload: ChallengeCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return create_challenge(
        db,
        profile.id,
        title=payload.title,
        description=payload.description,
        points=payload.points,
        challenge_type=ChallengeType(payload.type),
        category=payload.category,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
