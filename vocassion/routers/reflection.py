"""
Reflection router.

GET  /api/reflection   — recent reflections, newest first
POST /api/reflection   — today's reflection (one per day)
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.gamification import StreakUpdateResponse
from vocassion.schemas.reflection import (
    ReflectionCreateRequest,
    ReflectionCreateResponse,
    ReflectionResponse,
)
from vocassion.services.reflections import create_reflection, list_reflections

router = APIRouter(prefix="/api/reflection", tags=["reflection"])


@router.get("", response_model=list[ReflectionResponse], summary="Recent reflections")
def get_reflections(
    limit: int = Query(default=30, ge=1, le=365),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return list_reflections(db, profile.id, limit=limit)


@router.post(
    "",
    response_model=ReflectionCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit today's reflection",
    responses={409: {"description": "A reflection was already submitted today."}},
)
def post_reflection(
    payload: ReflectionCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Saves the reflection and checks in the `daily_reflection` streak."""
    result = create_reflection(
        db,
        profile.id,
        mood=payload.mood,
        gratitude=payload.gratitude,
        challenges=payload.challenges,
        wins=payload.wins,
        content=payload.content,
    )
    return ReflectionCreateResponse(
        reflection=ReflectionResponse.model_validate(result.reflection),
        streak=StreakUpdateResponse.from_update(result.streak),
    )
