"""
Profile router.

GET   /api/profile             — the caller's profile
PATCH /api/profile             — update display name or avatar
GET   /api/profile/{user_id}   — another user's profile with their Ikigai map
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.common import ErrorResponse
from vocassion.schemas.ikigai import IkigaiResponse
from vocassion.schemas.profile import ProfileResponse, ProfileUpdateRequest, PublicProfileResponse
from vocassion.services.ikigai import get_ikigai_map
from vocassion.services.profiles import require_profile, update_profile

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse, summary="Current user's profile")
def read_profile(profile: Profile = Depends(get_current_profile)):
    """Return the caller's profile, creating it on first contact."""
    return profile


@router.patch("", response_model=ProfileResponse, summary="Update display name or avatar")
def patch_profile(
    payload: ProfileUpdateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return update_profile(db, profile, name=payload.name, image_url=payload.image_url)


@router.get(
    "/{user_id}",
    response_model=PublicProfileResponse,
    summary="Another user's profile",
    responses={404: {"model": ErrorResponse, "description": "No profile for that user id."}},
)
def read_user_profile(
    user_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    other = require_profile(db, user_id)
    ikigai = get_ikigai_map(db, other.id)
    return PublicProfileResponse.model_validate(other).model_copy(
        update={"ikigai": IkigaiResponse.from_map(ikigai) if ikigai else None}
    )
