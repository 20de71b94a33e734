"""
Ikigai router.

GET  /api/ikigai                 — caller's map
POST /api/ikigai                 — save (upsert) the map
POST /api/ikigai/sections        — credit progress for one section
GET  /api/ikigai/map/{user_id}   — another user's map
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.ikigai import (
    IkigaiRequest,
    IkigaiResponse,
    IkigaiSaveResponse,
    SectionProgressRequest,
    SectionProgressResponse,
)
from vocassion.services.ikigai import award_section_progress, require_ikigai_map, save_ikigai_map
from vocassion.services.realtime import (
    Broadcaster,
    get_broadcaster,
    publish_leaderboard_update,
)

router = APIRouter(prefix="/api/ikigai", tags=["ikigai"])


@router.get(
    "",
    response_model=IkigaiResponse,
    summary="Caller's Ikigai map",
    responses={404: {"description": "No map saved yet."}},
)
def read_ikigai(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return IkigaiResponse.from_map(require_ikigai_map(db, profile.id))


@router.post("", response_model=IkigaiSaveResponse, summary="Save the Ikigai map")
def post_ikigai(
    payload: IkigaiRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
):
    """
    Upsert all four sections. The first save unlocks **Ikigai Pioneer** and
    credits 100 points; a leaderboard update is broadcast when that happens.
    """
    result = save_ikigai_map(
        db,
        profile.id,
        passion=payload.passion,
        mission=payload.mission,
        profession=payload.profession,
        vocation=payload.vocation,
    )
    if result.points_awarded:
        publish_leaderboard_update(
            broadcaster, profile.id, f"{profile.name} completed their Ikigai assessment",
        )
    return IkigaiSaveResponse(
        ikigai=IkigaiResponse.from_map(result.ikigai),
        created=result.created,
        points_awarded=result.points_awarded,
        achievements_unlocked=result.achievements_unlocked,
    )


@router.post(
    "/sections",
    response_model=SectionProgressResponse,
    summary="Credit progress for one Ikigai section",
    responses={
        404: {"description": "No map saved yet."},
        422: {"description": "Unknown section."},
    },
)
def post_section(
    payload: SectionProgressRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Credits 25 points. Once every section has entries, unlocks **Ikigai Master**."""
    result = award_section_progress(db, profile.id, payload.section)
    return SectionProgressResponse(
        section=payload.section.lower(),
        points_awarded=result.points_awarded,
        is_complete=result.ikigai.is_complete,
        achievements_unlocked=result.achievements_unlocked,
    )


@router.get(
    "/map/{user_id}",
    response_model=IkigaiResponse,
    summary="Another user's Ikigai map",
    responses={404: {"description": "No map for that user."}},
)
def read_user_map(
    user_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return IkigaiResponse.from_map(require_ikigai_map(db, user_id))
