"""
Community router.

Feed
  GET  /api/community/posts
  POST /api/community/posts
  POST /api/community/posts/{post_id}/like
  POST /api/community/posts/{post_id}/comments

Team challenges
  GET  /api/community/challenges
  POST /api/community/challenges
  POST /api/community/challenges/{challenge_id}/join
  PUT  /api/community/challenges/{challenge_id}/progress
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vocassion.core.auth import get_current_profile
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.schemas.community import (
    CommentCreateRequest,
    CommentResponse,
    FeedResponse,
    LikeResponse,
    ParticipantResponse,
    PostCreateRequest,
    PostResponse,
    TeamChallengeCreateRequest,
    TeamChallengeResponse,
    TeamProgressRequest,
    TeamProgressResponse,
)
from vocassion.services.community import (
    FeedItem,
    TeamChallengeSummary,
    add_comment,
    create_post,
    create_team_challenge,
    join_team_challenge,
    list_active_team_challenges,
    list_feed,
    toggle_like,
    update_team_progress,
)

router = APIRouter(prefix="/api/community", tags=["community"])


def _post_response(item: FeedItem) -> PostResponse:
    return PostResponse.model_validate(item.post).model_copy(update={
        "author_name": item.author_name,
        "author_image": item.author_image,
        "likes": item.likes,
        "comments": item.comments,
    })


def _team_response(summary: TeamChallengeSummary) -> TeamChallengeResponse:
    return TeamChallengeResponse.model_validate(summary.challenge).model_copy(
        update={"participants": summary.participants}
    )


# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------

@router.get("/posts", response_model=FeedResponse, summary="Community feed, newest first")
def get_feed(
    limit: int = Query(default=20, ge=1, le=100, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    total, items = list_feed(db, limit=limit, offset=offset)
    return FeedResponse(total=total, items=[_post_response(i) for i in items])


@router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share a post",
    responses={422: {"description": "Unknown post type."}},
)
def post_post(
    payload: PostCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Posting credits the author 10 points."""
    post = create_post(db, profile.id, payload.title, payload.content, post_type=payload.type)
    return _post_response(FeedItem(
        post=post, author_name=profile.name, author_image=profile.image_url, likes=0, comments=0,
    ))


@router.post(
    "/posts/{post_id}/like",
    response_model=LikeResponse,
    summary="Like or unlike a post",
    responses={404: {"description": "Post not found."}},
)
def post_like(
    post_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    liked, count = toggle_like(db, profile.id, post_id)
    return LikeResponse(post_id=post_id, liked=liked, likes=count)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found."}},
)
def post_comment(
    post_id: int,
    payload: CommentCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return add_comment(db, profile.id, post_id, payload.content)


# ---------------------------------------------------------------------------
# Team challenges
# ---------------------------------------------------------------------------

@router.get(
    "/challenges",
    response_model=list[TeamChallengeResponse],
    summary="Team challenges that have not ended",
)
def get_team_challenges(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return [_team_response(s) for s in list_active_team_challenges(db)]


@router.post(
    "/challenges",
    response_model=TeamChallengeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a team challenge",
    responses={422: {"description": "Unknown category."}},
)
def post_team_challenge(
    payload: TeamChallengeCreateRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    challenge = create_team_challenge(
        db,
        profile.id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        reward_points=payload.reward_points,
        end_date=payload.end_date,
    )
    return _team_response(TeamChallengeSummary(challenge=challenge, participants=0))


@router.post(
    "/challenges/{challenge_id}/join",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Join a team challenge",
    responses={
        404: {"description": "Team challenge not found."},
        409: {"description": "Already participating."},
    },
)
def post_join(
    challenge_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return join_team_challenge(db, profile.id, challenge_id)


@router.put(
    "/challenges/{challenge_id}/progress",
    response_model=TeamProgressResponse,
    summary="Update progress in a team challenge",
    responses={404: {"description": "Team challenge not found or not joined."}},
)
def put_team_progress(
    challenge_id: int,
    payload: TeamProgressRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Reaching 100 completes the participation and credits `reward_points` once."""
    participant, awarded = update_team_progress(db, profile.id, challenge_id, payload.progress)
    return TeamProgressResponse(
        participant=ParticipantResponse.model_validate(participant),
        points_awarded=awarded,
    )
