"""
Community feed and team challenges.

Posting credits CONTRIBUTION_POINTS to the author. Team challenge
participants are paid the challenge's reward_points once, when their
progress first reaches 100.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vocassion.core.errors import (
    AlreadyParticipatingError,
    InvalidCategoryError,
    InvalidPostTypeError,
    PostNotFoundError,
    TeamChallengeNotFoundError,
)
from vocassion.db.base import atomic
from vocassion.models.community import (
    DEFAULT_COMMUNITY_ID,
    POST_TYPES,
    TEAM_CHALLENGE_CATEGORIES,
    Community,
    CommunityPost,
    PostComment,
    PostLike,
    TeamChallenge,
    TeamChallengeParticipant,
)
from vocassion.models.profile import Profile
from vocassion.services.ledger import add_points

logger = logging.getLogger(__name__)

CONTRIBUTION_POINTS = 10


@dataclass
class FeedItem:
    post: CommunityPost
    author_name: Optional[str]
    author_image: Optional[str]
    likes: int
    comments: int


@dataclass
class TeamChallengeSummary:
    challenge: TeamChallenge
    participants: int


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------

def ensure_community(db: Session, community_id: str = DEFAULT_COMMUNITY_ID) -> Community:
    community = db.query(Community).filter(Community.id == community_id).first()
    if community is None:
        community = Community(
            id=community_id,
            name="General" if community_id == DEFAULT_COMMUNITY_ID else community_id,
            description="The main community for all users",
        )
        db.add(community)
        db.flush()
    return community


def _get_post(db: Session, post_id: int) -> CommunityPost:
    post = db.query(CommunityPost).filter(CommunityPost.id == post_id).first()
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def list_feed(db: Session, limit: int = 50, offset: int = 0) -> tuple[int, list[FeedItem]]:
    likes = (
        db.query(PostLike.post_id, func.count(PostLike.id).label("n"))
        .group_by(PostLike.post_id)
        .subquery()
    )
    comments = (
        db.query(PostComment.post_id, func.count(PostComment.id).label("n"))
        .group_by(PostComment.post_id)
        .subquery()
    )
    q = (
        db.query(
            CommunityPost,
            Profile.name,
            Profile.image_url,
            func.coalesce(likes.c.n, 0),
            func.coalesce(comments.c.n, 0),
        )
        .outerjoin(Profile, Profile.id == CommunityPost.user_id)
        .outerjoin(likes, likes.c.post_id == CommunityPost.id)
        .outerjoin(comments, comments.c.post_id == CommunityPost.id)
    )
    total = db.query(func.count(CommunityPost.id)).scalar() or 0
    rows = (
        q.order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return total, [
        FeedItem(post=post, author_name=name, author_image=image, likes=n_likes, comments=n_comments)
        for post, name, image, n_likes, n_comments in rows
    ]


def create_post(
    db: Session,
    user_id: str,
    title: str,
    content: str,
    post_type: str = "reflection",
    community_id: str = DEFAULT_COMMUNITY_ID,
) -> CommunityPost:
    if post_type not in POST_TYPES:
        raise InvalidPostTypeError(post_type, list(POST_TYPES))

    with atomic(db):
        ensure_community(db, community_id)
        post = CommunityPost(
            user_id=user_id,
            community_id=community_id,
            title=title,
            content=content,
            type=post_type,
        )
        db.add(post)
        db.flush()
        add_points(db, user_id, CONTRIBUTION_POINTS, description="Community contribution")

    db.refresh(post)
    logger.info("post created user=%s post=%s type=%s", user_id, post.id, post_type)
    return post


def toggle_like(db: Session, user_id: str, post_id: int) -> tuple[bool, int]:
    """Like or unlike a post. Returns (liked, like_count)."""
    with atomic(db):
        _get_post(db, post_id)
        existing = (
            db.query(PostLike)
            .filter(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .first()
        )
        if existing is not None:
            db.delete(existing)
            liked = False
        else:
            db.add(PostLike(post_id=post_id, user_id=user_id))
            liked = True
        db.flush()
        count = (
            db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar() or 0
        )
    return liked, count


def add_comment(db: Session, user_id: str, post_id: int, content: str) -> PostComment:
    with atomic(db):
        _get_post(db, post_id)
        comment = PostComment(post_id=post_id, user_id=user_id, content=content)
        db.add(comment)
    db.refresh(comment)
    return comment


# ---------------------------------------------------------------------------
# Team challenges
# ---------------------------------------------------------------------------

def _get_team_challenge(db: Session, challenge_id: int) -> TeamChallenge:
    challenge = db.query(TeamChallenge).filter(TeamChallenge.id == challenge_id).first()
    if challenge is None:
        raise TeamChallengeNotFoundError(challenge_id)
    return challenge


def list_active_team_challenges(
    db: Session, today: Optional[date] = None,
) -> list[TeamChallengeSummary]:
    today = today or _today()
    participants = (
        db.query(
            TeamChallengeParticipant.challenge_id,
            func.count(TeamChallengeParticipant.id).label("n"),
        )
        .group_by(TeamChallengeParticipant.challenge_id)
        .subquery()
    )
    rows = (
        db.query(TeamChallenge, func.coalesce(participants.c.n, 0))
        .outerjoin(participants, participants.c.challenge_id == TeamChallenge.id)
        .filter(TeamChallenge.end_date >= today)
        .order_by(TeamChallenge.created_at.desc(), TeamChallenge.id.desc())
        .all()
    )
    return [TeamChallengeSummary(challenge=c, participants=n) for c, n in rows]


def create_team_challenge(
    db: Session,
    creator_id: str,
    title: str,
    description: str,
    category: str,
    reward_points: int,
    end_date: date,
) -> TeamChallenge:
    if category not in TEAM_CHALLENGE_CATEGORIES:
        raise InvalidCategoryError(category, list(TEAM_CHALLENGE_CATEGORIES))
    challenge = TeamChallenge(
        creator_id=creator_id,
        title=title,
        description=description,
        category=category,
        reward_points=reward_points,
        end_date=end_date,
    )
    with atomic(db):
        db.add(challenge)
    db.refresh(challenge)
    return challenge


def join_team_challenge(db: Session, user_id: str, challenge_id: int) -> TeamChallengeParticipant:
    with atomic(db):
        _get_team_challenge(db, challenge_id)
        existing = (
            db.query(TeamChallengeParticipant.id)
            .filter(
                TeamChallengeParticipant.challenge_id == challenge_id,
                TeamChallengeParticipant.user_id == user_id,
            )
            .first()
        )
        if existing is not None:
            raise AlreadyParticipatingError(str(challenge_id))
        participant = TeamChallengeParticipant(
            challenge_id=challenge_id, user_id=user_id, progress=0, status="active",
        )
        db.add(participant)
    db.refresh(participant)
    return participant


def update_team_progress(
    db: Session, user_id: str, challenge_id: int, progress: int,
) -> tuple[TeamChallengeParticipant, int]:
    """Set a participant's progress. Returns (participant, points_awarded)."""
    with atomic(db):
        challenge = _get_team_challenge(db, challenge_id)
        participant = (
            db.query(TeamChallengeParticipant)
            .filter(
                TeamChallengeParticipant.challenge_id == challenge_id,
                TeamChallengeParticipant.user_id == user_id,
            )
            .first()
        )
        if participant is None:
            raise TeamChallengeNotFoundError(challenge_id)

        progress = max(0, min(100, progress))
        awarded = 0
        if progress >= 100:
            flipped = (
                db.query(TeamChallengeParticipant)
                .filter(
                    TeamChallengeParticipant.id == participant.id,
                    TeamChallengeParticipant.status == "active",
                )
                .update(
                    {
                        TeamChallengeParticipant.status: "completed",
                        TeamChallengeParticipant.progress: 100,
                    },
                    synchronize_session="fetch",
                )
            )
            if flipped and challenge.reward_points > 0:
                add_points(db, user_id, challenge.reward_points,
                           description="Team challenge completion")
                awarded = challenge.reward_points
        elif participant.status == "active":
            participant.progress = progress

    db.refresh(participant)
    return participant, awarded
