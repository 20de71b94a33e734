"""
Tests for the community feed and team challenges.
"""
from datetime import date, timedelta

import pytest

from vocassion.core.errors import (
    AlreadyParticipatingError,
    InvalidCategoryError,
    InvalidPostTypeError,
    PostNotFoundError,
    TeamChallengeNotFoundError,
)
from vocassion.services.community import (
    CONTRIBUTION_POINTS,
    add_comment,
    create_post,
    create_team_challenge,
    join_team_challenge,
    list_active_team_challenges,
    list_feed,
    toggle_like,
    update_team_progress,
)
from vocassion.services.ledger import get_total_points

TODAY = date(2026, 6, 1)


def _team(db, creator, **kwargs):
    kwargs.setdefault("title", "Teach a skill")
    kwargs.setdefault("description", "Run one free workshop")
    kwargs.setdefault("category", "skills")
    kwargs.setdefault("reward_points", 80)
    kwargs.setdefault("end_date", TODAY + timedelta(days=14))
    return create_team_challenge(db, creator, **kwargs)


class TestPosts:
    def test_post_credits_contribution_points(self, db, user_id):
        post = create_post(db, user_id, "My map", "Finally filled it in", post_type="map")
        assert post.id > 0
        assert post.community_id == "default"
        assert get_total_points(db, user_id) == CONTRIBUTION_POINTS

    def test_invalid_post_type(self, db, user_id):
        with pytest.raises(InvalidPostTypeError):
            create_post(db, user_id, "Hi", "there", post_type="meme")
        assert get_total_points(db, user_id) == 0

    def test_feed_counts_likes_and_comments(self, db, user_id):
        post = create_post(db, user_id, "Win", "Shipped it", post_type="achievement")
        toggle_like(db, user_id, post.id)
        toggle_like(db, user_id + "-friend", post.id)
        add_comment(db, user_id + "-friend", post.id, "Congrats!")

        _, items = list_feed(db, limit=100)
        item = next(i for i in items if i.post.id == post.id)
        assert item.likes == 2
        assert item.comments == 1

    def test_like_toggles(self, db, user_id):
        post = create_post(db, user_id, "Toggle", "me")
        assert toggle_like(db, user_id, post.id) == (True, 1)
        assert toggle_like(db, user_id, post.id) == (False, 0)

    def test_missing_post(self, db, user_id):
        with pytest.raises(PostNotFoundError):
            toggle_like(db, user_id, 999_999)
        with pytest.raises(PostNotFoundError):
            add_comment(db, user_id, 999_999, "hello?")


class TestTeamChallenges:
    def test_invalid_category(self, db, user_id):
        with pytest.raises(InvalidCategoryError):
            _team(db, user_id, category="cooking")

    def test_active_list_excludes_ended(self, db, user_id):
        live = _team(db, user_id, title="Live")
        ended = _team(db, user_id, title="Ended", end_date=TODAY - timedelta(days=1))
        join_team_challenge(db, user_id, live.id)

        summaries = list_active_team_challenges(db, today=TODAY)
        ids = {s.challenge.id for s in summaries}
        assert live.id in ids
        assert ended.id not in ids
        assert next(s for s in summaries if s.challenge.id == live.id).participants == 1

    def test_join_twice(self, db, user_id):
        challenge = _team(db, user_id)
        participant = join_team_challenge(db, user_id, challenge.id)
        assert participant.status == "active"
        assert participant.progress == 0
        with pytest.raises(AlreadyParticipatingError):
            join_team_challenge(db, user_id, challenge.id)

    def test_join_missing(self, db, user_id):
        with pytest.raises(TeamChallengeNotFoundError):
            join_team_challenge(db, user_id, 999_999)

    def test_progress_pays_reward_once(self, db, user_id):
        challenge = _team(db, user_id, reward_points=80)
        join_team_challenge(db, user_id, challenge.id)

        participant, awarded = update_team_progress(db, user_id, challenge.id, 60)
        assert (participant.progress, participant.status, awarded) == (60, "active", 0)

        participant, awarded = update_team_progress(db, user_id, challenge.id, 120)
        assert (participant.progress, participant.status, awarded) == (100, "completed", 80)

        _, awarded = update_team_progress(db, user_id, challenge.id, 100)
        assert awarded == 0
        assert get_total_points(db, user_id) == 80

    def test_progress_without_joining(self, db, user_id):
        challenge = _team(db, user_id)
        with pytest.raises(TeamChallengeNotFoundError):
            update_team_progress(db, user_id, challenge.id, 10)
