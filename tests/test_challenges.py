"""
Tests for daily challenge issuance and completion.
"""
from datetime import date, timedelta

import pytest

from vocassion.core.errors import ChallengeAlreadyCompletedError, ChallengeNotFoundError
from vocassion.models.challenge import ChallengeStatus, ChallengeType
from vocassion.models.goal import IkigaiCategory
from vocassion.services.challenges import (
    complete_challenge,
    create_challenge,
    get_daily_challenges,
    list_challenges,
)
from vocassion.services.ikigai import save_ikigai_map
from vocassion.services.ledger import get_total_points
from vocassion.services.streaks import StreakOutcome

D = date(2026, 4, 6)


class TestDailyChallenges:
    def test_four_templates_issued_once_per_day(self, db, user_id):
        first = get_daily_challenges(db, user_id, today=D)
        assert [c.category for c in first] == [
            IkigaiCategory.PASSION, IkigaiCategory.PROFESSION,
            IkigaiCategory.MISSION, IkigaiCategory.VOCATION,
        ]
        assert [c.points for c in first] == [50, 30, 40, 60]
        assert all(c.type == ChallengeType.daily for c in first)

        again = get_daily_challenges(db, user_id, today=D)
        assert [c.id for c in again] == [c.id for c in first]

        tomorrow = get_daily_challenges(db, user_id, today=D + timedelta(days=1))
        assert not {c.id for c in tomorrow} & {c.id for c in first}

    def test_descriptions_use_ikigai_map(self, db, user_id):
        save_ikigai_map(db, user_id, passion=["music"], profession=["design"])
        passion, profession, mission, _ = get_daily_challenges(db, user_id, today=D)
        assert passion.description == "Research careers related to music"
        assert profession.description == "Connect with someone in the design field"
        assert mission.description == "Write down three ways you can help others with your skills"


class TestCompleteChallenge:
    def test_completion_credits_points_streak_and_achievement(self, db, user_id):
        passion = get_daily_challenges(db, user_id, today=D)[0]
        result = complete_challenge(db, user_id, passion.id, today=D)
        assert result.challenge.status == ChallengeStatus.completed
        assert result.challenge.completed_at is not None
        assert result.points_awarded == 50
        assert result.total_points == 50
        assert result.streak.outcome == StreakOutcome.CREATED
        assert result.achievements_unlocked == ["Challenge Beginner"]

    def test_second_completion_is_rejected(self, db, user_id):
        challenge = get_daily_challenges(db, user_id, today=D)[1]
        complete_challenge(db, user_id, challenge.id, today=D)
        with pytest.raises(ChallengeAlreadyCompletedError):
            complete_challenge(db, user_id, challenge.id, today=D)
        assert get_total_points(db, user_id) == 30

    def test_other_users_challenge_is_not_found(self, db, user_id):
        challenge = get_daily_challenges(db, user_id, today=D)[0]
        with pytest.raises(ChallengeNotFoundError):
            complete_challenge(db, user_id + "-intruder", challenge.id, today=D)

    def test_consecutive_days_continue_streak(self, db, user_id):
        day1 = get_daily_challenges(db, user_id, today=D)[0]
        complete_challenge(db, user_id, day1.id, today=D)
        day2 = get_daily_challenges(db, user_id, today=D + timedelta(days=1))[0]
        result = complete_challenge(db, user_id, day2.id, today=D + timedelta(days=1))
        assert result.streak.outcome == StreakOutcome.CONTINUED
        assert result.streak.streak.current_count == 2

    def test_same_day_completions_keep_streak(self, db, user_id):
        a, b, *_ = get_daily_challenges(db, user_id, today=D)
        complete_challenge(db, user_id, a.id, today=D)
        result = complete_challenge(db, user_id, b.id, today=D)
        assert result.streak.outcome == StreakOutcome.UNCHANGED
        assert result.total_points == 80


class TestListChallenges:
    def test_filter_by_status_and_type(self, db, user_id):
        daily = get_daily_challenges(db, user_id, today=D)
        special = create_challenge(db, user_id, "Mentor someone", "One hour", 120)
        complete_challenge(db, user_id, daily[0].id, today=D)

        completed = list_challenges(db, user_id, status=ChallengeStatus.completed)
        assert [c.id for c in completed] == [daily[0].id]
        specials = list_challenges(db, user_id, challenge_type=ChallengeType.special)
        assert [c.id for c in specials] == [special.id]
        assert len(list_challenges(db, user_id)) == 5
