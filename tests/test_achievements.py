"""
Unit tests for achievement awarding and the completed-challenge thresholds.
"""
from datetime import date

from vocassion.models.achievement import Achievement
from vocassion.models.challenge import Challenge, ChallengeStatus, ChallengeType
from vocassion.services.achievements import (
    award_achievement,
    category_emoji,
    check_and_award_achievements,
    list_achievements,
)


def _completed_challenges(db, user_id, n):
    for i in range(n):
        db.add(Challenge(
            user_id=user_id,
            title=f"Challenge {i}",
            description="done",
            type=ChallengeType.special,
            points=10,
            status=ChallengeStatus.completed,
            start_date=date(2026, 1, 1),
        ))
    db.flush()


class TestAwardAchievement:
    def test_award_is_idempotent(self, db, user_id):
        assert award_achievement(db, user_id, "Ikigai Pioneer", "First map", "milestone", 100)
        assert not award_achievement(db, user_id, "Ikigai Pioneer", "First map", "milestone", 100)
        count = db.query(Achievement).filter(Achievement.user_id == user_id).count()
        assert count == 1


class TestChallengeThresholds:
    def test_no_completed_challenges_awards_nothing(self, db, user_id):
        assert check_and_award_achievements(db, user_id) == []

    def test_first_challenge_unlocks_beginner(self, db, user_id):
        _completed_challenges(db, user_id, 1)
        assert check_and_award_achievements(db, user_id) == ["Challenge Beginner"]
        beginner = list_achievements(db, user_id)[0]
        assert beginner.points == 10
        assert beginner.category == "CHALLENGES"

    def test_rerun_awards_nothing_new(self, db, user_id):
        _completed_challenges(db, user_id, 5)
        first = check_and_award_achievements(db, user_id)
        assert first == ["Challenge Beginner", "Challenge Explorer"]
        assert check_and_award_achievements(db, user_id) == []
        assert check_and_award_achievements(db, user_id) == []
        assert len(list_achievements(db, user_id)) == 2

    def test_twenty_unlocks_master(self, db, user_id):
        _completed_challenges(db, user_id, 20)
        unlocked = check_and_award_achievements(db, user_id)
        assert "Challenge Master" in unlocked
        master = next(a for a in list_achievements(db, user_id) if a.title == "Challenge Master")
        assert master.points == 200


class TestEmoji:
    def test_known_and_unknown_categories(self):
        assert category_emoji("milestone") == "🏆"
        assert category_emoji("PASSION") == "❤️"
        assert category_emoji("development") == "🎯"
        assert category_emoji("") == "🎯"
