"""
Unit tests for daily streak check-ins.
"""
from datetime import date, timedelta

from vocassion.services.achievements import has_achievement
from vocassion.services.streaks import StreakOutcome, get_streak, update_streak

D = date(2026, 3, 2)
KIND = "daily_challenges"


class TestUpdateStreak:
    def test_first_checkin_creates_streak(self, db, user_id):
        result = update_streak(db, user_id, KIND, today=D)
        assert result.outcome == StreakOutcome.CREATED
        assert result.outcome == "created"
        assert result.streak.current_count == 1
        assert result.streak.longest_count == 1
        assert result.streak.last_checkin == D

    def test_same_day_is_unchanged(self, db, user_id):
        update_streak(db, user_id, KIND, today=D)
        result = update_streak(db, user_id, KIND, today=D)
        assert result.outcome == StreakOutcome.UNCHANGED
        assert result.streak.current_count == 1

    def test_next_day_continues(self, db, user_id):
        update_streak(db, user_id, KIND, today=D)
        result = update_streak(db, user_id, KIND, today=D + timedelta(days=1))
        assert result.outcome == StreakOutcome.CONTINUED
        assert result.streak.current_count == 2
        assert result.streak.longest_count == 2
        assert result.streak.last_checkin == D + timedelta(days=1)

    def test_gap_resets_current_but_keeps_longest(self, db, user_id):
        for offset in range(3):
            update_streak(db, user_id, KIND, today=D + timedelta(days=offset))
        result = update_streak(db, user_id, KIND, today=D + timedelta(days=4))
        assert result.outcome == StreakOutcome.RESET
        assert result.streak.current_count == 1
        assert result.streak.longest_count == 3

    def test_checkin_dated_before_last_is_unchanged(self, db, user_id):
        update_streak(db, user_id, KIND, today=D)
        result = update_streak(db, user_id, KIND, today=D - timedelta(days=1))
        assert result.outcome == StreakOutcome.UNCHANGED
        assert result.streak.last_checkin == D

    def test_types_are_independent(self, db, user_id):
        update_streak(db, user_id, KIND, today=D)
        update_streak(db, user_id, KIND, today=D + timedelta(days=1))
        update_streak(db, user_id, "daily_reflection", today=D + timedelta(days=1))
        assert get_streak(db, user_id, KIND).current_count == 2
        assert get_streak(db, user_id, "daily_reflection").current_count == 1


class TestStreakAchievements:
    def test_seven_days_unlocks_week_warrior_once(self, db, user_id):
        unlocked = []
        for offset in range(7):
            unlocked += update_streak(
                db, user_id, KIND, today=D + timedelta(days=offset)
            ).achievements_unlocked
        assert unlocked == ["Week Warrior"]
        assert has_achievement(db, user_id, "Week Warrior")

        # Break the streak and climb back to 7: no second award.
        restart = D + timedelta(days=10)
        again = []
        for offset in range(7):
            again += update_streak(
                db, user_id, KIND, today=restart + timedelta(days=offset)
            ).achievements_unlocked
        assert again == []

    def test_thirty_days_unlocks_monthly_master(self, db, user_id):
        unlocked = []
        for offset in range(30):
            unlocked += update_streak(
                db, user_id, KIND, today=D + timedelta(days=offset)
            ).achievements_unlocked
        assert unlocked == ["Week Warrior", "Monthly Master"]
