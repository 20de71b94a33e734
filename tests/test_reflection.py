"""
Tests for daily reflections and the reflection streak.
"""
from datetime import date, timedelta

import pytest

from vocassion.core.errors import ReflectionAlreadySubmittedError
from vocassion.services.reflections import create_reflection, list_reflections
from vocassion.services.streaks import StreakOutcome

D = date(2026, 5, 11)


def _reflect(db, user_id, day):
    return create_reflection(
        db, user_id,
        mood="hopeful",
        gratitude="family",
        challenges="focus",
        wins="finished the course",
        content="A good day overall.",
        today=day,
    )


class TestCreateReflection:
    def test_first_reflection_starts_streak(self, db, user_id):
        result = _reflect(db, user_id, D)
        assert result.reflection.day == D
        assert result.streak.outcome == StreakOutcome.CREATED
        assert result.streak.streak.type == "daily_reflection"

    def test_one_per_day(self, db, user_id):
        _reflect(db, user_id, D)
        with pytest.raises(ReflectionAlreadySubmittedError) as exc:
            _reflect(db, user_id, D)
        assert exc.value.details == {"day": "2026-05-11"}

    def test_next_day_continues_streak(self, db, user_id):
        _reflect(db, user_id, D)
        result = _reflect(db, user_id, D + timedelta(days=1))
        assert result.streak.outcome == StreakOutcome.CONTINUED
        assert result.streak.streak.current_count == 2


class TestListReflections:
    def test_newest_first(self, db, user_id):
        for offset in (0, 2, 1):
            _reflect(db, user_id, D + timedelta(days=offset))
        days = [r.day for r in list_reflections(db, user_id)]
        assert days == [D + timedelta(days=2), D + timedelta(days=1), D]
