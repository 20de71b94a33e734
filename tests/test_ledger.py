"""
Unit tests for the points ledger: totals are always rewards minus penalties.
"""
import pytest

from vocassion.services.ledger import (
    add_points,
    deduct_points,
    get_history,
    get_level,
    get_total_points,
)


class TestTotals:
    def test_no_rows_is_zero(self, db, user_id):
        assert get_total_points(db, user_id) == 0

    def test_rewards_are_summed(self, db, user_id):
        for points in (50, 30, 100):
            add_points(db, user_id, points)
        assert get_total_points(db, user_id) == 180

    def test_add_points_returns_new_total(self, db, user_id):
        assert add_points(db, user_id, 40, "first") == 40
        assert add_points(db, user_id, 2, "second") == 42

    def test_penalties_are_subtracted(self, db, user_id):
        add_points(db, user_id, 180)
        assert deduct_points(db, user_id, 150, "Unlocked goal") == 30
        assert get_total_points(db, user_id) == 30

    def test_total_can_go_negative(self, db, user_id):
        deduct_points(db, user_id, 10, "manual correction")
        assert get_total_points(db, user_id) == -10

    def test_users_are_isolated(self, db, user_id):
        add_points(db, user_id, 25)
        add_points(db, user_id + "-other", 1000)
        assert get_total_points(db, user_id) == 25


class TestLevel:
    @pytest.mark.parametrize("points,level", [
        (0, 1), (99, 1), (100, 2), (250, 3), (1000, 11), (-50, 1),
    ])
    def test_level_from_points(self, points, level):
        assert get_level(points) == level


class TestHistory:
    def test_history_signs_and_descriptions(self, db, user_id):
        add_points(db, user_id, 50, "Completed daily challenge")
        deduct_points(db, user_id, 20, "Unlocked goal: Run")
        entries = get_history(db, user_id)
        assert len(entries) == 2
        by_kind = {e.kind: e for e in entries}
        assert by_kind["reward"].points == 50
        assert by_kind["penalty"].points == -20
        assert by_kind["penalty"].description == "Unlocked goal: Run"

    def test_history_limit(self, db, user_id):
        for i in range(5):
            add_points(db, user_id, i + 1)
        assert len(get_history(db, user_id, limit=3)) == 3

    def test_history_orders_rewards_and_penalties_by_write(self, db, user_id):
        add_points(db, user_id, 10, "first")
        deduct_points(db, user_id, 5, "second")
        add_points(db, user_id, 3, "third")
        db.commit()
        assert [e.description for e in get_history(db, user_id)] == ["third", "second", "first"]
