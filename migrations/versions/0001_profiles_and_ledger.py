"""profiles, ikigai maps, points ledger, streaks, achievements

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id", sa.String(128),
        sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
    )


def upgrade() -> None:
    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("username", sa.String(128), nullable=False),
        sa.Column("slug", sa.String(160), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_profiles_slug", "profiles", ["slug"], unique=True)

    # --- ikigai_maps ---
    op.create_table(
        "ikigai_maps",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("passion", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("mission", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("profession", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("vocation", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index("ix_ikigai_maps_id", "ikigai_maps", ["id"])

    # --- rewards / penalties (append-only ledger) ---
    op.create_table(
        "rewards",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rewards_id", "rewards", ["id"])
    op.create_index("ix_rewards_user_id", "rewards", ["user_id"])

    op.create_table(
        "penalties",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column("points_lost", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_penalties_id", "penalties", ["id"])
    op.create_index("ix_penalties_user_id", "penalties", ["user_id"])

    # --- streaks ---
    op.create_table(
        "streaks",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("current_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("longest_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_checkin", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "type", name="uq_streak_user_type"),
    )
    op.create_index("ix_streaks_id", "streaks", ["id"])
    op.create_index("ix_streaks_user_id", "streaks", ["user_id"])

    # --- achievements ---
    op.create_table(
        "achievements",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "title", name="uq_achievement_user_title"),
    )
    op.create_index("ix_achievements_id", "achievements", ["id"])
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])


def downgrade() -> None:
    op.drop_table("achievements")
    op.drop_table("streaks")
    op.drop_table("penalties")
    op.drop_table("rewards")
    op.drop_table("ikigai_maps")
    op.drop_table("profiles")
