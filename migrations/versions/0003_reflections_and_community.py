"""daily reflections, community feed, team challenges

Revision ID: 0003
Revises: 0002
Create Date: 2026-10-19 00:20:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0003"
down_revision: Union[str, None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk(name: str = "user_id") -> sa.Column:
    return sa.Column(
        name, sa.String(128),
        sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
    )


def upgrade() -> None:
    # --- daily_reflections ---
    op.create_table(
        "daily_reflections",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("mood", sa.String(64), nullable=False),
        sa.Column("gratitude", sa.Text(), nullable=False),
        sa.Column("challenges", sa.Text(), nullable=False),
        sa.Column("wins", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "day", name="uq_reflection_user_day"),
    )
    op.create_index("ix_daily_reflections_id", "daily_reflections", ["id"])
    op.create_index("ix_daily_reflections_user_id", "daily_reflections", ["user_id"])
    op.create_index("ix_daily_reflections_day", "daily_reflections", ["day"])

    # --- communities ---
    op.create_table(
        "communities",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # --- community_posts ---
    op.create_table(
        "community_posts",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk(),
        sa.Column(
            "community_id", sa.String(64),
            sa.ForeignKey("communities.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False, server_default="reflection"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_community_posts_id", "community_posts", ["id"])
    op.create_index("ix_community_posts_user_id", "community_posts", ["user_id"])
    op.create_index("ix_community_posts_community_id", "community_posts", ["community_id"])

    # --- post_likes / post_comments ---
    op.create_table(
        "post_likes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "post_id", sa.Integer(),
            sa.ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False,
        ),
        _user_fk(),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_post_like_post_user"),
    )
    op.create_index("ix_post_likes_id", "post_likes", ["id"])
    op.create_index("ix_post_likes_post_id", "post_likes", ["post_id"])

    op.create_table(
        "post_comments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "post_id", sa.Integer(),
            sa.ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False,
        ),
        _user_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_comments_id", "post_comments", ["id"])
    op.create_index("ix_post_comments_post_id", "post_comments", ["post_id"])

    # --- team_challenges / participants ---
    op.create_table(
        "team_challenges",
        sa.Column("id", sa.Integer(), nullable=False),
        _user_fk("creator_id"),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("reward_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_team_challenges_id", "team_challenges", ["id"])
    op.create_index("ix_team_challenges_end_date", "team_challenges", ["end_date"])

    op.create_table(
        "team_challenge_participants",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "challenge_id", sa.Integer(),
            sa.ForeignKey("team_challenges.id", ondelete="CASCADE"), nullable=False,
        ),
        _user_fk(),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("challenge_id", "user_id", name="uq_team_participant_challenge_user"),
    )
    op.create_index("ix_team_challenge_participants_id", "team_challenge_participants", ["id"])
    op.create_index(
        "ix_team_challenge_participants_challenge_id",
        "team_challenge_participants", ["challenge_id"],
    )

    # --- seed the shared community ---
    op.execute("""
        INSERT INTO communities (id, name, description)
        VALUES ('default', 'General', 'The main community for all users')
    """)


def downgrade() -> None:
    op.drop_table("team_challenge_participants")
    op.drop_table("team_challenges")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("community_posts")
    op.drop_table("communities")
    op.drop_table("daily_reflections")
