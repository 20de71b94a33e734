"""goals, sub-goals, milestones, goal feedback, challenges

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 00:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

GOAL_STATUS = ("locked", "active", "completed")
IKIGAI_CATEGORY = ("PASSION", "PROFESSION", "MISSION", "VOCATION")
CHALLENGE_TYPE = ("daily", "weekly", "special")
CHALLENGE_STATUS = ("pending", "completed")


def _enum(values, name: str) -> sa.Enum:
    return sa.Enum(*values, name=name, create_type=False)


def upgrade() -> None:
    bind = op.get_bind()

    # --- ENUM types ---
    sa.Enum(*GOAL_STATUS, name="goal_status_enum").create(bind, checkfirst=True)
    sa.Enum(*IKIGAI_CATEGORY, name="ikigai_category_enum").create(bind, checkfirst=True)
    sa.Enum(*CHALLENGE_TYPE, name="challenge_type_enum").create(bind, checkfirst=True)
    sa.Enum(*CHALLENGE_STATUS, name="challenge_status_enum").create(bind, checkfirst=True)

    # --- goals ---
    op.create_table(
        "goals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", _enum(IKIGAI_CATEGORY, "ikigai_category_enum"), nullable=False),
        sa.Column("difficulty", sa.String(32), nullable=False, server_default="medium"),
        sa.Column("status", _enum(GOAL_STATUS, "goal_status_enum"), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("points_cost", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("points_reward", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_goals_id", "goals", ["id"])
    op.create_index("ix_goals_user_id", "goals", ["user_id"])

    # --- sub_goals ---
    op.create_table(
        "sub_goals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", _enum(GOAL_STATUS, "goal_status_enum"), nullable=False),
        sa.Column("points_reward", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sub_goals_id", "sub_goals", ["id"])
    op.create_index("ix_sub_goals_goal_id", "sub_goals", ["goal_id"])

    # --- milestones ---
    op.create_table(
        "milestones",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "sub_goal_id", sa.Integer(),
            sa.ForeignKey("sub_goals.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("points_reward", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_milestones_id", "milestones", ["id"])
    op.create_index("ix_milestones_sub_goal_id", "milestones", ["sub_goal_id"])

    # --- goal_feedback ---
    op.create_table(
        "goal_feedback",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False, server_default="encouragement"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_goal_feedback_id", "goal_feedback", ["id"])
    op.create_index("ix_goal_feedback_goal_id", "goal_feedback", ["goal_id"])

    # --- challenges ---
    op.create_table(
        "challenges",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", _enum(CHALLENGE_TYPE, "challenge_type_enum"), nullable=False),
        sa.Column("category", _enum(IKIGAI_CATEGORY, "ikigai_category_enum"), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", _enum(CHALLENGE_STATUS, "challenge_status_enum"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_challenges_id", "challenges", ["id"])
    op.create_index("ix_challenges_user_id", "challenges", ["user_id"])
    op.create_index("ix_challenges_start_date", "challenges", ["start_date"])


def downgrade() -> None:
    op.drop_table("challenges")
    op.drop_table("goal_feedback")
    op.drop_table("milestones")
    op.drop_table("sub_goals")
    op.drop_table("goals")

    bind = op.get_bind()
    sa.Enum(name="challenge_status_enum").drop(bind, checkfirst=True)
    sa.Enum(name="challenge_type_enum").drop(bind, checkfirst=True)
    sa.Enum(name="ikigai_category_enum").drop(bind, checkfirst=True)
    sa.Enum(name="goal_status_enum").drop(bind, checkfirst=True)
