"""
Goal tree: Goal → SubGoal → Milestone, plus GoalFeedback messages.

A goal with a points cost starts `locked`; unlocking spends the cost
(recorded as a Penalty) and flips it to `active`.
"""
from datetime import datetime, date
from sqlalchemy import (
    Integer, String, Text, Boolean, DateTime, Date, Enum, ForeignKey, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from vocassion.db.base import Base


class GoalStatus(str, enum.Enum):
    locked = "locked"
    active = "active"
    completed = "completed"


class IkigaiCategory(str, enum.Enum):
    PASSION = "PASSION"
    PROFESSION = "PROFESSION"
    MISSION = "MISSION"
    VOCATION = "VOCATION"


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        Enum(IkigaiCategory, name="ikigai_category_enum"), nullable=False,
    )
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(
        Enum(GoalStatus, name="goal_status_enum"),
        nullable=False,
        default=GoalStatus.active,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    sub_goals: Mapped[list["SubGoal"]] = relationship(
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="SubGoal.order",
    )


class SubGoal(Base):
    __tablename__ = "sub_goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    goal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        Enum(GoalStatus, name="goal_status_enum"),
        nullable=False,
        default=GoalStatus.active,
    )
    points_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    goal: Mapped[Goal] = relationship(back_populates="sub_goals")
    milestones: Mapped[list["Milestone"]] = relationship(
        back_populates="sub_goal",
        cascade="all, delete-orphan",
        order_by="Milestone.id",
    )


class Milestone(Base):
    __tablename__ = "milestones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    sub_goal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sub_goals.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    points_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    sub_goal: Mapped[SubGoal] = relationship(back_populates="milestones")


class GoalFeedback(Base):
    __tablename__ = "goal_feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    goal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="encouragement")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
