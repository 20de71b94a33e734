from datetime import datetime, date
from sqlalchemy import Integer, String, Text, DateTime, Date, Enum, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from vocassion.db.base import Base
from vocassion.models.goal import IkigaiCategory


class ChallengeType(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    special = "special"


class ChallengeStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"


class Challenge(Base):
    """A personal task worth points; completing one feeds streaks and achievements."""

    __tablename__ = "challenges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        Enum(ChallengeType, name="challenge_type_enum"),
        nullable=False,
        default=ChallengeType.daily,
    )
    category: Mapped[str | None] = mapped_column(
        Enum(IkigaiCategory, name="ikigai_category_enum"), nullable=True,
    )
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        Enum(ChallengeStatus, name="challenge_status_enum"),
        nullable=False,
        default=ChallengeStatus.pending,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
