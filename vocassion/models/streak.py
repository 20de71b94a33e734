from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vocassion.db.base import Base


class Streak(Base):
    """Consecutive-day counter for one (user, activity type) pair."""

    __tablename__ = "streaks"
    __table_args__ = (
        UniqueConstraint("user_id", "type", name="uq_streak_user_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    current_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    longest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_checkin: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
