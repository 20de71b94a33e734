from datetime import datetime, date
from sqlalchemy import Integer, String, Text, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vocassion.db.base import Base


class DailyReflection(Base):
    """One journal-style reflection per user per day."""

    __tablename__ = "daily_reflections"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_reflection_user_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    mood: Mapped[str] = mapped_column(String(64), nullable=False)
    gratitude: Mapped[str] = mapped_column(Text, nullable=False)
    challenges: Mapped[str] = mapped_column(Text, nullable=False)
    wins: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
