"""
IkigaiMap — the four Ikigai sections of a profile, 1:1 with `profiles`.

Each section is a JSON-encoded list of strings stored as Text.
"""
import json
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from vocassion.db.base import Base

SECTIONS = ("passion", "mission", "profession", "vocation")


class IkigaiMap(Base):
    __tablename__ = "ikigai_maps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    passion: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    mission: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    profession: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    vocation: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def section(self, name: str) -> list[str]:
        raw = getattr(self, name) or "[]"
        try:
            values = json.loads(raw)
        except (ValueError, TypeError):
            return []
        return [str(v) for v in values] if isinstance(values, list) else []

    def set_section(self, name: str, values: list[str]) -> None:
        setattr(self, name, json.dumps(list(values)))

    @property
    def is_complete(self) -> bool:
        return all(self.section(name) for name in SECTIONS)
