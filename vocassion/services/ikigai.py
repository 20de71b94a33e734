"""
Ikigai map persistence and the rewards attached to it.

  save_ikigai_map         upsert all four sections; the first save unlocks
                          "Ikigai Pioneer" and credits ASSESSMENT_POINTS
  award_section_progress  credit SECTION_POINTS for one filled section; once
                          every section has entries, unlock "Ikigai Master"
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from vocassion.core.errors import IkigaiMapNotFoundError, InvalidSectionError
from vocassion.db.base import atomic
from vocassion.models.ikigai import IkigaiMap, SECTIONS
from vocassion.services.achievements import award_achievement
from vocassion.services.ledger import add_points

logger = logging.getLogger(__name__)

ASSESSMENT_POINTS = 100
SECTION_POINTS = 25

PIONEER = ("Ikigai Pioneer", "Completed your first Ikigai assessment", "milestone", 100)
MASTER = ("Ikigai Master", "Completed all sections of your Ikigai map", "development", 100)


@dataclass
class IkigaiSaveResult:
    ikigai: IkigaiMap
    created: bool
    points_awarded: int = 0
    achievements_unlocked: list[str] = field(default_factory=list)


def _clean(values: Optional[list[str]]) -> list[str]:
    return [v.strip() for v in (values or []) if v and v.strip()]


def get_ikigai_map(db: Session, user_id: str) -> Optional[IkigaiMap]:
    return db.query(IkigaiMap).filter(IkigaiMap.user_id == user_id).first()


def require_ikigai_map(db: Session, user_id: str) -> IkigaiMap:
    ikigai = get_ikigai_map(db, user_id)
    if ikigai is None:
        raise IkigaiMapNotFoundError(user_id)
    return ikigai


def save_ikigai_map(
    db: Session,
    user_id: str,
    passion: Optional[list[str]] = None,
    mission: Optional[list[str]] = None,
    profession: Optional[list[str]] = None,
    vocation: Optional[list[str]] = None,
) -> IkigaiSaveResult:
    sections = {
        "passion": _clean(passion),
        "mission": _clean(mission),
        "profession": _clean(profession),
        "vocation": _clean(vocation),
    }
    with atomic(db):
        ikigai = get_ikigai_map(db, user_id)
        created = ikigai is None
        if created:
            ikigai = IkigaiMap(user_id=user_id)
            db.add(ikigai)
        for name, values in sections.items():
            ikigai.set_section(name, values)
        db.flush()

        result = IkigaiSaveResult(ikigai=ikigai, created=created)
        title, description, category, points = PIONEER
        if award_achievement(db, user_id, title, description, category, points):
            add_points(db, user_id, ASSESSMENT_POINTS, description="Completed Ikigai Assessment")
            result.points_awarded = ASSESSMENT_POINTS
            result.achievements_unlocked.append(title)

    db.refresh(ikigai)
    logger.info("ikigai saved user=%s created=%s complete=%s", user_id, created, ikigai.is_complete)
    return result


def award_section_progress(db: Session, user_id: str, section: str) -> IkigaiSaveResult:
    section = section.strip().lower()
    if section not in SECTIONS:
        raise InvalidSectionError(section, list(SECTIONS))

    with atomic(db):
        ikigai = require_ikigai_map(db, user_id)
        add_points(
            db, user_id, SECTION_POINTS,
            description=f"Completed {section} section of Ikigai map",
        )
        result = IkigaiSaveResult(ikigai=ikigai, created=False, points_awarded=SECTION_POINTS)
        if ikigai.is_complete:
            title, description, category, points = MASTER
            if award_achievement(db, user_id, title, description, category, points):
                result.achievements_unlocked.append(title)
    return result
