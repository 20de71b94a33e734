"""
Points ledger — rewards in, penalties out.

The balance is derived on every read:

    total = sum(rewards.points) - sum(penalties.points_lost)

Writers only append rows and flush; the caller owns the transaction
(see `vocassion.db.base.atomic`). A flush is required before summing
because sessions are created with autoflush disabled.

Public API
----------
add_points(db, user_id, amount, description)  -> int   (new total)
deduct_points(db, user_id, amount, reason)    -> int   (new total)
get_total_points(db, user_id)                 -> int
get_level(points)                             -> int
get_history(db, user_id, limit)               -> list[LedgerEntry]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from vocassion.models.ledger import Reward, Penalty

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 100


@dataclass
class LedgerEntry:
    kind: str          # "reward" | "penalty"
    points: int        # signed: negative for penalties
    description: str
    created_at: datetime


def get_total_points(db: Session, user_id: str) -> int:
    earned = (
        db.query(func.coalesce(func.sum(Reward.points), 0))
        .filter(Reward.user_id == user_id)
        .scalar()
    )
    spent = (
        db.query(func.coalesce(func.sum(Penalty.points_lost), 0))
        .filter(Penalty.user_id == user_id)
        .scalar()
    )
    return int(earned or 0) - int(spent or 0)


def add_points(
    db: Session,
    user_id: str,
    amount: int,
    description: str = "Points awarded",
) -> int:
    db.add(Reward(user_id=user_id, points=amount, description=description))
    db.flush()
    total = get_total_points(db, user_id)
    logger.info("reward user=%s points=%d reason=%r total=%d", user_id, amount, description, total)
    return total


def deduct_points(db: Session, user_id: str, amount: int, reason: str) -> int:
    db.add(Penalty(user_id=user_id, points_lost=amount, reason=reason))
    db.flush()
    total = get_total_points(db, user_id)
    logger.info("penalty user=%s points=%d reason=%r total=%d", user_id, amount, reason, total)
    return total


def get_level(points: int) -> int:
    """Every 100 points is one level; level 1 is the floor."""
    return max(1, points // POINTS_PER_LEVEL + 1)


def _sort_key(entry: LedgerEntry) -> datetime:
    # SQLite hands back naive values; rows still in the session are aware.
    if entry.created_at.tzinfo is None:
        return entry.created_at.replace(tzinfo=timezone.utc)
    return entry.created_at


def get_history(db: Session, user_id: str, limit: int = 50) -> list[LedgerEntry]:
    rewards = (
        db.query(Reward)
        .filter(Reward.user_id == user_id)
        .order_by(Reward.created_at.desc(), Reward.id.desc())
        .limit(limit)
        .all()
    )
    penalties = (
        db.query(Penalty)
        .filter(Penalty.user_id == user_id)
        .order_by(Penalty.created_at.desc(), Penalty.id.desc())
        .limit(limit)
        .all()
    )
    entries = [
        LedgerEntry("reward", r.points, r.description, r.created_at) for r in rewards
    ] + [
        LedgerEntry("penalty", -p.points_lost, p.reason, p.created_at) for p in penalties
    ]
    entries.sort(key=_sort_key, reverse=True)
    return entries[:limit]
