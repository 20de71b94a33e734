"""
Profile bootstrap and lookups.

A profile is created the first time an authenticated user id reaches the
API, using whatever display data the auth proxy forwarded.
"""
from __future__ import annotations

import logging
import re
import secrets
import unicodedata
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vocassion.core.errors import ProfileNotFoundError
from vocassion.models.profile import Profile

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    normalized = unicodedata.normalize("NFD", name.lower())
    ascii_only = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9-]", "-", ascii_only)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or "user"


def _unique_value(db: Session, column, base: str) -> str:
    if db.query(Profile.id).filter(column == base).first() is None:
        return base
    return f"{base}-{secrets.token_hex(3)}"


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.id == user_id).first()


def require_profile(db: Session, user_id: str) -> Profile:
    profile = get_profile(db, user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)
    return profile


def get_or_create_profile(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
) -> Profile:
    profile = get_profile(db, user_id)
    if profile is not None:
        return profile

    name = display_name or (email.split("@")[0] if email else f"User {user_id[:8]}")
    username_base = re.sub(r"\s+", "", name.lower()) or "user"
    profile = Profile(
        id=user_id,
        name=name,
        username=_unique_value(db, Profile.username, f"{username_base}{user_id[:8].lower()}"),
        slug=_unique_value(db, Profile.slug, slugify(name)),
        email=email,
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent first request for the same user won the insert.
        db.rollback()
        existing = get_profile(db, user_id)
        if existing is None:
            raise
        logger.info("profile for user=%s created concurrently; reusing it", user_id)
        return existing
    db.refresh(profile)
    logger.info("profile created user=%s slug=%s", user_id, profile.slug)
    return profile


def update_profile(
    db: Session,
    profile: Profile,
    name: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Profile:
    if name:
        profile.name = name
    if image_url is not None:
        profile.image_url = image_url
    db.commit()
    db.refresh(profile)
    return profile
