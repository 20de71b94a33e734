"""
Request identity.

Authentication happens upstream (an auth proxy in front of the API). Its only
contract with this service is a set of forwarded headers carrying an opaque
user id and, optionally, an email and display name.
"""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from vocassion.core.config import settings
from vocassion.core.errors import NotAuthenticatedError
from vocassion.db.base import get_db
from vocassion.models.profile import Profile
from vocassion.services.profiles import get_or_create_profile


def resolve_user_id(
    x_auth_request_user: Optional[str],
    x_forwarded_user: Optional[str],
) -> Optional[str]:
    user_id = (x_auth_request_user or x_forwarded_user or "").strip()
    return user_id or None


def get_current_user_id(
    x_auth_request_user: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
) -> str:
    """Resolve the caller to an opaque user id or fail with 401."""
    if settings.DEV_MODE:
        return settings.DEV_USER_ID
    user_id = resolve_user_id(x_auth_request_user, x_forwarded_user)
    if user_id is None:
        raise NotAuthenticatedError()
    return user_id


def get_current_profile(
    user_id: str = Depends(get_current_user_id),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_auth_request_preferred_username: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Profile:
    email = x_auth_request_email.strip().lower() if x_auth_request_email else None
    return get_or_create_profile(
        db,
        user_id=user_id,
        email=email,
        display_name=x_auth_request_preferred_username,
    )
