from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from city_sentinel.domain.entities import UserProfile
from city_sentinel.infrastructure.repositories import ProfileRepository


def get_notification_preferences(session: Session, *, user_id: str) -> UserProfile:
    """Return the stored preferences, or the defaults when no profile exists."""

    return ProfileRepository(session).get(user_id) or UserProfile(user_id=user_id)


def update_notification_preferences(
    session: Session, *, user_id: str, notification_email: bool
) -> UserProfile:
    repository = ProfileRepository(session)
    current = repository.get(user_id) or UserProfile(user_id=user_id)
    return repository.save(replace(current, notification_email=notification_email))


__all__ = ["get_notification_preferences", "update_notification_preferences"]
