"""Endpoints for user notification preferences."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from city_sentinel.application.use_cases.profiles import (
    get_notification_preferences,
    update_notification_preferences,
)
from city_sentinel.infrastructure.database import get_db
from city_sentinel.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/{user_id}/notification-preferences", response_model=NotificationPreferencesRead)
def read_preferences(user_id: str, db: Session = Depends(get_db)) -> NotificationPreferencesRead:
    profile = get_notification_preferences(db, user_id=user_id)
    return NotificationPreferencesRead(
        user_id=profile.user_id, notification_email=profile.notification_email
    )


@router.put("/{user_id}/notification-preferences", response_model=NotificationPreferencesRead)
def update_preferences(
    user_id: str,
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
) -> NotificationPreferencesRead:
    """Opt a user in to or out of change emails."""

    profile = update_notification_preferences(
        db, user_id=user_id, notification_email=payload.notification_email
    )
    return NotificationPreferencesRead(
        user_id=profile.user_id, notification_email=profile.notification_email
    )
