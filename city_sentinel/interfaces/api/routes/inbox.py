"""Endpoints for reading in-app notifications."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from city_sentinel.application.use_cases.notifications import (
    list_user_notifications,
    mark_notifications_read,
)
from city_sentinel.domain.entities import Notification
from city_sentinel.infrastructure.database import get_db
from city_sentinel.interfaces.api.schemas import (
    NotificationListResponse,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        issue_id=notification.issue_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    user_id: str = Query(..., min_length=1),
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> NotificationListResponse:
    """Return the most recent notifications of a user, newest first."""

    notifications, unread_count = list_user_notifications(
        db, user_id=user_id, unread_only=unread_only, limit=limit
    )
    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in notifications],
        unread_count=unread_count,
    )


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
) -> NotificationMarkReadResponse:
    updated = mark_notifications_read(
        db, user_id=payload.user_id, notification_ids=payload.unique_ids()
    )
    return NotificationMarkReadResponse(updated=updated)
