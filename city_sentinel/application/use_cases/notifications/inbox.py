"""Read side of the in-app notifications: listing and marking as read."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from city_sentinel.domain.entities import Notification
from city_sentinel.infrastructure.repositories import NotificationRepository


def list_user_notifications(
    session: Session,
    *,
    user_id: str,
    unread_only: bool = False,
    limit: int = 50,
) -> tuple[Sequence[Notification], int]:
    """Return the newest notifications of ``user_id`` and their unread count."""

    repository = NotificationRepository(session)
    notifications = repository.list_for_user(user_id, unread_only=unread_only, limit=limit)
    return notifications, repository.count_unread_for_user(user_id)


def mark_notifications_read(
    session: Session, *, user_id: str, notification_ids: Sequence[str] | None = None
) -> int:
    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)


__all__ = ["list_user_notifications", "mark_notifications_read"]
