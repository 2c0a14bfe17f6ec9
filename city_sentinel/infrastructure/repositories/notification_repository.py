"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from city_sentinel.domain.entities import Notification
from city_sentinel.infrastructure.models import NotificationModel
from city_sentinel.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide create and read operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread_for_user(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .scalar()
            or 0
        )

    def mark_as_read(self, notification_ids: Iterable[str] | None, *, user_id: str) -> int:
        """Mark notifications of ``user_id`` as read; all of them when ``ids`` is ``None``."""

        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
        )
        if notification_ids is not None:
            ids = [notification_id for notification_id in notification_ids if notification_id]
            if not ids:
                return 0
            query = query.filter(NotificationModel.id.in_(ids))
        updated = query.update(
            {NotificationModel.is_read: True}, synchronize_session=False
        )
        self.session.commit()
        return updated

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.user_id = notification.user_id
        model.issue_id = notification.issue_id
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.is_read = notification.is_read
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            # Leave the session usable for the next insert.
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            issue_id=model.issue_id,
            title=model.title,
            message=model.message,
            type=model.type,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
