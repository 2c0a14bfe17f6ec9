"""Create the in-app notification records of a change event."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from city_sentinel.domain.entities import (
    EVENT_KIND_STATUS,
    EVENT_KIND_VERIFICATION,
    RECIPIENT_ROLE_FOLLOWER,
    RECIPIENT_ROLE_OWNER,
    ChangeEvent,
    IssueSnapshot,
    Notification,
    RecipientTarget,
)
from city_sentinel.utils import now_in_app_timezone

from .labels import label_for


class NotificationWriteError(RuntimeError):
    """Raised when a notification record could not be stored."""

    def __init__(self, user_id: str, issue_id: str) -> None:
        super().__init__(f"Could not store notification for user {user_id} on issue {issue_id}")
        self.user_id = user_id
        self.issue_id = issue_id


class NotificationStore(Protocol):
    def create(self, notification: Notification) -> Notification: ...


def _status_owner(event: ChangeEvent, issue: IssueSnapshot) -> tuple[str, str]:
    old, new = label_for(event.kind, event.old_value), label_for(event.kind, event.new_value)
    return (
        f"Issue Status Updated: {new}",
        f'Your issue "{issue.title}" has been updated from {old} to {new}.',
    )


def _status_follower(event: ChangeEvent, issue: IssueSnapshot) -> tuple[str, str]:
    old, new = label_for(event.kind, event.old_value), label_for(event.kind, event.new_value)
    return (
        "Issue You Follow Updated",
        f'Issue "{issue.title}" has been updated from {old} to {new}.',
    )


def _verification_owner(event: ChangeEvent, issue: IssueSnapshot) -> tuple[str, str]:
    new = label_for(event.kind, event.new_value)
    actor = f" by a {event.actor_role}" if event.actor_role else ""
    return (
        f"Issue Verification Updated: {new}",
        f'Your issue "{issue.title}" has been {new.lower()}{actor}.',
    )


def _verification_follower(event: ChangeEvent, issue: IssueSnapshot) -> tuple[str, str]:
    old, new = label_for(event.kind, event.old_value), label_for(event.kind, event.new_value)
    return (
        "Issue You Follow - Verification Update",
        f'Issue "{issue.title}" verification status changed from {old} to {new}.',
    )


_COPY: dict[tuple[str, str], Callable[[ChangeEvent, IssueSnapshot], tuple[str, str]]] = {
    (EVENT_KIND_STATUS, RECIPIENT_ROLE_OWNER): _status_owner,
    (EVENT_KIND_STATUS, RECIPIENT_ROLE_FOLLOWER): _status_follower,
    (EVENT_KIND_VERIFICATION, RECIPIENT_ROLE_OWNER): _verification_owner,
    (EVENT_KIND_VERIFICATION, RECIPIENT_ROLE_FOLLOWER): _verification_follower,
}


def compose_notification_copy(
    event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget
) -> tuple[str, str]:
    """Return the ``(title, message)`` shown to ``target``."""

    return _COPY[(event.kind, target.role)](event, issue)


class NotificationWriter:
    """Persist one notification per ``(event, recipient)`` pair."""

    def __init__(self, store: NotificationStore) -> None:
        self._store = store

    def write(
        self, event: ChangeEvent, issue: IssueSnapshot, target: RecipientTarget
    ) -> Notification:
        title, message = compose_notification_copy(event, issue, target)
        notification = Notification(
            id=None,
            user_id=target.user_id,
            issue_id=issue.id,
            title=title,
            message=message,
            type=event.notification_type,
            is_read=False,
            created_at=now_in_app_timezone(),
        )
        try:
            return self._store.create(notification)
        except Exception as exc:
            raise NotificationWriteError(target.user_id, issue.id) from exc


__all__ = ["NotificationWriteError", "NotificationWriter", "compose_notification_copy"]
