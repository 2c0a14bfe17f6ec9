"""Aggregate application use cases."""

from .issues import (
    follow_issue,
    is_following_issue,
    unfollow_issue,
    update_issue_status,
    update_issue_verification,
)
from .notifications import list_user_notifications, mark_notifications_read, notify_issue_change
from .profiles import get_notification_preferences, update_notification_preferences

__all__ = [
    "follow_issue",
    "get_notification_preferences",
    "is_following_issue",
    "list_user_notifications",
    "mark_notifications_read",
    "notify_issue_change",
    "unfollow_issue",
    "update_issue_status",
    "update_issue_verification",
    "update_notification_preferences",
]
