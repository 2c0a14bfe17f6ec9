"""Public helpers for notifying users about issue changes."""

from .change_notifications import (
    ChangeNotificationOrchestrator,
    IssueNotFoundError,
    build_change_notification_orchestrator,
    notify_issue_change,
)
from .dispatcher import EmailDispatcher, PreparedEmail
from .email_templates import RenderedEmail, render_email, select_template
from .inbox import list_user_notifications, mark_notifications_read
from .labels import label_for
from .recipients import RecipientResolver
from .writer import NotificationWriteError, NotificationWriter, compose_notification_copy

__all__ = [
    "ChangeNotificationOrchestrator",
    "EmailDispatcher",
    "IssueNotFoundError",
    "NotificationWriteError",
    "NotificationWriter",
    "PreparedEmail",
    "RecipientResolver",
    "RenderedEmail",
    "build_change_notification_orchestrator",
    "compose_notification_copy",
    "label_for",
    "list_user_notifications",
    "mark_notifications_read",
    "notify_issue_change",
    "render_email",
    "select_template",
]
