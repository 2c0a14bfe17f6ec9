"""Domain entities exposed by the application."""

from .change_event import EVENT_KIND_STATUS, EVENT_KIND_VERIFICATION, ChangeEvent
from .email_attempt import EmailSendAttempt, OrchestrationSummary
from .issue import (
    ISSUE_STATUS_IN_PROGRESS,
    ISSUE_STATUS_PENDING,
    ISSUE_STATUS_RESOLVED,
    ISSUE_STATUS_WITHDRAWN,
    ISSUE_STATUSES,
    VERIFICATION_INVALID,
    VERIFICATION_PENDING,
    VERIFICATION_SPAM,
    VERIFICATION_STATUSES,
    VERIFICATION_VERIFIED,
    Issue,
    IssueSnapshot,
)
from .notification import Notification
from .recipient import RECIPIENT_ROLE_FOLLOWER, RECIPIENT_ROLE_OWNER, RecipientTarget
from .user_profile import UserProfile

__all__ = [
    "ChangeEvent",
    "EVENT_KIND_STATUS",
    "EVENT_KIND_VERIFICATION",
    "EmailSendAttempt",
    "OrchestrationSummary",
    "Issue",
    "IssueSnapshot",
    "ISSUE_STATUS_PENDING",
    "ISSUE_STATUS_IN_PROGRESS",
    "ISSUE_STATUS_RESOLVED",
    "ISSUE_STATUS_WITHDRAWN",
    "ISSUE_STATUSES",
    "VERIFICATION_PENDING",
    "VERIFICATION_VERIFIED",
    "VERIFICATION_INVALID",
    "VERIFICATION_SPAM",
    "VERIFICATION_STATUSES",
    "Notification",
    "RecipientTarget",
    "RECIPIENT_ROLE_OWNER",
    "RECIPIENT_ROLE_FOLLOWER",
    "UserProfile",
]
