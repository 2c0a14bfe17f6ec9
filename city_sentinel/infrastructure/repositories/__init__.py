"""Repository implementations for infrastructure layer."""

from .issue_follow_repository import IssueFollowRepository
from .issue_repository import IssueRepository
from .notification_repository import NotificationRepository
from .profile_repository import ProfileRepository, UserAccountRepository

__all__ = [
    "IssueFollowRepository",
    "IssueRepository",
    "NotificationRepository",
    "ProfileRepository",
    "UserAccountRepository",
]
