"""ORM models used by the application infrastructure."""

from .issue import IssueFollowModel, IssueModel
from .notification import NotificationModel
from .user import ProfileModel, UserAccountModel

__all__ = [
    "IssueModel",
    "IssueFollowModel",
    "NotificationModel",
    "ProfileModel",
    "UserAccountModel",
]
