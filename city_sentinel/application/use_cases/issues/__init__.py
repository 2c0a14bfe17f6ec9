"""Use cases for managing issues."""

from .follows import follow_issue, is_following_issue, unfollow_issue
from .update_issue_state import update_issue_status, update_issue_verification

__all__ = [
    "follow_issue",
    "is_following_issue",
    "unfollow_issue",
    "update_issue_status",
    "update_issue_verification",
]
