from .issue import FollowStatus, IssueRead, IssueStatusUpdate, IssueVerificationUpdate
from .notification import (
    ErrorResponse,
    NotificationListResponse,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
    NotificationSummaryResponse,
    StatusChangeRequest,
    VerificationChangeRequest,
)
from .profile import NotificationPreferencesRead, NotificationPreferencesUpdate

__all__ = [
    "ErrorResponse",
    "FollowStatus",
    "IssueRead",
    "IssueStatusUpdate",
    "IssueVerificationUpdate",
    "NotificationListResponse",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "NotificationSummaryResponse",
    "StatusChangeRequest",
    "VerificationChangeRequest",
]
