"""Pydantic models describing change notification requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

IssueStatusValue = Literal["pending", "in_progress", "resolved", "withdrawn"]
VerificationStatusValue = Literal["pending_verification", "verified", "invalid", "spam"]


class StatusChangeRequest(BaseModel):
    """Body accepted by ``POST /notify-status-change``."""

    issue_id: str = Field(..., min_length=1)
    old_status: IssueStatusValue
    new_status: IssueStatusValue


class VerificationChangeRequest(BaseModel):
    """Body accepted by ``POST /notify-verification-change``."""

    issue_id: str = Field(..., min_length=1)
    old_status: VerificationStatusValue | None = None
    new_status: VerificationStatusValue
    verifier_name: str | None = None
    verifier_role: str | None = None


class NotificationSummaryResponse(BaseModel):
    success: bool = True
    message: str
    notifications_created: int
    emails_sent: int


class ErrorResponse(BaseModel):
    error: str


class NotificationRead(BaseModel):
    """Representation of an in-app notification delivered to the client."""

    id: str
    user_id: str
    issue_id: str | None = None
    title: str
    message: str
    type: str
    is_read: bool
    created_at: datetime | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    unread_count: int


class NotificationMarkReadRequest(BaseModel):
    """Mark the given notifications as read, or all of them when ``ids`` is omitted."""

    user_id: str = Field(..., min_length=1)
    ids: list[str] | None = Field(default=None, min_length=1)

    def unique_ids(self) -> list[str] | None:
        if self.ids is None:
            return None
        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResponse(BaseModel):
    updated: int


__all__ = [
    "ErrorResponse",
    "IssueStatusValue",
    "NotificationListResponse",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "NotificationSummaryResponse",
    "StatusChangeRequest",
    "VerificationChangeRequest",
    "VerificationStatusValue",
]
