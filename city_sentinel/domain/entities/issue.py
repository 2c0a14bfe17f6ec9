"""Domain entities describing reported issues."""

from dataclasses import dataclass
from datetime import datetime

ISSUE_STATUS_PENDING = "pending"
ISSUE_STATUS_IN_PROGRESS = "in_progress"
ISSUE_STATUS_RESOLVED = "resolved"
ISSUE_STATUS_WITHDRAWN = "withdrawn"

ISSUE_STATUSES = frozenset(
    {
        ISSUE_STATUS_PENDING,
        ISSUE_STATUS_IN_PROGRESS,
        ISSUE_STATUS_RESOLVED,
        ISSUE_STATUS_WITHDRAWN,
    }
)

VERIFICATION_PENDING = "pending_verification"
VERIFICATION_VERIFIED = "verified"
VERIFICATION_INVALID = "invalid"
VERIFICATION_SPAM = "spam"

VERIFICATION_STATUSES = frozenset(
    {
        VERIFICATION_PENDING,
        VERIFICATION_VERIFIED,
        VERIFICATION_INVALID,
        VERIFICATION_SPAM,
    }
)


@dataclass(frozen=True)
class IssueSnapshot:
    """Read-only view of an issue used while fanning out notifications."""

    id: str
    title: str
    description: str
    address: str | None = None
    reporter_id: str | None = None
    reporter_email: str | None = None


@dataclass
class Issue:
    """Infrastructure problem reported by a citizen."""

    id: str
    title: str
    description: str
    status: str
    address: str | None
    reporter_id: str | None
    reporter_email: str | None
    verification_status: str | None
    verification_notes: str | None
    verified_by: str | None
    verified_at: datetime | None
    resolved_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    def snapshot(self) -> IssueSnapshot:
        return IssueSnapshot(
            id=self.id,
            title=self.title,
            description=self.description,
            address=self.address,
            reporter_id=self.reporter_id,
            reporter_email=self.reporter_email,
        )


__all__ = [
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
]
