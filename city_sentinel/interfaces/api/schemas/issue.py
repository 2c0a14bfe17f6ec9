"""Schemas exposed by the issue state endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .notification import IssueStatusValue, VerificationStatusValue


class IssueRead(BaseModel):
    id: str
    title: str
    description: str
    status: str
    address: str | None
    reporter_id: str | None
    verification_status: str | None
    verification_notes: str | None
    verified_by: str | None
    verified_at: datetime | None
    resolved_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class IssueStatusUpdate(BaseModel):
    status: IssueStatusValue


class IssueVerificationUpdate(BaseModel):
    verification_status: VerificationStatusValue
    verified_by: str | None = None
    verifier_name: str | None = None
    verifier_role: str | None = None
    notes: str | None = Field(default=None, max_length=2000)


class FollowStatus(BaseModel):
    issue_id: str
    user_id: str
    following: bool


__all__ = ["FollowStatus", "IssueRead", "IssueStatusUpdate", "IssueVerificationUpdate"]
