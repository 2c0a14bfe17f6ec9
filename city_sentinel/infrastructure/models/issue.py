"""SQLAlchemy models for issues and the users following them."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from city_sentinel.domain.entities import ISSUE_STATUSES, VERIFICATION_STATUSES
from city_sentinel.infrastructure.database import Base
from city_sentinel.utils import now_in_app_naive_datetime


def _new_id() -> str:
    return str(uuid4())


def _value_set(values, name: str) -> Enum:
    return Enum(
        *sorted(values),
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
    )


class IssueModel(Base):
    """Database representation of a reported issue."""

    __tablename__ = "issues"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(String(255), nullable=True)
    status = Column(_value_set(ISSUE_STATUSES, "issue_status"), nullable=False, default="pending")
    reporter_id = Column(String(36), nullable=True, index=True)
    reporter_email = Column(String(255), nullable=True)
    verification_status = Column(
        _value_set(VERIFICATION_STATUSES, "verification_status"), nullable=True
    )
    verification_notes = Column(Text, nullable=True)
    verified_by = Column(String(36), nullable=True)
    verified_at = Column(DateTime, nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    follows = relationship(
        "IssueFollowModel",
        back_populates="issue",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class IssueFollowModel(Base):
    """A user following an issue for updates."""

    __tablename__ = "issue_follows"
    __table_args__ = (UniqueConstraint("issue_id", "user_id", name="uq_issue_follow"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    issue_id = Column(
        String(36), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    issue = relationship("IssueModel", back_populates="follows")


__all__ = ["IssueModel", "IssueFollowModel"]
