"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Configure an in-memory entity store and disable email before the
# application modules read their settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from city_sentinel.config import Settings, reset_settings_cache  # noqa: E402
from city_sentinel.domain.entities import EmailSendAttempt, UserProfile  # noqa: E402
from city_sentinel.infrastructure.database import Base, build_engine  # noqa: E402
from city_sentinel.infrastructure.models import (  # noqa: E402
    IssueModel,
    NotificationModel,
    UserAccountModel,
)
from city_sentinel.infrastructure.repositories import (  # noqa: E402
    IssueFollowRepository,
    ProfileRepository,
)
from sqlalchemy.orm import sessionmaker  # noqa: E402

reset_settings_cache()


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def email_settings() -> Settings:
    """Settings with SendGrid credentials present."""

    return Settings(
        database_url="sqlite://",
        sendgrid_api_key="SG.test-key",
        sendgrid_sender="alerts@city-sentinel.test",
        email_send_timeout_seconds=2.0,
    )


class RecordingSender:
    """Email sender double that records every submission."""

    def __init__(self, *, failing: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self._failing = {address.lower() for address in failing or set()}

    def __call__(self, subject: str, html: str, recipient: str) -> EmailSendAttempt:
        self.calls.append((subject, html, recipient))
        if recipient.lower() in self._failing:
            return EmailSendAttempt(
                recipient=recipient, subject=subject, html=html, status_code=500, error="rejected"
            )
        return EmailSendAttempt(
            recipient=recipient, subject=subject, html=html, delivered=True, status_code=202
        )

    @property
    def recipients(self) -> list[str]:
        return [recipient for _, _, recipient in self.calls]


@pytest.fixture()
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def seed(session):
    """Return helpers that populate and inspect the entity store."""

    class Seeder:
        def issue(
            self,
            issue_id: str = "issue-1",
            *,
            reporter_id: str | None = "U1",
            reporter_email: str | None = None,
            status: str = "pending",
            verification_status: str | None = None,
            title: str = "Pothole on Main Street",
            description: str = "A deep pothole near the crossing is damaging cars.",
            address: str | None = "12 Main Street",
        ) -> None:
            session.add(
                IssueModel(
                    id=issue_id,
                    title=title,
                    description=description,
                    status=status,
                    address=address,
                    reporter_id=reporter_id,
                    reporter_email=reporter_email,
                    verification_status=verification_status,
                )
            )
            session.commit()

        def follower(self, issue_id: str, user_id: str) -> None:
            IssueFollowRepository(session).follow(issue_id, user_id)

        def account(self, user_id: str, email: str | None) -> None:
            session.add(UserAccountModel(id=user_id, email=email))
            session.commit()

        def profile(self, user_id: str, *, notification_email: bool = True) -> None:
            ProfileRepository(session).save(
                UserProfile(user_id=user_id, notification_email=notification_email)
            )

        def notifications_for(self, issue_id: str) -> list[NotificationModel]:
            session.expire_all()
            return (
                session.query(NotificationModel)
                .filter(NotificationModel.issue_id == issue_id)
                .order_by(NotificationModel.created_at.asc())
                .all()
            )

    return Seeder()


@pytest.fixture()
def make_sender():
    """Build a :class:`RecordingSender` with custom failing addresses."""

    return RecordingSender
