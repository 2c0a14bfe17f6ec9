"""Tests for the issue state use cases."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import StatementError

from city_sentinel.application.use_cases import (
    follow_issue,
    is_following_issue,
    unfollow_issue,
    update_issue_status,
    update_issue_verification,
)
from city_sentinel.application.use_cases.notifications import IssueNotFoundError
from city_sentinel.infrastructure.models import IssueModel
from city_sentinel.infrastructure.repositories import IssueRepository


def test_status_update_persists_and_describes_the_change(session, seed) -> None:
    seed.issue(status="pending")

    issue, event = update_issue_status(session, issue_id="issue-1", status="in_progress")

    assert issue.status == "in_progress"
    assert IssueRepository(session).get("issue-1").status == "in_progress"
    assert event is not None
    assert (event.kind, event.old_value, event.new_value) == ("status", "pending", "in_progress")


def test_resolving_sets_resolution_time(session, seed) -> None:
    seed.issue(status="in_progress")

    issue, _ = update_issue_status(session, issue_id="issue-1", status="resolved")

    assert issue.resolved_at is not None


def test_unchanged_status_produces_no_event(session, seed) -> None:
    seed.issue(status="pending")

    _, event = update_issue_status(session, issue_id="issue-1", status="pending")

    assert event is None


def test_status_change_without_reporter_produces_no_event(session, seed) -> None:
    seed.issue(reporter_id=None)

    issue, event = update_issue_status(session, issue_id="issue-1", status="withdrawn")

    assert issue.status == "withdrawn"
    assert event is None


def test_invalid_status_is_rejected(session, seed) -> None:
    seed.issue()

    with pytest.raises(ValueError):
        update_issue_status(session, issue_id="issue-1", status="archived")


def test_unknown_issue_is_reported(session) -> None:
    with pytest.raises(IssueNotFoundError):
        update_issue_status(session, issue_id="missing", status="resolved")


def test_verification_update_records_verifier(session, seed) -> None:
    seed.issue()

    issue, event = update_issue_verification(
        session,
        issue_id="issue-1",
        verification_status="verified",
        verified_by="M1",
        verifier_name="Jordan",
        verifier_role="moderator",
        notes="Checked on site",
    )

    assert issue.verification_status == "verified"
    assert issue.verified_by == "M1"
    assert issue.verified_at is not None
    assert issue.verification_notes == "Checked on site"
    assert event.old_value is None
    assert event.new_value == "verified"
    assert (event.actor_name, event.actor_role) == ("Jordan", "moderator")


def test_verification_keeps_previous_value_as_old_state(session, seed) -> None:
    seed.issue(verification_status="pending_verification")

    _, event = update_issue_verification(
        session, issue_id="issue-1", verification_status="spam"
    )

    assert event.old_value == "pending_verification"
    assert event.notification_type == "verification_spam"


def test_verification_without_verifier_keeps_the_stored_one(session, seed) -> None:
    seed.issue()
    update_issue_verification(
        session, issue_id="issue-1", verification_status="pending_verification", verified_by="M1"
    )

    issue, _ = update_issue_verification(
        session, issue_id="issue-1", verification_status="verified"
    )

    assert issue.verified_by == "M1"


def test_issue_table_rejects_unknown_states(session) -> None:
    session.add(
        IssueModel(id="issue-x", title="Leak", description="Water leak", status="archived")
    )

    with pytest.raises(StatementError):
        session.commit()
    session.rollback()


def test_follow_use_cases(session, seed) -> None:
    seed.issue()

    assert follow_issue(session, issue_id="issue-1", user_id="U5") is True
    assert follow_issue(session, issue_id="issue-1", user_id="U5") is False
    assert is_following_issue(session, issue_id="issue-1", user_id="U5") is True
    assert unfollow_issue(session, issue_id="issue-1", user_id="U5") is True
    assert unfollow_issue(session, issue_id="issue-1", user_id="U5") is False

    with pytest.raises(IssueNotFoundError):
        follow_issue(session, issue_id="missing", user_id="U5")
