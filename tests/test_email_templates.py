"""Tests for the change notification email templates."""

from __future__ import annotations

import pytest

from city_sentinel.application.use_cases.notifications import render_email, select_template
from city_sentinel.application.use_cases.notifications.labels import (
    BADGE_PALETTE,
    badge_colors,
    label_for,
)
from city_sentinel.domain.entities import ChangeEvent, IssueSnapshot, RecipientTarget

ISSUE = IssueSnapshot(
    id="I1",
    title="Graffiti on <school> wall",
    description="Paint all over the wall.",
    address="5 Elm Road",
    reporter_id="U1",
)
OWNER = RecipientTarget(user_id="U1", role="owner", email="u1@example.com")
FOLLOWER = RecipientTarget(user_id="U2", role="follower", email="u2@example.com")


def _status_event(old: str = "pending", new: str = "resolved") -> ChangeEvent:
    return ChangeEvent(issue_id="I1", kind="status", old_value=old, new_value=new)


def test_labels_fall_back_to_raw_value_and_none() -> None:
    assert label_for("status", "in_progress") == "In Progress"
    assert label_for("verification", "pending_verification") == "Pending Verification"
    assert label_for("verification", None) == "None"
    assert label_for("status", "archived") == "archived"


@pytest.mark.parametrize(
    ("value", "palette"),
    [
        ("pending", "amber"),
        ("in_progress", "blue"),
        ("resolved", "green"),
        ("verified", "green"),
        ("invalid", "red"),
        ("spam", "gray"),
        (None, "gray"),
    ],
)
def test_badge_colours(value, palette) -> None:
    assert badge_colors(value) == BADGE_PALETTE[palette]


def test_owner_status_email_has_owner_subject_and_no_follower_banner() -> None:
    rendered = render_email(_status_event(), ISSUE, OWNER)

    assert rendered.subject == "Issue Status Updated: Resolved"
    assert "Your issue has been updated!" in rendered.html
    assert "You're following this issue" not in rendered.html
    assert "Pending" in rendered.html and "Resolved" in rendered.html
    assert "5 Elm Road" in rendered.html


def test_follower_status_email_includes_banner() -> None:
    rendered = render_email(_status_event(), ISSUE, FOLLOWER)

    assert rendered.subject == "Issue Update: Graffiti on <school> wall"
    assert "You're following this issue" in rendered.html
    assert "An issue you follow has been updated!" in rendered.html


def test_issue_text_is_escaped_in_html() -> None:
    rendered = render_email(_status_event(), ISSUE, OWNER)

    assert "&lt;school&gt;" in rendered.html
    assert "<school>" not in rendered.html


def test_long_description_is_truncated() -> None:
    issue = IssueSnapshot(id="I1", title="Noise", description="x" * 400, reporter_id="U1")

    rendered = render_email(_status_event(), issue, OWNER)

    assert "x" * 150 + "..." in rendered.html
    assert "x" * 151 not in rendered.html


def test_verification_email_shows_verifier_and_skips_missing_previous_state() -> None:
    event = ChangeEvent(
        issue_id="I1",
        kind="verification",
        old_value=None,
        new_value="verified",
        actor_name="Jordan",
        actor_role="moderator",
    )

    rendered = render_email(event, ISSUE, FOLLOWER)

    assert rendered.subject == "Verification Update: Graffiti on <school> wall"
    assert "Verified by:</strong> Jordan (moderator)" in rendered.html
    assert "&rarr;" not in rendered.html
    assert "#7c3aed" in rendered.html


def test_verification_email_without_verifier_has_no_verifier_box() -> None:
    event = ChangeEvent(
        issue_id="I1", kind="verification", old_value="pending_verification", new_value="spam"
    )

    rendered = render_email(event, ISSUE, OWNER)

    assert rendered.subject == "Issue Verification Updated: Spam"
    assert "Verified by" not in rendered.html
    assert "Pending Verification" in rendered.html


def test_unknown_template_key_is_rejected() -> None:
    with pytest.raises(ValueError):
        select_template("status", "moderator")
