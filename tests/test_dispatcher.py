"""Tests for the per-run email dispatcher."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from city_sentinel.application.use_cases.notifications import EmailDispatcher
from city_sentinel.domain.entities import ChangeEvent, IssueSnapshot, RecipientTarget

ISSUE = IssueSnapshot(id="I1", title="Flooded underpass", description="Water everywhere")
EVENT = ChangeEvent(issue_id="I1", kind="status", old_value="pending", new_value="in_progress")


def test_disabled_dispatcher_never_calls_sender(sender) -> None:
    dispatcher = EmailDispatcher(sender, enabled=False)

    result = dispatcher.dispatch(
        EVENT, ISSUE, RecipientTarget(user_id="U1", role="owner", email="a@example.com")
    )

    assert result is None
    assert sender.calls == []


def test_opted_out_or_addressless_targets_are_skipped(sender) -> None:
    dispatcher = EmailDispatcher(sender, enabled=True)

    assert dispatcher.dispatch(EVENT, ISSUE, RecipientTarget(user_id="U1", role="owner")) is None
    assert (
        dispatcher.dispatch(
            EVENT,
            ISSUE,
            RecipientTarget(user_id="U2", role="follower", email="b@example.com", wants_email=False),
        )
        is None
    )
    assert sender.calls == []


def test_shared_address_receives_one_email_per_run(sender) -> None:
    dispatcher = EmailDispatcher(sender, enabled=True)

    first = dispatcher.dispatch(
        EVENT, ISSUE, RecipientTarget(user_id="U1", role="owner", email="Family@Example.com")
    )
    second = dispatcher.dispatch(
        EVENT, ISSUE, RecipientTarget(user_id="U2", role="follower", email="family@example.com")
    )

    assert first is not None and first.delivered
    assert second is None
    assert sender.recipients == ["Family@Example.com"]


def test_reserve_is_exclusive_across_threads(sender) -> None:
    dispatcher = EmailDispatcher(sender, enabled=True)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(dispatcher.reserve, ["shared@example.com"] * 50))

    assert results.count(True) == 1


def test_sender_exception_becomes_undelivered_attempt() -> None:
    def exploding_sender(subject, html, recipient):
        raise ConnectionError("provider unreachable")

    dispatcher = EmailDispatcher(exploding_sender, enabled=True)

    attempt = dispatcher.dispatch(
        EVENT, ISSUE, RecipientTarget(user_id="U1", role="owner", email="a@example.com")
    )

    assert attempt is not None
    assert attempt.delivered is False
    assert "provider unreachable" in attempt.error
