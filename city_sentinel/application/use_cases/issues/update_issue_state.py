"""Use cases for changing the status or verification state of an issue."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from city_sentinel.domain.entities import (
    EVENT_KIND_STATUS,
    EVENT_KIND_VERIFICATION,
    ISSUE_STATUS_RESOLVED,
    ISSUE_STATUSES,
    VERIFICATION_STATUSES,
    ChangeEvent,
    Issue,
)
from city_sentinel.infrastructure.repositories import IssueRepository
from city_sentinel.utils import now_in_app_timezone

from city_sentinel.application.use_cases.notifications import IssueNotFoundError


def _get_issue(repository: IssueRepository, issue_id: str) -> Issue:
    issue = repository.get(issue_id)
    if issue is None:
        raise IssueNotFoundError(issue_id)
    return issue


def update_issue_status(
    session: Session, *, issue_id: str, status: str
) -> tuple[Issue, ChangeEvent | None]:
    """Persist the new ``status`` and describe the change to notify, if any.

    No event is produced when the status did not change or the issue has no
    reporter.
    """

    if status not in ISSUE_STATUSES:
        raise ValueError(f"'{status}' is not a valid issue status")

    repository = IssueRepository(session)
    current = _get_issue(repository, issue_id)
    if current.status == status:
        return current, None

    event = None
    if current.reporter_id:
        event = ChangeEvent(
            issue_id=current.id,
            kind=EVENT_KIND_STATUS,
            old_value=current.status,
            new_value=status,
        )

    updated = replace(current, status=status)
    if status == ISSUE_STATUS_RESOLVED:
        updated = replace(updated, resolved_at=now_in_app_timezone())
    return repository.update(updated), event


def update_issue_verification(
    session: Session,
    *,
    issue_id: str,
    verification_status: str,
    verified_by: str | None = None,
    verifier_name: str | None = None,
    verifier_role: str | None = None,
    notes: str | None = None,
) -> tuple[Issue, ChangeEvent | None]:
    """Persist a verification decision and describe the change to notify."""

    if verification_status not in VERIFICATION_STATUSES:
        raise ValueError(f"'{verification_status}' is not a valid verification status")

    repository = IssueRepository(session)
    current = _get_issue(repository, issue_id)
    if current.verification_status == verification_status:
        return current, None

    event = ChangeEvent(
        issue_id=current.id,
        kind=EVENT_KIND_VERIFICATION,
        old_value=current.verification_status,
        new_value=verification_status,
        actor_name=verifier_name,
        actor_role=verifier_role,
    )
    saved = repository.update(
        replace(
            current,
            verification_status=verification_status,
            verified_by=verified_by if verified_by is not None else current.verified_by,
            verified_at=now_in_app_timezone(),
            verification_notes=notes if notes is not None else current.verification_notes,
        )
    )
    return saved, event


__all__ = ["update_issue_status", "update_issue_verification"]
