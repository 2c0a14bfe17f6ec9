"""Use cases for following issues to receive their updates."""

from __future__ import annotations

from sqlalchemy.orm import Session

from city_sentinel.infrastructure.repositories import IssueFollowRepository, IssueRepository

from city_sentinel.application.use_cases.notifications import IssueNotFoundError


def _ensure_issue(session: Session, issue_id: str) -> None:
    if IssueRepository(session).get_snapshot(issue_id) is None:
        raise IssueNotFoundError(issue_id)


def is_following_issue(session: Session, *, issue_id: str, user_id: str) -> bool:
    _ensure_issue(session, issue_id)
    return IssueFollowRepository(session).is_following(issue_id, user_id)


def follow_issue(session: Session, *, issue_id: str, user_id: str) -> bool:
    """Subscribe ``user_id`` to ``issue_id``; ``False`` if already following."""

    _ensure_issue(session, issue_id)
    return IssueFollowRepository(session).follow(issue_id, user_id)


def unfollow_issue(session: Session, *, issue_id: str, user_id: str) -> bool:
    _ensure_issue(session, issue_id)
    return IssueFollowRepository(session).unfollow(issue_id, user_id)


__all__ = ["follow_issue", "is_following_issue", "unfollow_issue"]
