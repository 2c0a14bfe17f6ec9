"""Persistence layer for issues."""

from __future__ import annotations

from sqlalchemy.orm import Session

from city_sentinel.domain.entities import Issue, IssueSnapshot
from city_sentinel.infrastructure.models import IssueModel
from city_sentinel.utils import ensure_app_naive_datetime, ensure_app_timezone


class IssueRepository:
    """Provide read and update operations for :class:`Issue` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, issue_id: str) -> Issue | None:
        model = self.session.get(IssueModel, issue_id)
        return self._to_entity(model) if model else None

    def get_snapshot(self, issue_id: str) -> IssueSnapshot | None:
        issue = self.get(issue_id)
        return issue.snapshot() if issue else None

    def update(self, issue: Issue) -> Issue:
        model = self.session.get(IssueModel, issue.id)
        if model is None:
            msg = f"Issue with id {issue.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, issue)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: IssueModel, issue: Issue) -> None:
        model.title = issue.title
        model.description = issue.description
        model.status = issue.status
        model.address = issue.address
        model.reporter_id = issue.reporter_id
        model.reporter_email = issue.reporter_email
        model.verification_status = issue.verification_status
        model.verification_notes = issue.verification_notes
        model.verified_by = issue.verified_by
        model.verified_at = ensure_app_naive_datetime(issue.verified_at)
        model.resolved_at = ensure_app_naive_datetime(issue.resolved_at)

    @staticmethod
    def _to_entity(model: IssueModel) -> Issue:
        return Issue(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            address=model.address,
            reporter_id=model.reporter_id,
            reporter_email=model.reporter_email,
            verification_status=model.verification_status,
            verification_notes=model.verification_notes,
            verified_by=model.verified_by,
            verified_at=ensure_app_timezone(model.verified_at),
            resolved_at=ensure_app_timezone(model.resolved_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["IssueRepository"]
