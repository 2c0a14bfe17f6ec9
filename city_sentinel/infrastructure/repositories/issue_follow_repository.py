"""Persistence layer for issue follow relationships."""

from __future__ import annotations

from sqlalchemy.orm import Session

from city_sentinel.infrastructure.models import IssueFollowModel


class IssueFollowRepository:
    """Read and record which users follow an issue."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_follower_ids(self, issue_id: str) -> list[str]:
        query = (
            self.session.query(IssueFollowModel.user_id)
            .filter(IssueFollowModel.issue_id == issue_id)
            .order_by(IssueFollowModel.created_at.asc(), IssueFollowModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    def is_following(self, issue_id: str, user_id: str) -> bool:
        return self._get(issue_id, user_id) is not None

    def follow(self, issue_id: str, user_id: str) -> bool:
        """Record the follow; ``False`` when it already existed."""

        if self._get(issue_id, user_id) is not None:
            return False
        self.session.add(IssueFollowModel(issue_id=issue_id, user_id=user_id))
        self.session.commit()
        return True

    def unfollow(self, issue_id: str, user_id: str) -> bool:
        model = self._get(issue_id, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get(self, issue_id: str, user_id: str) -> IssueFollowModel | None:
        return (
            self.session.query(IssueFollowModel)
            .filter_by(issue_id=issue_id, user_id=user_id)
            .first()
        )


__all__ = ["IssueFollowRepository"]
