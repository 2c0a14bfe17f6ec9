"""Persistence layer for user profiles and identity records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from city_sentinel.domain.entities import UserProfile
from city_sentinel.infrastructure.models import ProfileModel, UserAccountModel


class ProfileRepository:
    """Look up notification preferences of users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> UserProfile | None:
        model = self.session.get(ProfileModel, user_id)
        return self._to_entity(model) if model else None

    def get_map_by_user_ids(self, user_ids: Sequence[str]) -> dict[str, UserProfile]:
        if not user_ids:
            return {}

        unique_ids = {str(user_id) for user_id in user_ids}
        query = self.session.query(ProfileModel).filter(
            ProfileModel.user_id.in_(unique_ids)
        )
        return {model.user_id: self._to_entity(model) for model in query.all()}

    def save(self, profile: UserProfile) -> UserProfile:
        model = self.session.get(ProfileModel, profile.user_id)
        if model is None:
            model = ProfileModel(user_id=profile.user_id)
        model.full_name = profile.full_name
        model.notification_email = profile.notification_email
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProfileModel) -> UserProfile:
        return UserProfile(
            user_id=model.user_id,
            full_name=model.full_name,
            notification_email=bool(model.notification_email),
        )


class UserAccountRepository:
    """Resolve contact addresses from the identity directory."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_email_map_by_ids(self, user_ids: Sequence[str]) -> dict[str, str]:
        if not user_ids:
            return {}

        unique_ids = {str(user_id) for user_id in user_ids}
        query = self.session.query(UserAccountModel.id, UserAccountModel.email).filter(
            UserAccountModel.id.in_(unique_ids)
        )
        return {user_id: email for user_id, email in query.all() if email}


__all__ = ["ProfileRepository", "UserAccountRepository"]
