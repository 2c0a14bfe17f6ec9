"""Resolve who must be notified about an issue change."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from city_sentinel.domain.entities import (
    RECIPIENT_ROLE_FOLLOWER,
    RECIPIENT_ROLE_OWNER,
    IssueSnapshot,
    RecipientTarget,
    UserProfile,
)

logger = logging.getLogger(__name__)


class FollowerSource(Protocol):
    def list_follower_ids(self, issue_id: str) -> Sequence[str]: ...


class ProfileSource(Protocol):
    def get_map_by_user_ids(self, user_ids: Sequence[str]) -> Mapping[str, UserProfile]: ...


class EmailDirectory(Protocol):
    def get_email_map_by_ids(self, user_ids: Sequence[str]) -> Mapping[str, str]: ...


class RecipientResolver:
    """Compute the deduplicated list of notification targets for an issue.

    The reporter comes first with the ``owner`` role; followers are appended
    in the order returned by the follow store. Lookup failures degrade the
    result instead of raising:

    * followers unavailable: only the owner is returned;
    * profiles unavailable: every target defaults to wanting email;
    * identity directory unavailable: targets without an address on the
      issue get in-app notifications only.
    """

    def __init__(
        self,
        *,
        followers: FollowerSource,
        profiles: ProfileSource,
        directory: EmailDirectory,
    ) -> None:
        self._followers = followers
        self._profiles = profiles
        self._directory = directory

    def resolve(self, issue: IssueSnapshot) -> list[RecipientTarget]:
        owner_id = issue.reporter_id or None
        user_ids: list[str] = [owner_id] if owner_id else []
        for follower_id in self._fetch_follower_ids(issue):
            if follower_id and follower_id not in user_ids:
                user_ids.append(follower_id)

        if not user_ids:
            return []

        profiles = self._fetch_profiles(issue, user_ids)

        lookup_ids = [
            user_id
            for user_id in user_ids
            if not (user_id == owner_id and issue.reporter_email)
        ]
        emails = self._fetch_emails(issue, lookup_ids)

        targets: list[RecipientTarget] = []
        for user_id in user_ids:
            is_owner = user_id == owner_id
            email = issue.reporter_email if is_owner and issue.reporter_email else None
            profile = profiles.get(user_id)
            targets.append(
                RecipientTarget(
                    user_id=user_id,
                    role=RECIPIENT_ROLE_OWNER if is_owner else RECIPIENT_ROLE_FOLLOWER,
                    email=email or emails.get(user_id) or None,
                    wants_email=profile.notification_email if profile else True,
                )
            )
        return targets

    def _fetch_follower_ids(self, issue: IssueSnapshot) -> list[str]:
        try:
            return [str(user_id) for user_id in self._followers.list_follower_ids(issue.id)]
        except Exception:
            logger.exception(
                "Could not fetch followers of issue %s; notifying the reporter only",
                issue.id,
            )
            return []

    def _fetch_profiles(
        self, issue: IssueSnapshot, user_ids: Sequence[str]
    ) -> Mapping[str, UserProfile]:
        try:
            return self._profiles.get_map_by_user_ids(user_ids)
        except Exception:
            logger.exception(
                "Could not fetch notification preferences for issue %s; assuming email is wanted",
                issue.id,
            )
            return {}

    def _fetch_emails(
        self, issue: IssueSnapshot, user_ids: Sequence[str]
    ) -> Mapping[str, str]:
        if not user_ids:
            return {}
        try:
            return self._directory.get_email_map_by_ids(user_ids)
        except Exception:
            logger.exception(
                "Could not resolve email addresses for %s recipient(s) of issue %s",
                len(user_ids),
                issue.id,
            )
            return {}


__all__ = ["RecipientResolver"]
