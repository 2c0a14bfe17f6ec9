"""Tests for the recipient resolver."""

from __future__ import annotations

from city_sentinel.application.use_cases.notifications import RecipientResolver
from city_sentinel.domain.entities import IssueSnapshot, UserProfile


class _Followers:
    def __init__(self, ids=None, *, error: Exception | None = None) -> None:
        self.ids = list(ids or [])
        self.error = error

    def list_follower_ids(self, issue_id):
        if self.error:
            raise self.error
        return self.ids


class _Profiles:
    def __init__(self, profiles=None, *, error: Exception | None = None) -> None:
        self.profiles = {profile.user_id: profile for profile in profiles or []}
        self.error = error
        self.requested: list[list[str]] = []

    def get_map_by_user_ids(self, user_ids):
        self.requested.append(list(user_ids))
        if self.error:
            raise self.error
        return {uid: self.profiles[uid] for uid in user_ids if uid in self.profiles}


class _Directory:
    def __init__(self, emails=None, *, error: Exception | None = None) -> None:
        self.emails = dict(emails or {})
        self.error = error
        self.requested: list[list[str]] = []

    def get_email_map_by_ids(self, user_ids):
        self.requested.append(list(user_ids))
        if self.error:
            raise self.error
        return {uid: self.emails[uid] for uid in user_ids if uid in self.emails}


def _issue(**overrides) -> IssueSnapshot:
    values = {
        "id": "I1",
        "title": "Broken streetlight",
        "description": "The light at the corner is out.",
        "reporter_id": "U1",
        "reporter_email": None,
    }
    values.update(overrides)
    return IssueSnapshot(**values)


def test_owner_comes_first_and_followers_are_deduplicated() -> None:
    resolver = RecipientResolver(
        followers=_Followers(["U2", "U1", "U3", "U2"]),
        profiles=_Profiles(),
        directory=_Directory({"U1": "u1@example.com", "U2": "u2@example.com"}),
    )

    targets = resolver.resolve(_issue())

    assert [(t.user_id, t.role) for t in targets] == [
        ("U1", "owner"),
        ("U2", "follower"),
        ("U3", "follower"),
    ]
    assert [t.email for t in targets] == ["u1@example.com", "u2@example.com", None]
    assert all(t.wants_email for t in targets)


def test_issue_without_reporter_or_followers_has_no_targets() -> None:
    directory = _Directory()
    resolver = RecipientResolver(
        followers=_Followers([]), profiles=_Profiles(), directory=directory
    )

    assert resolver.resolve(_issue(reporter_id=None)) == []
    assert directory.requested == []


def test_followers_are_notified_when_issue_has_no_reporter() -> None:
    resolver = RecipientResolver(
        followers=_Followers(["U2"]), profiles=_Profiles(), directory=_Directory()
    )

    targets = resolver.resolve(_issue(reporter_id=None))

    assert [(t.user_id, t.role) for t in targets] == [("U2", "follower")]


def test_reporter_email_on_issue_takes_precedence_over_directory() -> None:
    directory = _Directory({"U1": "login@example.com", "U2": "u2@example.com"})
    resolver = RecipientResolver(
        followers=_Followers(["U2"]), profiles=_Profiles(), directory=directory
    )

    targets = resolver.resolve(_issue(reporter_email="reporter@example.com"))

    assert targets[0].email == "reporter@example.com"
    assert directory.requested == [["U2"]]


def test_profile_preferences_are_applied_and_missing_profile_defaults_to_email() -> None:
    resolver = RecipientResolver(
        followers=_Followers(["U2", "U3"]),
        profiles=_Profiles(
            [
                UserProfile(user_id="U1", notification_email=True),
                UserProfile(user_id="U2", notification_email=False),
            ]
        ),
        directory=_Directory(),
    )

    targets = {t.user_id: t for t in resolver.resolve(_issue())}

    assert targets["U1"].wants_email is True
    assert targets["U2"].wants_email is False
    assert targets["U3"].wants_email is True


def test_follower_lookup_failure_falls_back_to_owner_only() -> None:
    resolver = RecipientResolver(
        followers=_Followers(error=RuntimeError("follow store down")),
        profiles=_Profiles(),
        directory=_Directory({"U1": "u1@example.com"}),
    )

    targets = resolver.resolve(_issue())

    assert [t.user_id for t in targets] == ["U1"]
    assert targets[0].email == "u1@example.com"


def test_profile_lookup_failure_defaults_every_target_to_email() -> None:
    resolver = RecipientResolver(
        followers=_Followers(["U2"]),
        profiles=_Profiles(error=RuntimeError("profiles down")),
        directory=_Directory(),
    )

    targets = resolver.resolve(_issue())

    assert [t.wants_email for t in targets] == [True, True]


def test_directory_failure_leaves_targets_without_email() -> None:
    resolver = RecipientResolver(
        followers=_Followers(["U2"]),
        profiles=_Profiles(),
        directory=_Directory(error=RuntimeError("directory down")),
    )

    targets = resolver.resolve(_issue(reporter_email="reporter@example.com"))

    assert [(t.user_id, t.email) for t in targets] == [
        ("U1", "reporter@example.com"),
        ("U2", None),
    ]
