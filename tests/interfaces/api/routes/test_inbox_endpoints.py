"""Integration tests for reading notifications and managing preferences."""

from __future__ import annotations


def _notify(client, new_status: str) -> None:
    response = client.post(
        "/notify-status-change",
        json={"issue_id": "issue-1", "old_status": "pending", "new_status": new_status},
    )
    assert response.status_code == 200


def test_list_notifications_newest_first_with_unread_count(client, seed) -> None:
    seed.issue(reporter_id="U1")
    _notify(client, "in_progress")
    _notify(client, "resolved")

    response = client.get("/notifications", params={"user_id": "U1"})

    assert response.status_code == 200
    body = response.json()
    assert body["unread_count"] == 2
    assert [item["type"] for item in body["notifications"]] == [
        "status_resolved",
        "status_in_progress",
    ]
    assert all(item["issue_id"] == "issue-1" for item in body["notifications"])


def test_list_notifications_requires_user(client) -> None:
    assert client.get("/notifications").status_code == 422


def test_mark_selected_notifications_read(client, seed) -> None:
    seed.issue(reporter_id="U1")
    _notify(client, "in_progress")
    _notify(client, "resolved")
    first_id = client.get("/notifications", params={"user_id": "U1"}).json()["notifications"][0]["id"]

    response = client.post("/notifications/read", json={"user_id": "U1", "ids": [first_id, first_id]})

    assert response.json() == {"updated": 1}
    unread = client.get("/notifications", params={"user_id": "U1", "unread_only": True}).json()
    assert unread["unread_count"] == 1
    assert [item["type"] for item in unread["notifications"]] == ["status_in_progress"]


def test_mark_all_read_only_touches_the_given_user(client, seed) -> None:
    seed.issue(reporter_id="U1")
    seed.follower("issue-1", "U2")
    _notify(client, "resolved")

    response = client.post("/notifications/read", json={"user_id": "U1"})

    assert response.json() == {"updated": 1}
    assert client.get("/notifications", params={"user_id": "U1"}).json()["unread_count"] == 0
    assert client.get("/notifications", params={"user_id": "U2"}).json()["unread_count"] == 1


def test_preferences_default_to_email_and_can_opt_out(client, seed, sender) -> None:
    seed.issue(reporter_id="U1", reporter_email="reporter@example.com")

    assert client.get("/profiles/U1/notification-preferences").json() == {
        "user_id": "U1",
        "notification_email": True,
    }

    response = client.put(
        "/profiles/U1/notification-preferences", json={"notification_email": False}
    )
    assert response.json()["notification_email"] is False

    _notify(client, "resolved")

    assert sender.calls == []
    assert client.get("/notifications", params={"user_id": "U1"}).json()["unread_count"] == 1
