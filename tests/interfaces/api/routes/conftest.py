"""Fixtures for the HTTP API tests."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from city_sentinel.application.use_cases.notifications import change_notifications
from city_sentinel.infrastructure.database import get_db
from city_sentinel.interfaces.api.routes import issues as issues_routes


@pytest.fixture()
def client(session_factory, email_settings, sender, monkeypatch: pytest.MonkeyPatch):
    """Return a test client wired to the per-test database and email double."""

    from city_sentinel.main import create_app

    monkeypatch.setattr(change_notifications, "get_settings", lambda: email_settings)
    monkeypatch.setattr(change_notifications, "send_email", sender)
    monkeypatch.setattr(issues_routes, "SessionLocal", session_factory)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
