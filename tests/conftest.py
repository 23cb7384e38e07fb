"""Shared fixtures: a fresh SQLite database and an API test client per test."""

import asyncio
import sqlite3

import pytest
from fastapi.testclient import TestClient

from volunteer_api.app.core.config import settings
from volunteer_api.app.core.db import get_connection, init_db
from volunteer_api.app.schemas.article import ArticleCreate
from volunteer_api.app.services.article_service import ArticleService


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the application at an empty database file and migrate it."""
    path = tmp_path / "test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def client(db_path):
    from volunteer_api.app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def query(db_path):
    """Run a read query directly against the test database."""

    def _query(sql, params=()):
        conn = get_connection()
        try:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]
        finally:
            conn.close()

    return _query


@pytest.fixture
def register_user(client):
    """Register a user through the API and return its id."""

    def _register(email, user_type="volunteer", password_hash="hash-123", **extra):
        body = {"email": email, "passwordHash": password_hash, "userType": user_type, **extra}
        resp = client.post("/api/users/register", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["userId"]

    return _register


@pytest.fixture
def organizer_id(register_user):
    return register_user("org@example.org", "organization", organizationName="Green Earth")


@pytest.fixture
def event_payload(organizer_id):
    return {
        "title": "Beach Clean-up",
        "description": "Collect plastic along the shore",
        "organizerId": organizer_id,
        "category": "environment",
        "targetVolunteerCount": 2,
        "participationFeeIdr": 0,
        "location": {
            "country": "Indonesia",
            "province": "Bali",
            "city": "Denpasar",
            "district": "Denpasar Selatan",
            "village": "Sanur",
            "rtRw": "001/002",
            "latitude": -8.69,
            "longitude": 115.26,
        },
    }


@pytest.fixture
def create_event(client, event_payload):
    """Create an event through the API and return its id."""

    def _create(**overrides):
        resp = client.post("/api/events", json={**event_payload, **overrides})
        assert resp.status_code == 201, resp.text
        return resp.json()["eventId"]

    return _create


@pytest.fixture
def insert_event(db_path, organizer_id):
    """Insert an event row with explicit id and counters."""

    def _insert(event_id, target, current=0, is_active=True):
        conn = sqlite3.connect(str(db_path))
        try:
            conn.execute(
                """
                INSERT INTO events (
                    id, title, description, organizer_id, category,
                    target_volunteer_count, current_volunteer_count, is_active
                ) VALUES (?, 'Seeded', 'Seeded event', ?, 'general', ?, ?, ?)
                """,
                (event_id, organizer_id, target, current, int(is_active)),
            )
            conn.commit()
        finally:
            conn.close()
        return event_id

    return _insert


@pytest.fixture
def create_article(db_path):
    def _create(**fields):
        fields.setdefault("title", "Untitled")
        return asyncio.run(ArticleService.create_article(ArticleCreate(**fields)))

    return _create
