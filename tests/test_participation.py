"""Tests for volunteer registration, including concurrent registrations."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from volunteer_api.app.core.errors import ConflictError
from volunteer_api.app.schemas.participation import ParticipationCreate
from volunteer_api.app.services.participation_service import ParticipationService


def register(client, user_id, event_id, **extra):
    return client.post(
        "/api/participation", json={"userId": user_id, "eventId": event_id, **extra}
    )


def test_register_participation(client, create_event, query):
    event_id = create_event()
    resp = register(client, "user_A", event_id, donationAmount=50000)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["participationId"].startswith("part_")

    rows = query("SELECT user_id, event_id, donation_amount FROM participations")
    assert rows == [{"user_id": "user_A", "event_id": event_id, "donation_amount": 50000}]

    event = client.get(f"/api/events/{event_id}").json()
    assert event["currentVolunteerCount"] == 1
    assert event["registeredVolunteerIds"] == ["user_A"]


def test_donation_defaults_to_zero(client, create_event):
    event_id = create_event()
    assert register(client, "user_A", event_id).status_code == 201
    assert register(client, "user_B", event_id, donationAmount=None).status_code == 201

    for user_id in ("user_A", "user_B"):
        rows = client.get(f"/api/participation/user/{user_id}").json()
        assert rows[0]["donationAmount"] == 0


def test_full_event_rejects_without_side_effects(client, insert_event, query):
    insert_event("event_full", target=3, current=3)

    resp = register(client, "user_A", "event_full")
    assert resp.status_code == 400
    assert resp.json()["code"] == "event_full"
    assert query("SELECT id FROM participations") == []
    assert query("SELECT current_volunteer_count FROM events WHERE id = 'event_full'") == [
        {"current_volunteer_count": 3}
    ]


def test_duplicate_registration_is_rejected(client, create_event, query):
    event_id = create_event(targetVolunteerCount=10)
    assert register(client, "user_A", event_id).status_code == 201

    resp = register(client, "user_A", event_id)
    assert resp.status_code == 400
    assert resp.json()["code"] == "already_registered"
    assert len(query("SELECT id FROM participations")) == 1
    assert client.get(f"/api/events/{event_id}").json()["currentVolunteerCount"] == 1


def test_duplicate_is_reported_before_full(client, create_event):
    event_id = create_event(targetVolunteerCount=1)
    register(client, "user_A", event_id)
    assert register(client, "user_A", event_id).json()["code"] == "already_registered"
    assert register(client, "user_B", event_id).json()["code"] == "event_full"


def test_unknown_event_returns_404(client):
    resp = register(client, "user_A", "event_missing")
    assert resp.status_code == 404
    assert resp.json()["code"] == "event_not_found"


@pytest.mark.parametrize(
    "body",
    [
        {"eventId": "event_1"},
        {"userId": "user_A"},
        {"userId": "", "eventId": "event_1"},
        {"userId": "user_A", "eventId": "event_1", "donationAmount": -5},
    ],
)
def test_invalid_payload_returns_400(client, body):
    resp = client.post("/api/participation", json=body)
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


@pytest.mark.parametrize("amount", [b"Infinity", b"-Infinity", b"NaN"])
def test_non_finite_donation_is_rejected(client, insert_event, query, amount):
    insert_event("event_1", target=5)
    body = b'{"userId": "user_A", "eventId": "event_1", "donationAmount": ' + amount + b"}"

    resp = client.post(
        "/api/participation", content=body, headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"
    assert query("SELECT id FROM participations") == []


def test_list_user_participations_newest_first(client, create_event):
    first = create_event(title="First")
    second = create_event(title="Second")
    register(client, "user_A", first)
    register(client, "user_A", second)
    register(client, "user_B", first)

    resp = client.get("/api/participation/user/user_A")
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["eventId"] for r in rows] == [second, first]
    assert set(rows[0]) == {"id", "userId", "eventId", "donationAmount", "registrationDate"}


def test_list_participations_for_unknown_user_is_empty(client):
    assert client.get("/api/participation/user/nobody").json() == []


def test_capacity_one_end_to_end(client, insert_event):
    insert_event("event_1", target=1)

    assert register(client, "user_A", "event_1").status_code == 201
    event = client.get("/api/events/event_1").json()
    assert event["currentVolunteerCount"] == 1
    assert event["registeredVolunteerIds"] == ["user_A"]

    resp = register(client, "user_B", "event_1")
    assert resp.status_code == 400
    assert resp.json()["code"] == "event_full"
    event = client.get("/api/events/event_1").json()
    assert event["currentVolunteerCount"] == 1
    assert event["registeredVolunteerIds"] == ["user_A"]


def _attempt(user_id, event_id):
    try:
        asyncio.run(
            ParticipationService.register(ParticipationCreate(user_id=user_id, event_id=event_id))
        )
        return "ok"
    except ConflictError as e:
        return e.code


def test_concurrent_registrations_never_exceed_capacity(client, insert_event, query):
    insert_event("event_race", target=3)

    with ThreadPoolExecutor(max_workers=10) as pool:
        results = list(pool.map(lambda i: _attempt(f"user_{i}", "event_race"), range(10)))

    assert results.count("ok") == 3
    assert results.count("event_full") == 7
    assert len(query("SELECT id FROM participations WHERE event_id = 'event_race'")) == 3
    event = client.get("/api/events/event_race").json()
    assert event["currentVolunteerCount"] == 3
    assert len(event["registeredVolunteerIds"]) == 3


def test_concurrent_duplicate_registrations_succeed_once(client, insert_event, query):
    insert_event("event_dup", target=10)

    with ThreadPoolExecutor(max_workers=6) as pool:
        results = list(pool.map(lambda _: _attempt("user_A", "event_dup"), range(6)))

    assert results.count("ok") == 1
    assert results.count("already_registered") == 5
    assert query("SELECT current_volunteer_count FROM events WHERE id = 'event_dup'") == [
        {"current_volunteer_count": 1}
    ]
