"""End-to-end tests of the HTTP and websocket API."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from eventpass.interfaces.api.dependencies import get_fan_out_engine
from main import create_app


@pytest.fixture()
def client(fan_out_engine):
    app = create_app()
    app.dependency_overrides[get_fan_out_engine] = lambda: fan_out_engine
    with TestClient(app) as test_client:
        yield test_client


def _signup(client: TestClient, email: str, *, role: str = "participant") -> dict[str, str]:
    response = client.post(
        "/auth/signup",
        json={"name": email.split("@")[0], "email": email, "password": "Secret123!", "role": role},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _create_event(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    payload = {
        "title": "Tech Summit",
        "start_date": "2030-05-01T09:00:00Z",
        "requires_approval": True,
        **overrides,
    }
    response = client.post("/events/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_registration_lifecycle_over_http(client: TestClient) -> None:
    organizer = _signup(client, "organizer@example.com", role="organizer")
    event = _create_event(client, organizer)

    registered = client.post(
        f"/events/public/{event['public_link']}/register",
        json={"name": "Ana", "email": "ana@example.com"},
    )
    assert registered.status_code == 201
    registration = registered.json()
    assert registration["status"] == "pending"
    assert registration["user_id"] is None

    duplicate = client.post(
        f"/events/{event['id']}/registrations",
        json={"name": "Ana", "email": "ANA@example.com"},
    )
    assert duplicate.status_code == 400

    organizer_inbox = client.get("/notifications/", headers=organizer).json()
    assert [item["type"] for item in organizer_inbox] == ["new_registration"]

    attendee = _signup(client, "ana@example.com")
    assert client.get("/registrations/my-tickets", headers=attendee).json() == []

    forbidden = client.patch(
        f"/registrations/{registration['id']}/status",
        json={"action": "approve"},
        headers=attendee,
    )
    assert forbidden.status_code == 403

    approved = client.patch(
        f"/registrations/{registration['id']}/status",
        json={"action": "approve"},
        headers=organizer,
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    inbox = client.get("/notifications/", headers=attendee).json()
    assert [item["type"] for item in inbox] == ["registration_approved"]

    tickets = client.get("/registrations/my-tickets", headers=attendee).json()
    assert [ticket["id"] for ticket in tickets] == [registration["id"]]

    scan = client.post("/verify", json={"qr_code": registration["qr_code"]}, headers=organizer)
    assert scan.status_code == 200
    assert scan.json()["already_checked_in"] is False

    check_in = client.post(
        "/verify/check-in", json={"registration_id": registration["id"]}, headers=organizer
    )
    assert check_in.status_code == 200
    assert check_in.json()["type"] == "check_in"

    again = client.post(
        "/verify/check-in", json={"registration_id": registration["id"]}, headers=organizer
    )
    assert again.status_code == 409

    rescan = client.post("/verify", json={"qr_code": registration["qr_code"]}, headers=organizer)
    assert rescan.json()["already_checked_in"] is True

    unknown = client.post("/verify", json={"qr_code": "QR-nope"}, headers=organizer)
    assert unknown.status_code == 404

    history = client.get(f"/registrations/{registration['id']}/check-ins", headers=organizer)
    assert len(history.json()) == 1

    stats = client.get(f"/events/{event['id']}/stats", headers=organizer).json()
    assert stats["checked_in"] == 1


def test_broadcast_and_bulk_update_over_http(client: TestClient) -> None:
    organizer = _signup(client, "organizer@example.com", role="organizer")
    event = _create_event(client, organizer)
    attendees = {email: _signup(client, email) for email in ("a@x.com", "b@x.com")}

    ids = []
    for email, headers in attendees.items():
        response = client.post(
            f"/events/{event['id']}/registrations",
            json={"name": email, "email": email},
            headers=headers,
        )
        assert response.json()["user_id"] is not None
        ids.append(response.json()["id"])

    bulk = client.post(
        "/registrations/bulk-update",
        json={"registration_ids": ids + [ids[0], 999], "status": "approved"},
        headers=organizer,
    )
    assert bulk.json() == {"updated": 2, "total": 4}

    denied = client.post(
        f"/events/{event['id']}/broadcast",
        json={"message": "Hola"},
        headers=attendees["a@x.com"],
    )
    assert denied.status_code == 403

    accepted = client.post(
        f"/events/{event['id']}/broadcast",
        json={"title": "Parking", "message": "Use gate B"},
        headers=organizer,
    )
    assert accepted.status_code == 202
    assert accepted.json() == {"recipient_count": 2}

    history = client.get(f"/events/{event['id']}/broadcasts", headers=organizer).json()
    assert [item["title"] for item in history] == ["Parking"]

    inbox = client.get("/notifications/", headers=attendees["b@x.com"]).json()
    broadcast = next(item for item in inbox if item["type"] == "broadcast")
    marked = client.post(
        "/notifications/mark-read", json={"ids": [broadcast["id"]]}, headers=attendees["b@x.com"]
    )
    assert marked.json() == {"updated": 1}
    unread = client.get(
        "/notifications/", params={"unread_only": True}, headers=attendees["b@x.com"]
    ).json()
    assert broadcast["id"] not in [item["id"] for item in unread]


def test_push_token_registration(client: TestClient) -> None:
    headers = _signup(client, "a@x.com")

    response = client.put(
        "/auth/push-token", json={"push_token": "ExponentPushToken[abc]"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["has_push_token"] is True

    cleared = client.put("/auth/push-token", json={"push_token": None}, headers=headers)
    assert cleared.json()["has_push_token"] is False


def test_login_returns_token_and_rejects_bad_password(client: TestClient) -> None:
    _signup(client, "a@x.com")

    ok = client.post("/auth/token", data={"username": "A@x.com", "password": "Secret123!"})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"

    bad = client.post("/auth/token", data={"username": "a@x.com", "password": "wrong"})
    assert bad.status_code == 401


def test_websocket_rooms(client: TestClient) -> None:
    organizer = _signup(client, "organizer@example.com", role="organizer")
    event = _create_event(client, organizer)
    token = organizer["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "join-event", "event_id": event["id"]})
        assert websocket.receive_json() == {"type": "joined", "data": {"event_id": event["id"]}}

        websocket.send_json({"type": "join-event", "event_id": 9999})
        assert websocket.receive_json()["type"] == "error"


def test_registration_status_lookup(client: TestClient) -> None:
    organizer = _signup(client, "organizer@example.com", role="organizer")
    event = _create_event(client, organizer, requires_approval=False)
    client.post(
        f"/events/{event['id']}/registrations",
        json={"name": "Guest", "email": "guest@x.com"},
    )

    anonymous = client.get(f"/events/{event['id']}/registration-status")
    assert anonymous.json() == {"registration": None}

    by_param = client.get(
        f"/events/{event['id']}/registration-status", params={"email": "Guest@x.com"}
    )
    assert by_param.json()["registration"]["status"] == "approved"

    attendee = _signup(client, "guest@x.com")
    signed_in = client.get(f"/events/{event['id']}/registration-status", headers=attendee)
    assert signed_in.json()["registration"]["email"] == "guest@x.com"

    missing = client.get("/events/9999/registration-status")
    assert missing.status_code == 404
