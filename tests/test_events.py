from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlmodel import Session

from app.api.v1 import events as events_routes
from app.core.errors import StoreError
from app.models.event import Event
from tests.conftest import session_headers


def _seed_events(app, user_id: str, count: int, kind: str = "capture") -> list[str]:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ids = []
    with Session(app.state.engine) as session:
        for index in range(count):
            record = Event(
                user_id=user_id,
                kind=kind,
                payload={"index": index},
                ts=base + timedelta(minutes=index),
            )
            session.add(record)
            ids.append(record.id)
        session.commit()
    return ids


def test_create_event_enriches_payload_and_uses_session_user(client):
    user_id = str(uuid4())
    response = client.post(
        "/api/events",
        json={"kind": "click", "payload": {"x": 1}, "site": "chat.openai.com", "provider": "openai"},
        headers=session_headers(user_id),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == user_id
    assert body["kind"] == "click"
    assert body["payload"]["x"] == 1
    assert body["payload"]["site"] == "chat.openai.com"
    assert body["payload"]["provider"] == "openai"
    assert body["payload"]["timestamp"].endswith("Z")
    datetime.fromisoformat(body["payload"]["timestamp"].replace("Z", "+00:00"))
    assert body["ts"]
    assert body["id"]


def test_create_event_injects_site_and_provider_even_when_absent(client):
    response = client.post(
        "/api/events",
        json={"kind": "click", "payload": {"x": 1}},
        headers=session_headers("user-a"),
    )
    assert response.status_code == 200
    payload = response.json()["payload"]
    assert payload["x"] == 1
    assert {"site", "provider", "timestamp"} <= set(payload)
    assert payload["site"] is None
    assert payload["provider"] is None


def test_create_event_rejects_client_supplied_user_id(client, store_calls):
    response = client.post(
        "/api/events",
        json={"kind": "click", "payload": {"x": 1}, "user_id": "someone-else"},
        headers=session_headers("user-a"),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}
    assert store_calls["create_event"].calls == 0


def test_create_event_requires_kind_and_payload(client, store_calls):
    headers = session_headers("user-a")
    for body in ({"payload": {"x": 1}}, {"kind": "click"}, {"kind": "", "payload": {}}, {"kind": "click", "payload": None}):
        response = client.post("/api/events", json=body, headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Kind and payload required"}
    assert store_calls["create_event"].calls == 0


def test_create_event_accepts_empty_payload_object(client):
    response = client.post("/api/events", json={"kind": "inject", "payload": {}}, headers=session_headers("user-a"))
    assert response.status_code == 200
    assert set(response.json()["payload"]) == {"site", "provider", "timestamp"}


def test_list_events_paginates_newest_first(app, client):
    ids = _seed_events(app, "user-a", 5)
    response = client.get("/api/events?limit=2&offset=0", headers=session_headers("user-a"))
    assert response.status_code == 200
    rows = response.json()
    assert [row["id"] for row in rows] == [ids[4], ids[3]]
    assert rows[0]["ts"] > rows[1]["ts"]

    response = client.get("/api/events?limit=2&offset=3", headers=session_headers("user-a"))
    assert [row["id"] for row in response.json()] == [ids[1], ids[0]]


def test_list_events_falls_back_to_defaults_for_non_numeric_params(app, client):
    _seed_events(app, "user-a", 5)
    headers = session_headers("user-a")

    assert len(client.get("/api/events?limit=abc&offset=xyz", headers=headers).json()) == 5
    assert len(client.get("/api/events?limit=2abc", headers=headers).json()) == 2
    assert len(client.get("/api/events?limit=0", headers=headers).json()) == 0
    assert len(client.get("/api/events?offset=-4", headers=headers).json()) == 5


def test_list_events_filters_by_kind_and_owner(app, client):
    _seed_events(app, "user-a", 2, kind="capture")
    _seed_events(app, "user-a", 3, kind="error")
    _seed_events(app, "user-b", 4, kind="error")

    response = client.get("/api/events?kind=error", headers=session_headers("user-a"))
    rows = response.json()
    assert len(rows) == 3
    assert all(row["kind"] == "error" and row["user_id"] == "user-a" for row in rows)

    response = client.get("/api/events", headers=session_headers("user-b"))
    assert len(response.json()) == 4


def test_list_events_empty(client):
    response = client.get("/api/events", headers=session_headers("nobody"))
    assert response.status_code == 200
    assert response.json() == []


def test_insert_then_list_returns_row_once(client):
    headers = session_headers("user-a")
    created = client.post("/api/events", json={"kind": "capture", "payload": {"n": 1}}, headers=headers).json()
    rows = client.get("/api/events", headers=headers).json()
    assert [row["id"] for row in rows].count(created["id"]) == 1


def test_store_failure_is_logged_not_leaked(client, monkeypatch):
    def failing_create(*args, **kwargs):
        raise StoreError("events.insert", RuntimeError("connection refused by db-internal-host"))

    monkeypatch.setattr(events_routes, "create_event", failing_create)
    response = client.post("/api/events", json={"kind": "click", "payload": {"x": 1}}, headers=session_headers("user-a"))
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to log event"}
    assert "db-internal-host" not in response.text


def test_list_store_failure(client, monkeypatch):
    def failing_list(*args, **kwargs):
        raise StoreError("events.select", RuntimeError("boom"))

    monkeypatch.setattr(events_routes, "list_events", failing_list)
    response = client.get("/api/events", headers=session_headers("user-a"))
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch events"}


def test_unexpected_exception_becomes_internal_error(client, monkeypatch):
    def exploding_list(*args, **kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(events_routes, "list_events", exploding_list)
    response = client.get("/api/events", headers=session_headers("user-a"))
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_oversized_pagination_is_capped(app, client):
    _seed_events(app, "user-a", 3)
    headers = session_headers("user-a")
    huge = "99999999999999999999999"

    response = client.get(f"/api/events?limit={huge}", headers=headers)
    assert response.status_code == 200
    assert len(response.json()) == 3

    response = client.get(f"/api/events?offset={huge}", headers=headers)
    assert response.status_code == 200
    assert response.json() == []
