from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import event

from app.api.v1 import conversations as conversations_routes
from app.api.v1 import events as events_routes
from app.api.v1 import memories as memories_routes
from app.api.v1 import profiles as profiles_routes
from app.core.config import Settings
from app.main import create_app

TEST_JWT_SECRET = "test-jwt-secret"
TEST_SUPABASE_URL = "https://project-ref.supabase.co"
SESSION_COOKIE = "sb-access-token"

STORE_FUNCTIONS = {
    events_routes: ("create_event", "list_events"),
    memories_routes: ("create_memory", "list_memories", "update_memory", "delete_memory"),
    profiles_routes: ("list_profiles", "create_profile", "update_profile", "delete_profile", "get_profile_scope"),
    conversations_routes: (
        "list_conversations",
        "get_conversation",
        "create_conversation",
        "rename_conversation",
        "delete_conversation",
    ),
}


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "SUPABASE_URL": TEST_SUPABASE_URL,
        "SUPABASE_JWT_SECRET": TEST_JWT_SECRET,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def mint_token(
    user_id: str,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
    expires_in: timedelta = timedelta(hours=1),
    **claims,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "aud": audience,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def session_headers(user_id: str, **kwargs) -> dict:
    return {"Cookie": f"{SESSION_COOKIE}={mint_token(user_id, **kwargs)}"}


class CallCounter:
    """Wraps a store function and records how often handlers reach it."""

    def __init__(self, target):
        self.target = target
        self.calls = 0

    def __call__(self, *args, **kwargs):
        self.calls += 1
        return self.target(*args, **kwargs)


@pytest.fixture
def app():
    return create_app(make_settings())


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def store_calls(monkeypatch) -> dict:
    counters = {}
    for module, names in STORE_FUNCTIONS.items():
        for name in names:
            counter = CallCounter(getattr(module, name))
            monkeypatch.setattr(module, name, counter)
            counters[name] = counter
    return counters


@pytest.fixture
def recorded_statements(app, client):
    """(verb, sql) for every statement the app sends to the store after setup."""
    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append((statement.lstrip().split(None, 1)[0].upper(), statement))

    event.listen(app.state.engine, "before_cursor_execute", _record)
    yield statements
    event.remove(app.state.engine, "before_cursor_execute", _record)
