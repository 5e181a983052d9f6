"""Back stack endpoints and health probe."""
from __future__ import annotations

import pytest

from cofi.db.engine import reset_for_tests
from cofi.platform import PlatformAdapter
from cofi.startup import create_app


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("COFI_DB_PATH", ":memory:")
    yield
    reset_for_tests(drop=True)


@pytest.fixture
def client():
    app = create_app(platform=PlatformAdapter())
    with app.test_client() as client:
        yield client


def test_initial_stack_is_list(client):
    data = client.get("/nav").get_json()
    assert data["current"]["destination"] == "list"
    assert len(data["back_stack"]) == 1


def test_navigate_and_back(client):
    data = client.post("/nav/navigate", json={"route": "settings/about"}).get_json()
    assert data["current"]["destination"] == "about"
    assert data["current"]["graph"] == "settings"

    back = client.post("/nav/back").get_json()
    assert back["popped"] is True
    assert back["current"]["destination"] == "list"

    root = client.post("/nav/back").get_json()
    assert root["popped"] is False


def test_navigate_errors(client):
    assert client.post("/nav/navigate", json={}).status_code == 400
    resp = client.post("/nav/navigate", json={"route": "nowhere"})
    assert resp.status_code == 404


def test_deep_link_pushes_recipe(client):
    data = client.post("/nav/deeplink", json={"url": "https://rozpierog.github.io/recipe/3"}).get_json()
    assert data["current"]["route"] == "recipe/3"
    assert data["current"]["arguments"] == {"recipe_id": 3}

    assert client.post("/nav/deeplink", json={"url": "https://other.test/recipe/3"}).status_code == 404


def test_commands_empty_for_plain_platform(client):
    client.post("/recipe/1/timer", json={"running": True})
    assert client.get("/lifecycle/commands").get_json() == {"commands": []}


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": True}
