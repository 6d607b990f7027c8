"""Tests for the HTTP binding."""
import pytest
from fastapi.testclient import TestClient

from tracker.main import create_app


@pytest.fixture
def client(tmp_path, clock):
    app = create_app(db_path=tmp_path / "app.db", clock=clock)
    with TestClient(app) as client:
        yield client


def test_initial_state(client):
    resp = client.get("/state")
    assert resp.status_code == 200
    data = resp.json()
    assert data["start_button_visible"] is True
    assert data["stop_button_visible"] is False
    assert data["clear_button_visible"] is False
    assert data["items"] == []


def test_start_stop_rate_clear(client, clock):
    data = client.post("/start").json()
    assert data["stop_button_visible"] is True
    key = data["last_item"]["id"]

    clock.now = 200
    data = client.post("/stop").json()
    assert data["navigate_to_rating"]["id"] == key
    assert data["navigate_to_rating"]["end_time_ms"] == 200

    data = client.post("/navigation/ack").json()
    assert data["navigate_to_rating"] is None

    rated = client.post(f"/items/{key}/quality", json={"rating": 4}).json()
    assert rated["quality_rating"] == 4
    items = client.get("/items").json()["items"]
    assert items[0]["quality_rating"] == 4

    data = client.post("/clear").json()
    assert data["show_snackbar"] is True
    assert data["items"] == []

    data = client.post("/snackbar/ack").json()
    assert data["show_snackbar"] is False


def test_rating_unknown_item_is_404(client):
    resp = client.post("/items/999/quality", json={"rating": 1})
    assert resp.status_code == 404
