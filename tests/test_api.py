"""Tests for the battle REST endpoints."""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    """A test client with a freshly seeded reference battle."""
    client = TestClient(app)
    resp = client.post("/battle/reset", json={"seed": 1234})
    assert resp.status_code == 200
    return client


class TestInfo:
    """Tests for the root and health endpoints."""

    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"healthy": True}


class TestState:
    """Tests for GET /battle/state."""

    def test_initial_state(self, client):
        resp = client.get("/battle/state")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "active"
        assert data["tick"] == 0
        assert data["winner"] is None
        assert [a["name"] for a in data["agents"]] == ["Agent A", "Agent B"]
        assert [a["hp"] for a in data["agents"]] == [50, 30]

    def test_state_does_not_advance(self, client):
        client.get("/battle/state")
        assert client.get("/battle/state").json()["tick"] == 0


class TestStep:
    """Tests for POST /battle/step."""

    def test_step_moves_agents(self, client):
        before = client.get("/battle/state").json()["agents"]
        resp = client.post("/battle/step")
        assert resp.status_code == 200
        data = resp.json()
        assert data["events"] == []
        assert data["state"]["tick"] == 1
        after = data["state"]["agents"]
        assert after[0]["x"] == pytest.approx(before[0]["x"] + 3)
        assert after[1]["x"] == pytest.approx(before[1]["x"] - 3)

    def test_same_seed_same_battle(self, client):
        first = client.post("/battle/run").json()
        client.post("/battle/reset", json={"seed": 1234})
        second = client.post("/battle/run").json()
        assert first["state"] == second["state"]
        assert first["events"] == second["events"]


class TestRun:
    """Tests for POST /battle/run."""

    def test_runs_to_conclusion(self, client):
        resp = client.post("/battle/run")
        assert resp.status_code == 200
        data = resp.json()
        assert data["state"]["status"] == "concluded"
        assert len(data["state"]["agents"]) <= 1
        assert data["events"][-1]["kind"] == "concluded"

    def test_step_after_conclusion(self, client):
        client.post("/battle/run")
        tick = client.get("/battle/state").json()["tick"]
        data = client.post("/battle/step").json()
        assert data["events"] == []
        assert data["state"]["tick"] == tick


class TestReset:
    """Tests for POST /battle/reset."""

    def test_reset_restores_start(self, client):
        client.post("/battle/step")
        resp = client.post("/battle/reset")
        assert resp.status_code == 200
        assert resp.json()["tick"] == 0

    def test_custom_cadence(self, client):
        client.post("/battle/reset", json={"actions_per_turn": 1, "step_size": 5})
        before = client.get("/battle/state").json()["agents"][0]["x"]
        after = client.post("/battle/step").json()["state"]["agents"][0]["x"]
        assert after == pytest.approx(before + 5)

    def test_invalid_cadence(self, client):
        resp = client.post("/battle/reset", json={"actions_per_turn": 0})
        assert resp.status_code == 422

    def test_invalid_body(self, client):
        resp = client.post("/battle/reset", json={"seed": "not-a-number"})
        assert resp.status_code == 422


class TestLog:
    """Tests for GET /battle/log."""

    def test_empty_before_contact(self, client):
        client.post("/battle/step")
        assert client.get("/battle/log").json() == []

    def test_log_after_run(self, client):
        client.post("/battle/run")
        log = client.get("/battle/log").json()
        kinds = {event["kind"] for event in log}
        assert "death" in kinds
        assert "concluded" in kinds
        hits = [event for event in log if event["kind"] == "hit"]
        assert all(event["damage"] is not None for event in hits)
