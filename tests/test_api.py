"""Tests for the REST command surface (FastAPI TestClient, engine not auto-started)."""

import pytest
from fastapi.testclient import TestClient

from statecraft.api.app import create_app
from statecraft.api.dependencies import get_game_engine, set_game_engine
from statecraft.config import SimulationConfig


@pytest.fixture
def client():
    app = create_app(SimulationConfig(log_level="WARNING"), autostart=False)
    with TestClient(app) as c:
        yield c


class TestStateAndControl:

    def test_initial_state(self, client):
        resp = client.get("/api/v1/state")
        assert resp.status_code == 200
        body = resp.json()
        assert body["tick"] == 0
        assert body["running"] is False
        assert body["viewer"] == "player"
        assert body["resource_metrics"]["raw_materials"] == 100.0
        assert [p["id"] for p in body["active_projects"]] == ["proj_physics"]

    def test_step_advances_tick(self, client):
        resp = client.post("/api/v1/control/step")
        assert resp.json() == {"status": "ok", "message": "Single tick executed.", "tick": 1}
        assert client.get("/api/v1/state").json()["tick"] == 1

    def test_start_stop(self, client):
        assert client.post("/api/v1/control/start").json()["status"] == "ok"
        assert client.post("/api/v1/control/start").json()["status"] == "noop"
        assert client.post("/api/v1/control/stop").json()["status"] == "ok"
        assert client.post("/api/v1/control/stop").json()["status"] == "noop"

    def test_unknown_control_action(self, client):
        assert client.post("/api/v1/control/pause").status_code == 422

    def test_speed_is_floored(self, client):
        body = client.post("/api/v1/speed", params={"interval_ms": 10}).json()
        assert body["message"] == "Tick interval set to 100ms."
        assert client.get("/api/v1/config").json()["tick_interval_ms"] == 100

    def test_events_feed(self, client):
        client.post("/api/v1/control/step")
        assert client.get("/api/v1/events").status_code == 200


class TestSubsystemCommands:

    def test_population_action_on_unknown_segment(self, client):
        body = client.post("/api/v1/population/actions",
                           json={"action": "educate", "segment_id": "nobody", "value": 5}).json()
        assert body["status"] == "error"

    def test_population_policy(self, client):
        body = client.post("/api/v1/population/policies",
                           json={"policy": "welfare", "target_segments": ["urban"]}).json()
        assert body["status"] == "ok"

    def test_over_extraction_refused(self, client):
        body = client.post("/api/v1/environment/resources",
                           json={"action": "extract", "resource": "raw_materials", "amount": 150}).json()
        assert body["status"] == "error"
        state = client.get("/api/v1/state").json()
        assert state["resource_metrics"]["raw_materials"] == 100.0

    def test_intelligence_analysis_returns_insights(self, client):
        report = {"id": "r1", "type": "military", "source": "op", "target": "aurelia",
                  "reliability": 0.5, "data": {"troops": 10, "note": "x"}}
        body = client.post("/api/v1/intelligence/reports", json=report).json()
        assert body["status"] == "ok"
        assert body["insights"] == {"troops": 5.0}

        report["reliability"] = 3
        assert client.post("/api/v1/intelligence/reports", json=report).json()["status"] == "error"

    def test_research_gate(self, client):
        project = {"id": "p_energy", "name": "Grid", "field_id": "energy"}
        assert client.post("/api/v1/research/projects", json=project).json()["status"] == "error"

    def test_diplomacy_round_trip(self, client):
        assert client.post("/api/v1/diplomacy/relations",
                           json={"nation_a": "player", "nation_b": "zembla", "trust": 50}).json()["status"] == "ok"
        body = client.post("/api/v1/diplomacy/actions",
                           json={"type": "demand", "initiator": "zembla", "target": "player"}).json()
        assert body["status"] == "ok"

        pending = client.get("/api/v1/diplomacy/pending/player").json()
        assert len(pending) == 1
        action_id = pending[0]["action_id"]

        body = client.post(f"/api/v1/diplomacy/actions/{action_id}/respond", json={"response": "reject"}).json()
        assert body["status"] == "ok"
        relations = {r["key"]: r for r in client.get("/api/v1/diplomacy/relations").json()}
        assert relations["player:zembla"]["trust"] == pytest.approx(45.0)

    def test_trade_without_start_time_survives_a_tick(self, client):
        client.post("/api/v1/diplomacy/relations", json={"nation_a": "player", "nation_b": "zembla", "trust": 50})
        agreement = {"id": "grain", "type": "export", "resource": "grain", "amount": 100, "price": 2.5,
                     "duration": 30 * 86_400_000}
        body = client.post("/api/v1/diplomacy/trade",
                           json={"initiator": "player", "target": "zembla", "agreement": agreement}).json()
        assert body["status"] == "ok"

        action_id = client.get("/api/v1/diplomacy/pending/zembla").json()[0]["action_id"]
        client.post(f"/api/v1/diplomacy/actions/{action_id}/respond", json={"response": "accept"})
        client.post("/api/v1/control/step")

        relations = {r["key"]: r for r in client.get("/api/v1/diplomacy/relations").json()}
        agreements = relations["player:zembla"]["trade_agreements"]
        assert [a["id"] for a in agreements] == ["grain"]
        assert agreements[0]["start_time"] > 0


class TestDependencies:

    def test_engine_required(self):
        set_game_engine(None)
        with pytest.raises(RuntimeError):
            get_game_engine()
