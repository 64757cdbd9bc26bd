"""Tests for the fixed-order update pass.

Covers:
- Research → Population → Environment → Diplomacy ordering
- Fault containment (no rollback, tick still advances)
- Snapshot immutability and viewer filtering
- Headless run
"""

import pytest

from statecraft.core.models import (
    DiplomaticAction,
    PopulationSegment,
    ResearchField,
    ResearchProject,
)
from statecraft.engine.tick_loop import TickLoop
from statecraft.systems.diplomacy import DiplomacySystem
from statecraft.systems.environment import EnvironmentSystem
from statecraft.systems.population import PopulationSystem
from statecraft.systems.research import ResearchSystem


@pytest.fixture
def loop(bare_config, clock) -> TickLoop:
    return TickLoop(bare_config, clock=clock)


class TestOrdering:

    def test_fixed_pass_order(self, loop, monkeypatch):
        calls: list[str] = []
        monkeypatch.setattr(ResearchSystem, "update_research", lambda self: calls.append("research") or [])
        monkeypatch.setattr(PopulationSystem, "update_population_dynamics", lambda self: calls.append("population"))
        monkeypatch.setattr(EnvironmentSystem, "update_environment", lambda self: calls.append("environment"))
        monkeypatch.setattr(DiplomacySystem, "update_relations", lambda self: calls.append("diplomacy") or 0)

        loop.tick_once()
        loop.tick_once()
        assert calls == ["research", "population", "environment", "diplomacy"] * 2

    def test_tick_counter_and_snapshot(self, loop, clock):
        result = loop.tick_once()
        assert result.ok
        assert result.snapshot.tick == 1
        assert result.tick == 0
        assert result.snapshot.timestamp == clock()
        assert loop.tick == 1
        assert result.elapsed >= 0


class TestFaults:

    def test_fault_is_contained_without_rollback(self, loop, monkeypatch):
        loop.research.add_field(ResearchField(id="physics", name="Physics"))
        loop.research.start_research_project(
            ResearchProject(id="p", name="P", field_id="physics", progress=100.0),
        )

        def boom(self):
            raise RuntimeError("population ledger corrupted")

        monkeypatch.setattr(PopulationSystem, "update_population_dynamics", boom)
        result = loop.tick_once()

        assert not result.ok
        assert result.snapshot is None
        assert result.fault.error == "population ledger corrupted"
        assert result.fault.error_type == "RuntimeError"
        assert result.fault.tick == 0
        assert loop.tick == 1
        # research ran before the fault and is kept
        assert loop.research.has_broken_through("p")
        assert [e.category for e in loop.tick_events] == ["breakthrough", "fault"]

    def test_loop_recovers_on_next_tick(self, loop, monkeypatch):
        monkeypatch.setattr(EnvironmentSystem, "update_environment", lambda self: 1 / 0)
        assert not loop.tick_once().ok
        monkeypatch.undo()
        assert loop.tick_once().ok
        assert loop.tick == 2

    def test_empty_message_falls_back_to_type_name(self, loop, monkeypatch):
        def fail(self):
            raise KeyError

        monkeypatch.setattr(DiplomacySystem, "update_relations", fail)
        assert loop.tick_once().fault.error == "KeyError"

    def test_run_collects_faults(self, loop, monkeypatch):
        monkeypatch.setattr(EnvironmentSystem, "update_environment", lambda self: 1 / 0)
        faults = loop.run(max_ticks=3)
        assert [f.tick for f in faults] == [0, 1, 2]


class TestSnapshot:

    def test_metrics_are_read_only(self, loop):
        snapshot = loop.tick_once().snapshot
        with pytest.raises(TypeError):
            snapshot.global_metrics["pollution"] = 0.0

    def test_snapshot_is_detached_from_live_state(self, loop):
        loop.population.add_segment(PopulationSegment(id="s", name="S", size=10))
        loop.research.add_field(ResearchField(id="physics", name="Physics"))
        loop.research.start_research_project(ResearchProject(id="p", name="P", field_id="physics"))
        snapshot = loop.create_snapshot()
        loop.research.process_research_action("allocate_resources", "p", 40)
        assert snapshot.active_projects[0].progress == 0
        assert isinstance(snapshot.active_projects, tuple)

    def test_pending_actions_for_viewer_only(self, loop, clock):
        loop.diplomacy.establish_relation("player", "aurelia")
        loop.diplomacy.establish_relation("aurelia", "borealis")
        loop.diplomacy.initiate_diplomatic_action(DiplomaticAction(
            type="propose", initiator="aurelia", target="player", timestamp=clock(),
        ))
        clock.advance(1)
        loop.diplomacy.initiate_diplomatic_action(DiplomaticAction(
            type="propose", initiator="aurelia", target="borealis", timestamp=clock(),
        ))
        snapshot = loop.create_snapshot()
        assert snapshot.viewer == "player"
        assert [a.target for a in snapshot.pending_actions] == ["player"]

    def test_to_dict_groups_by_subsystem(self, loop):
        data = loop.create_snapshot().to_dict()
        assert set(data) == {"tick", "timestamp", "intelligence", "population",
                             "environment", "research", "diplomacy"}
        assert data["environment"]["resource_metrics"]["raw_materials"] == 100.0


class TestHeadlessRun:

    def test_run_advances_requested_ticks(self, loop):
        assert loop.run(max_ticks=5) == []
        assert loop.tick == 5
