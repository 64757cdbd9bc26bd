"""Tests for the background scheduler.

Covers:
- Cadence: at 100 ms, roughly one snapshot per interval and no overlapping passes
- Interval floor, idempotent start, stop/join
- Listener isolation, fault publication, manual stepping, reset
"""

import threading
import time
from dataclasses import replace

import pytest

from statecraft.config import SimulationConfig
from statecraft.engine.game_engine import GameEngine
from statecraft.engine.tick_loop import TickLoop
from statecraft.systems.environment import EnvironmentSystem


@pytest.fixture
def engine(bare_config):
    eng = GameEngine(bare_config)
    yield eng
    eng.stop()


class TestCadence:

    def test_ten_snapshots_in_about_a_second(self, engine, monkeypatch):
        active = 0
        max_active = 0
        guard = threading.Lock()
        original = TickLoop.tick_once

        def tracked(self):
            nonlocal active, max_active
            with guard:
                active += 1
                max_active = max(max_active, active)
            try:
                return original(self)
            finally:
                with guard:
                    active -= 1

        monkeypatch.setattr(TickLoop, "tick_once", tracked)
        ticks: list[int] = []
        engine.subscribe(on_snapshot=lambda s: ticks.append(s.tick))

        engine.start()
        time.sleep(1.05)
        engine.stop()

        assert len(ticks) >= 10
        assert ticks == list(range(1, len(ticks) + 1))
        assert max_active == 1

    def test_interval_floor(self, engine):
        engine.tick_interval_ms = 10
        assert engine.tick_interval_ms == 100
        assert engine.set_tick_interval(250) == 250

    def test_configured_interval_is_floored(self):
        eng = GameEngine(SimulationConfig(seed_default_scenario=False, tick_interval_ms=5))
        assert eng.tick_interval_ms == 100


class TestLifecycle:

    def test_start_is_idempotent(self, engine):
        engine.start()
        thread = engine._thread
        engine.start()
        assert engine._thread is thread
        assert engine.running

    def test_stop_joins_thread(self, engine):
        engine.start()
        engine.stop()
        assert not engine.running
        assert not engine._thread.is_alive()

    def test_restart_refused_while_stalled_thread_alive(self, bare_config, monkeypatch):
        entered = threading.Event()
        release = threading.Event()
        original = TickLoop.tick_once

        def stalled(self):
            entered.set()
            release.wait(5)
            return original(self)

        monkeypatch.setattr(TickLoop, "tick_once", stalled)
        eng = GameEngine(replace(bare_config, stop_join_timeout_seconds=0.05))
        assert eng.start()
        assert entered.wait(2)

        eng.stop()
        stale = eng._thread
        assert stale.is_alive()
        assert not eng.start()
        assert eng._thread is stale

        release.set()
        stale.join(2)
        assert not stale.is_alive()
        assert not eng.running

        assert eng.start()
        assert eng.running
        eng.stop()
        assert not eng.running

    def test_stop_when_stopped_is_harmless(self, engine):
        engine.stop()
        assert not engine.running

    def test_initial_snapshot_published_at_build(self, engine):
        snapshot = engine.get_snapshot()
        assert snapshot is not None
        assert snapshot.tick == 0


class TestPublishing:

    def test_step_publishes_snapshot(self, engine):
        seen = []
        engine.subscribe(on_snapshot=seen.append)
        result = engine.step()
        assert result.ok
        assert seen == [result.snapshot]
        assert engine.get_snapshot() is result.snapshot
        assert engine.tick == 1

    def test_listener_exception_is_isolated(self, engine):
        count = []

        def broken(_snapshot):
            raise ValueError("consumer bug")

        engine.subscribe(on_snapshot=broken)
        engine.subscribe(on_snapshot=count.append)
        engine.step()
        engine.step()
        assert len(count) == 2

    def test_fault_reaches_listeners_and_event_log(self, engine, monkeypatch):
        faults = []
        engine.subscribe(on_fault=faults.append)
        before = engine.get_snapshot()

        monkeypatch.setattr(EnvironmentSystem, "update_environment", lambda self: 1 / 0)
        result = engine.step()

        assert faults == [result.fault]
        assert engine.get_last_fault() is result.fault
        assert engine.get_snapshot() is before
        assert [e.category for e in engine.event_log.latest(category="fault")] == ["fault"]

    def test_execute_runs_under_lock(self, engine):
        def lock_free_elsewhere():
            acquired = []
            t = threading.Thread(target=lambda: acquired.append(engine._lock.acquire(blocking=False)))
            t.start()
            t.join()
            return acquired[0]

        assert engine.execute(lock_free_elsewhere) is False
        assert engine.execute(engine.environment.manage_resources, "extract", "raw_materials", 10)
        assert engine.environment.get_resource_metrics().raw_materials == pytest.approx(90.0)


class TestReset:

    def test_reset_rebuilds_state(self, engine):
        engine.step()
        engine.step()
        engine.environment.process_environmental_action("emit", "pollution", 20)
        engine.reset()
        assert engine.tick == 0
        assert engine.environment.get_global_metrics().pollution == 50.0
        assert len(engine.event_log) == 0

    def test_default_scenario_seeded(self):
        eng = GameEngine(SimulationConfig())
        assert len(eng.diplomacy.get_relations()) == 6
        assert len(eng.population.get_all_segments()) == 3
        assert eng.get_snapshot().active_projects
