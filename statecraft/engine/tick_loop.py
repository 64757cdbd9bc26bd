"""TickLoop — the authoritative fixed-order update pass.

Pass order:
  1. Research    — a completed field may change what other systems can do
  2. Population  — growth and productivity compounding
  3. Environment — metric re-normalisation
  4. Diplomacy   — trust decay, status re-derivation, expiry pruning

A fault anywhere in the pass is contained here and returned as a
``FaultNotice``; updates already applied before the fault are kept.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from statecraft.core.snapshot import FaultNotice, GameSnapshot, TickResult
from statecraft.systems.diplomacy import DiplomacySystem
from statecraft.systems.environment import EnvironmentSystem
from statecraft.systems.intelligence import IntelligenceSystem
from statecraft.systems.population import PopulationSystem
from statecraft.systems.research import ResearchSystem
from statecraft.utils.clock import Clock, now_ms
from statecraft.utils.event_log import SimEvent

if TYPE_CHECKING:
    from statecraft.config import SimulationConfig

logger = logging.getLogger(__name__)


class TickLoop:
    """Owns one instance of each subsystem and advances them together.

    Single-threaded mutation: callers must not invoke subsystem mutators
    while ``tick_once`` is running (``GameEngine`` serialises both behind
    its lock).
    """

    __slots__ = (
        "_config",
        "_clock",
        "_tick",
        "_tick_events",
        "intelligence",
        "population",
        "environment",
        "research",
        "diplomacy",
    )

    def __init__(self, config: SimulationConfig, clock: Clock = now_ms) -> None:
        self._config = config
        self._clock = clock
        self._tick: int = 0
        self._tick_events: list[SimEvent] = []
        self.intelligence = IntelligenceSystem()
        self.population = PopulationSystem()
        self.environment = EnvironmentSystem(config)
        self.research = ResearchSystem()
        self.diplomacy = DiplomacySystem(history_limit=config.action_history_limit, clock=clock)

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    def _emit(self, category: str, message: str) -> None:
        self._tick_events.append(SimEvent(
            tick=self._tick, category=category, message=message, timestamp=self._clock(),
        ))

    def tick_once(self) -> TickResult:
        """Run one update pass and return its snapshot or fault."""
        self._tick_events = []
        started = time.perf_counter()
        pass_tick = self._tick
        try:
            self._step()
            # snapshot carries the number of completed passes
            self._tick = pass_tick + 1
            snapshot = self.create_snapshot()
        except Exception as exc:
            logger.exception("Tick %d: update pass failed", pass_tick)
            fault = FaultNotice(
                tick=pass_tick,
                timestamp=self._clock(),
                error=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
            )
            self._emit("fault", fault.error)
            self._tick = pass_tick + 1
            return TickResult(tick=pass_tick, fault=fault,
                              started_at=started, finished_at=time.perf_counter())
        return TickResult(tick=pass_tick, snapshot=snapshot,
                          started_at=started, finished_at=time.perf_counter())

    def _step(self) -> None:
        completed = self.research.update_research()
        for project_id in completed:
            self._emit("breakthrough", f"Project '{project_id}' reached a breakthrough")

        self.population.update_population_dynamics()
        self.environment.update_environment()

        pruned = self.diplomacy.update_relations()
        if pruned:
            self._emit("diplomacy", f"{pruned} expired agreement(s) removed")

    def create_snapshot(self) -> GameSnapshot:
        """Create an immutable snapshot of the current subsystem state."""
        return GameSnapshot.capture(
            tick=self._tick,
            timestamp=self._clock(),
            intelligence=self.intelligence,
            population=self.population,
            environment=self.environment,
            research=self.research,
            diplomacy=self.diplomacy,
            viewer=self._config.diplomacy_viewer,
        )

    def run(self, max_ticks: int | None = None) -> list[FaultNotice]:
        """Run back-to-back passes without pacing; return any faults raised."""
        max_ticks = self._config.max_ticks if max_ticks is None else max_ticks
        logger.info("=== Headless run started (%d ticks) ===", max_ticks)
        faults: list[FaultNotice] = []
        for _ in range(max_ticks):
            result = self.tick_once()
            if result.fault is not None:
                faults.append(result.fault)
            if self._tick % 50 == 0:
                logger.info("Tick %d: %d project(s), %d relation(s)",
                            self._tick,
                            len(self.research.get_active_projects()),
                            len(self.diplomacy.get_relations()))
        logger.info("=== Headless run finished at tick %d (%d fault(s)) ===", self._tick, len(faults))
        return faults
