"""GameEngine — runs the TickLoop on a background thread at a fixed cadence.

Consumers read from an atomically-swapped immutable GameSnapshot and
receive FaultNotices; the TickLoop mutates subsystem state only while the
engine lock is held, and external commands take the same lock through
``execute`` (Single-Writer preserved).
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from statecraft.engine.tick_loop import TickLoop
from statecraft.utils.clock import Clock, now_ms
from statecraft.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from statecraft.config import SimulationConfig
    from statecraft.core.snapshot import FaultNotice, GameSnapshot, TickResult
    from statecraft.systems import (
        DiplomacySystem,
        EnvironmentSystem,
        IntelligenceSystem,
        PopulationSystem,
        ResearchSystem,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")

SnapshotListener = Callable[["GameSnapshot"], None]
FaultListener = Callable[["FaultNotice"], None]


class GameEngine:
    """Manages the simulation lifecycle on a background thread.

    States are stopped and running.  Provides thread-safe access to:
      - latest snapshot and fault (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / stop / step / reset / tick interval)
      - subsystem commands serialised against ticks (``execute``)
    """

    def __init__(self, config: SimulationConfig, clock: Clock = now_ms) -> None:
        self._config = config
        self._clock = clock
        self._tick_interval_ms: int = max(config.min_tick_interval_ms, config.tick_interval_ms)

        self._loop: TickLoop | None = None

        # Thread-safe shared state
        self._lock = threading.RLock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: GameSnapshot | None = None
        self._latest_fault: FaultNotice | None = None
        self._event_log = EventLog(config.event_log_size)
        self._snapshot_listeners: list[SnapshotListener] = []
        self._fault_listeners: list[FaultListener] = []

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def tick_interval_ms(self) -> int:
        return self._tick_interval_ms

    @tick_interval_ms.setter
    def tick_interval_ms(self, value: int) -> None:
        self._tick_interval_ms = max(self._config.min_tick_interval_ms, int(value))

    def set_tick_interval(self, interval_ms: int) -> int:
        self.tick_interval_ms = interval_ms
        logger.info("Tick interval set to %dms", self._tick_interval_ms)
        return self._tick_interval_ms

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tick(self) -> int:
        return self._loop.tick if self._loop else 0

    @property
    def loop(self) -> TickLoop:
        assert self._loop is not None
        return self._loop

    # -- subsystem accessors --

    @property
    def intelligence(self) -> IntelligenceSystem:
        return self.loop.intelligence

    @property
    def population(self) -> PopulationSystem:
        return self.loop.population

    @property
    def environment(self) -> EnvironmentSystem:
        return self.loop.environment

    @property
    def research(self) -> ResearchSystem:
        return self.loop.research

    @property
    def diplomacy(self) -> DiplomacySystem:
        return self.loop.diplomacy

    # -- consumers --

    def subscribe(
        self,
        on_snapshot: SnapshotListener | None = None,
        on_fault: FaultListener | None = None,
    ) -> None:
        if on_snapshot is not None:
            self._snapshot_listeners.append(on_snapshot)
        if on_fault is not None:
            self._fault_listeners.append(on_fault)

    def get_snapshot(self) -> GameSnapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def get_last_fault(self) -> FaultNotice | None:
        with self._snapshot_lock:
            return self._latest_fault

    # -- commands --

    def execute(self, command: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run *command* with the engine lock held, so it never overlaps a tick."""
        with self._lock:
            return command(*args, **kwargs)

    # -- lifecycle --

    def start(self) -> bool:
        """Spawn the loop thread.  Returns False while a previous loop thread is still alive."""
        if self._running.is_set():
            return False
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Previous engine thread still running; start refused.")
            return False
        self._stop_requested.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("GameEngine started (tick_interval=%dms)", self._tick_interval_ms)
        return True

    def stop(self) -> None:
        self._stop_requested.set()
        self._running.clear()
        if (
            self._thread
            and self._thread.is_alive()
            and self._thread is not threading.current_thread()
        ):
            self._thread.join(timeout=self._config.stop_join_timeout_seconds)
        logger.info("GameEngine stopped at tick %d.", self.tick)

    def step(self) -> TickResult:
        """Execute exactly one update pass on the calling thread."""
        with self._lock:
            result = self.loop.tick_once()
            events = list(self.loop.tick_events)
        self._publish(result, events)
        return result

    def reset(self) -> None:
        """Stop and rebuild every subsystem from config."""
        self.stop()
        self._event_log.clear()
        with self._lock:
            self._build()
        logger.info("GameEngine reset.")

    # -- internals --

    def _build(self) -> None:
        """Construct the tick loop and seed the default scenario if configured."""
        cfg = self._config
        self._loop = TickLoop(cfg, clock=self._clock)
        if cfg.seed_default_scenario:
            from statecraft.scenario import build_default_scenario
            build_default_scenario(self._loop, cfg.world_seed, viewer=cfg.diplomacy_viewer)

        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap
            self._latest_fault = None

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")

        while not self._stop_requested.is_set():
            started = time.perf_counter()
            with self._lock:
                result = self.loop.tick_once()
                events = list(self.loop.tick_events)
            self._publish(result, events)

            # Pace: a slow tick shortens the next wait, never queues ticks
            elapsed = time.perf_counter() - started
            wait = max(0.0, self._tick_interval_ms / 1000 - elapsed)
            if wait > 0:
                self._stop_requested.wait(wait)

        if self._thread is threading.current_thread():
            self._running.clear()
        logger.info("Engine thread exited.")

    def _publish(self, result: TickResult, events: list[SimEvent]) -> None:
        """Swap snapshot or fault, push events, notify listeners."""
        with self._snapshot_lock:
            if result.snapshot is not None:
                self._latest_snapshot = result.snapshot
            if result.fault is not None:
                self._latest_fault = result.fault

        if events:
            self._event_log.append_many(events)

        if result.snapshot is not None:
            self._notify(self._snapshot_listeners, result.snapshot)
        if result.fault is not None:
            self._notify(self._fault_listeners, result.fault)

    @staticmethod
    def _notify(listeners: list[Callable[[Any], None]], payload: Any) -> None:
        for listener in list(listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener %r failed", listener)
