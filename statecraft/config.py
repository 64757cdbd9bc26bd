"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    world_seed: int = 42
    seed_default_scenario: bool = True

    # Timing
    tick_interval_ms: int = 1000
    min_tick_interval_ms: int = 100     # floor applied by the tick interval setter
    max_ticks: int = 200                # headless CLI run length
    stop_join_timeout_seconds: float = 5.0

    # Snapshot
    diplomacy_viewer: str = "player"    # nation whose pending actions are published

    # Diplomacy
    action_history_limit: int = 1000

    # Environment: initial global metrics
    initial_pollution: float = 50.0
    initial_sustainability: float = 50.0
    initial_biodiversity: float = 50.0
    initial_climate_stability: float = 50.0

    # Environment: initial resource metrics
    initial_renewable_energy: float = 20.0
    initial_raw_materials: float = 100.0
    initial_water_quality: float = 80.0
    initial_air_quality: float = 70.0

    # Event feed
    event_log_size: int = 5000

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    quiet_loggers: tuple[str, ...] = ("uvicorn.access", "httpx")   # held at WARNING unless DEBUG
