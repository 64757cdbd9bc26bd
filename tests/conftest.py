"""Shared fixtures: a controllable millisecond clock and small configs."""

from __future__ import annotations

import pytest

from statecraft.config import SimulationConfig

T0 = 1_700_000_000_000


class FakeClock:
    """Manually advanced clock returning integer milliseconds."""

    def __init__(self, start: int = T0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bare_config() -> SimulationConfig:
    """No default scenario, fastest legal cadence."""
    return SimulationConfig(seed_default_scenario=False, tick_interval_ms=100)
