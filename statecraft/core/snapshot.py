"""Immutable per-tick snapshot and fault notice handed to external consumers."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from statecraft.core.models import (
    ClimateEvent,
    CulturalTrend,
    DiplomaticAction,
    IntelligenceOperation,
    ResearchFacility,
    ResearchProject,
    SocialMovement,
)

if TYPE_CHECKING:
    from statecraft.systems.diplomacy import DiplomacySystem
    from statecraft.systems.environment import EnvironmentSystem
    from statecraft.systems.intelligence import IntelligenceSystem
    from statecraft.systems.population import PopulationSystem
    from statecraft.systems.research import ResearchSystem


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only consolidated state, safe to share across threads.

    Every entity is a copy taken from the owning subsystem; metric records
    are exposed through MappingProxyType to enforce immutability at runtime.
    """

    tick: int
    timestamp: int
    active_operations: tuple[IntelligenceOperation, ...]
    movements: tuple[SocialMovement, ...]
    trends: tuple[CulturalTrend, ...]
    global_metrics: Mapping[str, float]
    resource_metrics: Mapping[str, float]
    active_events: tuple[ClimateEvent, ...]
    active_projects: tuple[ResearchProject, ...]
    facilities: tuple[ResearchFacility, ...]
    viewer: str
    pending_actions: tuple[DiplomaticAction, ...]

    @classmethod
    def capture(
        cls,
        tick: int,
        timestamp: int,
        intelligence: IntelligenceSystem,
        population: PopulationSystem,
        environment: EnvironmentSystem,
        research: ResearchSystem,
        diplomacy: DiplomacySystem,
        viewer: str,
    ) -> GameSnapshot:
        return cls(
            tick=tick,
            timestamp=timestamp,
            active_operations=tuple(intelligence.get_active_operations()),
            movements=tuple(population.get_all_movements()),
            trends=tuple(population.get_all_trends()),
            global_metrics=MappingProxyType(environment.get_global_metrics().to_dict()),
            resource_metrics=MappingProxyType(environment.get_resource_metrics().to_dict()),
            active_events=tuple(environment.get_active_events()),
            active_projects=tuple(research.get_active_projects()),
            facilities=tuple(research.get_facilities()),
            viewer=viewer,
            pending_actions=tuple(diplomacy.get_pending_actions(viewer)),
        )

    def to_dict(self) -> dict:
        return {
            "tick": self.tick,
            "timestamp": self.timestamp,
            "intelligence": {
                "active_operations": [o.to_dict() for o in self.active_operations],
            },
            "population": {
                "movements": [m.to_dict() for m in self.movements],
                "trends": [t.to_dict() for t in self.trends],
            },
            "environment": {
                "global_metrics": dict(self.global_metrics),
                "resource_metrics": dict(self.resource_metrics),
                "active_events": [e.to_dict() for e in self.active_events],
            },
            "research": {
                "active_projects": [p.to_dict() for p in self.active_projects],
                "facilities": [f.to_dict() for f in self.facilities],
            },
            "diplomacy": {
                "viewer": self.viewer,
                "pending_actions": [a.to_dict() for a in self.pending_actions],
            },
        }


@dataclass(frozen=True, slots=True)
class FaultNotice:
    """Emitted instead of a snapshot when an update pass raised."""

    tick: int
    timestamp: int
    error: str
    error_type: str = "Exception"

    def to_dict(self) -> dict:
        return {
            "tick": self.tick,
            "timestamp": self.timestamp,
            "error": self.error,
            "error_type": self.error_type,
        }


@dataclass(frozen=True, slots=True)
class TickResult:
    """Outcome of one update pass: exactly one of snapshot / fault is set."""

    tick: int
    snapshot: GameSnapshot | None = None
    fault: FaultNotice | None = None
    started_at: float = 0.0      # perf_counter seconds
    finished_at: float = 0.0

    @property
    def ok(self) -> bool:
        return self.fault is None

    @property
    def elapsed(self) -> float:
        return self.finished_at - self.started_at
