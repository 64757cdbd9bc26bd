"""Core data models for the five subsystems.

Every mutable entity carries a string ``id`` unique within its owning
subsystem's mapping.  Subsystems hand out ``copy()`` results from their read
accessors so no entity object is ever shared between two owners.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, is_dataclass, replace
from typing import Any, ClassVar

from statecraft.core.enums import DiplomaticStatus


# ---------------------------------------------------------------------------
# Intelligence
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class IntelligenceOperation:
    """A covert operation launched against a target."""

    id: str
    type: str
    cost: dict[str, float]
    duration: float
    success_rate: float                # probability in [0, 1]
    target: str = ""
    deployed_assets: list[str] = field(default_factory=list)

    def copy(self) -> IntelligenceOperation:
        return replace(self, cost=dict(self.cost), deployed_assets=list(self.deployed_assets))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Intelligence:
    """An intelligence report.  ``data`` is an opaque keyed payload."""

    id: str
    type: str
    source: str
    target: str
    reliability: float                 # in [0, 1]
    timestamp: int = 0
    data: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> Intelligence:
        return replace(self, data=dict(self.data))

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Population
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class PopulationSegment:
    id: str
    name: str
    size: float
    happiness: float = 50.0            # soft-capped at 100
    productivity: float = 50.0         # unbounded under compounding growth
    education: float = 50.0            # soft-capped at 100

    def copy(self) -> PopulationSegment:
        return replace(self)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class SocialMovement:
    id: str
    name: str
    support: float
    influence: float
    demands: list[str] = field(default_factory=list)

    def copy(self) -> SocialMovement:
        return replace(self, demands=list(self.demands))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class CulturalTrend:
    id: str
    name: str
    strength: float
    effects: dict[str, float] = field(default_factory=dict)

    def copy(self) -> CulturalTrend:
        return replace(self, effects=dict(self.effects))

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

class _MetricRecord:
    """Mixin for flat records of bounded scalars addressed by name."""

    __slots__ = ()

    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self))  # type: ignore[arg-type]

    def has(self, name: str) -> bool:
        return name in self.names()

    def get(self, name: str) -> float:
        return getattr(self, name)

    def set(self, name: str, value: float) -> None:
        setattr(self, name, value)

    def normalize(self, low: float = 0.0, high: float = 100.0) -> None:
        for name in self.names():
            self.set(name, max(low, min(high, self.get(name))))

    def to_dict(self) -> dict[str, float]:
        return {name: self.get(name) for name in self.names()}


@dataclass(slots=True)
class EnvironmentalMetrics(_MetricRecord):
    """Global environment record.  Every value lives in [0, 100]."""

    pollution: float = 50.0
    sustainability: float = 50.0
    biodiversity: float = 50.0
    climate_stability: float = 50.0

    def copy(self) -> EnvironmentalMetrics:
        return replace(self)


@dataclass(slots=True)
class ResourceMetrics(_MetricRecord):
    """Resource balance record.  Every value lives in [0, 100]."""

    renewable_energy: float = 20.0
    raw_materials: float = 100.0
    water_quality: float = 80.0
    air_quality: float = 70.0

    def copy(self) -> ResourceMetrics:
        return replace(self)


@dataclass(slots=True)
class ClimateEvent:
    id: str
    type: str
    severity: float                    # in [0, 100]; scales effect magnitude
    duration: float
    effects: dict[str, float] = field(default_factory=dict)

    def copy(self) -> ClimateEvent:
        return replace(self, effects=dict(self.effects))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class EnvironmentalPolicy:
    id: str
    name: str
    cost: dict[str, float] = field(default_factory=dict)
    effects: dict[str, float] = field(default_factory=dict)

    def copy(self) -> EnvironmentalPolicy:
        return replace(self, cost=dict(self.cost), effects=dict(self.effects))

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Research
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ResearchField:
    id: str
    name: str
    progress: float = 0.0
    cost: dict[str, float] = field(default_factory=dict)
    requirements: list[str] = field(default_factory=list)   # prerequisite field ids

    @property
    def completed(self) -> bool:
        return self.progress >= 100

    def copy(self) -> ResearchField:
        return replace(self, cost=dict(self.cost), requirements=list(self.requirements))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class ResearchProject:
    id: str
    name: str
    field_id: str                      # ResearchField id
    progress: float = 0.0
    researchers: int = 0
    cost: dict[str, float] = field(default_factory=dict)

    def copy(self) -> ResearchProject:
        return replace(self, cost=dict(self.cost))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class TechnologyTree:
    """Ordered field nodes plus descriptive prerequisite edges.

    Edges are informational only; prerequisites are enforced through
    ``ResearchField.requirements``.
    """

    id: str
    name: str
    nodes: list[ResearchField] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def copy(self) -> TechnologyTree:
        return replace(self, nodes=[n.copy() for n in self.nodes], edges=list(self.edges))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [list(e) for e in self.edges],
        }


@dataclass(slots=True)
class ResearchFacility:
    id: str
    name: str
    level: int = 1                     # [1, 10]
    capacity: float = 10.0             # [0, 100] max researchers
    efficiency: float = 1.0            # [0, 2]
    specialization: str = ""           # matched against ResearchField.name

    MIN_LEVEL: ClassVar[int] = 1
    MAX_LEVEL: ClassVar[int] = 10
    MAX_CAPACITY: ClassVar[float] = 100.0
    MAX_EFFICIENCY: ClassVar[float] = 2.0

    def copy(self) -> ResearchFacility:
        return replace(self)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Diplomacy
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TradeAgreement:
    id: str
    type: str                          # "import" | "export"
    resource: str
    amount: float
    price: float
    duration: int                      # ms
    start_time: int = 0                # ms

    def expired(self, now: int) -> bool:
        return now >= self.start_time + self.duration

    def copy(self) -> TradeAgreement:
        return replace(self)


@dataclass(slots=True)
class Treaty:
    id: str
    type: str                          # alliance, peace, trade, research
    terms: list[str] = field(default_factory=list)
    benefits: dict[str, float] = field(default_factory=dict)
    obligations: dict[str, float] = field(default_factory=dict)
    start_time: int = 0                # ms
    duration: int = 0                  # ms

    def expired(self, now: int) -> bool:
        return now >= self.start_time + self.duration

    def copy(self) -> Treaty:
        return replace(
            self, terms=list(self.terms),
            benefits=dict(self.benefits), obligations=dict(self.obligations),
        )


@dataclass(slots=True)
class DiplomaticAction:
    type: str                          # DiplomaticActionType value
    initiator: str
    target: str
    content: dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0                 # ms

    @property
    def action_id(self) -> str:
        """Pending-action key: initiator immediately followed by the timestamp."""
        return f"{self.initiator}{self.timestamp}"

    def copy(self) -> DiplomaticAction:
        content = {k: (v.copy() if hasattr(v, "copy") else v) for k, v in self.content.items()}
        return replace(self, content=content)

    def to_dict(self) -> dict:
        return {
            "action_id": self.action_id,
            "type": str(getattr(self.type, "value", self.type)),
            "initiator": self.initiator,
            "target": self.target,
            "content": {k: (asdict(v) if is_dataclass(v) else v) for k, v in self.content.items()},
            "timestamp": self.timestamp,
        }


def relation_key(nation_a: str, nation_b: str) -> str:
    """Canonical, order-independent key for a pair of nations."""
    return ":".join(sorted((nation_a, nation_b)))


@dataclass(slots=True)
class DiplomaticRelation:
    nation_a: str
    nation_b: str
    status: DiplomaticStatus = DiplomaticStatus.NEUTRAL
    trust: float = 50.0                # [0, 100]
    trade_agreements: list[TradeAgreement] = field(default_factory=list)
    treaties: list[Treaty] = field(default_factory=list)
    last_interaction: int = 0          # ms

    @property
    def key(self) -> str:
        return relation_key(self.nation_a, self.nation_b)

    def copy(self) -> DiplomaticRelation:
        return replace(
            self,
            trade_agreements=[a.copy() for a in self.trade_agreements],
            treaties=[t.copy() for t in self.treaties],
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["key"] = self.key
        d["status"] = self.status.value
        return d
