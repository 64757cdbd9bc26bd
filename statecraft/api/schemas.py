"""Pydantic request/response models for the REST API.

Entity schemas mirror the dataclasses in ``statecraft.core.models``;
``to_model`` builds the core record a subsystem expects and
``from_model`` serialises one back out.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from statecraft.core.models import (
    ClimateEvent,
    CulturalTrend,
    DiplomaticAction,
    DiplomaticRelation,
    EnvironmentalPolicy,
    Intelligence,
    IntelligenceOperation,
    PopulationSegment,
    ResearchFacility,
    ResearchField,
    ResearchProject,
    SocialMovement,
    TechnologyTree,
    TradeAgreement,
    Treaty,
)


# --- Intelligence ---

class OperationSchema(BaseModel):
    id: str
    type: str
    cost: dict[str, float]
    duration: float
    success_rate: float = Field(description="Probability of success in [0, 1]")
    target: str = ""
    deployed_assets: list[str] = Field(default_factory=list)

    def to_model(self) -> IntelligenceOperation:
        return IntelligenceOperation(**self.model_dump())

    @classmethod
    def from_model(cls, op: IntelligenceOperation) -> OperationSchema:
        return cls(**op.to_dict())


class IntelligenceSchema(BaseModel):
    id: str
    type: str
    source: str
    target: str
    reliability: float = Field(description="Report reliability in [0, 1]")
    timestamp: int = 0
    data: dict[str, Any] = Field(default_factory=dict)

    def to_model(self) -> Intelligence:
        return Intelligence(**self.model_dump())

    @classmethod
    def from_model(cls, intel: Intelligence) -> IntelligenceSchema:
        return cls(**intel.to_dict())


class DeployAssetRequest(BaseModel):
    asset_type: str


# --- Population ---

class SegmentSchema(BaseModel):
    id: str
    name: str
    size: float
    happiness: float = 50.0
    productivity: float = 50.0
    education: float = 50.0

    def to_model(self) -> PopulationSegment:
        return PopulationSegment(**self.model_dump())

    @classmethod
    def from_model(cls, segment: PopulationSegment) -> SegmentSchema:
        return cls(**segment.to_dict())


class MovementSchema(BaseModel):
    id: str
    name: str
    support: float
    influence: float
    demands: list[str] = Field(default_factory=list)

    def to_model(self) -> SocialMovement:
        return SocialMovement(**self.model_dump())

    @classmethod
    def from_model(cls, movement: SocialMovement) -> MovementSchema:
        return cls(**movement.to_dict())


class TrendSchema(BaseModel):
    id: str
    name: str
    strength: float
    effects: dict[str, float] = Field(default_factory=dict)

    def to_model(self) -> CulturalTrend:
        return CulturalTrend(**self.model_dump())

    @classmethod
    def from_model(cls, trend: CulturalTrend) -> TrendSchema:
        return cls(**trend.to_dict())


class PopulationActionRequest(BaseModel):
    action: str = Field(description="educate | improve_happiness | boost_productivity")
    segment_id: str
    value: float


class SocialPolicyRequest(BaseModel):
    policy: str = Field(description="welfare | education_reform | labor_policy")
    target_segments: list[str]


class DemographicProgramRequest(BaseModel):
    segment_id: str
    education: float | None = None
    happiness: float | None = None
    productivity: float | None = None


# --- Environment ---

class ClimateEventSchema(BaseModel):
    id: str
    type: str
    severity: float
    duration: float
    effects: dict[str, float] = Field(default_factory=dict)

    def to_model(self) -> ClimateEvent:
        return ClimateEvent(**self.model_dump())

    @classmethod
    def from_model(cls, event: ClimateEvent) -> ClimateEventSchema:
        return cls(**event.to_dict())


class EnvironmentalPolicySchema(BaseModel):
    id: str
    name: str
    cost: dict[str, float] = Field(default_factory=dict)
    effects: dict[str, float] = Field(default_factory=dict)

    def to_model(self) -> EnvironmentalPolicy:
        return EnvironmentalPolicy(**self.model_dump())


class EnvironmentalActionRequest(BaseModel):
    action: str
    target: str = Field(description="Metric name, e.g. pollution or water_quality")
    value: float


class ResourceRequest(BaseModel):
    action: str = Field(description="extract | conserve | restore")
    resource: str
    amount: float


class GreenTechnologyRequest(BaseModel):
    technology: str
    investment: float
    target_metric: str


# --- Research ---

class ResearchFieldSchema(BaseModel):
    id: str
    name: str
    progress: float = 0.0
    cost: dict[str, float] = Field(default_factory=dict)
    requirements: list[str] = Field(default_factory=list)

    def to_model(self) -> ResearchField:
        return ResearchField(**self.model_dump())

    @classmethod
    def from_model(cls, research_field: ResearchField) -> ResearchFieldSchema:
        return cls(**research_field.to_dict())


class ProjectSchema(BaseModel):
    id: str
    name: str
    field_id: str
    progress: float = 0.0
    researchers: int = 0
    cost: dict[str, float] = Field(default_factory=dict)

    def to_model(self) -> ResearchProject:
        return ResearchProject(**self.model_dump())

    @classmethod
    def from_model(cls, project: ResearchProject) -> ProjectSchema:
        return cls(**project.to_dict())


class FacilitySchema(BaseModel):
    id: str
    name: str
    level: int = 1
    capacity: float = 10.0
    efficiency: float = 1.0
    specialization: str = ""

    def to_model(self) -> ResearchFacility:
        return ResearchFacility(**self.model_dump())

    @classmethod
    def from_model(cls, facility: ResearchFacility) -> FacilitySchema:
        return cls(**facility.to_dict())


class TechnologyTreeSchema(BaseModel):
    id: str
    name: str
    nodes: list[ResearchFieldSchema] = Field(default_factory=list)
    edges: list[tuple[str, str]] = Field(default_factory=list)

    def to_model(self) -> TechnologyTree:
        return TechnologyTree(
            id=self.id, name=self.name,
            nodes=[n.to_model() for n in self.nodes],
            edges=list(self.edges),
        )

    @classmethod
    def from_model(cls, tree: TechnologyTree) -> TechnologyTreeSchema:
        return cls(
            id=tree.id, name=tree.name,
            nodes=[ResearchFieldSchema.from_model(n) for n in tree.nodes],
            edges=list(tree.edges),
        )


class ResearchActionRequest(BaseModel):
    action: str = Field(description="allocate_resources | adjust_researchers")
    target_id: str
    value: float


class AllocateResearchersRequest(BaseModel):
    count: int


class CollaborationRequest(BaseModel):
    partner_ids: list[str]


class FacilityUpgradeRequest(BaseModel):
    level: int | None = None
    capacity: float | None = None
    efficiency: float | None = None


# --- Diplomacy ---

class TradeAgreementSchema(BaseModel):
    id: str
    type: str = Field(description="import | export")
    resource: str
    amount: float
    price: float
    duration: int = Field(description="Milliseconds")
    start_time: int | None = Field(None, description="Defaults to the time of the proposal")

    def to_model(self, now: int) -> TradeAgreement:
        data = self.model_dump()
        if data["start_time"] is None:
            data["start_time"] = now
        return TradeAgreement(**data)


class TreatySchema(BaseModel):
    id: str
    type: str
    terms: list[str] = Field(default_factory=list)
    benefits: dict[str, float] = Field(default_factory=dict)
    obligations: dict[str, float] = Field(default_factory=dict)
    start_time: int | None = Field(None, description="Defaults to the time of the proposal")
    duration: int = Field(0, description="Milliseconds")

    def to_model(self, now: int) -> Treaty:
        data = self.model_dump()
        if data["start_time"] is None:
            data["start_time"] = now
        return Treaty(**data)


class RelationRequest(BaseModel):
    nation_a: str
    nation_b: str
    trust: float = 50.0


class RelationSchema(BaseModel):
    key: str
    nation_a: str
    nation_b: str
    status: str
    trust: float
    trade_agreements: list[TradeAgreementSchema] = Field(default_factory=list)
    treaties: list[TreatySchema] = Field(default_factory=list)
    last_interaction: int = 0

    @classmethod
    def from_model(cls, relation: DiplomaticRelation) -> RelationSchema:
        return cls(**relation.to_dict())


class TreatyProposalRequest(BaseModel):
    initiator: str
    target: str
    treaty: TreatySchema


class TradeProposalRequest(BaseModel):
    initiator: str
    target: str
    agreement: TradeAgreementSchema


class DiplomaticActionRequest(BaseModel):
    type: str = Field(description="negotiate | propose | demand | threaten")
    initiator: str
    target: str
    content: dict[str, Any] = Field(default_factory=dict)


class CounterProposal(BaseModel):
    agreement: TradeAgreementSchema | None = None
    treaty: TreatySchema | None = None
    terms: dict[str, Any] = Field(default_factory=dict)

    def to_content(self, now: int) -> dict[str, Any]:
        content: dict[str, Any] = dict(self.terms)
        if self.agreement is not None:
            content["agreement"] = self.agreement.to_model(now)
        if self.treaty is not None:
            content["treaty"] = self.treaty.to_model(now)
        return content


class DiplomaticResponseRequest(BaseModel):
    response: str = Field(description="accept | reject | counter")
    counter_proposal: CounterProposal | None = None


class DiplomaticActionSchema(BaseModel):
    action_id: str
    type: str
    initiator: str
    target: str
    content: dict[str, Any] = Field(default_factory=dict)
    timestamp: int = 0

    @classmethod
    def from_model(cls, action: DiplomaticAction) -> DiplomaticActionSchema:
        return cls(**action.to_dict())


# --- State ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    timestamp: int = 0


class FaultSchema(BaseModel):
    tick: int
    timestamp: int
    error: str
    error_type: str


class StateResponse(BaseModel):
    tick: int
    timestamp: int
    running: bool
    active_operations: list[OperationSchema] = Field(default_factory=list)
    movements: list[MovementSchema] = Field(default_factory=list)
    trends: list[TrendSchema] = Field(default_factory=list)
    global_metrics: dict[str, float] = Field(default_factory=dict)
    resource_metrics: dict[str, float] = Field(default_factory=dict)
    active_events: list[ClimateEventSchema] = Field(default_factory=list)
    active_projects: list[ProjectSchema] = Field(default_factory=list)
    facilities: list[FacilitySchema] = Field(default_factory=list)
    viewer: str
    pending_actions: list[DiplomaticActionSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)
    last_fault: FaultSchema | None = None


# --- Control ---

class CommandResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


class InsightResponse(CommandResponse):
    insights: dict[str, float] = Field(default_factory=dict)


# --- Config ---

class SimulationConfigResponse(BaseModel):
    world_seed: int
    seed_default_scenario: bool
    tick_interval_ms: int
    min_tick_interval_ms: int
    max_ticks: int
    diplomacy_viewer: str
    action_history_limit: int
    event_log_size: int
    running: bool
