"""Core data models, enums and the per-tick snapshot."""

from statecraft.core.enums import (
    ActionResponse,
    DiplomaticActionType,
    DiplomaticStatus,
    PopulationAction,
    ResearchAction,
    ResourceAction,
    ResourceType,
    SocialPolicy,
    TradeDirection,
)
from statecraft.core.snapshot import FaultNotice, GameSnapshot, TickResult

__all__ = [
    "ActionResponse",
    "DiplomaticActionType",
    "DiplomaticStatus",
    "FaultNotice",
    "GameSnapshot",
    "PopulationAction",
    "ResearchAction",
    "ResourceAction",
    "ResourceType",
    "SocialPolicy",
    "TickResult",
    "TradeDirection",
]
