"""Enumerations used throughout the engine.

Gameplay enums are ``str``-valued so that plain strings coming from the command
surface compare equal to members (``DiplomaticStatus.HOSTILE == "hostile"``).
"""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class ResourceType(str, Enum):
    """Currencies a cost mapping may be keyed by."""

    MONEY = "money"
    INFLUENCE = "influence"
    TECHNOLOGY = "technology"
    MILITARY = "military"


# ---------------------------------------------------------------------------
# Diplomacy
# ---------------------------------------------------------------------------

@unique
class DiplomaticStatus(str, Enum):
    """How two nations regard each other — a pure function of trust."""

    FRIENDLY = "friendly"
    NEUTRAL = "neutral"
    HOSTILE = "hostile"


@unique
class DiplomaticActionType(str, Enum):
    NEGOTIATE = "negotiate"
    PROPOSE = "propose"
    DEMAND = "demand"
    THREATEN = "threaten"


@unique
class ActionResponse(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    COUNTER = "counter"


@unique
class TradeDirection(str, Enum):
    IMPORT = "import"
    EXPORT = "export"


# ---------------------------------------------------------------------------
# Population
# ---------------------------------------------------------------------------

@unique
class PopulationAction(str, Enum):
    EDUCATE = "educate"
    IMPROVE_HAPPINESS = "improve_happiness"
    BOOST_PRODUCTIVITY = "boost_productivity"


@unique
class SocialPolicy(str, Enum):
    WELFARE = "welfare"                    # +5 happiness
    EDUCATION_REFORM = "education_reform"  # +3 education
    LABOR_POLICY = "labor_policy"          # +4 productivity


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@unique
class ResourceAction(str, Enum):
    EXTRACT = "extract"
    CONSERVE = "conserve"
    RESTORE = "restore"


# ---------------------------------------------------------------------------
# Research
# ---------------------------------------------------------------------------

@unique
class ResearchAction(str, Enum):
    ALLOCATE_RESOURCES = "allocate_resources"
    ADJUST_RESEARCHERS = "adjust_researchers"


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    DIPLOMACY = 0
    POPULATION = 1
    RESEARCH = 2
    ENVIRONMENT = 3
