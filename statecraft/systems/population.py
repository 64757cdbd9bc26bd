"""Population subsystem — segments, social movements, cultural trends.

Per-tick dynamics compound without a ceiling:

    growth_rate   = 0.001 + (happiness - 50) * 0.0001 + education * 0.0001
    size         *= 1 + growth_rate
    productivity *= 1 + education * 0.001

Action, policy and program deltas are soft-capped: a positive delta never
lifts happiness, education or productivity past 100, and never pulls down a
value the dynamics pass already pushed above 100.
"""

from __future__ import annotations

import logging

from statecraft.core.enums import PopulationAction, SocialPolicy
from statecraft.core.models import CulturalTrend, PopulationSegment, SocialMovement
from statecraft.core.validation import all_finite, in_range, is_number, non_empty

logger = logging.getLogger(__name__)

SOFT_CAP = 100.0

# policy → (segment attribute, delta)
_POLICY_EFFECTS: dict[SocialPolicy, tuple[str, float]] = {
    SocialPolicy.WELFARE: ("happiness", 5.0),
    SocialPolicy.EDUCATION_REFORM: ("education", 3.0),
    SocialPolicy.LABOR_POLICY: ("productivity", 4.0),
}

_ACTION_TARGETS: dict[PopulationAction, str] = {
    PopulationAction.EDUCATE: "education",
    PopulationAction.IMPROVE_HAPPINESS: "happiness",
    PopulationAction.BOOST_PRODUCTIVITY: "productivity",
}

# attributes that may not drop below zero
_FLOORED = frozenset({"happiness", "education"})


def soft_cap(current: float, delta: float, cap: float = SOFT_CAP) -> float:
    """Apply *delta* without pushing past *cap* (values already above stay put)."""
    result = current + delta
    if delta > 0:
        result = min(result, max(cap, current))
    return result


def growth_rate(segment: PopulationSegment) -> float:
    base_rate = 0.001
    happiness_modifier = (segment.happiness - 50) * 0.0001
    education_modifier = segment.education * 0.0001
    return base_rate + happiness_modifier + education_modifier


class PopulationSystem:
    """Owns population segments, registered movements and trends."""

    __slots__ = ("_segments", "_movements", "_trends")

    def __init__(self) -> None:
        self._segments: dict[str, PopulationSegment] = {}
        self._movements: dict[str, SocialMovement] = {}
        self._trends: dict[str, CulturalTrend] = {}

    # -- registration --

    def add_segment(self, segment: PopulationSegment) -> bool:
        if not (
            isinstance(segment, PopulationSegment)
            and non_empty(segment.id)
            and non_empty(segment.name)
            and is_number(segment.size) and segment.size >= 0
            and in_range(segment.happiness, 0, 100)
            and in_range(segment.education, 0, 100)
            and is_number(segment.productivity) and segment.productivity >= 0
        ):
            return False
        if segment.id in self._segments:
            return False
        self._segments[segment.id] = segment.copy()
        return True

    # -- mutators --

    def process_population_action(self, action: str, segment_id: str, value: float) -> bool:
        segment = self._segments.get(segment_id)
        if segment is None or not is_number(value):
            return False
        try:
            attr = _ACTION_TARGETS[PopulationAction(action)]
        except ValueError:
            logger.debug("Unknown population action %r", action)
            return False
        self._apply_delta(segment, attr, value)
        return True

    def implement_social_policy(self, policy: str, target_segments: list[str]) -> bool:
        try:
            attr, delta = _POLICY_EFFECTS[SocialPolicy(policy)]
        except ValueError:
            logger.debug("Unknown social policy %r", policy)
            return False
        affected = [sid for sid in target_segments if sid in self._segments]
        if not affected:
            return False
        for sid in affected:
            self._apply_delta(self._segments[sid], attr, delta)
        logger.info("Social policy '%s' applied to %d segment(s)", policy, len(affected))
        return True

    def implement_demographic_program(
        self,
        segment_id: str,
        education: float | None = None,
        happiness: float | None = None,
        productivity: float | None = None,
    ) -> bool:
        segment = self._segments.get(segment_id)
        if segment is None:
            return False
        program = {"education": education, "happiness": happiness, "productivity": productivity}
        deltas = {attr: v for attr, v in program.items() if v}
        if not all(is_number(v) for v in deltas.values()):
            return False
        for attr, delta in deltas.items():
            self._apply_delta(segment, attr, delta)
        return True

    def launch_cultural_initiative(self, trend: CulturalTrend) -> bool:
        if not (
            isinstance(trend, CulturalTrend)
            and non_empty(trend.id)
            and non_empty(trend.name)
            and in_range(trend.strength, 0, 100)
            and all_finite(trend.effects)
        ):
            logger.debug("Rejected cultural trend %r", getattr(trend, "id", None))
            return False
        self._trends[trend.id] = trend.copy()
        return True

    def handle_social_movement(self, movement: SocialMovement) -> bool:
        """Register a movement and apply its one-time effect to every segment."""
        if not (
            isinstance(movement, SocialMovement)
            and non_empty(movement.id)
            and non_empty(movement.name)
            and in_range(movement.support, 0, 100)
            and in_range(movement.influence, 0, 100)
            and isinstance(movement.demands, list)
            and all(isinstance(d, str) for d in movement.demands)
        ):
            logger.debug("Rejected social movement %r", getattr(movement, "id", None))
            return False
        self._movements[movement.id] = movement.copy()

        support_impact = movement.support * movement.influence * 0.0001
        for segment in self._segments.values():
            segment.happiness += support_impact
            segment.productivity += support_impact * (segment.education / 100)
        logger.info("Social movement '%s' registered (impact %.4f)", movement.name, support_impact)
        return True

    # -- per-tick --

    def update_population_dynamics(self) -> None:
        for segment in self._segments.values():
            segment.size *= 1 + growth_rate(segment)
            segment.productivity *= 1 + segment.education * 0.001

    # -- internals --

    @staticmethod
    def _apply_delta(segment: PopulationSegment, attr: str, delta: float) -> None:
        value = soft_cap(getattr(segment, attr), delta)
        if attr in _FLOORED:
            value = max(0.0, value)
        setattr(segment, attr, value)

    # -- queries --

    def get_population_segment(self, segment_id: str) -> PopulationSegment | None:
        seg = self._segments.get(segment_id)
        return seg.copy() if seg else None

    def get_all_segments(self) -> list[PopulationSegment]:
        return [s.copy() for s in self._segments.values()]

    def get_all_movements(self) -> list[SocialMovement]:
        return [m.copy() for m in self._movements.values()]

    def get_all_trends(self) -> list[CulturalTrend]:
        return [t.copy() for t in self._trends.values()]
