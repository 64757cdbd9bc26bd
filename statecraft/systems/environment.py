"""Environment subsystem — global and resource metrics, policies, climate events.

Both metric records are clamped to [0, 100] at the end of every public
mutator, so readers never observe an out-of-range value.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from statecraft.core.enums import ResourceAction
from statecraft.core.models import (
    ClimateEvent,
    EnvironmentalMetrics,
    EnvironmentalPolicy,
    ResourceMetrics,
)
from statecraft.core.validation import all_finite, in_range, is_number, non_empty, valid_cost

if TYPE_CHECKING:
    from statecraft.config import SimulationConfig

logger = logging.getLogger(__name__)


class EnvironmentSystem:
    """Owns the two metric singletons plus active events and policies."""

    __slots__ = ("_global", "_resources", "_events", "_policies")

    def __init__(self, config: SimulationConfig | None = None) -> None:
        if config is None:
            self._global = EnvironmentalMetrics()
            self._resources = ResourceMetrics()
        else:
            self._global = EnvironmentalMetrics(
                pollution=config.initial_pollution,
                sustainability=config.initial_sustainability,
                biodiversity=config.initial_biodiversity,
                climate_stability=config.initial_climate_stability,
            )
            self._resources = ResourceMetrics(
                renewable_energy=config.initial_renewable_energy,
                raw_materials=config.initial_raw_materials,
                water_quality=config.initial_water_quality,
                air_quality=config.initial_air_quality,
            )
        self._normalize()
        self._events: dict[str, ClimateEvent] = {}
        self._policies: dict[str, EnvironmentalPolicy] = {}

    # -- mutators --

    def process_environmental_action(self, action: str, target: str, value: float) -> bool:
        """Add *value* to one named metric (global record first)."""
        if not is_number(value):
            return False
        if self._global.has(target):
            self._global.set(target, self._global.get(target) + value)
        elif self._resources.has(target):
            self._resources.set(target, self._resources.get(target) + value)
        else:
            logger.debug("Environmental action %r on unknown metric %r", action, target)
            return False
        self._normalize()
        return True

    def manage_resources(self, action: str, resource: str, amount: float) -> bool:
        if not self._resources.has(resource) or not is_number(amount) or amount < 0:
            return False
        try:
            action = ResourceAction(action)
        except ValueError:
            return False

        current = self._resources.get(resource)
        g = self._global
        match action:
            case ResourceAction.EXTRACT:
                if current < amount:
                    logger.debug("Extraction of %.2f %s refused (balance %.2f)", amount, resource, current)
                    return False
                self._resources.set(resource, current - amount)
                g.sustainability -= amount * 0.1
            case ResourceAction.CONSERVE:
                self._resources.set(resource, min(100.0, current + amount * 0.5))
                g.sustainability += amount * 0.05
            case ResourceAction.RESTORE:
                self._resources.set(resource, min(100.0, current + amount))
                g.sustainability += amount * 0.1
                g.biodiversity += amount * 0.05

        self._normalize()
        return True

    def implement_environmental_policy(self, policy: EnvironmentalPolicy) -> bool:
        if not (
            isinstance(policy, EnvironmentalPolicy)
            and non_empty(policy.id)
            and non_empty(policy.name)
            and valid_cost(policy.cost)
            and all_finite(policy.effects)
        ):
            logger.debug("Rejected environmental policy %r", getattr(policy, "id", None))
            return False
        self._policies[policy.id] = policy.copy()
        for metric, effect in policy.effects.items():
            if self._global.has(metric):
                self._global.set(metric, self._global.get(metric) + effect)
        self._normalize()
        logger.info("Environmental policy '%s' implemented", policy.name)
        return True

    def respond_to_climate_event(self, event: ClimateEvent) -> bool:
        """Register a climate event; its scaled effects are subtracted once."""
        if not (
            isinstance(event, ClimateEvent)
            and non_empty(event.id)
            and non_empty(event.type)
            and in_range(event.severity, 0, 100)
            and is_number(event.duration) and event.duration > 0
            and all_finite(event.effects)
        ):
            logger.debug("Rejected climate event %r", getattr(event, "id", None))
            return False
        self._events[event.id] = event.copy()
        scale = event.severity / 100
        for metric, effect in event.effects.items():
            if self._global.has(metric):
                self._global.set(metric, self._global.get(metric) - effect * scale)
            if self._resources.has(metric):
                self._resources.set(metric, self._resources.get(metric) - effect * scale)
        self._normalize()
        logger.info("Climate event '%s' (%s, severity %.0f) applied", event.id, event.type, event.severity)
        return True

    def clear_climate_event(self, event_id: str) -> bool:
        """Remove an event from the active set.  Its applied effects remain."""
        return self._events.pop(event_id, None) is not None

    def invest_in_green_technology(self, technology: str, investment: float, target_metric: str) -> bool:
        if not is_number(investment) or investment <= 0 or not self._global.has(target_metric):
            return False
        efficiency = self.investment_efficiency(technology, investment)
        self._global.set(target_metric, self._global.get(target_metric) + efficiency)
        self._resources.renewable_energy += efficiency * 0.5
        self._normalize()
        return True

    # -- per-tick --

    def update_environment(self) -> None:
        self.process_environmental_action("update", "climate_stability", 0.0)

    # -- formulas --

    @classmethod
    def investment_efficiency(cls, technology: str, investment: float) -> float:
        base_efficiency = 0.1
        diminishing_returns = math.log10(investment) / 10
        return base_efficiency * diminishing_returns * cls.technology_bonus(technology)

    @staticmethod
    def technology_bonus(technology: str) -> float:
        return 1.0

    def _normalize(self) -> None:
        self._global.normalize()
        self._resources.normalize()

    # -- queries --

    def get_global_metrics(self) -> EnvironmentalMetrics:
        return self._global.copy()

    def get_resource_metrics(self) -> ResourceMetrics:
        return self._resources.copy()

    def get_active_events(self) -> list[ClimateEvent]:
        return [e.copy() for e in self._events.values()]

    def get_active_policies(self) -> list[EnvironmentalPolicy]:
        return [p.copy() for p in self._policies.values()]
