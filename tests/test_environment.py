"""Tests for the environment subsystem."""

import math

import pytest

from statecraft.config import SimulationConfig
from statecraft.core.models import ClimateEvent, EnvironmentalPolicy
from statecraft.systems.environment import EnvironmentSystem


def _all_in_range(env: EnvironmentSystem) -> bool:
    values = list(env.get_global_metrics().to_dict().values())
    values += list(env.get_resource_metrics().to_dict().values())
    return all(0 <= v <= 100 for v in values)


class TestDefaults:

    def test_initial_metrics(self):
        env = EnvironmentSystem()
        assert env.get_global_metrics().to_dict() == {
            "pollution": 50.0, "sustainability": 50.0,
            "biodiversity": 50.0, "climate_stability": 50.0,
        }
        assert env.get_resource_metrics().to_dict() == {
            "renewable_energy": 20.0, "raw_materials": 100.0,
            "water_quality": 80.0, "air_quality": 70.0,
        }

    def test_config_values_are_clamped(self):
        env = EnvironmentSystem(SimulationConfig(initial_pollution=140.0, initial_air_quality=-3.0))
        assert env.get_global_metrics().pollution == 100.0
        assert env.get_resource_metrics().air_quality == 0.0


class TestClamping:

    def test_direct_actions_clamp(self):
        env = EnvironmentSystem()
        assert env.process_environmental_action("emit", "pollution", 500)
        assert env.get_global_metrics().pollution == 100.0
        assert env.process_environmental_action("clean", "water_quality", -500)
        assert env.get_resource_metrics().water_quality == 0.0

    def test_unknown_metric_rejected(self):
        env = EnvironmentSystem()
        assert not env.process_environmental_action("emit", "ozone", 5)
        assert not env.process_environmental_action("emit", "pollution", math.nan)

    def test_every_mutator_leaves_metrics_in_range(self):
        env = EnvironmentSystem()
        for i in range(40):
            delta = (i * 37 % 200) - 100
            env.process_environmental_action("step", "biodiversity", delta)
            env.manage_resources("restore", "air_quality", abs(delta))
            env.manage_resources("conserve", "renewable_energy", abs(delta))
            env.implement_environmental_policy(EnvironmentalPolicy(
                id=f"p{i}", name="Policy", effects={"sustainability": delta * 3},
            ))
            env.respond_to_climate_event(ClimateEvent(
                id=f"e{i}", type="storm", severity=i * 2.5 % 100, duration=1,
                effects={"climate_stability": delta, "water_quality": -delta},
            ))
            env.invest_in_green_technology("solar", 10 ** (i % 8 + 1), "pollution")
            env.update_environment()
            assert _all_in_range(env)


class TestResources:

    def test_over_extraction_is_refused(self):
        env = EnvironmentSystem()
        assert not env.manage_resources("extract", "raw_materials", 150)
        assert env.get_resource_metrics().raw_materials == 100.0
        assert env.get_global_metrics().sustainability == 50.0

    def test_extract_costs_sustainability(self):
        env = EnvironmentSystem()
        assert env.manage_resources("extract", "raw_materials", 30)
        assert env.get_resource_metrics().raw_materials == pytest.approx(70.0)
        assert env.get_global_metrics().sustainability == pytest.approx(47.0)

    def test_conserve_and_restore(self):
        env = EnvironmentSystem()
        assert env.manage_resources("conserve", "renewable_energy", 10)
        assert env.get_resource_metrics().renewable_energy == pytest.approx(25.0)
        assert env.manage_resources("restore", "water_quality", 10)
        assert env.get_resource_metrics().water_quality == pytest.approx(90.0)
        g = env.get_global_metrics()
        assert g.sustainability == pytest.approx(50.0 + 0.5 + 1.0)
        assert g.biodiversity == pytest.approx(50.5)

    def test_bad_resource_requests(self):
        env = EnvironmentSystem()
        assert not env.manage_resources("extract", "unobtainium", 1)
        assert not env.manage_resources("smelt", "raw_materials", 1)
        assert not env.manage_resources("extract", "raw_materials", -1)


class TestEventsAndPolicies:

    def test_climate_event_scaled_by_severity(self):
        env = EnvironmentSystem()
        event = ClimateEvent(id="flood", type="flood", severity=50, duration=3,
                             effects={"biodiversity": 20, "water_quality": 10})
        assert env.respond_to_climate_event(event)
        assert env.get_global_metrics().biodiversity == pytest.approx(40.0)
        assert env.get_resource_metrics().water_quality == pytest.approx(75.0)
        assert [e.id for e in env.get_active_events()] == ["flood"]

    def test_clearing_event_keeps_its_effects(self):
        env = EnvironmentSystem()
        env.respond_to_climate_event(ClimateEvent(id="fire", type="wildfire", severity=100,
                                                  duration=1, effects={"biodiversity": 10}))
        assert env.clear_climate_event("fire")
        assert not env.clear_climate_event("fire")
        assert env.get_active_events() == []
        assert env.get_global_metrics().biodiversity == pytest.approx(40.0)

    def test_invalid_event_rejected(self):
        env = EnvironmentSystem()
        assert not env.respond_to_climate_event(ClimateEvent(id="x", type="storm", severity=120, duration=1))
        assert not env.respond_to_climate_event(ClimateEvent(id="x", type="storm", severity=10, duration=0))

    def test_policy_applies_global_effects_only(self):
        env = EnvironmentSystem()
        policy = EnvironmentalPolicy(id="cap", name="Emission cap", cost={"money": 10},
                                     effects={"pollution": -10, "air_quality": 10, "mood": 5})
        assert env.implement_environmental_policy(policy)
        assert env.get_global_metrics().pollution == pytest.approx(40.0)
        assert env.get_resource_metrics().air_quality == pytest.approx(70.0)
        assert [p.id for p in env.get_active_policies()] == ["cap"]

    def test_policy_with_negative_cost_rejected(self):
        env = EnvironmentSystem()
        assert not env.implement_environmental_policy(
            EnvironmentalPolicy(id="p", name="P", cost={"money": -1}),
        )


class TestGreenTechnology:

    def test_investment_formula(self):
        env = EnvironmentSystem()
        assert env.invest_in_green_technology("solar", 1000, "pollution")
        gain = 0.1 * (math.log10(1000) / 10)
        assert env.get_global_metrics().pollution == pytest.approx(50.0 + gain)
        assert env.get_resource_metrics().renewable_energy == pytest.approx(20.0 + gain * 0.5)

    def test_rejects_non_positive_investment_and_resource_target(self):
        env = EnvironmentSystem()
        assert not env.invest_in_green_technology("solar", 0, "pollution")
        assert not env.invest_in_green_technology("solar", 100, "water_quality")

    def test_update_only_renormalizes(self):
        env = EnvironmentSystem()
        before = env.get_global_metrics().to_dict()
        env.update_environment()
        assert env.get_global_metrics().to_dict() == before
