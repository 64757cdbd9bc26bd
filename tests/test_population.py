"""Tests for the population subsystem.

Covers:
- Compounding growth and productivity dynamics
- Soft-capped action, policy and program deltas
- One-time social movement effects
- Registration validation for segments and cultural trends
"""

import pytest

from statecraft.core.models import CulturalTrend, PopulationSegment, SocialMovement
from statecraft.systems.population import PopulationSystem, growth_rate, soft_cap


def _system(**segment_kw) -> PopulationSystem:
    system = PopulationSystem()
    defaults = dict(id="s1", name="Urban", size=1000.0)
    defaults.update(segment_kw)
    assert system.add_segment(PopulationSegment(**defaults))
    return system


class TestDynamics:

    def test_growth_rate_formula(self):
        seg = PopulationSegment(id="s", name="S", size=1, happiness=60, education=40)
        assert growth_rate(seg) == pytest.approx(0.001 + 10 * 0.0001 + 40 * 0.0001)

    def test_size_non_decreasing_at_full_happiness_and_education(self):
        system = _system(happiness=100, education=100)
        sizes = []
        for _ in range(50):
            system.update_population_dynamics()
            sizes.append(system.get_population_segment("s1").size)
        assert all(b >= a for a, b in zip(sizes, sizes[1:]))
        assert sizes[0] == pytest.approx(1000 * 1.016)

    def test_unhappy_uneducated_population_shrinks(self):
        system = _system(happiness=0, education=0)
        system.update_population_dynamics()
        assert system.get_population_segment("s1").size == pytest.approx(1000 * (1 - 0.004))

    def test_productivity_compounds_past_hundred(self):
        system = _system(productivity=99, education=100)
        for _ in range(5):
            system.update_population_dynamics()
        assert system.get_population_segment("s1").productivity == pytest.approx(99 * 1.1 ** 5)


class TestSoftCap:

    def test_soft_cap_rules(self):
        assert soft_cap(98, 5) == 100
        assert soft_cap(120, 5) == 120
        assert soft_cap(120, -5) == 115
        assert soft_cap(10, 5) == 15

    def test_action_deltas_are_capped(self):
        system = _system(happiness=98)
        assert system.process_population_action("improve_happiness", "s1", 5)
        assert system.get_population_segment("s1").happiness == 100

    def test_negative_action_floors_at_zero(self):
        system = _system(education=3)
        assert system.process_population_action("educate", "s1", -10)
        assert system.get_population_segment("s1").education == 0

    def test_unknown_action_or_segment(self):
        system = _system()
        assert not system.process_population_action("indoctrinate", "s1", 5)
        assert not system.process_population_action("educate", "missing", 5)


class TestPolicies:

    def test_welfare_hits_known_segments_only(self):
        system = _system(happiness=50)
        assert system.implement_social_policy("welfare", ["s1", "missing"])
        assert system.get_population_segment("s1").happiness == pytest.approx(55)

    @pytest.mark.parametrize("policy,attr,delta", [
        ("education_reform", "education", 3),
        ("labor_policy", "productivity", 4),
    ])
    def test_policy_effects(self, policy, attr, delta):
        system = _system()
        system.implement_social_policy(policy, ["s1"])
        assert getattr(system.get_population_segment("s1"), attr) == pytest.approx(50 + delta)

    def test_unknown_policy_changes_nothing(self):
        system = _system()
        before = system.get_population_segment("s1")
        assert not system.implement_social_policy("martial_law", ["s1"])
        assert system.get_population_segment("s1") == before

    def test_demographic_program(self):
        system = _system(happiness=99)
        assert system.implement_demographic_program("s1", education=5, happiness=5)
        seg = system.get_population_segment("s1")
        assert seg.education == pytest.approx(55)
        assert seg.happiness == 100
        assert seg.productivity == pytest.approx(50)
        assert not system.implement_demographic_program("missing", education=1)


class TestMovementsAndTrends:

    def test_movement_effect_is_one_time(self):
        system = _system(happiness=50, education=50, productivity=50)
        movement = SocialMovement(id="m", name="Greens", support=50, influence=40, demands=["clean air"])
        assert system.handle_social_movement(movement)

        seg = system.get_population_segment("s1")
        assert seg.happiness == pytest.approx(50.2)
        assert seg.productivity == pytest.approx(50.1)

        system.update_population_dynamics()
        assert system.get_population_segment("s1").happiness == pytest.approx(50.2)
        assert [m.id for m in system.get_all_movements()] == ["m"]

    def test_invalid_movement_rejected(self):
        system = _system()
        assert not system.handle_social_movement(SocialMovement(id="m", name="M", support=150, influence=10))
        assert system.get_all_movements() == []

    def test_cultural_trend_validation(self):
        system = PopulationSystem()
        assert system.launch_cultural_initiative(CulturalTrend(id="t", name="Jazz", strength=40,
                                                               effects={"happiness": 1.0}))
        assert not system.launch_cultural_initiative(CulturalTrend(id="u", name="Noise", strength=140))
        assert [t.id for t in system.get_all_trends()] == ["t"]

    def test_duplicate_segment_rejected(self):
        system = _system()
        assert not system.add_segment(PopulationSegment(id="s1", name="Again", size=1))
