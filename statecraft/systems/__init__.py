"""Simulation subsystems and the deterministic RNG used to seed them."""

from statecraft.systems.diplomacy import DiplomacySystem
from statecraft.systems.environment import EnvironmentSystem
from statecraft.systems.intelligence import IntelligenceSystem
from statecraft.systems.population import PopulationSystem
from statecraft.systems.research import ResearchSystem
from statecraft.systems.rng import DeterministicRNG

__all__ = [
    "DeterministicRNG",
    "DiplomacySystem",
    "EnvironmentSystem",
    "IntelligenceSystem",
    "PopulationSystem",
    "ResearchSystem",
]
