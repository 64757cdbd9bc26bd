"""Default starting scenario: nations, population, research base.

All jitter is drawn from ``DeterministicRNG`` so two worlds built from the
same seed start from identical state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from statecraft.core.enums import Domain, ResourceType
from statecraft.core.models import (
    PopulationSegment,
    ResearchFacility,
    ResearchField,
    ResearchProject,
    TechnologyTree,
)
from statecraft.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from statecraft.engine.tick_loop import TickLoop

logger = logging.getLogger(__name__)

NATIONS: tuple[str, ...] = ("aurelia", "borealis", "cathay")

# (id, name, base size)
SEGMENTS: tuple[tuple[str, str, float], ...] = (
    ("urban", "Urban Workers", 4_000_000.0),
    ("rural", "Rural Communities", 2_500_000.0),
    ("academic", "Academic Class", 300_000.0),
)

# (id, name, requirements)
FIELDS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("physics", "Physics", ()),
    ("materials", "Materials Science", ("physics",)),
    ("energy", "Energy Systems", ("physics", "materials")),
)

# (id, name, specialization)
FACILITIES: tuple[tuple[str, str, str], ...] = (
    ("lab_central", "Central Laboratory", "Physics"),
    ("lab_foundry", "Foundry Institute", "Materials Science"),
)


def build_default_scenario(loop: TickLoop, seed: int, viewer: str = "player") -> None:
    """Register the default world on *loop*'s subsystems."""
    rng = DeterministicRNG(seed)

    # Diplomacy: viewer knows every nation, each nation knows its neighbour
    for i, nation in enumerate(NATIONS):
        trust = float(rng.next_int(Domain.DIPLOMACY, nation, 0, 35, 75))
        loop.diplomacy.establish_relation(viewer, nation, trust=trust)
        neighbour = NATIONS[(i + 1) % len(NATIONS)]
        trust = float(rng.next_int(Domain.DIPLOMACY, nation + neighbour, 1, 20, 80))
        loop.diplomacy.establish_relation(nation, neighbour, trust=trust)

    # Population
    for seg_id, name, base_size in SEGMENTS:
        loop.population.add_segment(PopulationSegment(
            id=seg_id,
            name=name,
            size=round(base_size * rng.uniform(Domain.POPULATION, seg_id, 0, 0.9, 1.1)),
            happiness=float(rng.next_int(Domain.POPULATION, seg_id, 1, 40, 65)),
            productivity=float(rng.next_int(Domain.POPULATION, seg_id, 2, 40, 60)),
            education=float(rng.next_int(Domain.POPULATION, seg_id, 3, 30, 70)),
        ))

    # Research
    fields = [
        ResearchField(id=fid, name=name, cost={ResourceType.MONEY.value: 100.0 * (i + 1)}, requirements=list(reqs))
        for i, (fid, name, reqs) in enumerate(FIELDS)
    ]
    for research_field in fields:
        loop.research.add_field(research_field)
    loop.research.add_technology_tree(TechnologyTree(
        id="core",
        name="Core Sciences",
        nodes=[f.copy() for f in fields],
        edges=[(req, fid) for fid, _, reqs in FIELDS for req in reqs],
    ))

    for fac_id, name, specialization in FACILITIES:
        loop.research.add_facility(ResearchFacility(
            id=fac_id,
            name=name,
            level=rng.next_int(Domain.RESEARCH, fac_id, 0, 1, 3),
            capacity=float(rng.next_int(Domain.RESEARCH, fac_id, 1, 10, 30)),
            efficiency=round(rng.uniform(Domain.RESEARCH, fac_id, 2, 0.8, 1.2), 2),
            specialization=specialization,
        ))

    loop.research.start_research_project(ResearchProject(
        id="proj_physics",
        name="Fundamental Forces",
        field_id="physics",
        researchers=rng.next_int(Domain.RESEARCH, "proj_physics", 0, 2, 8),
        cost={ResourceType.MONEY.value: 50.0},
    ))

    logger.info("Default scenario seeded (seed=%d, viewer=%s): %d nation(s), %d segment(s), %d field(s)",
                seed, viewer, len(NATIONS) + 1, len(SEGMENTS), len(FIELDS))
