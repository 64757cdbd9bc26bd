"""Research subsystem — dependency-gated projects, facilities, technology trees.

Progress per tick for a project with a matching facility:

    rate = 0.1 + researchers * 0.05 * efficiency * (level / 10)

A facility matches a project when its ``specialization`` equals the *name*
of the project's field.  When several facilities share a specialization the
first one registered wins.

A project reaching 100 triggers its breakthrough exactly once: the owning
field is finalised and every technology tree node for that field is
replaced by the completed field record.
"""

from __future__ import annotations

import logging
import math

from statecraft.core.enums import ResearchAction
from statecraft.core.models import ResearchFacility, ResearchField, ResearchProject, TechnologyTree
from statecraft.core.validation import in_range, is_number, non_empty, valid_cost

logger = logging.getLogger(__name__)

BASE_RATE = 0.1
RESEARCHER_RATE = 0.05
COLLABORATION_BASE_BONUS = 5.0


class ResearchSystem:
    """Owns fields, projects, facilities and technology trees."""

    __slots__ = ("_fields", "_projects", "_facilities", "_trees", "_breakthroughs")

    def __init__(self) -> None:
        self._fields: dict[str, ResearchField] = {}
        self._projects: dict[str, ResearchProject] = {}
        self._facilities: dict[str, ResearchFacility] = {}
        self._trees: dict[str, TechnologyTree] = {}
        # project ids whose breakthrough has already propagated
        self._breakthroughs: set[str] = set()

    # -- registration --

    def add_field(self, research_field: ResearchField) -> bool:
        if not (
            isinstance(research_field, ResearchField)
            and non_empty(research_field.id)
            and non_empty(research_field.name)
            and in_range(research_field.progress, 0, 100)
            and valid_cost(research_field.cost)
            and all(non_empty(r) for r in research_field.requirements)
            and research_field.id not in research_field.requirements
        ):
            return False
        if research_field.id in self._fields:
            return False
        self._fields[research_field.id] = research_field.copy()
        return True

    def add_facility(self, facility: ResearchFacility) -> bool:
        if not (
            isinstance(facility, ResearchFacility)
            and non_empty(facility.id)
            and non_empty(facility.name)
            and isinstance(facility.level, int) and ResearchFacility.MIN_LEVEL <= facility.level <= ResearchFacility.MAX_LEVEL
            and in_range(facility.capacity, 0, ResearchFacility.MAX_CAPACITY)
            and in_range(facility.efficiency, 0, ResearchFacility.MAX_EFFICIENCY)
            and non_empty(facility.specialization)
        ):
            return False
        if facility.id in self._facilities:
            return False
        self._facilities[facility.id] = facility.copy()
        return True

    def add_technology_tree(self, tree: TechnologyTree) -> bool:
        if not (isinstance(tree, TechnologyTree) and non_empty(tree.id) and non_empty(tree.name)):
            return False
        node_ids = set(tree.node_ids())
        if any(a not in node_ids or b not in node_ids for a, b in tree.edges):
            logger.debug("Technology tree '%s' has an edge to an unknown node", tree.id)
            return False
        self._trees[tree.id] = tree.copy()
        return True

    # -- mutators --

    def start_research_project(self, project: ResearchProject) -> bool:
        if not self._validate_project(project):
            logger.debug("Rejected research project %r", getattr(project, "id", None))
            return False
        if not self._requirements_met(project):
            logger.debug("Research project '%s' blocked by unmet prerequisites", project.id)
            return False
        if project.id in self._projects:
            logger.debug("Research project '%s' already exists", project.id)
            return False
        self._projects[project.id] = project.copy()
        logger.info("Research project '%s' started in field '%s'", project.name, project.field_id)
        return True

    def process_research_action(self, action: str, target_id: str, value: float) -> bool:
        project = self._projects.get(target_id)
        if project is None or not is_number(value):
            return False
        try:
            action = ResearchAction(action)
        except ValueError:
            return False
        match action:
            case ResearchAction.ALLOCATE_RESOURCES:
                project.progress = min(100.0, project.progress + value)
            case ResearchAction.ADJUST_RESEARCHERS:
                project.researchers = max(0, project.researchers + int(value))
        return True

    def allocate_researchers(self, project_id: str, count: int) -> bool:
        project = self._projects.get(project_id)
        if project is None or not isinstance(count, int) or isinstance(count, bool) or count < 0:
            return False
        facility = self._facility_for(project)
        if facility is None or facility.capacity < count:
            return False
        project.researchers = count
        return True

    def initiate_collaboration(self, project_id: str, partner_ids: list[str]) -> bool:
        project = self._projects.get(project_id)
        if project is None:
            return False
        bonus = collaboration_bonus(len(partner_ids))
        project.progress = min(100.0, project.progress + bonus)
        return True

    def upgrade_facility(
        self,
        facility_id: str,
        level: int | None = None,
        capacity: float | None = None,
        efficiency: float | None = None,
    ) -> bool:
        facility = self._facilities.get(facility_id)
        if facility is None:
            return False
        upgrades = (level, capacity, efficiency)
        if not all(u is None or is_number(u) for u in upgrades):
            return False
        if level:
            facility.level = _bounded(
                facility.level + int(level), ResearchFacility.MIN_LEVEL, ResearchFacility.MAX_LEVEL,
            )
        if capacity:
            facility.capacity = _bounded(facility.capacity + capacity, 0.0, ResearchFacility.MAX_CAPACITY)
        if efficiency:
            facility.efficiency = _bounded(facility.efficiency + efficiency, 0.0, ResearchFacility.MAX_EFFICIENCY)
        return True

    # -- per-tick --

    def update_research(self) -> list[str]:
        """Advance every open project; return ids that broke through this tick."""
        completed: list[str] = []
        for project in self._projects.values():
            if project.id in self._breakthroughs:
                continue
            facility = self._facility_for(project)
            if facility is not None:
                project.progress = min(100.0, project.progress + progress_rate(project, facility))
            if project.progress >= 100:
                self._handle_breakthrough(project)
                completed.append(project.id)
        return completed

    # -- internals --

    @staticmethod
    def _validate_project(project: ResearchProject) -> bool:
        return (
            isinstance(project, ResearchProject)
            and non_empty(project.id)
            and non_empty(project.name)
            and non_empty(project.field_id)
            and in_range(project.progress, 0, 100)
            and isinstance(project.researchers, int) and project.researchers >= 0
            and valid_cost(project.cost)
        )

    def _requirements_met(self, project: ResearchProject) -> bool:
        research_field = self._fields.get(project.field_id)
        if research_field is None:
            return False
        for req in research_field.requirements:
            required = self._fields.get(req)
            if required is None or not required.completed:
                return False
        return True

    def _facility_for(self, project: ResearchProject) -> ResearchFacility | None:
        research_field = self._fields.get(project.field_id)
        if research_field is None:
            return None
        for facility in self._facilities.values():
            if facility.specialization == research_field.name:
                return facility
        return None

    def _handle_breakthrough(self, project: ResearchProject) -> None:
        self._breakthroughs.add(project.id)
        research_field = self._fields.get(project.field_id)
        if research_field is None:
            return
        research_field.progress = 100.0
        for tree in self._trees.values():
            if research_field.id in tree.node_ids():
                tree.nodes = [
                    research_field.copy() if node.id == research_field.id else node
                    for node in tree.nodes
                ]
        logger.info("Breakthrough: project '%s' completed field '%s'", project.name, research_field.name)

    # -- queries --

    def get_research_field(self, field_id: str) -> ResearchField | None:
        f = self._fields.get(field_id)
        return f.copy() if f else None

    def get_active_projects(self) -> list[ResearchProject]:
        return [p.copy() for p in self._projects.values()]

    def get_facilities(self) -> list[ResearchFacility]:
        return [f.copy() for f in self._facilities.values()]

    def get_technology_tree(self, tree_id: str) -> TechnologyTree | None:
        tree = self._trees.get(tree_id)
        return tree.copy() if tree else None

    def has_broken_through(self, project_id: str) -> bool:
        return project_id in self._breakthroughs


def progress_rate(project: ResearchProject, facility: ResearchFacility) -> float:
    researcher_contribution = project.researchers * RESEARCHER_RATE
    facility_bonus = facility.efficiency * (facility.level / 10)
    return BASE_RATE + researcher_contribution * facility_bonus


def collaboration_bonus(partner_count: int) -> float:
    """Diminishing-returns bonus: 5 * log10(partners + 1)."""
    return COLLABORATION_BASE_BONUS * math.log10(partner_count + 1)


def _bounded(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
