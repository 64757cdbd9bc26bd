"""/api/v1/research — fields, projects, facilities and technology trees."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from statecraft.api.dependencies import get_game_engine
from statecraft.api.routes.common import command_response
from statecraft.api.schemas import (
    AllocateResearchersRequest,
    CollaborationRequest,
    CommandResponse,
    FacilitySchema,
    FacilityUpgradeRequest,
    ProjectSchema,
    ResearchActionRequest,
    ResearchFieldSchema,
    TechnologyTreeSchema,
)
from statecraft.engine.game_engine import GameEngine

router = APIRouter(prefix="/research")


@router.post("/fields", response_model=CommandResponse)
def add_field(body: ResearchFieldSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.research.add_field, body.to_model())
    return command_response(engine, ok, f"Field '{body.id}' registered.", "Invalid or duplicate field.")


@router.get("/fields/{field_id}", response_model=ResearchFieldSchema)
def get_field(field_id: str, engine: GameEngine = Depends(get_game_engine)) -> ResearchFieldSchema:
    research_field = engine.execute(engine.research.get_research_field, field_id)
    if research_field is None:
        raise HTTPException(status_code=404, detail=f"Field '{field_id}' not found.")
    return ResearchFieldSchema.from_model(research_field)


@router.post("/facilities", response_model=CommandResponse)
def add_facility(body: FacilitySchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.research.add_facility, body.to_model())
    return command_response(engine, ok, f"Facility '{body.id}' registered.", "Invalid or duplicate facility.")


@router.post("/facilities/{facility_id}/upgrade", response_model=CommandResponse)
def upgrade_facility(
    facility_id: str,
    body: FacilityUpgradeRequest,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(
        engine.research.upgrade_facility, facility_id,
        level=body.level, capacity=body.capacity, efficiency=body.efficiency,
    )
    return command_response(engine, ok, f"Facility '{facility_id}' upgraded.", "Unknown facility.")


@router.post("/trees", response_model=CommandResponse)
def add_technology_tree(body: TechnologyTreeSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.research.add_technology_tree, body.to_model())
    return command_response(engine, ok, f"Tree '{body.id}' registered.", "Invalid technology tree.")


@router.get("/trees/{tree_id}", response_model=TechnologyTreeSchema)
def get_technology_tree(tree_id: str, engine: GameEngine = Depends(get_game_engine)) -> TechnologyTreeSchema:
    tree = engine.execute(engine.research.get_technology_tree, tree_id)
    if tree is None:
        raise HTTPException(status_code=404, detail=f"Tree '{tree_id}' not found.")
    return TechnologyTreeSchema.from_model(tree)


@router.post("/projects", response_model=CommandResponse)
def start_project(body: ProjectSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.research.start_research_project, body.to_model())
    return command_response(engine, ok, f"Project '{body.id}' started.", "Invalid project or unmet prerequisites.")


@router.post("/actions", response_model=CommandResponse)
def research_action(body: ResearchActionRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.research.process_research_action, body.action, body.target_id, body.value)
    return command_response(engine, ok, f"Action '{body.action}' applied.", "Unknown action or project.")


@router.post("/projects/{project_id}/researchers", response_model=CommandResponse)
def allocate_researchers(
    project_id: str,
    body: AllocateResearchersRequest,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(engine.research.allocate_researchers, project_id, body.count)
    return command_response(engine, ok, f"{body.count} researcher(s) allocated.", "Allocation refused.")


@router.post("/projects/{project_id}/collaborations", response_model=CommandResponse)
def initiate_collaboration(
    project_id: str,
    body: CollaborationRequest,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(engine.research.initiate_collaboration, project_id, body.partner_ids)
    return command_response(engine, ok, "Collaboration started.", "Unknown project.")
