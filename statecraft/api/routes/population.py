"""/api/v1/population — segments, policies, movements and trends."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from statecraft.api.dependencies import get_game_engine
from statecraft.api.routes.common import command_response
from statecraft.api.schemas import (
    CommandResponse,
    DemographicProgramRequest,
    MovementSchema,
    PopulationActionRequest,
    SegmentSchema,
    SocialPolicyRequest,
    TrendSchema,
)
from statecraft.engine.game_engine import GameEngine

router = APIRouter(prefix="/population")


@router.get("/segments", response_model=list[SegmentSchema])
def list_segments(engine: GameEngine = Depends(get_game_engine)) -> list[SegmentSchema]:
    return [SegmentSchema.from_model(s) for s in engine.execute(engine.population.get_all_segments)]


@router.get("/segments/{segment_id}", response_model=SegmentSchema)
def get_segment(segment_id: str, engine: GameEngine = Depends(get_game_engine)) -> SegmentSchema:
    segment = engine.execute(engine.population.get_population_segment, segment_id)
    if segment is None:
        raise HTTPException(status_code=404, detail=f"Segment '{segment_id}' not found.")
    return SegmentSchema.from_model(segment)


@router.post("/segments", response_model=CommandResponse)
def add_segment(body: SegmentSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.population.add_segment, body.to_model())
    return command_response(engine, ok, f"Segment '{body.id}' added.", "Invalid or duplicate segment.")


@router.post("/actions", response_model=CommandResponse)
def population_action(body: PopulationActionRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.population.process_population_action, body.action, body.segment_id, body.value)
    return command_response(engine, ok, f"Action '{body.action}' applied.", "Unknown action or segment.")


@router.post("/policies", response_model=CommandResponse)
def social_policy(body: SocialPolicyRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.population.implement_social_policy, body.policy, body.target_segments)
    return command_response(engine, ok, f"Policy '{body.policy}' implemented.", "Unknown policy or no known segment.")


@router.post("/programs", response_model=CommandResponse)
def demographic_program(body: DemographicProgramRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(
        engine.population.implement_demographic_program,
        body.segment_id,
        education=body.education, happiness=body.happiness, productivity=body.productivity,
    )
    return command_response(engine, ok, "Demographic program applied.", "Unknown segment.")


@router.post("/trends", response_model=CommandResponse)
def cultural_initiative(body: TrendSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.population.launch_cultural_initiative, body.to_model())
    return command_response(engine, ok, f"Cultural trend '{body.id}' launched.", "Invalid cultural trend.")


@router.post("/movements", response_model=CommandResponse)
def social_movement(body: MovementSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.population.handle_social_movement, body.to_model())
    return command_response(engine, ok, f"Movement '{body.id}' registered.", "Invalid social movement.")
