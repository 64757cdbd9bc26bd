"""/api/v1/environment — metrics, resources, policies and climate events."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from statecraft.api.dependencies import get_game_engine
from statecraft.api.routes.common import command_response
from statecraft.api.schemas import (
    ClimateEventSchema,
    CommandResponse,
    EnvironmentalActionRequest,
    EnvironmentalPolicySchema,
    GreenTechnologyRequest,
    ResourceRequest,
)
from statecraft.engine.game_engine import GameEngine

router = APIRouter(prefix="/environment")


@router.post("/actions", response_model=CommandResponse)
def environmental_action(body: EnvironmentalActionRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.environment.process_environmental_action, body.action, body.target, body.value)
    return command_response(engine, ok, f"Metric '{body.target}' adjusted.", f"Unknown metric '{body.target}'.")


@router.post("/resources", response_model=CommandResponse)
def manage_resources(body: ResourceRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.environment.manage_resources, body.action, body.resource, body.amount)
    return command_response(
        engine, ok, f"{body.action} {body.amount:g} {body.resource}.", "Resource action refused.",
    )


@router.get("/policies", response_model=list[EnvironmentalPolicySchema])
def list_policies(engine: GameEngine = Depends(get_game_engine)) -> list[EnvironmentalPolicySchema]:
    policies = engine.execute(engine.environment.get_active_policies)
    return [EnvironmentalPolicySchema(**p.to_dict()) for p in policies]


@router.post("/policies", response_model=CommandResponse)
def environmental_policy(body: EnvironmentalPolicySchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.environment.implement_environmental_policy, body.to_model())
    return command_response(engine, ok, f"Policy '{body.id}' implemented.", "Invalid environmental policy.")


@router.post("/climate-events", response_model=CommandResponse)
def climate_event(body: ClimateEventSchema, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.environment.respond_to_climate_event, body.to_model())
    return command_response(engine, ok, f"Climate event '{body.id}' applied.", "Invalid climate event.")


@router.delete("/climate-events/{event_id}", response_model=CommandResponse)
def clear_climate_event(event_id: str, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.environment.clear_climate_event, event_id)
    return command_response(engine, ok, f"Climate event '{event_id}' cleared.", "Unknown climate event.")


@router.post("/green-technology", response_model=CommandResponse)
def green_technology(body: GreenTechnologyRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(
        engine.environment.invest_in_green_technology, body.technology, body.investment, body.target_metric,
    )
    return command_response(engine, ok, f"Invested in '{body.technology}'.", "Investment refused.")
