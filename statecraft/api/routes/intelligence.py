"""/api/v1/intelligence — covert operations and report analysis."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from statecraft.api.dependencies import get_game_engine
from statecraft.api.routes.common import command_response
from statecraft.api.schemas import (
    CommandResponse,
    DeployAssetRequest,
    InsightResponse,
    IntelligenceSchema,
    OperationSchema,
)
from statecraft.core.models import Intelligence
from statecraft.engine.game_engine import GameEngine
from statecraft.systems.intelligence import IntelligenceSystem

router = APIRouter(prefix="/intelligence")


@router.post("/operations", response_model=CommandResponse)
def launch_operation(
    body: OperationSchema,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(engine.intelligence.launch_operation, body.to_model())
    return command_response(engine, ok, f"Operation '{body.id}' launched.", "Invalid operation.")


@router.get("/operations", response_model=list[OperationSchema])
def list_operations(engine: GameEngine = Depends(get_game_engine)) -> list[OperationSchema]:
    ops = engine.execute(engine.intelligence.get_active_operations)
    return [OperationSchema.from_model(o) for o in ops]


@router.post("/operations/{operation_id}/assets", response_model=CommandResponse)
def deploy_asset(
    operation_id: str,
    body: DeployAssetRequest,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(engine.intelligence.deploy_asset, operation_id, body.asset_type)
    return command_response(engine, ok, f"Asset deployed to '{operation_id}'.", "Unknown operation or asset.")


@router.post("/reports", response_model=InsightResponse)
def analyze_intelligence(
    body: IntelligenceSchema,
    engine: GameEngine = Depends(get_game_engine),
) -> InsightResponse:
    intel = body.to_model()
    stored = engine.execute(_analyze, engine, intel)
    if stored is None:
        return InsightResponse(status="error", message="Invalid intelligence report.", tick=engine.tick)
    return InsightResponse(status="ok", message=f"Report '{body.id}' analysed.", tick=engine.tick, insights=stored)


@router.get("/reports", response_model=list[IntelligenceSchema])
def reports_by_target(
    target: str = Query(..., min_length=1),
    engine: GameEngine = Depends(get_game_engine),
) -> list[IntelligenceSchema]:
    reports = engine.execute(engine.intelligence.get_intelligence_by_target, target)
    return [IntelligenceSchema.from_model(r) for r in reports]


@router.post("/reports/{report_id}/counter", response_model=CommandResponse)
def initiate_counter_measures(
    report_id: str,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    ok = engine.execute(engine.intelligence.initiate_counter_measures, report_id)
    return command_response(engine, ok, f"Counter-measures against '{report_id}' initiated.", "Unknown report.")


def _analyze(engine: GameEngine, intel: Intelligence) -> dict[str, float] | None:
    if not IntelligenceSystem.valid_report(intel):
        return None
    return engine.intelligence.analyze_intelligence(intel)
