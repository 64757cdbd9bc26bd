"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from statecraft.api.dependencies import get_game_engine
from statecraft.api.schemas import SimulationConfigResponse
from statecraft.engine.game_engine import GameEngine

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    engine: GameEngine = Depends(get_game_engine),
) -> SimulationConfigResponse:
    cfg = engine.config
    return SimulationConfigResponse(
        world_seed=cfg.world_seed,
        seed_default_scenario=cfg.seed_default_scenario,
        tick_interval_ms=engine.tick_interval_ms,
        min_tick_interval_ms=cfg.min_tick_interval_ms,
        max_ticks=cfg.max_ticks,
        diplomacy_viewer=cfg.diplomacy_viewer,
        action_history_limit=cfg.action_history_limit,
        event_log_size=cfg.event_log_size,
        running=engine.running,
    )
