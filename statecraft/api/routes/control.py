"""POST /api/v1/control/{action} — simulation lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from statecraft.api.dependencies import get_game_engine
from statecraft.api.schemas import CommandResponse
from statecraft.engine.game_engine import GameEngine

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    stop = "stop"
    step = "step"
    reset = "reset"


@router.post("/control/{action}", response_model=CommandResponse)
def control(
    action: ControlAction,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    match action:
        case ControlAction.start:
            if engine.running:
                return CommandResponse(status="noop", message="Already running.", tick=engine.tick)
            if not engine.start():
                return CommandResponse(status="error", message="Previous loop still stopping.", tick=engine.tick)
            return CommandResponse(status="ok", message="Simulation started.", tick=engine.tick)

        case ControlAction.stop:
            if not engine.running:
                return CommandResponse(status="noop", message="Not running.", tick=engine.tick)
            engine.stop()
            return CommandResponse(status="ok", message="Simulation stopped.", tick=engine.tick)

        case ControlAction.step:
            result = engine.step()
            if result.fault is not None:
                return CommandResponse(status="error", message=result.fault.error, tick=engine.tick)
            return CommandResponse(status="ok", message="Single tick executed.", tick=engine.tick)

        case ControlAction.reset:
            engine.reset()
            return CommandResponse(status="ok", message="Simulation reset.", tick=engine.tick)


@router.post("/speed", response_model=CommandResponse)
def set_speed(
    interval_ms: int = Query(1000, ge=1, le=60_000, description="Tick interval in milliseconds"),
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    applied = engine.set_tick_interval(interval_ms)
    return CommandResponse(status="ok", message=f"Tick interval set to {applied}ms.", tick=engine.tick)
