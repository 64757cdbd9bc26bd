"""Helpers shared by the command routes."""

from __future__ import annotations

from statecraft.api.schemas import CommandResponse
from statecraft.engine.game_engine import GameEngine


def command_response(engine: GameEngine, ok: bool, success: str, failure: str) -> CommandResponse:
    """Map a subsystem's bool result onto a ``CommandResponse``."""
    if ok:
        return CommandResponse(status="ok", message=success, tick=engine.tick)
    return CommandResponse(status="error", message=failure, tick=engine.tick)
