"""Tick loop and the background scheduler that drives it."""

from statecraft.engine.game_engine import GameEngine
from statecraft.engine.tick_loop import TickLoop

__all__ = ["GameEngine", "TickLoop"]
