"""FastAPI dependency injection — provides the GameEngine singleton."""

from __future__ import annotations

from statecraft.engine.game_engine import GameEngine

_game_engine: GameEngine | None = None


def set_game_engine(engine: GameEngine | None) -> None:
    global _game_engine
    _game_engine = engine


def get_game_engine() -> GameEngine:
    if _game_engine is None:
        raise RuntimeError("GameEngine not initialized — server not started correctly.")
    return _game_engine
