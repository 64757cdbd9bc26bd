"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statecraft import __version__
from statecraft.api.dependencies import set_game_engine
from statecraft.api.routes import api_router
from statecraft.config import SimulationConfig
from statecraft.engine.game_engine import GameEngine
from statecraft.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config)
        engine = GameEngine(_config)
        set_game_engine(engine)
        if autostart:
            engine.start()
        logger.info("API server started (autostart=%s).", autostart)
        yield
        engine.stop()
        set_game_engine(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Statecraft Simulation Engine",
        description=(
            "Tick-based grand-strategy simulation core.\n\n"
            "## API Groups\n\n"
            "- **State** — Latest published snapshot and the event feed\n"
            "- **Control** — Simulation lifecycle: start, stop, step, reset, speed\n"
            "- **Config** — Read-only simulation configuration\n"
            "- **Intelligence / Population / Environment / Research / Diplomacy** — "
            "subsystem commands, serialised against ticks\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Latest immutable snapshot, last fault and recent events."},
            {"name": "Control", "description": "Start, stop, single-step, reset and tick interval."},
            {"name": "Config", "description": "Read-only simulation configuration parameters."},
            {"name": "Intelligence", "description": "Covert operations, assets and report analysis."},
            {"name": "Population", "description": "Segments, social policies, movements and cultural trends."},
            {"name": "Environment", "description": "Metrics, resource management, policies and climate events."},
            {"name": "Research", "description": "Fields, projects, facilities and technology trees."},
            {"name": "Diplomacy", "description": "Relations, treaties, trade and responses to pending actions."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
