"""Versioned API route modules."""

from fastapi import APIRouter

from statecraft.api.routes.config import router as config_router
from statecraft.api.routes.control import router as control_router
from statecraft.api.routes.diplomacy import router as diplomacy_router
from statecraft.api.routes.environment import router as environment_router
from statecraft.api.routes.intelligence import router as intelligence_router
from statecraft.api.routes.population import router as population_router
from statecraft.api.routes.research import router as research_router
from statecraft.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])
api_router.include_router(intelligence_router, tags=["Intelligence"])
api_router.include_router(population_router, tags=["Population"])
api_router.include_router(environment_router, tags=["Environment"])
api_router.include_router(research_router, tags=["Research"])
api_router.include_router(diplomacy_router, tags=["Diplomacy"])

__all__ = ["api_router"]
