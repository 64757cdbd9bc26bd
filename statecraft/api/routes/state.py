"""GET /api/v1/state — latest published snapshot and the event feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from statecraft.api.dependencies import get_game_engine
from statecraft.api.schemas import (
    ClimateEventSchema,
    DiplomaticActionSchema,
    EventSchema,
    FacilitySchema,
    FaultSchema,
    MovementSchema,
    OperationSchema,
    ProjectSchema,
    StateResponse,
    TrendSchema,
)
from statecraft.engine.game_engine import GameEngine

router = APIRouter()


@router.get("/state", response_model=StateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    engine: GameEngine = Depends(get_game_engine),
) -> StateResponse:
    snapshot = engine.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    fault = engine.get_last_fault()
    return StateResponse(
        tick=snapshot.tick,
        timestamp=snapshot.timestamp,
        running=engine.running,
        active_operations=[OperationSchema.from_model(o) for o in snapshot.active_operations],
        movements=[MovementSchema.from_model(m) for m in snapshot.movements],
        trends=[TrendSchema.from_model(t) for t in snapshot.trends],
        global_metrics=dict(snapshot.global_metrics),
        resource_metrics=dict(snapshot.resource_metrics),
        active_events=[ClimateEventSchema.from_model(e) for e in snapshot.active_events],
        active_projects=[ProjectSchema.from_model(p) for p in snapshot.active_projects],
        facilities=[FacilitySchema.from_model(f) for f in snapshot.facilities],
        viewer=snapshot.viewer,
        pending_actions=[DiplomaticActionSchema.from_model(a) for a in snapshot.pending_actions],
        events=[_event(e) for e in engine.event_log.since_tick(since_tick)],
        last_fault=FaultSchema(**fault.to_dict()) if fault else None,
    )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    limit: int = Query(50, ge=1, le=1000),
    category: str | None = Query(None, description="Filter by category, e.g. fault or breakthrough"),
    engine: GameEngine = Depends(get_game_engine),
) -> list[EventSchema]:
    return [_event(e) for e in engine.event_log.latest(limit, category)]


def _event(e) -> EventSchema:
    return EventSchema(tick=e.tick, category=e.category, message=e.message, timestamp=e.timestamp)
