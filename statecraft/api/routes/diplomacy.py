"""/api/v1/diplomacy — relations, proposals and responses."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from statecraft.api.dependencies import get_game_engine
from statecraft.api.routes.common import command_response
from statecraft.api.schemas import (
    CommandResponse,
    DiplomaticActionRequest,
    DiplomaticActionSchema,
    DiplomaticResponseRequest,
    RelationRequest,
    RelationSchema,
    TradeProposalRequest,
    TreatyProposalRequest,
)
from statecraft.core.models import DiplomaticAction
from statecraft.engine.game_engine import GameEngine

router = APIRouter(prefix="/diplomacy")


@router.get("/relations", response_model=list[RelationSchema])
def list_relations(engine: GameEngine = Depends(get_game_engine)) -> list[RelationSchema]:
    return [RelationSchema.from_model(r) for r in engine.execute(engine.diplomacy.get_relations)]


@router.post("/relations", response_model=CommandResponse)
def establish_relation(body: RelationRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    ok = engine.execute(engine.diplomacy.establish_relation, body.nation_a, body.nation_b, body.trust)
    return command_response(
        engine, ok, f"Relation {body.nation_a}:{body.nation_b} established.", "Invalid or existing relation.",
    )


@router.post("/actions", response_model=CommandResponse)
def initiate_action(body: DiplomaticActionRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    action = DiplomaticAction(
        type=body.type, initiator=body.initiator, target=body.target,
        content=dict(body.content), timestamp=engine.diplomacy.now(),
    )
    ok = engine.execute(engine.diplomacy.initiate_diplomatic_action, action)
    return command_response(engine, ok, f"Action {action.action_id} pending.", "Action not permitted.")


@router.post("/treaties", response_model=CommandResponse)
def propose_treaty(body: TreatyProposalRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    treaty = body.treaty.to_model(engine.diplomacy.now())
    ok = engine.execute(engine.diplomacy.propose_treaty, body.initiator, body.target, treaty)
    return command_response(engine, ok, f"Treaty '{body.treaty.id}' proposed.", "Treaty proposal refused.")


@router.post("/trade", response_model=CommandResponse)
def negotiate_trade(body: TradeProposalRequest, engine: GameEngine = Depends(get_game_engine)) -> CommandResponse:
    agreement = body.agreement.to_model(engine.diplomacy.now())
    ok = engine.execute(engine.diplomacy.negotiate_trade_agreement, body.initiator, body.target, agreement)
    return command_response(engine, ok, f"Trade agreement '{body.agreement.id}' proposed.", "Trade proposal refused.")


@router.post("/actions/{action_id}/respond", response_model=CommandResponse)
def respond_to_action(
    action_id: str,
    body: DiplomaticResponseRequest,
    engine: GameEngine = Depends(get_game_engine),
) -> CommandResponse:
    counter = body.counter_proposal.to_content(engine.diplomacy.now()) if body.counter_proposal else None
    ok = engine.execute(engine.diplomacy.respond_to_diplomatic_action, action_id, body.response, counter)
    return command_response(engine, ok, f"Responded '{body.response}' to {action_id}.", "Response refused.")


@router.get("/pending/{nation}", response_model=list[DiplomaticActionSchema])
def pending_actions(nation: str, engine: GameEngine = Depends(get_game_engine)) -> list[DiplomaticActionSchema]:
    return [DiplomaticActionSchema.from_model(a) for a in engine.execute(engine.diplomacy.get_pending_actions, nation)]


@router.get("/history/{nation}", response_model=list[DiplomaticActionSchema])
def action_history(
    nation: str,
    limit: int = Query(10, ge=1, le=1000),
    engine: GameEngine = Depends(get_game_engine),
) -> list[DiplomaticActionSchema]:
    history = engine.execute(engine.diplomacy.get_action_history, nation, limit)
    return [DiplomaticActionSchema.from_model(a) for a in history]
