"""Diplomacy subsystem — pairwise relations, trust decay, treaties, trade.

Design:
  - A relation is keyed by the two nation ids sorted and joined with ``:``,
    so ``(a, b)`` and ``(b, a)`` address the same record.
  - Status is a pure function of trust, re-derived every tick and after
    every trust-affecting response:

        trust >= 70  → friendly
        trust >= 30  → neutral
        otherwise    → hostile

  - Relations must be established before any action on the pair is
    accepted; nothing here creates them implicitly.
  - Pending actions are keyed by ``initiator + str(timestamp)``.  Two actions
    from one initiator in the same millisecond share a key; the later one
    replaces the earlier.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from statecraft.core.enums import ActionResponse, DiplomaticActionType, DiplomaticStatus, TradeDirection
from statecraft.core.models import (
    DiplomaticAction,
    DiplomaticRelation,
    TradeAgreement,
    Treaty,
    relation_key,
)
from statecraft.core.validation import all_finite, in_range, is_number, non_empty
from statecraft.utils.clock import DAY_MS, Clock, now_ms

logger = logging.getLogger(__name__)

FRIENDLY_THRESHOLD = 70.0
NEUTRAL_THRESHOLD = 30.0
TRUST_DECAY_PER_DAY = 0.1

ACCEPT_TRADE_TRUST = 5.0
ACCEPT_TREATY_TRUST = 10.0
REJECT_TRUST_PENALTY = 5.0

_TRADE_DIRECTIONS = frozenset(d.value for d in TradeDirection)


def relation_status(trust: float) -> DiplomaticStatus:
    if trust >= FRIENDLY_THRESHOLD:
        return DiplomaticStatus.FRIENDLY
    if trust >= NEUTRAL_THRESHOLD:
        return DiplomaticStatus.NEUTRAL
    return DiplomaticStatus.HOSTILE


def trust_decay(elapsed_ms: int) -> float:
    """Decay owed for *elapsed_ms* without interaction: 0.1 per whole day."""
    return (max(0, elapsed_ms) // DAY_MS) * TRUST_DECAY_PER_DAY


def action_allowed(action_type: DiplomaticActionType, relation: DiplomaticRelation) -> bool:
    match action_type:
        case DiplomaticActionType.NEGOTIATE:
            return relation.status != DiplomaticStatus.HOSTILE
        case DiplomaticActionType.PROPOSE:
            return True
        case DiplomaticActionType.DEMAND:
            return relation.trust >= NEUTRAL_THRESHOLD
        case DiplomaticActionType.THREATEN:
            return relation.status == DiplomaticStatus.HOSTILE or relation.trust < NEUTRAL_THRESHOLD
    return False


class DiplomacySystem:
    """Owns relations, pending actions and the bounded action history."""

    __slots__ = ("_relations", "_pending", "_history", "_clock")

    def __init__(self, history_limit: int = 1000, clock: Clock = now_ms) -> None:
        self._relations: dict[str, DiplomaticRelation] = {}
        self._pending: dict[str, DiplomaticAction] = {}
        self._history: deque[DiplomaticAction] = deque(maxlen=history_limit)
        self._clock = clock

    def now(self) -> int:
        """Current time on this system's clock (ms)."""
        return self._clock()

    # -- registration --

    def establish_relation(self, nation_a: str, nation_b: str, trust: float = 50.0) -> bool:
        if not (non_empty(nation_a) and non_empty(nation_b)) or nation_a == nation_b:
            return False
        if not in_range(trust, 0, 100):
            return False
        key = relation_key(nation_a, nation_b)
        if key in self._relations:
            return False
        a, b = sorted((nation_a, nation_b))
        self._relations[key] = DiplomaticRelation(
            nation_a=a, nation_b=b,
            status=relation_status(trust), trust=float(trust),
            last_interaction=self._clock(),
        )
        logger.info("Relation %s established (trust %.1f)", key, trust)
        return True

    # -- actions --

    def initiate_diplomatic_action(self, action: DiplomaticAction) -> bool:
        relation = self._relations.get(relation_key(action.initiator, action.target))
        if relation is None:
            logger.debug("No relation between %s and %s", action.initiator, action.target)
            return False
        try:
            action_type = DiplomaticActionType(action.type)
        except ValueError:
            return False
        if not action_allowed(action_type, relation):
            logger.debug("%s from %s refused (status=%s, trust=%.1f)",
                         action_type.value, action.initiator, relation.status.value, relation.trust)
            return False

        action_id = action.action_id
        if action_id in self._pending:
            logger.warning("Pending action key %s reused; replacing earlier action", action_id)
        self._pending[action_id] = action.copy()
        self._history.append(action.copy())
        return True

    def propose_treaty(self, initiator: str, target: str, treaty: Treaty) -> bool:
        if relation_key(initiator, target) not in self._relations or not self._validate_treaty(treaty):
            return False
        return self.initiate_diplomatic_action(DiplomaticAction(
            type=DiplomaticActionType.PROPOSE.value,
            initiator=initiator, target=target,
            content={"treaty": treaty.copy()},
            timestamp=self._clock(),
        ))

    def negotiate_trade_agreement(self, initiator: str, target: str, agreement: TradeAgreement) -> bool:
        if relation_key(initiator, target) not in self._relations or not self._validate_trade(agreement):
            return False
        return self.initiate_diplomatic_action(DiplomaticAction(
            type=DiplomaticActionType.NEGOTIATE.value,
            initiator=initiator, target=target,
            content={"agreement": agreement.copy()},
            timestamp=self._clock(),
        ))

    def respond_to_diplomatic_action(
        self,
        action_id: str,
        response: str,
        counter_proposal: dict[str, Any] | None = None,
    ) -> bool:
        action = self._pending.get(action_id)
        if action is None:
            return False
        relation = self._relations.get(relation_key(action.initiator, action.target))
        if relation is None:
            return False
        try:
            response = ActionResponse(response)
        except ValueError:
            return False

        match response:
            case ActionResponse.ACCEPT:
                self._execute(action, relation)
            case ActionResponse.REJECT:
                relation.trust -= REJECT_TRUST_PENALTY
                relation.last_interaction = self._clock()
                self._refresh_status(relation)
            case ActionResponse.COUNTER:
                if not counter_proposal:
                    return False
                del self._pending[action_id]
                return self.initiate_diplomatic_action(DiplomaticAction(
                    type=action.type,
                    initiator=action.target,
                    target=action.initiator,
                    content=dict(counter_proposal),
                    timestamp=self._clock(),
                ))

        del self._pending[action_id]
        return True

    # -- per-tick --

    def update_relations(self) -> int:
        """Decay trust, re-derive status and prune expired agreements.

        Returns the number of agreements and treaties pruned.
        """
        now = self._clock()
        pruned = 0
        for relation in self._relations.values():
            relation.trust -= trust_decay(now - relation.last_interaction)
            self._refresh_status(relation)

            agreements = [a for a in relation.trade_agreements if not a.expired(now)]
            treaties = [t for t in relation.treaties if not t.expired(now)]
            pruned += len(relation.trade_agreements) - len(agreements)
            pruned += len(relation.treaties) - len(treaties)
            relation.trade_agreements = agreements
            relation.treaties = treaties
        return pruned

    # -- internals --

    def _execute(self, action: DiplomaticAction, relation: DiplomaticRelation) -> None:
        content = action.content
        if action.type == DiplomaticActionType.NEGOTIATE and isinstance(content.get("agreement"), TradeAgreement):
            relation.trade_agreements.append(content["agreement"].copy())
            relation.trust += ACCEPT_TRADE_TRUST
        elif action.type == DiplomaticActionType.PROPOSE and isinstance(content.get("treaty"), Treaty):
            relation.treaties.append(content["treaty"].copy())
            relation.trust += ACCEPT_TREATY_TRUST
        relation.last_interaction = self._clock()
        self._refresh_status(relation)

    @staticmethod
    def _refresh_status(relation: DiplomaticRelation) -> None:
        relation.trust = max(0.0, min(100.0, relation.trust))
        status = relation_status(relation.trust)
        if status != relation.status:
            logger.info("Relation %s: %s → %s (trust %.1f)",
                        relation.key, relation.status.value, status.value, relation.trust)
            relation.status = status

    @staticmethod
    def _validate_treaty(treaty: Treaty) -> bool:
        return (
            isinstance(treaty, Treaty)
            and non_empty(treaty.id)
            and non_empty(treaty.type)
            and isinstance(treaty.terms, list) and len(treaty.terms) > 0
            and is_number(treaty.duration) and treaty.duration > 0
            and all_finite(treaty.benefits)
            and all_finite(treaty.obligations)
        )

    @staticmethod
    def _validate_trade(agreement: TradeAgreement) -> bool:
        return (
            isinstance(agreement, TradeAgreement)
            and non_empty(agreement.id)
            and agreement.type in _TRADE_DIRECTIONS
            and is_number(agreement.amount) and agreement.amount > 0
            and is_number(agreement.price) and agreement.price >= 0
            and is_number(agreement.duration) and agreement.duration > 0
        )

    # -- queries --

    def get_relation(self, nation_a: str, nation_b: str) -> DiplomaticRelation | None:
        relation = self._relations.get(relation_key(nation_a, nation_b))
        return relation.copy() if relation else None

    def get_relations(self) -> list[DiplomaticRelation]:
        return [r.copy() for r in self._relations.values()]

    def get_pending_actions(self, nation: str) -> list[DiplomaticAction]:
        return [
            a.copy() for a in self._pending.values()
            if a.initiator == nation or a.target == nation
        ]

    def get_action_history(self, nation: str, limit: int = 10) -> list[DiplomaticAction]:
        involved = [a.copy() for a in self._history if a.initiator == nation or a.target == nation]
        return involved[-limit:] if limit > 0 else []
