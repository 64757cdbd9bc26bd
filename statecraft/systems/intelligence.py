"""Intelligence subsystem — operation lifecycle and report scoring.

Operations stay active once launched; nothing in this subsystem expires
or completes them.
"""

from __future__ import annotations

import logging

from statecraft.core.models import Intelligence, IntelligenceOperation
from statecraft.core.validation import in_range, is_number, non_empty, valid_cost

logger = logging.getLogger(__name__)


class IntelligenceSystem:
    """Owns launched operations and analysed reports."""

    __slots__ = ("_operations", "_reports", "_active", "_countered")

    def __init__(self) -> None:
        self._operations: dict[str, IntelligenceOperation] = {}
        self._reports: dict[str, Intelligence] = {}
        self._active: set[str] = set()
        self._countered: set[str] = set()

    # -- mutators --

    def launch_operation(self, operation: IntelligenceOperation) -> bool:
        if not self._validate_operation(operation):
            logger.debug("Rejected operation %r", getattr(operation, "id", None))
            return False
        self._operations[operation.id] = operation.copy()
        self._active.add(operation.id)
        logger.info("Launched %s operation '%s' against %s",
                    operation.type, operation.id, operation.target or "-")
        return True

    def deploy_asset(self, operation_id: str, asset_type: str) -> bool:
        """Attach an asset to an active operation."""
        operation = self._operations.get(operation_id)
        if operation is None or operation_id not in self._active or not non_empty(asset_type):
            return False
        operation.deployed_assets.append(asset_type)
        return True

    def analyze_intelligence(self, intel: Intelligence) -> dict[str, float]:
        """Store a report and return its reliability-weighted numeric insights.

        An invalid report yields an empty mapping and is not stored.
        """
        if not self.valid_report(intel):
            logger.debug("Rejected intelligence report %r", getattr(intel, "id", None))
            return {}
        self._reports[intel.id] = intel.copy()
        return self._calculate_insights(intel)

    def initiate_counter_measures(self, target_id: str) -> bool:
        """Flag a stored report as countered."""
        if target_id not in self._reports:
            return False
        self._countered.add(target_id)
        logger.info("Counter-measures initiated against report '%s'", target_id)
        return True

    # -- validation --

    @staticmethod
    def _validate_operation(op: IntelligenceOperation) -> bool:
        return (
            isinstance(op, IntelligenceOperation)
            and non_empty(op.id)
            and non_empty(op.type)
            and op.cost is not None
            and valid_cost(op.cost)
            and is_number(op.duration)
            and op.duration > 0
            and in_range(op.success_rate, 0.0, 1.0)
        )

    @staticmethod
    def valid_report(intel: Intelligence) -> bool:
        return (
            isinstance(intel, Intelligence)
            and non_empty(intel.id)
            and non_empty(intel.type)
            and non_empty(intel.source)
            and non_empty(intel.target)
            and in_range(intel.reliability, 0.0, 1.0)
        )

    @staticmethod
    def _calculate_insights(intel: Intelligence) -> dict[str, float]:
        if not isinstance(intel.data, dict):
            return {}
        return {
            key: value * intel.reliability
            for key, value in intel.data.items()
            if isinstance(value, (int, float)) and not isinstance(value, bool)
        }

    # -- queries --

    def get_active_operations(self) -> list[IntelligenceOperation]:
        return [self._operations[oid].copy() for oid in self._operations if oid in self._active]

    def get_operation(self, operation_id: str) -> IntelligenceOperation | None:
        op = self._operations.get(operation_id)
        return op.copy() if op else None

    def get_intelligence_by_target(self, target: str) -> list[Intelligence]:
        return [r.copy() for r in self._reports.values() if r.target == target]

    def is_countered(self, report_id: str) -> bool:
        return report_id in self._countered
