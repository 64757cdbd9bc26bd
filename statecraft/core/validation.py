"""Shape checks shared by the subsystem validators.

Every helper is a predicate: validation failures are reported to callers
as a ``False`` return, never as an exception.
"""

from __future__ import annotations

import math
from typing import Any, Mapping


def is_number(value: Any) -> bool:
    """True for finite ints/floats (bools and NaN/inf excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def in_range(value: Any, low: float, high: float) -> bool:
    return is_number(value) and low <= value <= high


def all_finite(values: Any) -> bool:
    """Every value of a mapping is a finite number."""
    if not isinstance(values, Mapping):
        return False
    return all(is_number(v) for v in values.values())


def valid_cost(cost: Any) -> bool:
    """A cost mapping whose amounts are all finite and non-negative."""
    return all_finite(cost) and all(v >= 0 for v in cost.values())
