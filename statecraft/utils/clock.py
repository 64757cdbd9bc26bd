"""Millisecond wall clock shared by the subsystems."""

from __future__ import annotations

import time
from typing import Callable

DAY_MS = 24 * 60 * 60 * 1000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time as integer milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
