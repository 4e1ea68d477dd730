"""
Simulation time abstraction.

Gameplay code should prefer `now_ms()` over reading the wall clock directly so we can:
- pin time in tests and headless runs (`set_sim_now_ms`)
- keep plot timestamps comparable across sessions (epoch milliseconds)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from typing import Optional

_SIM_NOW_MS: Optional[int] = None


def set_sim_now_ms(now_ms: Optional[int]) -> None:
    """
    Set the current simulation time in milliseconds.

    If set to None, `now_ms()` falls back to real epoch milliseconds.
    """
    global _SIM_NOW_MS
    _SIM_NOW_MS = None if now_ms is None else int(now_ms)


def now_ms() -> int:
    """Return sim time (if provided), otherwise wall-clock epoch ms."""
    if _SIM_NOW_MS is not None:
        return int(_SIM_NOW_MS)
    return int(time.time() * 1000)


def today_key(today: Optional[date] = None) -> str:
    """Calendar-day key (local date, YYYY-MM-DD) that drives day rollover."""
    d = today or date.today()
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


@dataclass
class PeriodicTask:
    """Fixed-period trigger; `due()` fires at most once per call."""

    name: str
    period_ms: int
    next_due_ms: int = 0

    def due(self, now: int) -> bool:
        if now < self.next_due_ms:
            return False
        self.next_due_ms = int(now) + int(self.period_ms)
        return True
