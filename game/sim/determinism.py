"""
Determinism helpers.

Goals:
- Provide an explicit, seeded RNG value for per-day gameplay state (weather, prices, quests)
- Provide stable sub-streams derived from a day seed (avoid hidden coupling between systems)
- Be bit-for-bit reproducible across platforms and runs (pure 32-bit integer math)

Non-goals:
- Cryptographic security
"""

from __future__ import annotations

import math
from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK32


@dataclass(slots=True)
class Mulberry32:
    """
    Mulberry32 stream with visible internal state.

    Every call to `next()` advances `state` by a fixed increment; the output is a
    pure function of that state, so two generators built from the same seed yield
    identical sequences.
    """

    state: int

    def next(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        x = self.state
        x = _imul(x ^ (x >> 15), x | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296.0


def make_generator(seed: int) -> Mulberry32:
    """Create a generator from any integer seed (reduced to 32 bits)."""
    return Mulberry32(state=int(seed) & _MASK32)


def next_float(gen: Mulberry32) -> float:
    """Draw the next float in [0, 1) from `gen`."""
    return gen.next()


def derive_seed(day_key: str) -> int:
    # FNV-1a. NEVER Python's built-in hash(), which is randomized per process.
    h = _FNV_OFFSET
    for ch in str(day_key):
        h ^= ord(ch)
        h = _imul(h, _FNV_PRIME)
    return h


def sub_generator(day_seed: int, domain: int) -> Mulberry32:
    """Independent stream for one system, derived from the day seed."""
    return make_generator((int(day_seed) ^ int(domain)) & _MASK32)


def round_half_up(value: float) -> int:
    """Round .5 upwards (stable, unlike Python's banker's rounding)."""
    return int(math.floor(float(value) + 0.5))
