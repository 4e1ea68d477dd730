"""
Thin, stable data contracts for UI inspection.

These are intentionally small "struct-like" dataclasses so:
- presentation code gets read-only views, never a handle into PlayerState
- results are easy to print or serialize (CLI, toasts, tests)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from game.errors import FailureKind


@dataclass(slots=True)
class ActionResult:
    """Outcome of one player action. Failed actions changed nothing."""

    ok: bool
    message: str
    kind: Optional[FailureKind] = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": bool(self.ok),
            "message": str(self.message),
            "kind": None if self.kind is None else self.kind.value,
            "data": dict(self.data),
        }


@dataclass(frozen=True, slots=True)
class PlotView:
    index: int
    state: str
    crop_id: Optional[str]
    progress: float
    grow_ms: Optional[int]


@dataclass(frozen=True, slots=True)
class QuestView:
    id: str
    name: str
    progress: int
    goal: int
    reward_coins: int
    reward_seeds: int
    claimed: bool

    @property
    def claimable(self) -> bool:
        return not self.claimed and self.progress >= self.goal


@dataclass(frozen=True, slots=True)
class AchievementView:
    id: str
    name: str
    description: str
    unlocked: bool


@dataclass(frozen=True, slots=True)
class MarketView:
    crop_id: str
    price: int
    inventory: int
    history: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class FarmSnapshot:
    day_num: int
    day_key: str
    season_id: str
    weather_id: str
    coins: int
    seeds: dict[str, int]
    crops: dict[str, int]
    harvest_yield: int
    plots: tuple[PlotView, ...]
    market: tuple[MarketView, ...]
    quests: tuple[QuestView, ...]
    achievements: tuple[AchievementView, ...]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
