"""
Farm plot entity.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class PlotState(Enum):
    EMPTY = 0
    GROWING = 1
    READY = 2


@dataclass
class Plot:
    """
    One field plot.

    EMPTY carries no crop/timestamp, GROWING carries both, READY keeps only the crop.
    """

    state: PlotState = PlotState.EMPTY
    crop_id: Optional[str] = None
    planted_at_ms: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.state is PlotState.EMPTY

    @property
    def is_growing(self) -> bool:
        return self.state is PlotState.GROWING

    @property
    def is_ready(self) -> bool:
        return self.state is PlotState.READY

    def start_growing(self, crop_id: str, now_ms: int):
        self.state = PlotState.GROWING
        self.crop_id = crop_id
        self.planted_at_ms = int(now_ms)

    def mark_ready(self):
        self.state = PlotState.READY
        self.planted_at_ms = None

    def clear(self):
        self.state = PlotState.EMPTY
        self.crop_id = None
        self.planted_at_ms = None

    def elapsed_ms(self, now_ms: int) -> int:
        if not self.is_growing or self.planted_at_ms is None:
            return 0
        return max(0, int(now_ms) - int(self.planted_at_ms))

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "crop_id": self.crop_id,
            "planted_at_ms": self.planted_at_ms,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Plot":
        try:
            state = PlotState(int(d.get("state", 0)))
        except (TypeError, ValueError):
            state = PlotState.EMPTY
        plot = cls()
        if state is PlotState.GROWING and d.get("crop_id"):
            plot.start_growing(str(d["crop_id"]), int(d.get("planted_at_ms") or 0))
        elif state is PlotState.READY and d.get("crop_id"):
            plot.state = PlotState.READY
            plot.crop_id = str(d["crop_id"])
        return plot
