"""
Feedback events.

The core emits small named events (plant, harvest, sell, ...) after each action; a
feedback collaborator (audio, toasts) may subscribe. Listeners are best-effort:
a failing listener is logged and never affects simulation state.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from game.sim.timebase import now_ms

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    PLANT = "plant"
    HARVEST = "harvest"
    SELL = "sell"
    BUY = "buy"
    UPGRADE = "upgrade"
    QUEST_CLAIMED = "quest_claimed"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    ACTION_FAILED = "action_failed"
    DAY_ROLLOVER = "day_rollover"


@dataclass
class FeedbackEvent:
    kind: EventKind
    message: str
    at_ms: int
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "message": self.message,
            "at_ms": int(self.at_ms),
            "data": dict(self.data),
        }


Listener = Callable[[FeedbackEvent], None]


class EventBus:
    def __init__(self, *, history: int = 50):
        self._listeners: list[Listener] = []
        self._recent: deque[FeedbackEvent] = deque(maxlen=max(1, int(history)))

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def emit(self, kind: EventKind, message: str, *, data: Optional[dict] = None) -> FeedbackEvent:
        e = FeedbackEvent(kind=kind, message=message, at_ms=now_ms(), data=data or {})
        self._recent.append(e)
        for listener in list(self._listeners):
            try:
                listener(e)
            except Exception:
                # Feedback must never crash the simulation.
                logger.exception("feedback listener failed for %s", kind.value)
        return e

    def recent(self, *, max_events: int = 20) -> list[FeedbackEvent]:
        return list(self._recent)[-max_events:]
