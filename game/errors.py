"""
Action failures.

Every failure here is local and recoverable: systems validate before mutating and
raise one of these; the engine's action boundary turns it into an ActionResult and
an `action_failed` feedback event. None of them ever escapes a player action.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SEED = "insufficient_seed"
    INVALID_PLOT_TRANSITION = "invalid_plot_transition"
    NOTHING_TO_SELL = "nothing_to_sell"
    NOTHING_TO_HARVEST = "nothing_to_harvest"
    NO_EMPTY_PLOT = "no_empty_plot"
    AT_CAPACITY = "at_capacity"
    QUEST_NOT_CLAIMABLE = "quest_not_claimable"
    UNKNOWN_ITEM = "unknown_item"
    INVALID_QUANTITY = "invalid_quantity"


class FarmActionError(Exception):
    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientFunds(FarmActionError):
    kind = FailureKind.INSUFFICIENT_FUNDS

    def __init__(self, cost: int):
        super().__init__(f"NEED {int(cost)} COINS")
        self.cost = int(cost)


class InsufficientSeed(FarmActionError):
    kind = FailureKind.INSUFFICIENT_SEED

    def __init__(self, crop_id: str):
        super().__init__("NO SEED")
        self.crop_id = crop_id


class InvalidPlotTransition(FarmActionError):
    kind = FailureKind.INVALID_PLOT_TRANSITION


class NothingToSell(FarmActionError):
    kind = FailureKind.NOTHING_TO_SELL

    def __init__(self):
        super().__init__("NOTHING TO SELL")


class NothingToHarvest(FarmActionError):
    kind = FailureKind.NOTHING_TO_HARVEST

    def __init__(self):
        super().__init__("NO READY")


class NoEmptyPlot(FarmActionError):
    kind = FailureKind.NO_EMPTY_PLOT

    def __init__(self):
        super().__init__("NO EMPTY")


class AtCapacity(FarmActionError):
    kind = FailureKind.AT_CAPACITY

    def __init__(self, key: str):
        super().__init__("MAX")
        self.key = key


class QuestNotClaimable(FarmActionError):
    kind = FailureKind.QUEST_NOT_CLAIMABLE


class UnknownItem(FarmActionError):
    kind = FailureKind.UNKNOWN_ITEM

    def __init__(self, key: str):
        super().__init__(f"UNKNOWN: {key}")
        self.key = key


class InvalidQuantity(FarmActionError):
    kind = FailureKind.INVALID_QUANTITY

    def __init__(self, count: int):
        super().__init__(f"BAD AMOUNT: {count}")
        self.count = count
