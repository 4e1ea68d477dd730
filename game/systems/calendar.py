"""
Day/season keeper.

Rollover is detected by string inequality of the calendar day key, never by elapsed
time. Everything derived for a day (seed, weather, prices, quests) is a function of
the key and the day number, so every player sees the same day.
"""
from __future__ import annotations

import logging

from config import SEASON_LENGTH_DAYS
from game.content import SEASONS, SeasonDefinition, season_by_id
from game.sim.determinism import derive_seed
from game.state import PlayerState, QuestProgress
from game.systems.market import compute_price_table, rehydrate_market
from game.systems.quests import make_daily_quests
from game.systems.weather import select_weather

logger = logging.getLogger(__name__)


def season_for_day(day_num: int) -> SeasonDefinition:
    """Fixed-length seasons, cycling through the catalog."""
    idx = ((max(1, int(day_num)) - 1) // SEASON_LENGTH_DAYS) % len(SEASONS)
    return SEASONS[idx]


def has_rolled_over(state: PlayerState, day_key: str) -> bool:
    return state.day_key != day_key


def begin_day(state: PlayerState, day_key: str) -> None:
    """
    Derive the day's world state for `state.day_num` and reset per-day progress.

    Used both by rollover and by fresh-state initialization (which starts on
    day 1 without incrementing).
    """
    state.day_key = day_key
    state.season_id = season_for_day(state.day_num).id
    seed = derive_seed(day_key)
    state.market_seed = seed
    rehydrate_market(state)
    state.weather_id = select_weather(season_by_id(state.season_id), seed)
    compute_price_table(state)
    # Achievements are cumulative and survive the reset.
    state.progress = QuestProgress()
    state.quests = make_daily_quests(seed)


def commit_rollover(state: PlayerState, day_key: str) -> bool:
    """Advance to `day_key`. No-op (returns False) when no rollover is pending."""
    if not has_rolled_over(state, day_key):
        return False
    previous = state.day_key
    state.day_num = max(1, int(state.day_num)) + 1
    begin_day(state, day_key)
    logger.info(
        "day rollover %r -> %r: day %s, %s, %s",
        previous, day_key, state.day_num, state.season_id, state.weather_id,
    )
    return True
