"""
Market engine: daily crop prices and the cosmetic price-history series.

Prices are drawn once per crop per day, in catalog order, from the day's market
stream and cached on the PlayerState. Re-drawing on every query would walk the
stream forward and change the day's prices.
"""
from __future__ import annotations

import logging
from typing import Mapping

from config import MARKET_STREAM_XOR, PRICE_HISTORY_POINTS, PRICE_HISTORY_XOR, PRICE_MAX, PRICE_MIN
from game.content import CROPS, CropDefinition, SeasonDefinition, WeatherDefinition, crop_by_id, season_by_id, weather_by_id
from game.sim.determinism import Mulberry32, make_generator, round_half_up, sub_generator
from game.state import PlayerState

logger = logging.getLogger(__name__)


def cart_bonus(cart_level: int) -> float:
    return 1.0 + min(max(0, int(cart_level)) * 0.02, 0.20)


def silo_bonus(silo_level: int) -> float:
    return 1.0 + min(max(0, int(silo_level)) * 0.02, 0.20)


def price_for(
    crop: CropDefinition,
    weather: WeatherDefinition,
    season: SeasonDefinition,
    upgrades: Mapping[str, int],
    buildings: Mapping[str, int],
    gen: Mulberry32,
) -> int:
    """One day's price for `crop`. Consumes exactly one draw from `gen`."""
    swing = gen.next() * 0.8 + 0.6  # 0.6..1.4
    price = (
        crop.base_price
        * swing
        * weather.market_mult
        * season.market_mult
        * cart_bonus(upgrades.get("cart", 0))
        * silo_bonus(buildings.get("silo", 0))
    )
    return max(PRICE_MIN, min(PRICE_MAX, round_half_up(price)))


def market_generator(day_seed: int) -> Mulberry32:
    return sub_generator(day_seed, MARKET_STREAM_XOR)


def rehydrate_market(state: PlayerState) -> None:
    """Rebuild the live market stream from the persisted day seed."""
    state.market_rng = market_generator(state.market_seed)


def compute_price_table(state: PlayerState) -> dict[str, int]:
    """Draw every crop's price for the day in one pass and cache it on `state`."""
    if state.market_rng is None:
        rehydrate_market(state)
    weather = weather_by_id(state.weather_id)
    season = season_by_id(state.season_id)
    table: dict[str, int] = {}
    for crop in CROPS:
        table[crop.id] = price_for(crop, weather, season, state.upgrades, state.buildings, state.market_rng)
    state.price_by_crop = table
    logger.debug("day %s prices: %s", state.day_num, table)
    return table


def price_of(state: PlayerState, crop_id: str) -> int:
    """Cached day price; the crop's base price if the table lacks it."""
    cached = state.price_by_crop.get(crop_id)
    if cached is not None:
        return int(cached)
    crop = crop_by_id(crop_id)
    return crop.base_price if crop else PRICE_MIN


def price_history(day_seed: int, crop: CropDefinition, points: int = PRICE_HISTORY_POINTS) -> list[float]:
    """
    Cosmetic sparkline for the market panel.

    Uses its own per-crop stream; never feeds actual pricing.
    """
    gen = make_generator(int(day_seed) ^ (ord(crop.id[0]) << 16) ^ PRICE_HISTORY_XOR)
    out: list[float] = []
    v = float(crop.base_price)
    for _ in range(max(0, int(points))):
        v += (gen.next() - 0.5) * 1.0
        v = max(float(PRICE_MIN), min(float(PRICE_MAX), v))
        out.append(v)
    return out
