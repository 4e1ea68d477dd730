"""
Growth engine: grow durations, harvest yield and related level bonuses.

All pure functions of current state; no randomness.
"""
from __future__ import annotations

from typing import Mapping

from game.content import CropDefinition, SeasonDefinition, WeatherDefinition
from game.sim.determinism import round_half_up


def sprinkler_bonus(sprinkler_level: int) -> float:
    return 1.0 - min(max(0, int(sprinkler_level)) * 0.035, 0.35)


def windmill_bonus(windmill_level: int) -> float:
    return 1.0 - min(max(0, int(windmill_level)) * 0.02, 0.20)


def growth_duration_ms(
    crop: CropDefinition,
    weather: WeatherDefinition,
    season: SeasonDefinition,
    upgrades: Mapping[str, int],
    buildings: Mapping[str, int],
) -> int:
    """Milliseconds from planting to ready. Always > 0."""
    duration = (
        crop.grow_ms
        * weather.grow_mult
        * season.grow_mult
        * sprinkler_bonus(upgrades.get("sprinkler", 0))
        * windmill_bonus(buildings.get("windmill", 0))
    )
    return max(1, round_half_up(duration))


def harvest_yield(upgrades: Mapping[str, int], buildings: Mapping[str, int]) -> int:
    # base 1 + one per 2 shovel levels, + one per 3 barn levels
    shovel = 1 + max(0, int(upgrades.get("shovel", 0))) // 2
    barn = max(0, int(buildings.get("barn", 0))) // 3
    return shovel + barn


def quest_reward_boost(buildings: Mapping[str, int]) -> float:
    return 1.0 + min(max(0, int(buildings.get("farmhouse", 0))) * 0.03, 0.30)


def auto_harvest_capacity(upgrades: Mapping[str, int]) -> int:
    """Ready plots the sprinkler crew harvests per auto-progress tick."""
    return max(0, int(upgrades.get("sprinkler", 0))) // 3
