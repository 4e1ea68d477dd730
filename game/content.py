"""
Static game content: crops, seasons, weather, buildings, upgrades, achievements.

Catalog order is part of the determinism contract: prices are drawn per crop in
CROPS order, and weather weights are walked in insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True, slots=True)
class Reward:
    coins: int = 0
    seeds: int = 0


@dataclass(frozen=True, slots=True)
class CropDefinition:
    id: str
    name: str
    base_price: int
    grow_ms: int
    base_yield: int = 1
    seed_cost: int = 1


@dataclass(frozen=True, slots=True)
class WeatherDefinition:
    id: str
    label: str
    grow_mult: float
    market_mult: float


@dataclass(frozen=True, slots=True)
class SeasonDefinition:
    id: str
    label: str
    weather_weights: Mapping[str, float]
    market_mult: float
    grow_mult: float


@dataclass(frozen=True, slots=True)
class BuildingDefinition:
    key: str
    name: str
    description: str
    base_cost: int
    max_level: int = 12


@dataclass(frozen=True, slots=True)
class UpgradeDefinition:
    key: str
    name: str
    description: str
    base_cost: int


@dataclass(frozen=True, slots=True)
class AchievementDefinition:
    id: str
    name: str
    description: str
    reward: Reward


CROPS: tuple[CropDefinition, ...] = (
    CropDefinition("potato", "Potato", base_price=2, grow_ms=5200),
    CropDefinition("carrot", "Carrot", base_price=3, grow_ms=6400),
    CropDefinition("corn", "Corn", base_price=4, grow_ms=8200),
    CropDefinition("pumpkin", "Pumpkin", base_price=6, grow_ms=11000),
)

WEATHER_TYPES: tuple[WeatherDefinition, ...] = (
    WeatherDefinition("sunny", "Sunny", grow_mult=1.00, market_mult=1.00),
    WeatherDefinition("rain", "Rain", grow_mult=0.82, market_mult=0.92),
    WeatherDefinition("wind", "Windy", grow_mult=1.10, market_mult=1.05),
    WeatherDefinition("storm", "Storm", grow_mult=1.18, market_mult=1.18),
    WeatherDefinition("snow", "Snow", grow_mult=1.28, market_mult=1.22),
)


def _weights(**kw: float) -> Mapping[str, float]:
    return MappingProxyType(dict(kw))


SEASONS: tuple[SeasonDefinition, ...] = (
    SeasonDefinition(
        "spring", "Spring",
        _weights(sunny=0.35, rain=0.35, wind=0.2, storm=0.07, snow=0.03),
        market_mult=0.95, grow_mult=0.95,
    ),
    SeasonDefinition(
        "summer", "Summer",
        _weights(sunny=0.50, rain=0.15, wind=0.25, storm=0.07, snow=0.03),
        market_mult=0.92, grow_mult=0.90,
    ),
    SeasonDefinition(
        "autumn", "Autumn",
        _weights(sunny=0.30, rain=0.25, wind=0.25, storm=0.15, snow=0.05),
        market_mult=1.00, grow_mult=1.00,
    ),
    SeasonDefinition(
        "winter", "Winter",
        _weights(sunny=0.20, rain=0.10, wind=0.20, storm=0.20, snow=0.30),
        market_mult=1.10, grow_mult=1.10,
    ),
)

BUILDINGS: tuple[BuildingDefinition, ...] = (
    BuildingDefinition("barn", "Barn", "Slightly increases harvest yield as it levels.", base_cost=30),
    BuildingDefinition("silo", "Silo", "Improves market prices slightly as it levels.", base_cost=26),
    BuildingDefinition("windmill", "Windmill", "Speeds up crop growth slightly as it levels.", base_cost=34),
    BuildingDefinition("farmhouse", "Farmhouse", "Minor quest reward boost.", base_cost=22),
)

UPGRADES: tuple[UpgradeDefinition, ...] = (
    UpgradeDefinition("shovel", "Shovel", "More yield. +1 every 2 levels.", base_cost=12),
    UpgradeDefinition("sprinkler", "Sprinkler", "Faster growth. Auto-harvest every 3 levels.", base_cost=18),
    UpgradeDefinition("cart", "Cart", "Better prices.", base_cost=22),
    UpgradeDefinition("coop", "Coop", "More animals (visual).", base_cost=14),
    UpgradeDefinition("plot", "Extra Plot", "Add +1 plot.", base_cost=10),
)

ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition("first_plant", "First Plant", "Plant your first crop.", Reward(5, 2)),
    AchievementDefinition("first_harvest", "First Harvest", "Harvest your first plot.", Reward(7, 0)),
    AchievementDefinition("first_sell", "First Sale", "Sell any crops once.", Reward(10, 0)),
    AchievementDefinition("hundred_coins", "Pocket Money", "Reach 100 coins.", Reward(20, 5)),
    AchievementDefinition("thousand_coins", "Big Stacks", "Reach 1000 coins.", Reward(80, 10)),
    AchievementDefinition("100_crops", "Collector", "Collect 100 total crops.", Reward(30, 6)),
    AchievementDefinition("50_plants_day", "Planter", "Plant 50 plots in one day.", Reward(35, 0)),
    AchievementDefinition("all_crops", "Diversity", "Harvest every crop type.", Reward(40, 8)),
)

CROP_IDS: tuple[str, ...] = tuple(c.id for c in CROPS)
BUILDING_KEYS: tuple[str, ...] = tuple(b.key for b in BUILDINGS)
UPGRADE_KEYS: tuple[str, ...] = tuple(u.key for u in UPGRADES)


def crop_by_id(crop_id: str) -> Optional[CropDefinition]:
    return next((c for c in CROPS if c.id == crop_id), None)


def season_by_id(season_id: str) -> SeasonDefinition:
    """Unknown ids resolve to the first season."""
    return next((s for s in SEASONS if s.id == season_id), SEASONS[0])


def weather_by_id(weather_id: str) -> WeatherDefinition:
    """Unknown ids resolve to sunny."""
    return next((w for w in WEATHER_TYPES if w.id == weather_id), WEATHER_TYPES[0])


def building_by_key(key: str) -> Optional[BuildingDefinition]:
    return next((b for b in BUILDINGS if b.key == key), None)


def upgrade_by_key(key: str) -> Optional[UpgradeDefinition]:
    return next((u for u in UPGRADES if u.key == key), None)


def achievement_by_id(achievement_id: str) -> Optional[AchievementDefinition]:
    return next((a for a in ACHIEVEMENTS if a.id == achievement_id), None)
