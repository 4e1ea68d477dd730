"""Tests for growth duration, harvest yield and level bonuses."""

from game.content import CROPS, SEASONS, WEATHER_TYPES, crop_by_id, season_by_id, weather_by_id
from game.systems.growth import (
    auto_harvest_capacity,
    growth_duration_ms,
    harvest_yield,
    quest_reward_boost,
    sprinkler_bonus,
    windmill_bonus,
)


# ── growth_duration_ms ──────────────────────────────────────


def test_potato_sunny_spring():
    ms = growth_duration_ms(crop_by_id("potato"), weather_by_id("sunny"), season_by_id("spring"), {}, {})
    assert ms == 4940


def test_growth_monotonic_in_sprinkler():
    crop, weather, season = crop_by_id("corn"), weather_by_id("rain"), season_by_id("autumn")
    durations = [growth_duration_ms(crop, weather, season, {"sprinkler": lvl}, {}) for lvl in range(0, 20)]
    assert all(b <= a for a, b in zip(durations, durations[1:]))


def test_growth_monotonic_in_windmill():
    crop, weather, season = crop_by_id("pumpkin"), weather_by_id("snow"), season_by_id("winter")
    durations = [growth_duration_ms(crop, weather, season, {}, {"windmill": lvl}) for lvl in range(0, 20)]
    assert all(b <= a for a, b in zip(durations, durations[1:]))


def test_growth_always_positive():
    for crop in CROPS:
        for weather in WEATHER_TYPES:
            for season in SEASONS:
                ms = growth_duration_ms(crop, weather, season, {"sprinkler": 99}, {"windmill": 99})
                assert ms > 0


def test_bonus_caps():
    assert sprinkler_bonus(10) == sprinkler_bonus(100)
    assert windmill_bonus(10) == windmill_bonus(100)
    assert sprinkler_bonus(100) > 0
    assert windmill_bonus(100) > 0


# ── harvest_yield ───────────────────────────────────────────


def test_yield_shovel_and_barn():
    assert harvest_yield({"shovel": 4}, {"barn": 6}) == 5


def test_yield_base():
    assert harvest_yield({}, {}) == 1
    assert harvest_yield({"shovel": 1}, {"barn": 2}) == 1
    assert harvest_yield({"shovel": 2}, {"barn": 3}) == 3


# ── other bonuses ───────────────────────────────────────────


def test_quest_reward_boost_capped():
    assert quest_reward_boost({}) == 1.0
    assert quest_reward_boost({"farmhouse": 10}) == quest_reward_boost({"farmhouse": 40})


def test_auto_harvest_capacity():
    assert auto_harvest_capacity({}) == 0
    assert auto_harvest_capacity({"sprinkler": 2}) == 0
    assert auto_harvest_capacity({"sprinkler": 3}) == 1
    assert auto_harvest_capacity({"sprinkler": 7}) == 2
