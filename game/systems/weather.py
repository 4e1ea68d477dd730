"""
Weather selection: one weighted draw per day, conditioned on season.
"""
from __future__ import annotations

from typing import Mapping

from config import WEATHER_STREAM_XOR
from game.content import SeasonDefinition
from game.sim.determinism import Mulberry32, sub_generator


def weighted_pick(weights: Mapping[str, float], gen: Mulberry32) -> str:
    """
    Weighted sampling over `weights` in insertion order.

    Weights need not sum to 1. If float error leaves a positive remainder after the
    walk, the first id is returned so the pick always terminates.
    """
    entries = list(weights.items())
    if not entries:
        raise ValueError("weighted_pick needs at least one weight")
    total = sum(float(w) for _, w in entries)
    r = gen.next() * total
    for key, w in entries:
        r -= float(w)
        if r <= 0:
            return key
    return entries[0][0]


def weather_generator(day_seed: int) -> Mulberry32:
    return sub_generator(day_seed, WEATHER_STREAM_XOR)


def select_weather(season: SeasonDefinition, day_seed: int) -> str:
    return weighted_pick(season.weather_weights, weather_generator(day_seed))
