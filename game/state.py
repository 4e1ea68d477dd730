"""
Player state: the single mutable record every core operation reads and writes.

The host owns the PlayerState instance and passes it into systems; nothing in the
core keeps its own copy. `to_dict()` produces the persisted snapshot (schema
version 2) and deliberately leaves out the live market generator, which is
rehydrated from `market_seed` on load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from config import DEFAULT_CROP, SAVE_VERSION, START_COINS, START_PLOTS, START_SEEDS
from game.content import BUILDING_KEYS, CROP_IDS, UPGRADE_KEYS
from game.entities.plot import Plot
from game.entities.quest import Quest
from game.sim.determinism import Mulberry32

PROGRESS_KEYS = ("planted", "harvested", "sold", "planted_today")


@dataclass
class QuestProgress:
    """Per-day counters. Only ever incremented until the next rollover resets them."""

    planted: int = 0
    harvested: int = 0
    sold: int = 0
    planted_today: int = 0
    harvest_types: set[str] = field(default_factory=set)

    def get(self, key: str) -> int:
        if key not in PROGRESS_KEYS:
            return 0
        return int(getattr(self, key))

    def to_dict(self) -> dict[str, Any]:
        return {
            "planted": self.planted,
            "harvested": self.harvested,
            "sold": self.sold,
            "planted_today": self.planted_today,
            "harvest_types": sorted(self.harvest_types),
        }


@dataclass
class AudioPrefs:
    music_on: bool = True
    sfx_on: bool = True


def _zeroed(keys: tuple[str, ...]) -> dict[str, int]:
    return {k: 0 for k in keys}


@dataclass
class PlayerState:
    version: int = SAVE_VERSION
    coins: int = START_COINS
    seeds: dict[str, int] = field(default_factory=lambda: {**_zeroed(CROP_IDS), **START_SEEDS})
    crops: dict[str, int] = field(default_factory=lambda: _zeroed(CROP_IDS))
    selected_crop: str = DEFAULT_CROP
    selected_sell: str = DEFAULT_CROP
    plots: list[Plot] = field(default_factory=lambda: [Plot() for _ in range(START_PLOTS)])
    upgrades: dict[str, int] = field(default_factory=lambda: _zeroed(UPGRADE_KEYS))
    buildings: dict[str, int] = field(default_factory=lambda: _zeroed(BUILDING_KEYS))

    day_key: str = ""
    day_num: int = 1
    season_id: str = "spring"
    weather_id: str = "sunny"
    market_seed: int = 0
    price_by_crop: dict[str, int] = field(default_factory=dict)

    quests: list[Quest] = field(default_factory=list)
    progress: QuestProgress = field(default_factory=QuestProgress)
    achievements: set[str] = field(default_factory=set)
    tutorial_done: bool = False
    audio: AudioPrefs = field(default_factory=AudioPrefs)

    # Transient: never persisted.
    market_rng: Optional[Mulberry32] = field(default=None, repr=False, compare=False)

    def upgrade_level(self, key: str) -> int:
        return int(self.upgrades.get(key, 0) or 0)

    def building_level(self, key: str) -> int:
        return int(self.buildings.get(key, 0) or 0)

    def total_seeds(self) -> int:
        return sum(int(v or 0) for v in self.seeds.values())

    def total_crops(self) -> int:
        return sum(int(v or 0) for v in self.crops.values())

    def quest_by_id(self, quest_id: str) -> Optional[Quest]:
        return next((q for q in self.quests if q.id == quest_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": SAVE_VERSION,
            "coins": int(self.coins),
            "seeds": dict(self.seeds),
            "crops": dict(self.crops),
            "selected_crop": self.selected_crop,
            "selected_sell": self.selected_sell,
            "plots": [p.to_dict() for p in self.plots],
            "upgrades": dict(self.upgrades),
            "buildings": dict(self.buildings),
            "day_key": self.day_key,
            "day_num": int(self.day_num),
            "season_id": self.season_id,
            "weather_id": self.weather_id,
            "market_seed": int(self.market_seed),
            "price_by_crop": dict(self.price_by_crop),
            "quests": [q.to_dict() for q in self.quests],
            "progress": self.progress.to_dict(),
            "achievements": sorted(self.achievements),
            "tutorial_done": bool(self.tutorial_done),
            "audio": {"music_on": self.audio.music_on, "sfx_on": self.audio.sfx_on},
        }
