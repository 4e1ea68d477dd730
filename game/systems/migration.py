"""
Save migration: decode a persisted blob of any supported schema version into the
current PlayerState.

One pure decode function per historical version; every field the blob lacks is
default-filled. Anything unrecognized (no version, unknown version, wrong shape)
means "no prior save" and yields None rather than an error.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from config import DEFAULT_CROP, SAVE_VERSION, START_COINS, START_SEEDS
from game.content import CROP_IDS, building_by_key, crop_by_id
from game.entities.plot import Plot, PlotState
from game.entities.quest import Quest
from game.state import AudioPrefs, PlayerState, QuestProgress
from game.systems.market import compute_price_table, rehydrate_market

logger = logging.getLogger(__name__)


def _counts(raw: Any, base: Mapping[str, int]) -> dict[str, int]:
    """Merge a name -> count mapping over `base`, dropping negatives and junk."""
    out = dict(base)
    if isinstance(raw, Mapping):
        for k, v in raw.items():
            try:
                out[str(k)] = max(0, int(v or 0))
            except (TypeError, ValueError):
                continue
    return out


def _valid_plot(plot: Plot) -> Plot:
    if not plot.is_empty and crop_by_id(plot.crop_id or "") is None:
        plot.clear()
    return plot


def _progress_from(raw: Any) -> QuestProgress:
    raw = raw if isinstance(raw, Mapping) else {}
    types = raw.get("harvest_types") or []
    if isinstance(types, Mapping):
        types = [k for k, v in types.items() if v]
    return QuestProgress(
        planted=max(0, int(raw.get("planted") or 0)),
        harvested=max(0, int(raw.get("harvested") or 0)),
        sold=max(0, int(raw.get("sold") or 0)),
        planted_today=max(0, int(raw.get("planted_today") or 0)),
        harvest_types={str(t) for t in types if str(t) in CROP_IDS},
    )


def _achievements_from(raw: Any) -> set[str]:
    if isinstance(raw, Mapping):
        return {str(k) for k, v in raw.items() if v}
    return {str(a) for a in (raw or [])}


def _clamp_buildings(levels: dict[str, int]) -> dict[str, int]:
    for key, level in list(levels.items()):
        b = building_by_key(key)
        if b is not None:
            levels[key] = min(level, b.max_level)
    return levels


def decode_v2(blob: Mapping[str, Any]) -> PlayerState:
    s = PlayerState()
    s.coins = max(0, int(blob.get("coins", s.coins) or 0))
    s.seeds = _counts(blob.get("seeds"), s.seeds)
    s.crops = _counts(blob.get("crops"), s.crops)
    s.selected_crop = str(blob.get("selected_crop") or DEFAULT_CROP)
    s.selected_sell = str(blob.get("selected_sell") or DEFAULT_CROP)
    if "plots" in blob:
        s.plots = [_valid_plot(Plot.from_dict(p)) for p in (blob.get("plots") or [])]
    s.upgrades = _counts(blob.get("upgrades"), s.upgrades)
    s.buildings = _clamp_buildings(_counts(blob.get("buildings"), s.buildings))

    s.day_key = str(blob.get("day_key") or "")
    s.day_num = max(1, int(blob.get("day_num") or 1))
    s.season_id = str(blob.get("season_id") or s.season_id)
    s.weather_id = str(blob.get("weather_id") or s.weather_id)
    s.market_seed = int(blob.get("market_seed") or 0) & 0xFFFFFFFF
    s.price_by_crop = {k: int(v) for k, v in (blob.get("price_by_crop") or {}).items()}

    s.quests = [Quest.from_dict(q) for q in (blob.get("quests") or [])]
    s.progress = _progress_from(blob.get("progress"))
    s.achievements = _achievements_from(blob.get("achievements"))
    s.tutorial_done = bool(blob.get("tutorial_done", False))
    audio = blob.get("audio") or {}
    s.audio = AudioPrefs(music_on=bool(audio.get("music_on", True)), sfx_on=bool(audio.get("sfx_on", True)))
    return s


def decode_v1(blob: Mapping[str, Any]) -> PlayerState:
    """Single-crop (potato only) saves: no per-crop inventory, no buildings, no days."""
    s = PlayerState()
    s.coins = max(0, int(blob.get("coins", START_COINS) or 0))
    s.seeds = _counts(START_SEEDS, s.seeds)
    s.crops = _counts({DEFAULT_CROP: blob.get("potatoes") or 0}, s.crops)
    plots = []
    for p in blob.get("plots") or []:
        try:
            state = PlotState(int(p.get("state") or 0))
        except ValueError:
            state = PlotState.EMPTY
        plot = Plot()
        if state is PlotState.GROWING:
            plot.start_growing(DEFAULT_CROP, int(p.get("plantedAt") or 0))
        elif state is PlotState.READY:
            plot.state = PlotState.READY
            plot.crop_id = DEFAULT_CROP
        plots.append(plot)
    if plots:
        s.plots = plots
    s.upgrades = _counts(blob.get("upgrades"), s.upgrades)
    s.tutorial_done = bool(blob.get("tutorialDone", False))
    return s


DECODERS: dict[int, Callable[[Mapping[str, Any]], PlayerState]] = {
    1: decode_v1,
    SAVE_VERSION: decode_v2,
}


def migrate(blob: Any) -> Optional[PlayerState]:
    """Decode a persisted blob, or None when it is not a usable save."""
    if not isinstance(blob, Mapping):
        return None
    try:
        version = int(blob.get("version"))
    except (TypeError, ValueError):
        return None
    decoder = DECODERS.get(version)
    if decoder is None:
        logger.info("ignoring save with unknown version %r", version)
        return None
    try:
        state = decoder(blob)
    except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
        logger.warning("save (v%s) is malformed, starting fresh: %s", version, e)
        return None

    rehydrate_market(state)
    if state.day_key and any(c not in state.price_by_crop for c in CROP_IDS):
        compute_price_table(state)
    if version != SAVE_VERSION:
        logger.info("migrated save v%s -> v%s", version, SAVE_VERSION)
    return state
