"""
Plot lifecycle: EMPTY -> GROWING -> READY -> EMPTY.

- plant:   EMPTY only, consumes one seed of the selected crop
- growth:  GROWING -> READY once elapsed time reaches the growth duration (checked lazily)
- harvest: READY only, adds yield to the crop inventory

Rejected transitions raise before anything is mutated.
"""
from __future__ import annotations

import logging

from game.content import crop_by_id, season_by_id, weather_by_id
from game.entities.plot import Plot
from game.errors import InsufficientSeed, InvalidPlotTransition, NoEmptyPlot, NothingToHarvest, UnknownItem
from game.state import PlayerState
from game.systems.growth import auto_harvest_capacity, growth_duration_ms, harvest_yield

logger = logging.getLogger(__name__)


def grow_ms_for(state: PlayerState, crop_id: str) -> int:
    crop = crop_by_id(crop_id)
    if crop is None:
        raise UnknownItem(crop_id)
    return growth_duration_ms(
        crop,
        weather_by_id(state.weather_id),
        season_by_id(state.season_id),
        state.upgrades,
        state.buildings,
    )


def refresh_plot(state: PlayerState, plot: Plot, now_ms: int) -> bool:
    """Promote a GROWING plot to READY if its time is up. Returns True on promotion."""
    if not plot.is_growing or plot.crop_id is None:
        return False
    if plot.elapsed_ms(now_ms) >= grow_ms_for(state, plot.crop_id):
        plot.mark_ready()
        return True
    return False


def refresh_plots(state: PlayerState, now_ms: int) -> int:
    return sum(1 for p in state.plots if refresh_plot(state, p, now_ms))


def growth_fraction(state: PlayerState, plot: Plot, now_ms: int) -> float:
    if plot.is_ready:
        return 1.0
    if not plot.is_growing or plot.crop_id is None:
        return 0.0
    return max(0.0, min(1.0, plot.elapsed_ms(now_ms) / grow_ms_for(state, plot.crop_id)))


def _plot_at(state: PlayerState, index: int) -> Plot:
    if not 0 <= int(index) < len(state.plots):
        raise InvalidPlotTransition(f"NO PLOT {index}")
    return state.plots[int(index)]


def _seed_stock(state: PlayerState, crop_id: str) -> int:
    return int(state.seeds.get(crop_id, 0) or 0)


def plant(state: PlayerState, index: int, now_ms: int) -> Plot:
    plot = _plot_at(state, index)
    if not plot.is_empty:
        raise InvalidPlotTransition("GROWING..." if plot.is_growing else "READY TO HARVEST")
    crop_id = state.selected_crop
    if crop_by_id(crop_id) is None:
        raise UnknownItem(crop_id)
    if _seed_stock(state, crop_id) <= 0:
        raise InsufficientSeed(crop_id)

    state.seeds[crop_id] = _seed_stock(state, crop_id) - 1
    plot.start_growing(crop_id, now_ms)
    state.progress.planted += 1
    state.progress.planted_today += 1
    return plot


def _collect(state: PlayerState, plot: Plot) -> tuple[str, int]:
    crop_id = plot.crop_id
    y = harvest_yield(state.upgrades, state.buildings)
    state.crops[crop_id] = int(state.crops.get(crop_id, 0) or 0) + y
    plot.clear()
    state.progress.harvested += 1
    state.progress.harvest_types.add(crop_id)
    return crop_id, y


def harvest(state: PlayerState, index: int, now_ms: int) -> tuple[str, int]:
    """Harvest one READY plot. Returns (crop id, amount added)."""
    plot = _plot_at(state, index)
    refresh_plot(state, plot, now_ms)
    if not plot.is_ready:
        raise InvalidPlotTransition("GROWING..." if plot.is_growing else "NOTHING PLANTED")
    return _collect(state, plot)


def plant_all(state: PlayerState, now_ms: int) -> int:
    """Plant the selected crop on every empty plot, in order, until seeds run out."""
    crop_id = state.selected_crop
    if crop_by_id(crop_id) is None:
        raise UnknownItem(crop_id)
    planted = 0
    for plot in state.plots:
        if _seed_stock(state, crop_id) <= 0:
            break
        if plot.is_empty:
            state.seeds[crop_id] = _seed_stock(state, crop_id) - 1
            plot.start_growing(crop_id, now_ms)
            planted += 1
    if planted <= 0:
        if _seed_stock(state, crop_id) <= 0:
            raise InsufficientSeed(crop_id)
        raise NoEmptyPlot()
    state.progress.planted += planted
    state.progress.planted_today += planted
    return planted


def harvest_all(state: PlayerState, now_ms: int) -> int:
    refresh_plots(state, now_ms)
    harvested = 0
    for plot in state.plots:
        if plot.is_ready:
            _collect(state, plot)
            harvested += 1
    if harvested <= 0:
        raise NothingToHarvest()
    return harvested


def auto_harvest(state: PlayerState, now_ms: int) -> int:
    """Sprinkler crew: harvest up to `sprinkler // 3` ready plots. Silent when idle."""
    capacity = auto_harvest_capacity(state.upgrades)
    if capacity <= 0:
        return 0
    refresh_plots(state, now_ms)
    harvested = 0
    for plot in state.plots:
        if harvested >= capacity:
            break
        if plot.is_ready:
            _collect(state, plot)
            harvested += 1
    if harvested:
        logger.debug("auto-harvested %s plot(s)", harvested)
    return harvested


def add_plot(state: PlayerState) -> Plot:
    plot = Plot()
    state.plots.append(plot)
    return plot
