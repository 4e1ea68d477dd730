"""
Main farm engine - owns the PlayerState, runs the ticks, and exposes player actions.
"""
import logging
from typing import Callable, Optional

import pygame

from config import AUTO_PROGRESS_INTERVAL_MS, FPS, REEVALUATE_INTERVAL_MS
from game.content import ACHIEVEMENTS, CROPS, building_by_key, crop_by_id
from game.errors import FarmActionError, InvalidPlotTransition, UnknownItem
from game.events import EventBus, EventKind
from game.persistence import SaveScheduler, SaveStore
from game.sim.contracts import AchievementView, ActionResult, FarmSnapshot, MarketView, PlotView, QuestView
from game.sim.timebase import PeriodicTask, now_ms, today_key
from game.state import PlayerState
from game.systems import achievements, calendar, plots, quests
from game.systems.economy import EconomySystem, building_cost, upgrade_cost
from game.systems.growth import harvest_yield
from game.systems.market import price_history, price_of
from game.systems.migration import migrate

logger = logging.getLogger(__name__)


class FarmEngine:
    """
    Host for the simulation core.

    Every player intent goes through `_run_action`: systems raise FarmActionError on
    rejected actions (state untouched), which is turned into a failed ActionResult
    plus an `action_failed` feedback event. Nothing raises past this boundary.
    """

    def __init__(
        self,
        store: Optional[SaveStore] = None,
        *,
        audio=None,
        day_key_fn: Optional[Callable[[], str]] = None,
    ):
        self.store = store
        self.day_key_fn = day_key_fn or today_key
        self.state = PlayerState()
        self.events = EventBus()
        self.economy = EconomySystem()
        self.saver = SaveScheduler(store, lambda: self.state.to_dict())

        # Re-evaluation: rollover + readiness + save request. Auto-progress: sprinkler harvest.
        self.reevaluate_task = PeriodicTask("reevaluate", REEVALUATE_INTERVAL_MS)
        self.auto_task = PeriodicTask("auto_progress", AUTO_PROGRESS_INTERVAL_MS)
        self.running = False

        # Audio (feedback consumer). Expected interface:
        # - on_event(event: FeedbackEvent) -> None
        # - set_music(on: bool) / set_sfx(on: bool)
        self.audio = audio
        if audio is not None:
            self.events.subscribe(audio.on_event)

    # ------------------------------------------------------------------
    # Boot / reset
    # ------------------------------------------------------------------

    def boot(self, force_new: bool = False) -> PlayerState:
        """Load (and migrate) the saved farm, or start a fresh one."""
        loaded = None
        if not force_new and self.store is not None:
            loaded = migrate(self.store.load())

        if loaded is None:
            state = PlayerState()
            calendar.begin_day(state, self.day_key_fn())
            self.state = state
            logger.info("new farm: day %s (%s), %s", state.day_num, state.day_key, state.weather_id)
            self.saver.save_now()
        else:
            self.state = loaded
            logger.info("loaded farm: day %s, %s coins", loaded.day_num, loaded.coins)

        self.ensure_day()
        if self.audio is not None:
            self.audio.set_sfx(self.state.audio.sfx_on)
            self.audio.set_music(self.state.audio.music_on)
        return self.state

    def reset(self) -> ActionResult:
        if self.store is not None:
            self.store.clear()
        self.saver.cancel()
        self.economy = EconomySystem()
        self.boot(force_new=True)
        return ActionResult(ok=True, message="RESET")

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def ensure_day(self) -> bool:
        """Roll the day over if the calendar moved on. Idempotent within a day."""
        day_key = self.day_key_fn()
        if not calendar.has_rolled_over(self.state, day_key):
            return False
        calendar.commit_rollover(self.state, day_key)
        self.events.emit(
            EventKind.DAY_ROLLOVER,
            f"DAY {self.state.day_num}",
            data={"season": self.state.season_id, "weather": self.state.weather_id},
        )
        return True

    def reevaluate_tick(self, now: Optional[int] = None):
        now = now_ms() if now is None else int(now)
        self.ensure_day()
        plots.refresh_plots(self.state, now)
        self.saver.request(now)

    def auto_tick(self, now: Optional[int] = None) -> int:
        now = now_ms() if now is None else int(now)
        harvested = plots.auto_harvest(self.state, now)
        if harvested > 0:
            self.events.emit(EventKind.HARVEST, f"AUTO HARVEST {harvested}", data={"plots": harvested, "auto": True})
            self._after_mutation(now)
        return harvested

    def update(self, now: Optional[int] = None):
        """One frame: fire whichever periodic tasks are due, then flush a pending save."""
        now = now_ms() if now is None else int(now)
        if self.reevaluate_task.due(now):
            self.reevaluate_tick(now)
        if self.auto_task.due(now):
            self.auto_tick(now)
        self.saver.poll(now)

    def run(self, seconds: Optional[float] = None):
        """Cooperative main loop. Runs until stopped, or for `seconds` worth of frames."""
        pygame.init()
        clock = pygame.time.Clock()
        max_frames = None if seconds is None else max(1, int(seconds * FPS))
        frames = 0
        self.running = True
        try:
            while self.running:
                clock.tick(FPS)
                self.update()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            self.running = False
            self.saver.save_now()
            pygame.quit()

    def stop(self):
        self.running = False

    # ------------------------------------------------------------------
    # Action boundary
    # ------------------------------------------------------------------

    def _run_action(self, action: Callable[[int], ActionResult]) -> ActionResult:
        now = now_ms()
        try:
            result = action(now)
        except FarmActionError as e:
            logger.info("action rejected (%s): %s", e.kind.value, e.message)
            self.events.emit(EventKind.ACTION_FAILED, e.message, data={"kind": e.kind.value})
            return ActionResult(ok=False, message=e.message, kind=e.kind)
        self._after_mutation(now)
        return result

    def _after_mutation(self, now: int):
        for a in achievements.check_achievements(self.state):
            self._announce_unlock(a)
        self.saver.request(now)

    def _unlock(self, achievement_id: str):
        a = achievements.unlock(self.state, achievement_id)
        if a is not None:
            self._announce_unlock(a)

    def _announce_unlock(self, a):
        self.events.emit(
            EventKind.ACHIEVEMENT_UNLOCKED,
            f"ACHIEVEMENT: {a.name.upper()}",
            data={"id": a.id, "coins": a.reward.coins, "seeds": a.reward.seeds},
        )

    # ------------------------------------------------------------------
    # Field actions
    # ------------------------------------------------------------------

    def plant(self, index: int) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            plot = plots.plant(self.state, index, now)
            self.events.emit(EventKind.PLANT, "PLANTED", data={"plot": index, "crop": plot.crop_id})
            self._unlock("first_plant")
            return ActionResult(ok=True, message="PLANTED", data={"plot": index, "crop": plot.crop_id})
        return self._run_action(_do)

    def harvest(self, index: int) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            crop_id, amount = plots.harvest(self.state, index, now)
            message = f"HARVEST +{amount}"
            self.events.emit(EventKind.HARVEST, message, data={"plot": index, "crop": crop_id, "amount": amount})
            self._unlock("first_harvest")
            return ActionResult(ok=True, message=message, data={"crop": crop_id, "amount": amount})
        return self._run_action(_do)

    def tap_plot(self, index: int) -> ActionResult:
        """Single-tap intent: plant an empty plot, harvest a ready one."""
        if 0 <= index < len(self.state.plots):
            plot = self.state.plots[index]
            plots.refresh_plot(self.state, plot, now_ms())
            if plot.is_ready:
                return self.harvest(index)
            if plot.is_growing:
                return self._run_action(self._reject_growing)
        return self.plant(index)

    @staticmethod
    def _reject_growing(now: int) -> ActionResult:
        raise InvalidPlotTransition("GROWING...")

    def plant_all(self) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            planted = plots.plant_all(self.state, now)
            message = f"PLANTED {planted}"
            self.events.emit(EventKind.PLANT, message, data={"plots": planted, "crop": self.state.selected_crop})
            self._unlock("first_plant")
            return ActionResult(ok=True, message=message, data={"plots": planted})
        return self._run_action(_do)

    def harvest_all(self) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            harvested = plots.harvest_all(self.state, now)
            message = f"HARVESTED {harvested}"
            self.events.emit(EventKind.HARVEST, message, data={"plots": harvested})
            self._unlock("first_harvest")
            return ActionResult(ok=True, message=message, data={"plots": harvested})
        return self._run_action(_do)

    # ------------------------------------------------------------------
    # Market / shop actions
    # ------------------------------------------------------------------

    def sell(self, crop_id: Optional[str] = None, count: Optional[int] = None) -> ActionResult:
        """Sell `count` (default: all) of a crop (default: the selected sell crop)."""
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            cid = crop_id or self.state.selected_sell
            n = self.state.crops.get(cid, 0) if count is None else count
            sold, earned = self.economy.sell(self.state, cid, n)
            message = f"SOLD {sold} FOR {earned}C"
            self.events.emit(EventKind.SELL, message, data={"crop": cid, "count": sold, "earned": earned})
            self._unlock("first_sell")
            return ActionResult(ok=True, message=message, data={"sold": sold, "earned": earned})
        return self._run_action(_do)

    def sell_all(self) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            sold, earned = self.economy.sell_all(self.state)
            message = f"SOLD ALL +{earned}C"
            self.events.emit(EventKind.SELL, message, data={"count": sold, "earned": earned})
            self._unlock("first_sell")
            return ActionResult(ok=True, message=message, data={"sold": sold, "earned": earned})
        return self._run_action(_do)

    def buy_seeds(self, crop_id: str, count: int = 1) -> ActionResult:
        def _do(now: int) -> ActionResult:
            cost = self.economy.buy_seeds(self.state, crop_id, count)
            message = f"BOUGHT {count} {crop_by_id(crop_id).name.upper()} SEED"
            self.events.emit(EventKind.BUY, message, data={"crop": crop_id, "count": count, "cost": cost})
            return ActionResult(ok=True, message=message, data={"cost": cost})
        return self._run_action(_do)

    def buy_upgrade(self, key: str) -> ActionResult:
        def _do(now: int) -> ActionResult:
            level = self.economy.buy_upgrade(self.state, key)
            self.events.emit(EventKind.UPGRADE, "UPGRADED", data={"upgrade": key, "level": level})
            return ActionResult(ok=True, message="UPGRADED", data={"level": level})
        return self._run_action(_do)

    def buy_building(self, key: str) -> ActionResult:
        def _do(now: int) -> ActionResult:
            level = self.economy.buy_building(self.state, key)
            message = f"{building_by_key(key).name.upper()} BUILT"
            self.events.emit(EventKind.UPGRADE, message, data={"building": key, "level": level})
            return ActionResult(ok=True, message=message, data={"level": level})
        return self._run_action(_do)

    def claim_quest(self, quest_id: str) -> ActionResult:
        def _do(now: int) -> ActionResult:
            self.ensure_day()
            coins = quests.claim_quest(self.state, quest_id)
            message = f"QUEST CLAIMED +{coins}C"
            self.events.emit(EventKind.QUEST_CLAIMED, message, data={"quest": quest_id, "coins": coins})
            return ActionResult(ok=True, message=message, data={"coins": coins})
        return self._run_action(_do)

    # ------------------------------------------------------------------
    # Selections / settings
    # ------------------------------------------------------------------

    def select_crop(self, crop_id: str) -> ActionResult:
        def _do(now: int) -> ActionResult:
            if crop_by_id(crop_id) is None:
                raise UnknownItem(crop_id)
            self.state.selected_crop = crop_id
            return ActionResult(ok=True, message=crop_id.upper())
        return self._run_action(_do)

    def select_sell_crop(self, crop_id: str) -> ActionResult:
        def _do(now: int) -> ActionResult:
            if crop_by_id(crop_id) is None:
                raise UnknownItem(crop_id)
            self.state.selected_sell = crop_id
            return ActionResult(ok=True, message=crop_id.upper())
        return self._run_action(_do)

    def complete_tutorial(self) -> ActionResult:
        self.state.tutorial_done = True
        self.saver.request(now_ms())
        return ActionResult(ok=True, message="TUTORIAL DONE")

    def set_music(self, on: bool) -> ActionResult:
        self.state.audio.music_on = bool(on)
        if self.audio is not None:
            self.audio.set_music(on)
        self.saver.request(now_ms())
        return ActionResult(ok=True, message=f"MUSIC: {'ON' if on else 'OFF'}")

    def set_sfx(self, on: bool) -> ActionResult:
        self.state.audio.sfx_on = bool(on)
        if self.audio is not None:
            self.audio.set_sfx(on)
        self.saver.request(now_ms())
        return ActionResult(ok=True, message=f"SFX: {'ON' if on else 'OFF'}")

    def save_now(self) -> ActionResult:
        ok = self.saver.save_now()
        return ActionResult(ok=ok, message="SAVED" if ok else "NOT SAVED")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def upgrade_price(self, key: str) -> int:
        """Cost of the next level of an upgrade (raises UnknownItem for bad keys)."""
        return upgrade_cost(key, self.state.upgrade_level(key))

    def building_price(self, key: str) -> Optional[int]:
        """Cost of the next building level, or None once maxed."""
        b = building_by_key(key)
        if b is None:
            raise UnknownItem(key)
        level = self.state.building_level(key)
        return None if level >= b.max_level else building_cost(key, level)

    def snapshot(self, now: Optional[int] = None) -> FarmSnapshot:
        """Read-only view for presentation. Refreshes plot readiness first."""
        now = now_ms() if now is None else int(now)
        s = self.state
        plots.refresh_plots(s, now)
        plot_views = tuple(
            PlotView(
                index=i,
                state=p.state.name.lower(),
                crop_id=p.crop_id,
                progress=plots.growth_fraction(s, p, now),
                grow_ms=plots.grow_ms_for(s, p.crop_id) if p.is_growing else None,
            )
            for i, p in enumerate(s.plots)
        )
        market = tuple(
            MarketView(
                crop_id=c.id,
                price=price_of(s, c.id),
                inventory=int(s.crops.get(c.id, 0)),
                history=tuple(price_history(s.market_seed, c)),
            )
            for c in CROPS
        )
        quest_views = tuple(
            QuestView(
                id=q.id,
                name=q.name,
                progress=quests.quest_progress(s, q),
                goal=q.goal,
                reward_coins=q.reward.coins,
                reward_seeds=q.reward.seeds,
                claimed=q.claimed,
            )
            for q in s.quests
        )
        ach_views = tuple(
            AchievementView(id=a.id, name=a.name, description=a.description, unlocked=a.id in s.achievements)
            for a in ACHIEVEMENTS
        )
        return FarmSnapshot(
            day_num=s.day_num,
            day_key=s.day_key,
            season_id=s.season_id,
            weather_id=s.weather_id,
            coins=s.coins,
            seeds=dict(s.seeds),
            crops=dict(s.crops),
            harvest_yield=harvest_yield(s.upgrades, s.buildings),
            plots=plot_views,
            market=market,
            quests=quest_views,
            achievements=ach_views,
        )
