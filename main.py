"""
Pixel Fields - a tiny, deterministic daily farming sim.

Usage:
    python main.py [action] [args...] [--save PATH] [--new] [--no-audio]

Actions:
    status              - Show the farm (default)
    plant-all           - Plant the selected crop on every empty plot
    harvest-all         - Harvest every ready plot
    tap N               - Plant or harvest plot N
    sell [CROP [N]]     - Sell crops (default: all of the selected sell crop)
    sell-all            - Sell the whole inventory
    buy-seeds CROP [N]  - Buy seeds
    select CROP         - Choose the crop to plant
    upgrade KEY         - Buy an upgrade level (shovel, sprinkler, cart, coop, plot)
    build KEY           - Build or level a building (barn, silo, windmill, farmhouse)
    claim QUEST         - Claim a completed daily quest (plant, harv, sell)
    reset               - Wipe the save and start over
    run [SECONDS]       - Run the live loop (growth, auto-harvest, saving)
"""
import argparse
import logging
import math
import os
import sys
from pathlib import Path

from config import AUDIO_ENABLED, GAME_TITLE, LOG_LEVEL, SAVE_PATH
from game.content import BUILDINGS, UPGRADES
from game.engine import FarmEngine
from game.persistence import SaveStore

ACTIONS = (
    "status", "plant-all", "harvest-all", "tap", "sell", "sell-all", "buy-seeds",
    "select", "upgrade", "build", "claim", "reset", "run",
)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Pixel Fields - a daily farming sim")
    parser.add_argument("action", nargs="?", default="status", choices=ACTIONS, help="What to do (default: status)")
    parser.add_argument("args", nargs="*", help="Action arguments")
    parser.add_argument("--save", type=str, default=SAVE_PATH, help=f"Save file (default: {SAVE_PATH})")
    parser.add_argument("--new", action="store_true", help="Ignore any existing save")
    parser.add_argument("--no-audio", action="store_true", help="Disable sound")
    return parser.parse_args(argv)


def print_status(engine: FarmEngine):
    snap = engine.snapshot()
    print(f"Day {snap.day_num} ({snap.day_key})  {snap.season_id.upper()} / {snap.weather_id.upper()}")
    print(f"Coins: {snap.coins}   Yield: x{snap.harvest_yield}")
    print("Seeds: " + ", ".join(f"{k} {v}" for k, v in snap.seeds.items()))
    if engine.state.total_seeds() <= 0:
        print("  NO SEEDS - buy some with: buy-seeds potato 5")
    print()
    print("Plots:")
    for p in snap.plots:
        crop = p.crop_id or "-"
        print(f"  [{p.index:2d}] {p.state:<7} {crop:<8} {int(p.progress * 100):3d}%")
    print()
    print("Market:")
    for m in snap.market:
        print(f"  {m.crop_id:<8} {m.price:2d}c   have {m.inventory}")
    print()
    print("Quests:")
    for q in snap.quests:
        mark = "x" if q.claimed else ("!" if q.claimable else " ")
        print(f"  [{mark}] {q.id:<6} {q.name:<22} {q.progress}/{q.goal}  +{q.reward_coins}c +{q.reward_seeds}s")
    print()
    print("Shop:")
    for u in UPGRADES:
        print(f"  {u.key:<10} lvl {engine.state.upgrade_level(u.key):2d}  next {engine.upgrade_price(u.key)}c")
    for b in BUILDINGS:
        price = engine.building_price(b.key)
        label = "MAX" if price is None else f"{price}c"
        print(f"  {b.key:<10} lvl {engine.state.building_level(b.key):2d}  next {label}")
    unlocked = [a.name for a in snap.achievements if a.unlocked]
    if unlocked:
        print()
        print("Achievements: " + ", ".join(unlocked))


def _int_arg(args, i, default):
    try:
        return int(args[i])
    except (IndexError, ValueError):
        return default


def _seconds_arg(args, i):
    """Run length in seconds; None (run until stopped) when absent, bad, or not positive."""
    try:
        seconds = float(args[i])
    except (IndexError, ValueError):
        return None
    return seconds if math.isfinite(seconds) and seconds > 0 else None


def dispatch(engine: FarmEngine, action: str, args: list):
    """Forward one CLI action to the engine. Returns an ActionResult (or None for status/run)."""
    first = args[0] if args else ""
    if action == "plant-all":
        return engine.plant_all()
    if action == "harvest-all":
        return engine.harvest_all()
    if action == "tap":
        return engine.tap_plot(_int_arg(args, 0, -1))
    if action == "sell":
        return engine.sell(first or None, _int_arg(args, 1, None))
    if action == "sell-all":
        return engine.sell_all()
    if action == "buy-seeds":
        return engine.buy_seeds(first, _int_arg(args, 1, 1))
    if action == "select":
        return engine.select_crop(first)
    if action == "upgrade":
        return engine.buy_upgrade(first)
    if action == "build":
        return engine.buy_building(first)
    if action == "claim":
        return engine.claim_quest(first)
    if action == "reset":
        return engine.reset()
    if action == "run":
        seconds = _seconds_arg(args, 0)
        print("Running... (Ctrl+C to stop)")
        try:
            engine.run(seconds)
        except KeyboardInterrupt:
            engine.stop()
        return None
    return None


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    # Headless by default: no window is ever opened.
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

    print("=" * 50)
    print(f"  {GAME_TITLE}")
    print("=" * 50)
    print()

    audio = None
    if AUDIO_ENABLED and not args.no_audio and args.action == "run":
        from game.audio.audio_system import AudioSystem
        audio = AudioSystem(enabled=True)

    engine = FarmEngine(SaveStore(Path(args.save)), audio=audio)
    engine.boot(force_new=args.new)

    result = dispatch(engine, args.action, args.args)
    if result is not None:
        print(("OK: " if result.ok else "FAILED: ") + result.message)
        print()
    engine.save_now()

    print_status(engine)
    return 0 if result is None or result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
