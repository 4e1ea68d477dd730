"""
Economy system for coins, shop purchases, and market sales.
"""
from game.content import CROPS, building_by_key, crop_by_id, upgrade_by_key
from game.errors import AtCapacity, InsufficientFunds, InvalidQuantity, NothingToSell, UnknownItem
from game.sim.determinism import round_half_up
from game.state import PlayerState
from game.systems.market import price_of
from game.systems.plots import add_plot


def upgrade_cost(key: str, level: int) -> int:
    u = upgrade_by_key(key)
    if u is None:
        raise UnknownItem(key)
    level = max(0, int(level))
    if key == "plot":
        return round_half_up(u.base_cost + level * 8)
    return round_half_up(u.base_cost + level * (u.base_cost * 0.55))


def building_cost(key: str, level: int) -> int:
    b = building_by_key(key)
    if b is None:
        raise UnknownItem(key)
    return round_half_up(b.base_cost + max(0, int(level)) * (b.base_cost * 0.60))


class EconomySystem:
    """Shop and market transactions against a PlayerState."""

    def __init__(self):
        self.total_earned = 0
        self.total_spent = 0
        self.transaction_log = []

    def _spend(self, state: PlayerState, cost: int):
        if not self.can_afford(state, cost):
            raise InsufficientFunds(cost)
        state.coins -= cost
        self.total_spent += cost

    def can_afford(self, state: PlayerState, cost: int) -> bool:
        return state.coins >= cost

    def buy_seeds(self, state: PlayerState, crop_id: str, count: int) -> int:
        """Buy `count` seeds of a crop. Returns the cost paid."""
        crop = crop_by_id(crop_id)
        if crop is None:
            raise UnknownItem(crop_id)
        count = int(count)
        if count <= 0:
            raise InvalidQuantity(count)
        cost = count * crop.seed_cost
        self._spend(state, cost)
        state.seeds[crop.id] = int(state.seeds.get(crop.id, 0) or 0) + count
        self.transaction_log.append({
            "type": "seed_purchase",
            "crop": crop.id,
            "count": count,
            "cost": cost,
        })
        return cost

    def buy_upgrade(self, state: PlayerState, key: str) -> int:
        """Buy the next level of an upgrade. Returns the new level."""
        cost = upgrade_cost(key, state.upgrade_level(key))
        self._spend(state, cost)
        state.upgrades[key] = state.upgrade_level(key) + 1
        if key == "plot":
            add_plot(state)
        self.transaction_log.append({
            "type": "upgrade_purchase",
            "upgrade": key,
            "level": state.upgrades[key],
            "cost": cost,
        })
        return state.upgrades[key]

    def buy_building(self, state: PlayerState, key: str) -> int:
        """Build (or level up) a building. Returns the new level."""
        b = building_by_key(key)
        if b is None:
            raise UnknownItem(key)
        level = state.building_level(key)
        if level >= b.max_level:
            raise AtCapacity(key)
        cost = building_cost(key, level)
        self._spend(state, cost)
        state.buildings[key] = level + 1
        self.transaction_log.append({
            "type": "building_purchase",
            "building": key,
            "level": level + 1,
            "cost": cost,
        })
        return level + 1

    def sell(self, state: PlayerState, crop_id: str, count: int) -> tuple[int, int]:
        """Sell up to `count` of a crop at today's price. Returns (sold, earned)."""
        if crop_by_id(crop_id) is None:
            raise UnknownItem(crop_id)
        inv = int(state.crops.get(crop_id, 0) or 0)
        n = min(int(count), inv)
        if n <= 0:
            raise NothingToSell()
        earned = n * price_of(state, crop_id)
        state.crops[crop_id] = inv - n
        state.coins += earned
        state.progress.sold += n
        self.total_earned += earned
        self.transaction_log.append({
            "type": "sale",
            "crop": crop_id,
            "count": n,
            "earned": earned,
        })
        return n, earned

    def sell_all(self, state: PlayerState) -> tuple[int, int]:
        """Sell the whole crop inventory, catalog order. Returns (sold, earned)."""
        total_sold = 0
        total_earned = 0
        for crop in CROPS:
            inv = int(state.crops.get(crop.id, 0) or 0)
            if inv <= 0:
                continue
            total_earned += inv * price_of(state, crop.id)
            total_sold += inv
        if total_sold <= 0:
            raise NothingToSell()
        for crop in CROPS:
            if state.crops.get(crop.id):
                state.crops[crop.id] = 0
        state.coins += total_earned
        state.progress.sold += total_sold
        self.total_earned += total_earned
        self.transaction_log.append({
            "type": "sale",
            "crop": "*",
            "count": total_sold,
            "earned": total_earned,
        })
        return total_sold, total_earned

    def get_recent_transactions(self, count: int = 5) -> list:
        """Get the most recent transactions."""
        return self.transaction_log[-count:]
