"""Tests for shop purchases, market sales and the transaction log."""

import pytest

from game.errors import AtCapacity, InsufficientFunds, InvalidQuantity, NothingToSell, UnknownItem
from game.systems.economy import EconomySystem, building_cost, upgrade_cost


@pytest.fixture
def economy():
    return EconomySystem()


# ── costs ───────────────────────────────────────────────────


def test_upgrade_costs():
    assert upgrade_cost("shovel", 0) == 12
    assert upgrade_cost("shovel", 1) == 19
    assert upgrade_cost("sprinkler", 1) == 28
    assert upgrade_cost("plot", 0) == 10
    assert upgrade_cost("plot", 2) == 26


def test_building_costs():
    assert building_cost("barn", 0) == 30
    assert building_cost("barn", 1) == 48
    assert building_cost("farmhouse", 5) == 88


def test_unknown_keys():
    with pytest.raises(UnknownItem):
        upgrade_cost("tractor", 0)
    with pytest.raises(UnknownItem):
        building_cost("castle", 0)


# ── sell ────────────────────────────────────────────────────


def test_sell_ten_potatoes_at_three(state, economy):
    state.crops["potato"] = 10
    state.price_by_crop["potato"] = 3
    coins = state.coins

    assert economy.sell(state, "potato", 10) == (10, 30)
    assert state.coins == coins + 30
    assert state.progress.sold == 10
    assert state.crops["potato"] == 0


def test_sell_caps_at_inventory(state, economy):
    state.crops["carrot"] = 4
    state.price_by_crop["carrot"] = 2
    assert economy.sell(state, "carrot", 50) == (4, 8)


def test_sell_nothing(state, economy):
    before = state.to_dict()
    with pytest.raises(NothingToSell):
        economy.sell(state, "potato", 5)
    assert state.to_dict() == before


def test_sell_unknown_crop(state, economy):
    with pytest.raises(UnknownItem):
        economy.sell(state, "turnip", 1)


def test_sell_all(state, economy):
    state.crops.update(potato=4, carrot=2)
    state.price_by_crop.update(potato=3, carrot=5)
    coins = state.coins
    assert economy.sell_all(state) == (6, 22)
    assert state.coins == coins + 22
    assert state.total_crops() == 0
    assert state.progress.sold == 6


def test_sell_all_empty(state, economy):
    with pytest.raises(NothingToSell):
        economy.sell_all(state)


# ── buy ─────────────────────────────────────────────────────


def test_buy_seeds(state, economy):
    assert economy.buy_seeds(state, "corn", 3) == 3
    assert state.seeds["corn"] == 3
    assert state.coins == 2


def test_buy_seeds_too_expensive(state, economy):
    before = state.to_dict()
    with pytest.raises(InsufficientFunds) as exc:
        economy.buy_seeds(state, "pumpkin", 6)
    assert exc.value.message == "NEED 6 COINS"
    assert state.to_dict() == before


def test_buy_upgrade(state, economy):
    state.coins = 100
    assert economy.buy_upgrade(state, "shovel") == 1
    assert state.coins == 88
    assert state.upgrade_level("shovel") == 1


def test_buy_plot_upgrade_adds_plot(state, economy):
    state.coins = 100
    economy.buy_upgrade(state, "plot")
    assert len(state.plots) == 11


def test_buy_upgrade_insufficient(state, economy):
    with pytest.raises(InsufficientFunds):
        economy.buy_upgrade(state, "cart")
    assert state.upgrade_level("cart") == 0


def test_buy_building(state, economy):
    state.coins = 100
    assert economy.buy_building(state, "silo") == 1
    assert state.coins == 74


def test_building_max_level(state, economy):
    state.coins = 10_000
    state.buildings["barn"] = 12
    with pytest.raises(AtCapacity):
        economy.buy_building(state, "barn")
    assert state.coins == 10_000


# ── transaction log ─────────────────────────────────────────


def test_transaction_log(state, economy):
    state.coins = 100
    state.crops["potato"] = 2
    state.price_by_crop["potato"] = 4
    economy.buy_seeds(state, "carrot", 2)
    economy.sell(state, "potato", 2)
    recent = economy.get_recent_transactions()
    assert [t["type"] for t in recent] == ["seed_purchase", "sale"]
    assert economy.total_spent == 2
    assert economy.total_earned == 8


def test_buy_seeds_non_positive_count(state, economy):
    before = state.to_dict()
    for count in (0, -3):
        with pytest.raises(InvalidQuantity):
            economy.buy_seeds(state, "corn", count)
    assert state.to_dict() == before
    assert economy.transaction_log == []


def test_can_afford(state, economy):
    assert economy.can_afford(state, 5)
    assert not economy.can_afford(state, 6)
