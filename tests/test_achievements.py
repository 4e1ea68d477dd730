"""Tests for milestone checks and unlock-once rewards."""

from game.content import CROP_IDS
from game.systems.achievements import check_achievements, is_unlocked, unlock


def test_fresh_farm_unlocks_nothing(state):
    assert check_achievements(state) == []
    assert state.achievements == set()


def test_hundred_coins(state):
    state.coins = 100
    seeds = state.seeds["potato"]
    unlocked = check_achievements(state)
    assert [a.id for a in unlocked] == ["hundred_coins"]
    assert state.coins == 120
    assert state.seeds["potato"] == seeds + 5


def test_reward_can_cross_next_threshold(state):
    state.coins = 990
    ids = [a.id for a in check_achievements(state)]
    assert ids == ["hundred_coins", "thousand_coins"]
    assert state.coins == 990 + 20 + 80


def test_unlocks_never_relock(state):
    state.coins = 150
    check_achievements(state)
    state.coins = 0
    assert check_achievements(state) == []
    assert is_unlocked(state, "hundred_coins")


def test_unlock_is_once(state):
    assert unlock(state, "first_sell") is not None
    coins = state.coins
    assert unlock(state, "first_sell") is None
    assert state.coins == coins


def test_unlock_unknown_id(state):
    assert unlock(state, "moon_landing") is None
    assert state.achievements == set()


def test_collector_counts_inventory(state):
    state.crops["potato"] = 60
    state.crops["corn"] = 40
    assert "100_crops" in [a.id for a in check_achievements(state)]


def test_planter_uses_daily_count(state):
    state.progress.planted_today = 50
    assert "50_plants_day" in [a.id for a in check_achievements(state)]


def test_diversity_needs_every_crop(state):
    state.progress.harvest_types = set(CROP_IDS[:-1])
    assert "all_crops" not in [a.id for a in check_achievements(state)]
    state.progress.harvest_types.add(CROP_IDS[-1])
    assert "all_crops" in [a.id for a in check_achievements(state)]
