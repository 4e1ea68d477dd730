"""Tests for day rollover, season cycling and per-day derived state."""

from game.content import CROP_IDS, WEATHER_TYPES
from game.state import PlayerState
from game.systems.calendar import begin_day, commit_rollover, has_rolled_over, season_for_day


# ── season_for_day ──────────────────────────────────────────


def test_seasons_cycle_weekly():
    assert season_for_day(1).id == "spring"
    assert season_for_day(7).id == "spring"
    assert season_for_day(8).id == "summer"
    assert season_for_day(15).id == "autumn"
    assert season_for_day(22).id == "winter"
    assert season_for_day(29).id == "spring"


def test_season_for_nonpositive_day_is_spring():
    assert season_for_day(0).id == "spring"


# ── begin_day ───────────────────────────────────────────────


def test_begin_day_derives_everything(state):
    assert state.day_key == "2024-01-01"
    assert state.day_num == 1
    assert state.season_id == "spring"
    assert state.weather_id in {w.id for w in WEATHER_TYPES}
    assert set(state.price_by_crop) == set(CROP_IDS)
    assert [q.id for q in state.quests] == ["plant", "harv", "sell"]
    assert state.market_rng is not None


def test_same_day_same_world():
    a = PlayerState()
    b = PlayerState()
    begin_day(a, "2024-03-10")
    begin_day(b, "2024-03-10")
    assert a.weather_id == b.weather_id
    assert a.price_by_crop == b.price_by_crop
    assert [q.goal for q in a.quests] == [q.goal for q in b.quests]


# ── commit_rollover ─────────────────────────────────────────


def test_rollover_is_idempotent(state):
    before = state.to_dict()
    assert not has_rolled_over(state, "2024-01-01")
    assert commit_rollover(state, "2024-01-01") is False
    assert commit_rollover(state, "2024-01-01") is False
    assert state.to_dict() == before


def test_rollover_advances_day(state):
    assert commit_rollover(state, "2024-01-02") is True
    assert state.day_num == 2
    assert state.day_key == "2024-01-02"
    assert commit_rollover(state, "2024-01-02") is False
    assert state.day_num == 2


def test_rollover_resets_progress_keeps_achievements(state):
    state.progress.planted = 9
    state.progress.planted_today = 9
    state.progress.harvest_types.add("potato")
    state.achievements.add("first_plant")
    state.quests[0].claimed = True

    commit_rollover(state, "2024-01-02")

    assert state.progress.planted == 0
    assert state.progress.planted_today == 0
    assert state.progress.harvest_types == set()
    assert "first_plant" in state.achievements
    assert not any(q.claimed for q in state.quests)


def test_rollover_keys_compare_as_strings(state):
    # any different key is a new day, even one that sorts earlier
    assert commit_rollover(state, "2023-12-31") is True
    assert state.day_num == 2


def test_eighth_day_is_summer(state):
    for day in range(2, 9):
        commit_rollover(state, f"2024-01-{day:02d}")
    assert state.day_num == 8
    assert state.season_id == "summer"
