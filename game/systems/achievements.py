"""
Achievement tracker: threshold predicates over cumulative state, unlock-once rewards.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from config import DEFAULT_CROP
from game.content import CROP_IDS, AchievementDefinition, achievement_by_id
from game.state import PlayerState

logger = logging.getLogger(__name__)

# Milestones evaluated after every state-changing action.
MILESTONES: tuple[tuple[str, Callable[[PlayerState], bool]], ...] = (
    ("hundred_coins", lambda s: s.coins >= 100),
    ("thousand_coins", lambda s: s.coins >= 1000),
    ("100_crops", lambda s: s.total_crops() >= 100),
    ("50_plants_day", lambda s: s.progress.planted_today >= 50),
    ("all_crops", lambda s: all(c in s.progress.harvest_types for c in CROP_IDS)),
)


def is_unlocked(state: PlayerState, achievement_id: str) -> bool:
    return achievement_id in state.achievements


def unlock(state: PlayerState, achievement_id: str) -> Optional[AchievementDefinition]:
    """Unlock once and grant the reward. Returns the definition only on first unlock."""
    if achievement_id in state.achievements:
        return None
    a = achievement_by_id(achievement_id)
    if a is None:
        return None
    state.achievements.add(a.id)
    state.coins += int(a.reward.coins)
    if a.reward.seeds > 0:
        state.seeds[DEFAULT_CROP] = state.seeds.get(DEFAULT_CROP, 0) + int(a.reward.seeds)
    logger.info("achievement unlocked: %s", a.id)
    return a


def check_achievements(state: PlayerState) -> list[AchievementDefinition]:
    """
    Evaluate every milestone against the current state.

    Predicates are checked in order, each against the state as updated by earlier
    rewards, so a reward that crosses a later threshold unlocks it in the same pass.
    """
    unlocked: list[AchievementDefinition] = []
    for achievement_id, predicate in MILESTONES:
        if achievement_id in state.achievements:
            continue
        if predicate(state):
            a = unlock(state, achievement_id)
            if a is not None:
                unlocked.append(a)
    return unlocked
