"""
Daily quests: seeded generation, progress lookup, and claim-once payout.
"""
from __future__ import annotations

import logging

from config import DEFAULT_CROP, QUEST_STREAM_XOR
from game.content import Reward
from game.entities.quest import Quest
from game.errors import QuestNotClaimable
from game.sim.determinism import round_half_up, sub_generator
from game.state import PlayerState
from game.systems.growth import quest_reward_boost

logger = logging.getLogger(__name__)

# (id, progress key, low, span, reward, name template, description)
QUEST_TABLE = (
    ("plant", "planted", 6, 7, Reward(coins=8, seeds=3), "PLANT {goal} PLOTS", "GET THE FIELD STARTED."),
    ("harv", "harvested", 6, 8, Reward(coins=10, seeds=0), "HARVEST {goal} PLOTS", "BRING CROPS IN."),
    ("sell", "sold", 12, 29, Reward(coins=14, seeds=2), "SELL {goal} CROPS", "CASH IN AT THE MARKET."),
)


def make_daily_quests(day_seed: int) -> list[Quest]:
    """Three quests for the day, goals drawn in table order from the quest stream."""
    gen = sub_generator(day_seed, QUEST_STREAM_XOR)
    quests: list[Quest] = []
    for quest_id, key, low, span, reward, name, desc in QUEST_TABLE:
        goal = low + int(gen.next() * span)
        quests.append(
            Quest(
                id=quest_id,
                name=name.format(goal=goal),
                description=desc,
                progress_key=key,
                goal=goal,
                reward=reward,
            )
        )
    return quests


def quest_progress(state: PlayerState, quest: Quest) -> int:
    return state.progress.get(quest.progress_key)


def is_complete(state: PlayerState, quest: Quest) -> bool:
    return quest_progress(state, quest) >= quest.goal


def claim_quest(state: PlayerState, quest_id: str) -> int:
    """
    Pay out a completed quest. Returns the coins granted.

    Unknown, already-claimed or incomplete quests raise QuestNotClaimable and
    leave state untouched.
    """
    quest = state.quest_by_id(quest_id)
    if quest is None:
        raise QuestNotClaimable(f"NO QUEST {quest_id}")
    if quest.claimed:
        raise QuestNotClaimable("ALREADY CLAIMED")
    prog = quest_progress(state, quest)
    if prog < quest.goal:
        raise QuestNotClaimable(f"{prog}/{quest.goal}")

    coins = round_half_up(quest.reward.coins * quest_reward_boost(state.buildings))
    state.coins += coins
    # seed rewards go to potato seeds
    state.seeds[DEFAULT_CROP] = state.seeds.get(DEFAULT_CROP, 0) + int(quest.reward.seeds)
    quest.claimed = True
    logger.info("quest %s claimed: +%s coins, +%s seeds", quest.id, coins, quest.reward.seeds)
    return coins
