"""
Daily quest entity.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from game.content import Reward


@dataclass
class Quest:
    """A per-day goal tracked against one progress counter; claimable once."""

    id: str
    name: str
    description: str
    progress_key: str
    goal: int
    reward: Reward
    claimed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "progress_key": self.progress_key,
            "goal": int(self.goal),
            "reward": {"coins": int(self.reward.coins), "seeds": int(self.reward.seeds)},
            "claimed": bool(self.claimed),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Quest":
        reward = d.get("reward") or {}
        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or d["id"]),
            description=str(d.get("description") or ""),
            progress_key=str(d["progress_key"]),
            goal=int(d["goal"]),
            reward=Reward(coins=int(reward.get("coins") or 0), seeds=int(reward.get("seeds") or 0)),
            claimed=bool(d.get("claimed", False)),
        )
