"""
Game systems package.
"""
from .economy import EconomySystem, building_cost, upgrade_cost
from .calendar import begin_day, commit_rollover
from .migration import migrate
