"""
Game entities package.
"""
from .plot import Plot, PlotState
from .quest import Quest
