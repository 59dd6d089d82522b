"""Game outcome predictions and Game of the Week selection."""

from .game import GamePredictor, predict_week
from .gotw import GOTWSelector, select_gotw

__all__ = ["GamePredictor", "predict_week", "GOTWSelector", "select_gotw"]
