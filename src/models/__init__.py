"""Data models for teams, games and rankings."""

from .game import GamePrediction, GOTWSelection, ScheduledGame
from .ranking import PercentileMetrics, PowerRanking, RawMetrics
from .team import Standing, TeamSeasonAggregate

__all__ = [
    "GamePrediction",
    "GOTWSelection",
    "ScheduledGame",
    "PercentileMetrics",
    "PowerRanking",
    "RawMetrics",
    "Standing",
    "TeamSeasonAggregate",
]
