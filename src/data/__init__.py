"""Season snapshot loading, validation and aggregation."""

from .aggregation import GameResult, aggregates_from_game_results, aggregates_from_standings
from .loader import DataLoader, SeasonSnapshot

__all__ = [
    "GameResult",
    "aggregates_from_game_results",
    "aggregates_from_standings",
    "DataLoader",
    "SeasonSnapshot",
]
