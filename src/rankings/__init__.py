"""Raw metrics, percentiles and composite power rankings."""

from .metrics import calculate_percentile, calculate_percentiles, calculate_raw_metrics
from .power import PowerRankingEngine, calculate_power_rankings, calculate_power_score, rankings_to_frame

__all__ = [
    "calculate_percentile",
    "calculate_percentiles",
    "calculate_raw_metrics",
    "PowerRankingEngine",
    "calculate_power_rankings",
    "calculate_power_score",
    "rankings_to_frame",
]
