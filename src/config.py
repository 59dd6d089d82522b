"""Fixed tuning constants for the ranking and prediction engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PowerWeights:
    """Weights applied to each percentile in the composite power score."""

    efficiency: float = 0.30
    win_quality: float = 0.25
    margin_of_victory: float = 0.15
    turnover_differential: float = 0.15
    strength_of_schedule: float = 0.15

    def __post_init__(self):
        total = (
            self.efficiency
            + self.win_quality
            + self.margin_of_victory
            + self.turnover_differential
            + self.strength_of_schedule
        )
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Power weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class MetricConstants:
    """Bounds and defaults used while deriving raw team metrics."""

    mov_cap: float = 21.0
    neutral_schedule: float = 0.5
    neutral_percentile: float = 50.0


@dataclass(frozen=True)
class PredictionConstants:
    """Expected-score and confidence constants for the game predictor."""

    home_field_advantage: float = 2.5
    default_points_per_game: float = 24.0
    defense_adjustment_scale: float = 4.0
    power_influence_scale: float = 3.0
    confidence_base: float = 50.0
    confidence_power_weight: float = 0.5
    confidence_score_weight: float = 2.0
    min_confidence: float = 55.0
    max_confidence: float = 95.0
    significant_power_gap: float = 10.0
    moderate_power_gap: float = 5.0


@dataclass(frozen=True)
class GOTWConstants:
    """Component caps and trigger thresholds for Game of the Week scoring."""

    power_normalizer: float = 140.0
    power_points: float = 40.0
    elite_combined_power: float = 120.0
    record_points: float = 20.0
    premium_win_pct: float = 0.75
    balance_points: float = 20.0
    competitive_rank_gap: int = 5
    top_tier_rank: int = 10
    top_tier_bonus: float = 10.0
    undefeated_bonus: float = 10.0


@dataclass(frozen=True)
class EngineConfig:
    """All engine constants in one immutable bundle."""

    weights: PowerWeights = field(default_factory=PowerWeights)
    metrics: MetricConstants = field(default_factory=MetricConstants)
    prediction: PredictionConstants = field(default_factory=PredictionConstants)
    gotw: GOTWConstants = field(default_factory=GOTWConstants)


DEFAULT_CONFIG = EngineConfig()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line runs."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
