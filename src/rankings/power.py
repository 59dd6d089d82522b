"""Power score aggregation and weekly power rankings."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import pandas as pd

from ..config import DEFAULT_CONFIG, EngineConfig, PowerWeights
from ..models.ranking import PercentileMetrics, PowerRanking
from ..models.team import TeamSeasonAggregate
from .metrics import calculate_percentiles, calculate_raw_metrics, round_half_away_from_zero

logger = logging.getLogger(__name__)


def calculate_power_score(percentiles: PercentileMetrics, weights: PowerWeights = DEFAULT_CONFIG.weights) -> float:
    """
    Weighted composite of the five percentiles, rounded to one decimal.

    Args:
        percentiles: Team percentile breakdown
        weights: Component weights (sum to 1.0)

    Returns:
        Power score on a 0-100 scale
    """
    score = (
        weights.efficiency * percentiles.EFF
        + weights.win_quality * percentiles.WQ
        + weights.margin_of_victory * percentiles.MOV
        + weights.turnover_differential * percentiles.TOD
        + weights.strength_of_schedule * percentiles.SOS
    )
    return round_half_away_from_zero(score, 1)


class PowerRankingEngine:
    """Ranks every team in the league by composite power score."""

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine constants (defaults to the league-standard weights)
        """
        self.config = config or DEFAULT_CONFIG

    def rank(self, teams: Sequence[TeamSeasonAggregate]) -> List[PowerRanking]:
        """
        Calculate power rankings for all teams.

        Args:
            teams: Season aggregates, one per team

        Returns:
            Rankings sorted best first with ranks 1..n. Teams with equal
            rounded scores keep their input order.
        """
        logger.info("Power rankings: processing %d teams", len(teams))
        if not teams:
            return []

        teams_by_id = {t.team_id: t for t in teams}
        raws = [calculate_raw_metrics(t, teams_by_id, self.config.metrics) for t in teams]
        logger.debug("Sample raw metrics for team %s: %s", teams[0].team_id, raws[0])

        percentiles = calculate_percentiles(raws, self.config.metrics)

        rankings = [
            PowerRanking(
                team_id=team.team_id,
                rank=0,
                power_score=calculate_power_score(pct, self.config.weights),
                breakdown=pct,
                raw_metrics=raw,
            )
            for team, raw, pct in zip(teams, raws, percentiles)
        ]

        # list.sort is stable, so equal scores stay in input order
        rankings.sort(key=lambda r: r.power_score, reverse=True)
        for position, ranking in enumerate(rankings):
            ranking.rank = position + 1

        return rankings


def calculate_power_rankings(
    teams: Sequence[TeamSeasonAggregate],
    config: Optional[EngineConfig] = None,
) -> List[PowerRanking]:
    """Calculate power rankings for all teams with the given (or default) config."""
    return PowerRankingEngine(config).rank(teams)


def rankings_to_frame(rankings: Sequence[PowerRanking]) -> pd.DataFrame:
    """
    Flatten rankings into a DataFrame, one row per team.

    Columns: team_id, rank, power_score, the five percentiles and the five
    raw metrics, indexed by rank order.
    """
    rows = []
    for ranking in rankings:
        row = {"team_id": ranking.team_id, "rank": ranking.rank, "power_score": ranking.power_score}
        row.update(ranking.breakdown.to_dict())
        row.update(ranking.raw_metrics.to_dict())
        rows.append(row)

    columns = [
        "team_id", "rank", "power_score",
        "WQ", "EFF", "MOV", "TOD", "SOS",
        "win_pct", "net_ypp", "capped_mov", "to_diff_pg", "opp_win_pct_avg",
    ]
    return pd.DataFrame(rows, columns=columns)
