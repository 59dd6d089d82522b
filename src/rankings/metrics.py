"""Raw team metrics and league-relative percentiles.

Percentiles follow a strict "share of the league below you" convention:
``count(values < v) / (n - 1) * 100``. Tied teams all receive the percentile
of the number of teams below the whole tied group. This is deliberately not
an average-rank percentile; the composite power score depends on it.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, MetricConstants
from ..models.ranking import PercentileMetrics, RawMetrics
from ..models.team import TeamSeasonAggregate


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def round_half_away_from_zero(value: float, digits: int = 0) -> float:
    """Round halves away from zero: 2.5 -> 3, -2.5 -> -3, 71.25 -> 71.3 at one digit."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _per_game(total: float, games_played: int) -> float:
    return total / games_played if games_played > 0 else 0.0


def _per_play(yards: float, plays: int) -> float:
    return yards / plays if plays > 0 else 0.0


def calculate_raw_metrics(
    team: TeamSeasonAggregate,
    teams_by_id: Mapping[int, TeamSeasonAggregate],
    constants: MetricConstants = DEFAULT_CONFIG.metrics,
) -> RawMetrics:
    """
    Derive the five raw metrics for one team.

    Args:
        team: Team season totals
        teams_by_id: Every team in the league keyed by id (for strength of schedule)
        constants: Margin cap and neutral defaults

    Returns:
        RawMetrics for the team. A team with no games gets zeros and a
        neutral .500 schedule.
    """
    win_pct = _per_game(team.wins, team.games_played)

    net_ypp = _per_play(team.total_off_yards, team.total_off_plays) - _per_play(
        team.total_def_yards_allowed, team.total_def_plays_faced
    )

    avg_mov = _per_game(team.points_for - team.points_against, team.games_played)
    capped_mov = clamp(avg_mov, -constants.mov_cap, constants.mov_cap)

    to_diff_pg = _per_game(team.takeaways - team.giveaways, team.games_played)

    opp_win_pcts = []
    for opp_id in team.opponent_team_ids:
        opponent = teams_by_id.get(opp_id)
        if opponent is not None and opponent.games_played > 0:
            opp_win_pcts.append(opponent.wins / opponent.games_played)
    opp_win_pct_avg = sum(opp_win_pcts) / len(opp_win_pcts) if opp_win_pcts else constants.neutral_schedule

    return RawMetrics(
        win_pct=win_pct,
        net_ypp=net_ypp,
        capped_mov=capped_mov,
        to_diff_pg=to_diff_pg,
        opp_win_pct_avg=opp_win_pct_avg,
    )


def calculate_percentile(
    value: float,
    all_values: Sequence[float],
    constants: MetricConstants = DEFAULT_CONFIG.metrics,
) -> float:
    """
    Percentile (0-100) of a value within a population.

    Args:
        value: Value to place
        all_values: Full population, including ``value`` itself

    Returns:
        Share of the population strictly below ``value``, scaled by ``n - 1``.
        Populations of zero or one team return the neutral 50.
    """
    n = len(all_values)
    if n <= 1:
        return constants.neutral_percentile

    ordered = np.sort(np.asarray(all_values, dtype=float))
    below = int(np.searchsorted(ordered, value, side="left"))
    return clamp(below / (n - 1) * 100.0, 0.0, 100.0)


def percentile_vector(values: Iterable[float], constants: MetricConstants = DEFAULT_CONFIG.metrics) -> np.ndarray:
    """Percentile of every element of ``values`` against the whole vector."""
    arr = np.asarray(list(values), dtype=float)
    n = arr.size
    if n <= 1:
        return np.full(n, constants.neutral_percentile)

    below = np.searchsorted(np.sort(arr), arr, side="left")
    return np.clip(below / (n - 1) * 100.0, 0.0, 100.0)


def calculate_percentiles(
    raws: Sequence[RawMetrics],
    constants: MetricConstants = DEFAULT_CONFIG.metrics,
) -> List[PercentileMetrics]:
    """
    Convert a league's raw metrics into percentiles.

    Args:
        raws: Raw metrics for every team in the league

    Returns:
        PercentileMetrics in the same order as ``raws``
    """
    wq = percentile_vector((r.win_pct for r in raws), constants)
    eff = percentile_vector((r.net_ypp for r in raws), constants)
    mov = percentile_vector((r.capped_mov for r in raws), constants)
    tod = percentile_vector((r.to_diff_pg for r in raws), constants)
    sos = percentile_vector((r.opp_win_pct_avg for r in raws), constants)

    return [
        PercentileMetrics(
            WQ=float(wq[i]),
            EFF=float(eff[i]),
            MOV=float(mov[i]),
            TOD=float(tod[i]),
            SOS=float(sos[i]),
        )
        for i in range(len(raws))
    ]
