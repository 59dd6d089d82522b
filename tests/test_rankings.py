"""Unit tests for raw metrics, percentiles and power rankings."""

import numpy as np
import pytest

from src.config import PowerWeights
from src.models.ranking import PercentileMetrics
from src.models.team import TeamSeasonAggregate
from src.rankings.metrics import (
    calculate_percentile,
    calculate_raw_metrics,
    percentile_vector,
    round_half_away_from_zero,
)
from src.rankings.power import (
    calculate_power_rankings,
    calculate_power_score,
    rankings_to_frame,
)


def _team(team_id, wins=0, losses=0, ties=0, **kwargs):
    return TeamSeasonAggregate(
        team_id=team_id,
        games_played=wins + losses + ties,
        wins=wins,
        losses=losses,
        ties=ties,
        **kwargs,
    )


@pytest.fixture
def league():
    """Eight teams with varied records and stats."""
    teams = []
    for i in range(8):
        wins = 7 - i
        losses = i
        teams.append(
            _team(
                i + 1,
                wins=wins,
                losses=losses,
                points_for=20 * 7 + 5 * wins,
                points_against=20 * 7 + 5 * losses,
                total_off_yards=2200 + 40 * wins,
                total_off_plays=420,
                total_def_yards_allowed=2200 + 40 * losses,
                total_def_plays_faced=420,
                takeaways=7 + (wins % 3),
                giveaways=7 + (losses % 2),
                opponent_team_ids=tuple(t for t in range(1, 9) if t != i + 1),
            )
        )
    return teams


def test_percentile_counts_strictly_lower_values():
    assert calculate_percentile(10, [10, 20, 30, 40]) == 0.0
    assert calculate_percentile(20, [10, 20, 30, 40]) == pytest.approx(100 / 3)
    assert calculate_percentile(40, [10, 20, 30, 40]) == 100.0


def test_percentile_ties_share_count_below_group():
    values = [1, 5, 5, 9]
    assert calculate_percentile(5, values) == pytest.approx(100 / 3)
    assert calculate_percentile(9, values) == 100.0


def test_percentile_four_team_scenario():
    # Three 4-0 teams and one 3-1 team: one value sits below the unbeaten group
    win_pcts = [1.0, 1.0, 1.0, 0.75]
    assert calculate_percentile(1.0, win_pcts) == pytest.approx(100 / 3)
    assert calculate_percentile(0.75, win_pcts) == 0.0
    np.testing.assert_allclose(percentile_vector(win_pcts), [100 / 3, 100 / 3, 100 / 3, 0.0])


def test_percentile_single_or_empty_population_is_neutral():
    assert calculate_percentile(3.2, [3.2]) == 50.0
    assert calculate_percentile(3.2, []) == 50.0
    assert percentile_vector([7.0]).tolist() == [50.0]


def test_percentile_all_tied_is_zero():
    assert percentile_vector([0.5, 0.5, 0.5]).tolist() == [0.0, 0.0, 0.0]


def test_raw_metrics_zero_games_defaults():
    team = _team(1)
    raw = calculate_raw_metrics(team, {1: team})

    assert raw.win_pct == 0
    assert raw.net_ypp == 0
    assert raw.capped_mov == 0
    assert raw.to_diff_pg == 0
    assert raw.opp_win_pct_avg == 0.5


def test_raw_metrics_values():
    opp = _team(2, wins=3, losses=1)
    idle = _team(3)
    team = _team(
        1,
        wins=6,
        losses=4,
        points_for=250,
        points_against=200,
        total_off_yards=3000,
        total_off_plays=500,
        total_def_yards_allowed=2500,
        total_def_plays_faced=500,
        takeaways=15,
        giveaways=10,
        opponent_team_ids=(2, 3, 99),
    )
    raw = calculate_raw_metrics(team, {1: team, 2: opp, 3: idle})

    assert raw.win_pct == pytest.approx(0.6)
    assert raw.net_ypp == pytest.approx(1.0)
    assert raw.capped_mov == pytest.approx(5.0)
    assert raw.to_diff_pg == pytest.approx(0.5)
    # Only the opponent with games played counts
    assert raw.opp_win_pct_avg == pytest.approx(0.75)


def test_raw_metrics_zero_plays_side_counts_as_zero():
    team = _team(1, wins=1, total_off_yards=400, total_off_plays=80, total_def_yards_allowed=300)
    raw = calculate_raw_metrics(team, {1: team})
    assert raw.net_ypp == pytest.approx(5.0)


def test_margin_of_victory_is_capped():
    blowout = _team(1, wins=2, points_for=120, points_against=0)
    blown_out = _team(2, losses=2, points_for=0, points_against=120)

    assert calculate_raw_metrics(blowout, {}).capped_mov == 21
    assert calculate_raw_metrics(blown_out, {}).capped_mov == -21


def test_round_half_away_from_zero():
    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(24.5) == 25
    assert round_half_away_from_zero(71.25, 1) == 71.3
    assert round_half_away_from_zero(8.3333, 1) == 8.3


def test_power_score_weights():
    all_top = PercentileMetrics(WQ=100, EFF=100, MOV=100, TOD=100, SOS=100)
    only_eff = PercentileMetrics(WQ=0, EFF=100, MOV=0, TOD=0, SOS=0)
    only_wq = PercentileMetrics(WQ=100 / 3, EFF=0, MOV=0, TOD=0, SOS=0)

    assert calculate_power_score(all_top) == 100.0
    assert calculate_power_score(only_eff) == 30.0
    assert calculate_power_score(only_wq) == 8.3


def test_power_weights_must_sum_to_one():
    with pytest.raises(ValueError):
        PowerWeights(efficiency=0.5)


def test_rankings_are_contiguous_and_ordered(league):
    rankings = calculate_power_rankings(league)

    assert [r.rank for r in rankings] == list(range(1, len(league) + 1))
    scores = [r.power_score for r in rankings]
    assert scores == sorted(scores, reverse=True)
    assert {r.team_id for r in rankings} == {t.team_id for t in league}
    # Best record, efficiency and margin all belong to team 1
    assert rankings[0].team_id == 1


def test_rankings_bounds(league):
    for ranking in calculate_power_rankings(league):
        assert 0 <= ranking.power_score <= 100
        for value in ranking.breakdown.to_dict().values():
            assert 0 <= value <= 100
        assert -21 <= ranking.raw_metrics.capped_mov <= 21


def test_rankings_bounds_random_leagues():
    rng = np.random.default_rng(7)
    for _ in range(20):
        n = int(rng.integers(1, 33))
        teams = []
        for tid in range(n):
            wins = int(rng.integers(0, 10))
            losses = int(rng.integers(0, 10))
            teams.append(
                _team(
                    tid,
                    wins=wins,
                    losses=losses,
                    points_for=float(rng.integers(0, 600)),
                    points_against=float(rng.integers(0, 600)),
                    total_off_yards=float(rng.integers(0, 6000)),
                    total_off_plays=int(rng.integers(0, 1200)),
                    total_def_yards_allowed=float(rng.integers(0, 6000)),
                    total_def_plays_faced=int(rng.integers(0, 1200)),
                    takeaways=int(rng.integers(0, 30)),
                    giveaways=int(rng.integers(0, 30)),
                    opponent_team_ids=tuple(int(x) for x in rng.integers(0, n, size=wins + losses)),
                )
            )

        rankings = calculate_power_rankings(teams)
        assert [r.rank for r in rankings] == list(range(1, n + 1))
        for ranking in rankings:
            assert 0 <= ranking.power_score <= 100
            assert -21 <= ranking.raw_metrics.capped_mov <= 21


def test_rankings_are_idempotent(league):
    first = [r.to_dict() for r in calculate_power_rankings(league)]
    second = [r.to_dict() for r in calculate_power_rankings(league)]
    assert first == second


def test_equal_scores_keep_input_order():
    teams = [_team(tid, wins=2, losses=2, points_for=80, points_against=80) for tid in (30, 10, 20)]
    rankings = calculate_power_rankings(teams)

    assert [r.team_id for r in rankings] == [30, 10, 20]
    assert [r.rank for r in rankings] == [1, 2, 3]


def test_higher_win_pct_never_ranks_lower():
    better = _team(1, wins=3, losses=1)
    worse = _team(2, wins=1, losses=3)
    rankings = {r.team_id: r for r in calculate_power_rankings([worse, better])}

    assert rankings[1].breakdown.WQ >= rankings[2].breakdown.WQ
    assert rankings[1].power_score >= rankings[2].power_score
    assert rankings[1].rank == 1


def test_single_team_league_is_neutral():
    rankings = calculate_power_rankings([_team(1, wins=1)])
    assert rankings[0].rank == 1
    assert rankings[0].power_score == 50.0


def test_empty_league():
    assert calculate_power_rankings([]) == []


def test_rankings_to_frame(league):
    frame = rankings_to_frame(calculate_power_rankings(league))

    assert len(frame) == len(league)
    assert list(frame["rank"]) == list(range(1, 9))
    assert {"power_score", "EFF", "SOS", "net_ypp", "opp_win_pct_avg"} <= set(frame.columns)
