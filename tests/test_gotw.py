"""Unit tests for Game of the Week selection."""

import pytest

from src.errors import NoEligibleGamesError
from src.models.game import GamePrediction, ScheduledGame
from src.models.ranking import PercentileMetrics, PowerRanking, RawMetrics
from src.models.team import Standing
from src.predictors.gotw import GOTWSelector, select_gotw


def _ranking(team_id, rank, power_score):
    return PowerRanking(
        team_id=team_id,
        rank=rank,
        power_score=power_score,
        breakdown=PercentileMetrics(WQ=0, EFF=0, MOV=0, TOD=0, SOS=0),
        raw_metrics=RawMetrics(win_pct=0, net_ypp=0, capped_mov=0, to_diff_pg=0, opp_win_pct_avg=0.5),
    )


def _prediction(game):
    return GamePrediction(
        game=game,
        predicted_winner=game.home_team_id,
        predicted_loser=game.away_team_id,
        predicted_winner_score=24,
        predicted_loser_score=21,
        confidence=60,
        reasoning="",
    )


@pytest.fixture
def three_games():
    """Three games between equally rated teams; only game 2 pairs two unbeatens."""
    games = [
        ScheduledGame(schedule_id=1, home_team_id=1, away_team_id=2),
        ScheduledGame(schedule_id=2, home_team_id=3, away_team_id=4),
        ScheduledGame(schedule_id=3, home_team_id=5, away_team_id=6),
    ]
    rankings = [_ranking(tid, tid, 50.0) for tid in range(1, 7)]
    standings = [
        Standing(team_id=1, total_wins=0, total_losses=1),
        Standing(team_id=2, total_wins=0, total_losses=1),
        Standing(team_id=3, total_wins=0, total_losses=0),
        Standing(team_id=4, total_wins=0, total_losses=0),
        Standing(team_id=5, total_wins=0, total_losses=1),
        Standing(team_id=6, total_wins=0, total_losses=1),
    ]
    predictions = [_prediction(g) for g in games]
    return games, predictions, rankings, standings


def test_score_game_components():
    selector = GOTWSelector()
    score, reasons = selector.score_game(
        _ranking(1, 1, 80.0),
        _ranking(2, 2, 70.0),
        Standing(team_id=1, total_wins=5, total_losses=0),
        Standing(team_id=2, total_wins=4, total_losses=1),
    )

    # 150/140*40 + 0.9*20 + (20-1) + 10 + 10
    assert score == pytest.approx(150 / 140 * 40 + 18 + 19 + 10 + 10)
    assert reasons == [
        "Elite matchup: Combined power ranking of 150.0",
        "Premium records: Both teams winning at elite rates",
        "Highly competitive: Only 1 spots separate these teams",
        "Top-10 showdown: Both teams ranked in elite tier",
        "Undefeated team on the line",
    ]


def test_score_game_without_triggers():
    score, reasons = GOTWSelector().score_game(
        _ranking(1, 5, 30.0),
        _ranking(2, 30, 20.0),
        Standing(team_id=1, total_wins=2, total_losses=3),
        Standing(team_id=2, total_wins=1, total_losses=4),
    )

    # 50/140*40 + 0.3*20 + max(0, 20-25)
    assert score == pytest.approx(50 / 140 * 40 + 6)
    assert reasons == []


def test_undefeated_bonus_decides_selection(three_games):
    games, predictions, rankings, standings = three_games
    selector = GOTWSelector()

    selection = selector.select(games, predictions, rankings, standings)
    candidates = {c.game.schedule_id: c for c in selector.score_candidates(games, predictions, rankings, standings)}

    assert selection.game.schedule_id == 2
    assert "Battle of unbeatens: Both teams undefeated" in selection.reasoning
    assert selection.gotw_score - candidates[1].gotw_score == pytest.approx(10.0)
    assert selection.prediction is predictions[1]


def test_premium_unbeatens_beat_one_loss_teams():
    games = [
        ScheduledGame(schedule_id=1, home_team_id=1, away_team_id=2),
        ScheduledGame(schedule_id=2, home_team_id=3, away_team_id=4),
        ScheduledGame(schedule_id=3, home_team_id=5, away_team_id=6),
    ]
    rankings = [_ranking(tid, tid, 50.0) for tid in range(1, 7)]
    standings = [
        Standing(team_id=1, total_wins=3, total_losses=1),
        Standing(team_id=2, total_wins=3, total_losses=1),
        Standing(team_id=3, total_wins=3, total_losses=0, total_ties=1),
        Standing(team_id=4, total_wins=3, total_losses=0, total_ties=1),
        Standing(team_id=5, total_wins=3, total_losses=1),
        Standing(team_id=6, total_wins=3, total_losses=1),
    ]

    selection = select_gotw(games, [_prediction(g) for g in games], rankings, standings)

    assert selection.game.schedule_id == 2
    assert selection.gotw_score == pytest.approx(100 / 140 * 40 + 20 + 19 + 10 + 10)


def test_single_undefeated_team_reason(three_games):
    games, predictions, rankings, standings = three_games
    standings = list(standings)
    standings[0] = Standing(team_id=1, total_wins=1, total_losses=0)

    candidates = GOTWSelector().score_candidates(games, predictions, rankings, standings)

    assert "Undefeated team on the line" in candidates[0].reasoning


def test_games_missing_data_are_skipped(three_games):
    games, predictions, rankings, standings = three_games
    # Game 2 has no prediction, game 3 is missing a standing
    selection = select_gotw(
        games,
        [predictions[0], predictions[2]],
        rankings,
        [s for s in standings if s.team_id != 6],
    )

    assert selection.game.schedule_id == 1


def test_no_eligible_games_raises(three_games):
    games, _, rankings, standings = three_games
    with pytest.raises(NoEligibleGamesError):
        select_gotw(games, [], rankings, standings)


def test_no_games_raises():
    with pytest.raises(NoEligibleGamesError):
        select_gotw([], [], [], [])


def test_equal_scores_pick_earliest_game(three_games):
    games, predictions, rankings, standings = three_games
    # Drop the unbeaten matchup so games 1 and 3 tie
    selection = select_gotw(
        [games[2], games[0]],
        predictions,
        rankings,
        standings,
    )

    assert selection.game.schedule_id == 3
