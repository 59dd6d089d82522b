"""Heuristic game outcome predictor built on power rankings."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import MissingDataError
from ..models.game import GamePrediction, ScheduledGame
from ..models.ranking import PowerRanking
from ..models.team import Standing, TeamSeasonAggregate
from ..rankings.metrics import clamp, round_half_away_from_zero
from ..rankings.power import calculate_power_rankings

logger = logging.getLogger(__name__)


def first_by_team(rows) -> Dict[int, object]:
    """Map each team_id to its first row; later rows with the same id are ignored."""
    by_team: Dict[int, object] = {}
    for row in rows:
        by_team.setdefault(row.team_id, row)
    return by_team


def defensive_ranks(
    power_rankings: Sequence[PowerRanking],
    teams: Sequence[TeamSeasonAggregate],
) -> Dict[int, int]:
    """
    Rank ranked teams by points allowed, fewest first (rank 1 = best defense).

    Teams without an aggregate sort after every team that has one.
    """
    points_allowed = {t.team_id: t.points_against for t in first_by_team(teams).values()}
    ordered = sorted(
        power_rankings,
        key=lambda r: points_allowed.get(r.team_id, float("inf")),
    )
    ranks: Dict[int, int] = {}
    for idx, r in enumerate(ordered):
        ranks.setdefault(r.team_id, idx + 1)
    return ranks


class GamePredictor:
    """Predicts scores, winner and confidence for a single matchup."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def expected_score(
        self,
        power_score: float,
        points_for: float,
        games_played: int,
        opponent_defense_rank: int,
        total_teams: int,
        is_home: bool,
    ) -> int:
        """
        Expected points for one side of a matchup.

        Args:
            power_score: Team's power score (0-100)
            points_for: Season points scored
            games_played: Games played this season
            opponent_defense_rank: Opponent's points-allowed rank (1 = best)
            total_teams: Number of teams in the league
            is_home: Whether the team is at home

        Returns:
            Rounded expected score
        """
        c = self.config.prediction
        avg_points = points_for / games_played if games_played > 0 else c.default_points_per_game

        # Weaker (higher-numbered) defenses give up more
        defense_adjustment = 0.0
        if total_teams > 0:
            defense_adjustment = (total_teams - opponent_defense_rank) / total_teams * c.defense_adjustment_scale

        power_influence = power_score / 100.0 * c.power_influence_scale

        expected = avg_points + defense_adjustment + power_influence
        if is_home:
            expected += c.home_field_advantage

        return int(round_half_away_from_zero(expected))

    def confidence(self, power_diff: float, score_diff: float) -> int:
        """Confidence (55-95) from the absolute power and expected-score gaps."""
        c = self.config.prediction
        raw = c.confidence_base + c.confidence_power_weight * power_diff + c.confidence_score_weight * score_diff
        return int(round_half_away_from_zero(clamp(raw, c.min_confidence, c.max_confidence)))

    def describe_power_gap(self, power_diff: float) -> str:
        c = self.config.prediction
        if power_diff > c.significant_power_gap:
            return f"Significant power advantage ({power_diff:.1f} points). "
        if power_diff > c.moderate_power_gap:
            return "Moderate power edge. "
        return "Close matchup. "

    def predict_game(
        self,
        game: ScheduledGame,
        home_data: TeamSeasonAggregate,
        away_data: TeamSeasonAggregate,
        power_rankings: Sequence[PowerRanking],
        all_teams: Sequence[TeamSeasonAggregate],
        total_teams: int,
        home_standing: Standing,
        away_standing: Standing,
    ) -> GamePrediction:
        """
        Predict a single game.

        Args:
            game: Scheduled game
            home_data: Home team season aggregate
            away_data: Away team season aggregate
            power_rankings: Current power rankings for the league
            all_teams: Every team's aggregate (for defensive ranks)
            total_teams: Number of teams in the league
            home_standing: Home team standing (for the rationale)
            away_standing: Away team standing (for the rationale)

        Returns:
            GamePrediction for the game

        Raises:
            MissingDataError: If either team has no power ranking
        """
        by_team = first_by_team(power_rankings)
        home_ranking = by_team.get(game.home_team_id)
        away_ranking = by_team.get(game.away_team_id)
        if home_ranking is None or away_ranking is None:
            raise MissingDataError(f"Missing power ranking for game {game.schedule_id}")

        def_ranks = defensive_ranks(power_rankings, all_teams)

        home_expected = self.expected_score(
            home_ranking.power_score,
            home_data.points_for,
            home_data.games_played,
            def_ranks[game.away_team_id],
            total_teams,
            is_home=True,
        )
        away_expected = self.expected_score(
            away_ranking.power_score,
            away_data.points_for,
            away_data.games_played,
            def_ranks[game.home_team_id],
            total_teams,
            is_home=False,
        )

        # Dead-even expected scores go to the home team
        home_wins = home_expected >= away_expected

        power_diff = abs(home_ranking.power_score - away_ranking.power_score)
        score_diff = abs(home_expected - away_expected)

        if home_wins:
            winner_rank, loser_rank = home_ranking.rank, away_ranking.rank
            winner_standing, loser_standing = home_standing, away_standing
        else:
            winner_rank, loser_rank = away_ranking.rank, home_ranking.rank
            winner_standing, loser_standing = away_standing, home_standing

        reasoning = f"#{winner_rank} vs #{loser_rank} power ranking matchup. "
        reasoning += self.describe_power_gap(power_diff)
        reasoning += "Home field advantage decisive." if home_wins else "Road team overcomes home field."
        reasoning += f" ({winner_standing.record} over {loser_standing.record})"

        return GamePrediction(
            game=game,
            predicted_winner=game.home_team_id if home_wins else game.away_team_id,
            predicted_loser=game.away_team_id if home_wins else game.home_team_id,
            predicted_winner_score=max(home_expected, away_expected),
            predicted_loser_score=min(home_expected, away_expected),
            confidence=self.confidence(power_diff, score_diff),
            reasoning=reasoning,
            home_team_power_rank=home_ranking.rank,
            away_team_power_rank=away_ranking.rank,
        )

    def predict_week(
        self,
        games: Sequence[ScheduledGame],
        teams: Sequence[TeamSeasonAggregate],
        standings: Sequence[Standing],
        power_rankings: Optional[Sequence[PowerRanking]] = None,
    ) -> List[GamePrediction]:
        """
        Predict every game in a week, skipping games with missing data.

        Args:
            games: Scheduled games for the week
            teams: Season aggregates for the whole league
            standings: League standings
            power_rankings: Precomputed rankings (computed from ``teams`` if omitted)

        Returns:
            Predictions for the games that could be predicted, in schedule order
        """
        if power_rankings is None:
            power_rankings = calculate_power_rankings(teams, self.config)

        teams_by_id = first_by_team(teams)
        standings_by_id = first_by_team(standings)

        predictions: List[GamePrediction] = []
        for game in games:
            home_data = teams_by_id.get(game.home_team_id)
            away_data = teams_by_id.get(game.away_team_id)
            home_standing = standings_by_id.get(game.home_team_id)
            away_standing = standings_by_id.get(game.away_team_id)

            if home_data is None or away_data is None or home_standing is None or away_standing is None:
                logger.warning(
                    "Skipping game %s: missing data for teams %s vs %s",
                    game.schedule_id, game.home_team_id, game.away_team_id,
                )
                continue

            try:
                predictions.append(
                    self.predict_game(
                        game,
                        home_data,
                        away_data,
                        power_rankings,
                        teams,
                        len(teams),
                        home_standing,
                        away_standing,
                    )
                )
            except MissingDataError as e:
                logger.warning("Skipping game %s: %s", game.schedule_id, e)

        logger.info("Predicted %d of %d games", len(predictions), len(games))
        return predictions


def predict_week(
    games: Sequence[ScheduledGame],
    teams: Sequence[TeamSeasonAggregate],
    standings: Sequence[Standing],
    config: Optional[EngineConfig] = None,
) -> List[GamePrediction]:
    """Predict all games for a week with the given (or default) config."""
    return GamePredictor(config).predict_week(games, teams, standings)
