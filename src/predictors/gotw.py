"""Game of the Week selection."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import NoEligibleGamesError
from ..models.game import GamePrediction, GOTWSelection, ScheduledGame
from ..models.ranking import PowerRanking
from ..models.team import Standing
from .game import first_by_team

logger = logging.getLogger(__name__)


class GOTWSelector:
    """Scores candidate games and picks the most compelling one."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def score_game(
        self,
        home_ranking: PowerRanking,
        away_ranking: PowerRanking,
        home_standing: Standing,
        away_standing: Standing,
    ) -> Tuple[float, List[str]]:
        """
        Score one matchup.

        Returns:
            Tuple of (gotw_score, reasons)
        """
        c = self.config.gotw
        score = 0.0
        reasons: List[str] = []

        # Combined power
        combined_power = home_ranking.power_score + away_ranking.power_score
        score += combined_power / c.power_normalizer * c.power_points
        if combined_power > c.elite_combined_power:
            reasons.append(f"Elite matchup: Combined power ranking of {combined_power:.1f}")

        # Record quality
        total_wins = home_standing.total_wins + away_standing.total_wins
        total_games = (
            home_standing.total_wins + home_standing.total_losses
            + away_standing.total_wins + away_standing.total_losses
        )
        combined_win_pct = total_wins / total_games if total_games > 0 else 0.0
        score += combined_win_pct * c.record_points
        if combined_win_pct > c.premium_win_pct:
            reasons.append("Premium records: Both teams winning at elite rates")

        # Competitive balance
        rank_diff = abs(home_ranking.rank - away_ranking.rank)
        score += max(0.0, c.balance_points - rank_diff)
        if rank_diff <= c.competitive_rank_gap:
            reasons.append(f"Highly competitive: Only {rank_diff} spots separate these teams")

        if home_ranking.rank <= c.top_tier_rank and away_ranking.rank <= c.top_tier_rank:
            score += c.top_tier_bonus
            reasons.append("Top-10 showdown: Both teams ranked in elite tier")

        if home_standing.is_undefeated or away_standing.is_undefeated:
            score += c.undefeated_bonus
            if home_standing.is_undefeated and away_standing.is_undefeated:
                reasons.append("Battle of unbeatens: Both teams undefeated")
            else:
                reasons.append("Undefeated team on the line")

        return score, reasons

    def score_candidates(
        self,
        games: Sequence[ScheduledGame],
        predictions: Sequence[GamePrediction],
        power_rankings: Sequence[PowerRanking],
        standings: Sequence[Standing],
    ) -> List[GOTWSelection]:
        """Score every candidate game with complete data, in schedule order."""
        predictions_by_game = {p.game.schedule_id: p for p in predictions}
        rankings_by_team = first_by_team(power_rankings)
        standings_by_team = first_by_team(standings)

        candidates: List[GOTWSelection] = []
        for game in games:
            prediction = predictions_by_game.get(game.schedule_id)
            home_ranking = rankings_by_team.get(game.home_team_id)
            away_ranking = rankings_by_team.get(game.away_team_id)
            home_standing = standings_by_team.get(game.home_team_id)
            away_standing = standings_by_team.get(game.away_team_id)

            if any(x is None for x in (prediction, home_ranking, away_ranking, home_standing, away_standing)):
                logger.warning("Skipping GOTW consideration for game %s: missing data", game.schedule_id)
                continue

            score, reasons = self.score_game(home_ranking, away_ranking, home_standing, away_standing)
            candidates.append(GOTWSelection(game=game, gotw_score=score, prediction=prediction, reasoning=reasons))

        return candidates

    def select(
        self,
        games: Sequence[ScheduledGame],
        predictions: Sequence[GamePrediction],
        power_rankings: Sequence[PowerRanking],
        standings: Sequence[Standing],
    ) -> GOTWSelection:
        """
        Pick the Game of the Week.

        Args:
            games: Candidate games
            predictions: Precomputed predictions (matched by schedule id)
            power_rankings: Current power rankings
            standings: League standings

        Returns:
            The highest-scoring game; the earliest candidate wins a tie

        Raises:
            NoEligibleGamesError: If no candidate had complete data
        """
        candidates = self.score_candidates(games, predictions, power_rankings, standings)
        if not candidates:
            raise NoEligibleGamesError("No valid games found for GOTW selection")

        best = candidates[0]
        for candidate in candidates[1:]:
            if candidate.gotw_score > best.gotw_score:
                best = candidate

        logger.info("Game of the Week: game %s (score %.1f)", best.game.schedule_id, best.gotw_score)
        return best


def select_gotw(
    games: Sequence[ScheduledGame],
    predictions: Sequence[GamePrediction],
    power_rankings: Sequence[PowerRanking],
    standings: Sequence[Standing],
    config: Optional[EngineConfig] = None,
) -> GOTWSelection:
    """Select the Game of the Week with the given (or default) config."""
    return GOTWSelector(config).select(games, predictions, power_rankings, standings)
