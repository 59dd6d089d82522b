"""One-call weekly run: power rankings, game predictions and Game of the Week."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, EngineConfig
from ..data.loader import SeasonSnapshot
from ..errors import NoEligibleGamesError
from ..models.game import GamePrediction, GOTWSelection, ScheduledGame
from ..models.ranking import PowerRanking
from ..models.team import Standing, TeamSeasonAggregate
from ..predictors.game import GamePredictor
from ..predictors.gotw import GOTWSelector
from ..rankings.power import PowerRankingEngine

logger = logging.getLogger(__name__)


@dataclass
class WeeklyReport:
    """Everything produced for one week."""

    power_rankings: List[PowerRanking]
    predictions: List[GamePrediction] = field(default_factory=list)
    game_of_the_week: Optional[GOTWSelection] = None
    skipped_games: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "power_rankings": [r.to_dict() for r in self.power_rankings],
            "predictions": [p.to_dict() for p in self.predictions],
            "game_of_the_week": self.game_of_the_week.to_dict() if self.game_of_the_week else None,
            "skipped_games": list(self.skipped_games),
        }


class WeeklyPipeline:
    """Runs the ranking, prediction and GOTW stages over one season snapshot."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.ranking_engine = PowerRankingEngine(self.config)
        self.predictor = GamePredictor(self.config)
        self.gotw_selector = GOTWSelector(self.config)

    def run(
        self,
        teams: Sequence[TeamSeasonAggregate],
        standings: Sequence[Standing],
        games: Sequence[ScheduledGame],
        select_gotw: bool = True,
    ) -> WeeklyReport:
        """
        Run every stage for a week.

        Games that cannot be predicted are listed in ``skipped_games``. When
        no game qualifies for Game of the Week the report carries ``None``.
        """
        rankings = self.ranking_engine.rank(teams)
        predictions = self.predictor.predict_week(games, teams, standings, power_rankings=rankings)

        predicted_ids = {p.game.schedule_id for p in predictions}
        skipped = [g.schedule_id for g in games if g.schedule_id not in predicted_ids]

        gotw = None
        if select_gotw and games:
            try:
                gotw = self.gotw_selector.select(games, predictions, rankings, standings)
            except NoEligibleGamesError as e:
                logger.warning("No Game of the Week this week: %s", e)

        return WeeklyReport(
            power_rankings=rankings,
            predictions=predictions,
            game_of_the_week=gotw,
            skipped_games=skipped,
        )

    def run_snapshot(self, snapshot: SeasonSnapshot, select_gotw: bool = True) -> WeeklyReport:
        """Run every stage over a loaded snapshot."""
        return self.run(snapshot.teams, snapshot.standings, snapshot.schedule, select_gotw=select_gotw)
