"""Build team season aggregates from standings or completed game results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..models.team import Standing, TeamSeasonAggregate

logger = logging.getLogger(__name__)

# Estimation constants for standings-only seasons
YARDS_PER_POINT = 30
PLAYS_PER_GAME = 60
TURNOVERS_PER_GAME = 1


@dataclass
class GameResult:
    """Box-score line for one completed (or pending) game."""

    schedule_id: int
    home_team_id: int
    away_team_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_off_yards: float = 0.0
    home_off_plays: int = 0
    away_off_yards: float = 0.0
    away_off_plays: int = 0
    home_turnovers: int = 0
    away_turnovers: int = 0

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @classmethod
    def from_dict(cls, data: dict) -> "GameResult":
        return cls(
            schedule_id=data["schedule_id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            home_off_yards=data.get("home_off_yards", 0.0),
            home_off_plays=data.get("home_off_plays", 0),
            away_off_yards=data.get("away_off_yards", 0.0),
            away_off_plays=data.get("away_off_plays", 0),
            home_turnovers=data.get("home_turnovers", 0),
            away_turnovers=data.get("away_turnovers", 0),
        )


def aggregates_from_standings(standings: Sequence[Standing]) -> List[TeamSeasonAggregate]:
    """
    Estimate season aggregates when only standings are available.

    Yardage is estimated at 30 yards per point scored/allowed over 60 plays a
    game, and each team is credited with one takeaway and one giveaway per
    game. Opponent lists are empty, so every team gets a neutral schedule.
    """
    aggregates = []
    for standing in standings:
        games_played = standing.games_played
        aggregates.append(
            TeamSeasonAggregate(
                team_id=standing.team_id,
                games_played=games_played,
                wins=standing.total_wins,
                losses=standing.total_losses,
                ties=standing.total_ties,
                points_for=standing.points_for,
                points_against=standing.points_against,
                total_off_yards=standing.points_for * YARDS_PER_POINT,
                total_off_plays=games_played * PLAYS_PER_GAME,
                total_def_yards_allowed=standing.points_against * YARDS_PER_POINT,
                total_def_plays_faced=games_played * PLAYS_PER_GAME,
                takeaways=games_played * TURNOVERS_PER_GAME,
                giveaways=games_played * TURNOVERS_PER_GAME,
            )
        )
    logger.info("Estimated aggregates for %d teams from standings", len(aggregates))
    return aggregates


def _team_rows(results: Sequence[GameResult]) -> pd.DataFrame:
    """One row per team per played game, from that team's point of view."""
    rows = []
    for g in results:
        if not g.is_played:
            continue
        for side, other in (("home", "away"), ("away", "home")):
            points_for = getattr(g, f"{side}_score")
            points_against = getattr(g, f"{other}_score")
            rows.append({
                "team_id": getattr(g, f"{side}_team_id"),
                "opponent_id": getattr(g, f"{other}_team_id"),
                "points_for": points_for,
                "points_against": points_against,
                "off_yards": getattr(g, f"{side}_off_yards"),
                "off_plays": getattr(g, f"{side}_off_plays"),
                "def_yards": getattr(g, f"{other}_off_yards"),
                "def_plays": getattr(g, f"{other}_off_plays"),
                "takeaways": getattr(g, f"{other}_turnovers"),
                "giveaways": getattr(g, f"{side}_turnovers"),
                "win": int(points_for > points_against),
                "loss": int(points_for < points_against),
                "tie": int(points_for == points_against),
            })
    return pd.DataFrame(rows)


def aggregates_from_game_results(
    results: Sequence[GameResult],
    team_ids: Optional[Sequence[int]] = None,
) -> List[TeamSeasonAggregate]:
    """
    Fold completed game results into season aggregates.

    Args:
        results: Game results; games without both scores are ignored
        team_ids: Teams to include even if they have not played yet

    Returns:
        Aggregates in order of first appearance (``team_ids`` first)
    """
    df = _team_rows(results)
    order: List[int] = list(team_ids or [])

    totals: Dict[int, dict] = {}
    opponents: Dict[int, List[int]] = {}
    if not df.empty:
        summed = df.groupby("team_id", sort=False)[
            ["points_for", "points_against", "off_yards", "off_plays", "def_yards",
             "def_plays", "takeaways", "giveaways", "win", "loss", "tie"]
        ].sum()
        team_index = summed.index.tolist()
        totals = dict(zip(team_index, summed.to_dict(orient="records")))
        grouped = df.groupby("team_id", sort=False)["opponent_id"]
        opponents = {tid: series.tolist() for tid, series in grouped}
        order.extend(tid for tid in team_index if tid not in order)

    skipped = sum(1 for g in results if not g.is_played)
    if skipped:
        logger.debug("Ignored %d unplayed games", skipped)

    aggregates = []
    for tid in order:
        t = totals.get(tid)
        if t is None:
            aggregates.append(TeamSeasonAggregate(team_id=tid))
            continue
        wins, losses, ties = int(t["win"]), int(t["loss"]), int(t["tie"])
        aggregates.append(
            TeamSeasonAggregate(
                team_id=tid,
                games_played=wins + losses + ties,
                wins=wins,
                losses=losses,
                ties=ties,
                points_for=float(t["points_for"]),
                points_against=float(t["points_against"]),
                total_off_yards=float(t["off_yards"]),
                total_off_plays=int(t["off_plays"]),
                total_def_yards_allowed=float(t["def_yards"]),
                total_def_plays_faced=int(t["def_plays"]),
                takeaways=int(t["takeaways"]),
                giveaways=int(t["giveaways"]),
                opponent_team_ids=tuple(opponents.get(tid, [])),
            )
        )
    return aggregates


def standings_from_aggregates(teams: Sequence[TeamSeasonAggregate]) -> List[Standing]:
    """Derive standings rows from season aggregates."""
    return [
        Standing(
            team_id=t.team_id,
            total_wins=t.wins,
            total_losses=t.losses,
            total_ties=t.ties,
            points_for=t.points_for,
            points_against=t.points_against,
        )
        for t in teams
    ]
