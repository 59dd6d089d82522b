"""Data loader for season snapshots."""

import json
import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from ..models.game import ScheduledGame
from ..models.team import Standing, TeamSeasonAggregate
from .aggregation import aggregates_from_standings, standings_from_aggregates
from .validators import validate_snapshot_payload

logger = logging.getLogger(__name__)


@dataclass
class SeasonSnapshot:
    """Everything the engine needs for one week: teams, standings and schedule."""

    teams: List[TeamSeasonAggregate]
    standings: List[Standing] = field(default_factory=list)
    schedule: List[ScheduledGame] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "teams": [t.to_dict() for t in self.teams],
            "standings": [s.to_dict() for s in self.standings],
            "schedule": [g.to_dict() for g in self.schedule],
        }


class DataLoader:
    """Loads season snapshots from JSON and CSV files."""

    @staticmethod
    def snapshot_from_dict(data: dict) -> SeasonSnapshot:
        """
        Build a snapshot from a parsed payload.

        Missing standings are derived from the team aggregates; a payload with
        standings but no team aggregates gets estimated aggregates.

        Raises:
            ValueError: If the payload fails validation
        """
        errors = validate_snapshot_payload(data)
        if errors:
            raise ValueError("Invalid season snapshot: " + "; ".join(errors))

        standings = [Standing.from_dict(s) for s in data.get("standings") or []]
        if "teams" in data:
            teams = [TeamSeasonAggregate.from_dict(t) for t in data["teams"]]
        else:
            teams = aggregates_from_standings(standings)

        if not standings:
            standings = standings_from_aggregates(teams)

        schedule = [ScheduledGame.from_dict(g) for g in data.get("schedule") or []]
        logger.info(
            "Loaded snapshot: %d teams, %d standings, %d scheduled games",
            len(teams), len(standings), len(schedule),
        )
        return SeasonSnapshot(teams=teams, standings=standings, schedule=schedule)

    @staticmethod
    def load_snapshot_from_json(file_path: str) -> SeasonSnapshot:
        """
        Load a season snapshot from a JSON file.

        Args:
            file_path: Path to JSON file with ``teams``, ``standings`` and ``schedule``

        Returns:
            SeasonSnapshot
        """
        with open(file_path, 'r') as f:
            data = json.load(f)

        return DataLoader.snapshot_from_dict(data)

    @staticmethod
    def load_standings_from_csv(file_path: str) -> List[Standing]:
        """
        Load standings from a CSV with a ``team_id`` column and optional
        ``total_wins``, ``total_losses``, ``total_ties``, ``points_for`` and
        ``points_against`` columns. Blank cells count as zero.
        """
        df = pd.read_csv(file_path)
        if "team_id" not in df.columns:
            raise ValueError(f"{file_path} is missing a 'team_id' column")

        for col in ("total_wins", "total_losses", "total_ties"):
            df[col] = df[col].fillna(0).astype(int) if col in df.columns else 0
        for col in ("points_for", "points_against"):
            df[col] = df[col].fillna(0.0).astype(float) if col in df.columns else 0.0

        return [
            Standing(
                team_id=row.team_id,
                total_wins=int(row.total_wins),
                total_losses=int(row.total_losses),
                total_ties=int(row.total_ties),
                points_for=float(row.points_for),
                points_against=float(row.points_against),
            )
            for row in df.itertuples(index=False)
        ]

    @staticmethod
    def save_report_to_json(report: dict, file_path: str) -> None:
        """
        Save a weekly report to a JSON file.

        Args:
            report: Report dictionary (see ``WeeklyReport.to_dict``)
            file_path: Output file path
        """
        with open(file_path, 'w') as f:
            json.dump(report, f, indent=2)

    @staticmethod
    def create_sample_data(output_path: str) -> None:
        """
        Create a sample eight-team snapshot for testing.

        Args:
            output_path: Path to save sample data
        """
        records = [(6, 0), (5, 1), (4, 2), (4, 2), (2, 4), (2, 4), (1, 5), (0, 6)]
        teams = []
        for team_id, (wins, losses) in enumerate(records, start=1):
            games = wins + losses
            teams.append({
                "team_id": team_id,
                "games_played": games,
                "wins": wins,
                "losses": losses,
                "ties": 0,
                "points_for": 17 * games + 4 * wins,
                "points_against": 17 * games + 4 * losses,
                "total_off_yards": 300 * games + 25 * wins,
                "total_off_plays": 62 * games,
                "total_def_yards_allowed": 300 * games + 25 * losses,
                "total_def_plays_faced": 62 * games,
                "takeaways": games + wins // 2,
                "giveaways": games + losses // 2,
                "opponent_team_ids": [t for t in range(1, 9) if t != team_id][:games],
            })

        sample_data = {
            "teams": teams,
            "schedule": [
                {"schedule_id": 101, "home_team_id": 1, "away_team_id": 2, "week_index": 6},
                {"schedule_id": 102, "home_team_id": 3, "away_team_id": 4, "week_index": 6},
                {"schedule_id": 103, "home_team_id": 5, "away_team_id": 6, "week_index": 6},
                {"schedule_id": 104, "home_team_id": 8, "away_team_id": 7, "week_index": 6},
            ],
        }

        with open(output_path, 'w') as f:
            json.dump(sample_data, f, indent=2)
