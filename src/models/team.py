"""Team models for power rankings and predictions."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class TeamSeasonAggregate:
    """Season-to-date totals for one team."""

    team_id: int
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    total_off_yards: float = 0.0
    total_off_plays: int = 0
    total_def_yards_allowed: float = 0.0
    total_def_plays_faced: int = 0
    takeaways: int = 0
    giveaways: int = 0
    opponent_team_ids: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate team totals."""
        for name in ("games_played", "wins", "losses", "ties", "total_off_plays", "total_def_plays_faced"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        # Accept any iterable of opponents but store an immutable tuple
        if not isinstance(self.opponent_team_ids, tuple):
            object.__setattr__(self, "opponent_team_ids", tuple(self.opponent_team_ids))

    def to_dict(self) -> dict:
        """Convert aggregate to dictionary."""
        return {
            "team_id": self.team_id,
            "games_played": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "total_off_yards": self.total_off_yards,
            "total_off_plays": self.total_off_plays,
            "total_def_yards_allowed": self.total_def_yards_allowed,
            "total_def_plays_faced": self.total_def_plays_faced,
            "takeaways": self.takeaways,
            "giveaways": self.giveaways,
            "opponent_team_ids": list(self.opponent_team_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TeamSeasonAggregate":
        """Create aggregate from dictionary."""
        wins = data.get("wins", 0)
        losses = data.get("losses", 0)
        ties = data.get("ties", 0)
        return cls(
            team_id=data["team_id"],
            games_played=data.get("games_played", wins + losses + ties),
            wins=wins,
            losses=losses,
            ties=ties,
            points_for=data.get("points_for", 0.0),
            points_against=data.get("points_against", 0.0),
            total_off_yards=data.get("total_off_yards", 0.0),
            total_off_plays=data.get("total_off_plays", 0),
            total_def_yards_allowed=data.get("total_def_yards_allowed", 0.0),
            total_def_plays_faced=data.get("total_def_plays_faced", 0),
            takeaways=data.get("takeaways", 0),
            giveaways=data.get("giveaways", 0),
            opponent_team_ids=tuple(data.get("opponent_team_ids", ())),
        )


@dataclass(frozen=True)
class Standing:
    """A team's row in the league standings."""

    team_id: int
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0

    @property
    def games_played(self) -> int:
        return self.total_wins + self.total_losses + self.total_ties

    @property
    def record(self) -> str:
        """Win-loss record, e.g. ``"7-2"``."""
        return f"{self.total_wins}-{self.total_losses}"

    @property
    def is_undefeated(self) -> bool:
        return self.total_losses == 0

    def to_dict(self) -> dict:
        """Convert standing to dictionary."""
        return {
            "team_id": self.team_id,
            "total_wins": self.total_wins,
            "total_losses": self.total_losses,
            "total_ties": self.total_ties,
            "points_for": self.points_for,
            "points_against": self.points_against,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Standing":
        """Create standing from dictionary."""
        return cls(
            team_id=data["team_id"],
            total_wins=data.get("total_wins") or 0,
            total_losses=data.get("total_losses") or 0,
            total_ties=data.get("total_ties") or 0,
            points_for=data.get("points_for") or 0.0,
            points_against=data.get("points_against") or 0.0,
        )
