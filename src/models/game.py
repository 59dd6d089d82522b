"""Game models for weekly predictions."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ScheduledGame:
    """A single game on the league schedule."""

    schedule_id: int
    home_team_id: int
    away_team_id: int
    week_index: Optional[int] = None
    season_index: Optional[int] = None

    def __post_init__(self):
        """Validate game data."""
        if self.home_team_id == self.away_team_id:
            raise ValueError(f"Game {self.schedule_id} has the same home and away team: {self.home_team_id}")

    def to_dict(self) -> dict:
        """Convert game to dictionary."""
        return {
            "schedule_id": self.schedule_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "week_index": self.week_index,
            "season_index": self.season_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledGame":
        """Create game from dictionary."""
        return cls(
            schedule_id=data["schedule_id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            week_index=data.get("week_index"),
            season_index=data.get("season_index"),
        )


@dataclass
class GamePrediction:
    """Predicted outcome of a scheduled game."""

    game: ScheduledGame
    predicted_winner: int
    predicted_loser: int
    predicted_winner_score: int
    predicted_loser_score: int
    confidence: int
    reasoning: str
    home_team_power_rank: Optional[int] = None
    away_team_power_rank: Optional[int] = None

    @property
    def is_upset(self) -> bool:
        """Check if the road team is predicted to win."""
        return self.predicted_winner == self.game.away_team_id

    def to_dict(self) -> dict:
        """Convert prediction to dictionary."""
        return {
            "game": self.game.to_dict(),
            "predicted_winner": self.predicted_winner,
            "predicted_loser": self.predicted_loser,
            "predicted_winner_score": self.predicted_winner_score,
            "predicted_loser_score": self.predicted_loser_score,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "home_team_power_rank": self.home_team_power_rank,
            "away_team_power_rank": self.away_team_power_rank,
        }


@dataclass
class GOTWSelection:
    """The chosen Game of the Week and why it was picked."""

    game: ScheduledGame
    gotw_score: float
    prediction: GamePrediction
    reasoning: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "game": self.game.to_dict(),
            "gotw_score": self.gotw_score,
            "reasoning": list(self.reasoning),
            "prediction": self.prediction.to_dict(),
        }
