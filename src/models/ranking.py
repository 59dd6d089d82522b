"""Power ranking models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawMetrics:
    """Per-team metrics derived from season totals."""

    win_pct: float
    net_ypp: float
    capped_mov: float
    to_diff_pg: float
    opp_win_pct_avg: float

    def to_dict(self) -> dict:
        return {
            "win_pct": self.win_pct,
            "net_ypp": self.net_ypp,
            "capped_mov": self.capped_mov,
            "to_diff_pg": self.to_diff_pg,
            "opp_win_pct_avg": self.opp_win_pct_avg,
        }


@dataclass(frozen=True)
class PercentileMetrics:
    """Percentile (0-100) of each raw metric within the league.

    Attributes:
        WQ: Win quality (win percentage)
        EFF: Efficiency (net yards per play)
        MOV: Capped margin of victory per game
        TOD: Turnover differential per game
        SOS: Strength of schedule (opponent win percentage)
    """

    WQ: float
    EFF: float
    MOV: float
    TOD: float
    SOS: float

    def to_dict(self) -> dict:
        return {"WQ": self.WQ, "EFF": self.EFF, "MOV": self.MOV, "TOD": self.TOD, "SOS": self.SOS}


@dataclass
class PowerRanking:
    """A team's place in the weekly power rankings."""

    team_id: int
    rank: int
    power_score: float
    breakdown: PercentileMetrics
    raw_metrics: RawMetrics

    def to_dict(self) -> dict:
        """Convert ranking to dictionary."""
        return {
            "team_id": self.team_id,
            "rank": self.rank,
            "power_score": self.power_score,
            "breakdown": self.breakdown.to_dict(),
            "raw_metrics": self.raw_metrics.to_dict(),
        }
