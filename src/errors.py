"""Typed failures raised by the ranking and prediction engine."""


class RankingEngineError(ValueError):
    """Base class for precondition failures in the engine."""


class MissingDataError(RankingEngineError):
    """Raised when a game references a team absent from the power rankings."""


class NoEligibleGamesError(RankingEngineError):
    """Raised when no candidate game has enough data for GOTW selection."""
