"""End-to-end weekly pipeline."""

from .weekly import WeeklyPipeline, WeeklyReport

__all__ = ["WeeklyPipeline", "WeeklyReport"]
