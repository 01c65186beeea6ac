"""Player statistics feature."""

from .service import StatsService

__all__ = ["StatsService"]
