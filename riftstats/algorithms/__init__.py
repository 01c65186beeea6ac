"""
Statistics algorithms package.

Pure functions that reduce normalized match records into derived stats.
"""

from .player_stats import PlayerStats, kda_ratio, stats_from

__all__ = ["PlayerStats", "kda_ratio", "stats_from"]
