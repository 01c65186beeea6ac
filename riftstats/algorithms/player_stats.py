"""
Aggregate player statistics over a list of match summaries.

Win rate and per-game averages are rounded to one decimal, KDA to two.
KDA is computed over totals: (kills + assists) / deaths, or kills + assists
when the player never died.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence

import structlog

from riftstats.features.matches.models import MatchSummary
from riftstats.utils.statistics import round_half_up, safe_divide

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PlayerStats:
    """Aggregated statistics across a player's recent matches."""

    total_games: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    avg_kills: float = 0.0
    avg_deaths: float = 0.0
    avg_assists: float = 0.0
    avg_kda: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """camelCase representation for API responses."""
        data = asdict(self)
        return {
            "totalGames": data["total_games"],
            "wins": data["wins"],
            "losses": data["losses"],
            "winRate": data["win_rate"],
            "averageKills": data["avg_kills"],
            "averageDeaths": data["avg_deaths"],
            "averageAssists": data["avg_assists"],
            "averageKda": data["avg_kda"],
        }


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    """(kills + assists) / deaths, or kills + assists when deaths is 0."""
    if deaths == 0:
        return float(kills + assists)
    return (kills + assists) / deaths


def stats_from(summaries: Sequence[MatchSummary]) -> PlayerStats:
    """
    Reduce match summaries to aggregate player statistics.

    Args:
        summaries: Match summaries for one player

    Returns:
        PlayerStats; all zeros when there are no summaries
    """
    if not summaries:
        return PlayerStats()

    total_games = len(summaries)
    wins = sum(1 for match in summaries if match.win)
    total_kills = sum(match.kills for match in summaries)
    total_deaths = sum(match.deaths for match in summaries)
    total_assists = sum(match.assists for match in summaries)

    stats = PlayerStats(
        total_games=total_games,
        wins=wins,
        losses=total_games - wins,
        win_rate=round_half_up(safe_divide(wins, total_games) * 100, 1),
        avg_kills=round_half_up(safe_divide(total_kills, total_games), 1),
        avg_deaths=round_half_up(safe_divide(total_deaths, total_games), 1),
        avg_assists=round_half_up(safe_divide(total_assists, total_games), 1),
        avg_kda=round_half_up(kda_ratio(total_kills, total_deaths, total_assists), 2),
    )

    logger.debug(
        "Player stats computed",
        total_games=stats.total_games,
        wins=stats.wins,
        win_rate=stats.win_rate,
        avg_kda=stats.avg_kda,
    )
    return stats
