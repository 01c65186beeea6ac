"""Service that calculates player statistics from match history."""

from riftstats.algorithms.player_stats import PlayerStats, stats_from
from riftstats.core.decorators import service_error_handler
from riftstats.core.riot_api.constants import RiotRegion
from riftstats.features.matches.service import MatchService


class StatsService:
    """Aggregated statistics over a player's recent matches."""

    def __init__(self, match_service: MatchService):
        self.match_service = match_service

    @service_error_handler("StatsService")
    async def calculate_stats(
        self, puuid: str, region: RiotRegion, count: int
    ) -> PlayerStats:
        """
        Calculate player stats from their recent matches.

        :param puuid: Player's unique ID
        :param region: Player's region
        :param count: Number of matches to analyze
        :returns: Aggregated player statistics, all zeros with no matches
        """
        summaries = await self.match_service.get_recent_match_summaries(
            puuid, region, count
        )
        return stats_from(summaries)
