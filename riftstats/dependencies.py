"""Process-scoped object graph.

One ``RiftStatsEngine`` owns the cache, the HTTP client and the services
built on them. Create it once per process, share it between requests and
close it on shutdown.
"""

from typing import Any, List, Optional

import structlog

from riftstats.algorithms.player_stats import PlayerStats
from riftstats.core.config import Settings, get_global_settings
from riftstats.core.riot_api import (
    RiotAPIClient,
    RiotAPIEndpoints,
    RiotDataManager,
    RiotRegion,
    TTLCache,
)
from riftstats.features.matches import MatchDetail, MatchService, MatchSummary
from riftstats.features.players import PlayerService
from riftstats.features.stats import StatsService

logger = structlog.get_logger(__name__)


class RiftStatsEngine:
    """Cache, client and services wired together from settings."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_client: Optional[RiotAPIClient] = None,
        cache: Optional[TTLCache] = None,
    ):
        self.settings = settings or get_global_settings()

        self.cache = cache or TTLCache(
            max_entries=self.settings.cache_max_entries,
            coalesce_misses=self.settings.cache_coalesce_misses,
        )
        self.api_client = api_client or RiotAPIClient(
            api_key=self.settings.riot_api_key,
            timeout=self.settings.request_timeout,
            max_connections=max(10, self.settings.match_fetch_concurrency),
        )
        self.data_manager = RiotDataManager(
            self.api_client,
            self.cache,
            RiotAPIEndpoints(self.settings.riot_api_host_template),
        )

        self.matches = MatchService(
            self.data_manager,
            concurrency=self.settings.match_fetch_concurrency,
            aggregation_timeout=self.settings.aggregation_timeout,
        )
        self.stats = StatsService(self.matches)
        self.players = PlayerService(self.data_manager)

    async def __aenter__(self) -> "RiftStatsEngine":
        await self.api_client.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session and drop every cached document."""
        await self.api_client.close()
        self.cache.clear()
        logger.info("Engine closed")

    # Caller-facing operations

    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: "RiotRegion | str"
    ) -> Any:
        return await self.data_manager.get_account_by_riot_id(
            game_name, tag_line, RiotRegion.parse(region)
        )

    async def get_recent_match_ids(
        self, puuid: str, region: "RiotRegion | str", count: int, start: int = 0
    ) -> Any:
        return await self.data_manager.get_recent_match_ids(
            puuid, RiotRegion.parse(region), count, start
        )

    async def get_match_detail(self, match_id: str, region: "RiotRegion | str") -> Any:
        return await self.data_manager.get_match_detail(match_id, RiotRegion.parse(region))

    async def get_recent_match_summaries(
        self, puuid: str, region: "RiotRegion | str", count: int, start: int = 0
    ) -> List[MatchSummary]:
        return await self.matches.get_recent_match_summaries(
            puuid, RiotRegion.parse(region), count, start
        )

    def extract_full_match_detail(self, raw: Any, match_id: str) -> MatchDetail:
        return self.matches.extract_full_match_detail(raw, match_id)

    async def calculate_stats(
        self, puuid: str, region: "RiotRegion | str", count: int
    ) -> PlayerStats:
        return await self.stats.calculate_stats(puuid, RiotRegion.parse(region), count)
