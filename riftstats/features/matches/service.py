"""Match service: fan-out/join over match details.

A player's recent match IDs are fetched once, then every match detail is
fetched and normalized concurrently. The number of in-flight detail fetches
is bounded by a semaphore owned by the service, so the bound holds across all
requests served by the same instance.
"""

import asyncio
from typing import Any, List, Optional

import structlog

from riftstats.core.decorators import service_error_handler
from riftstats.core.riot_api.constants import RiotRegion
from riftstats.core.riot_api.data_manager import RiotDataManager
from riftstats.core.riot_api.errors import MatchFetchError, TransportError
from riftstats.core.validation import require_list

from .models import MatchDetail, MatchSummary
from .transformers import MatchNormalizer

logger = structlog.get_logger(__name__)

DEFAULT_CONCURRENCY = 6


class MatchService:
    """Recent match summaries and full match details for a player."""

    def __init__(
        self,
        data_manager: RiotDataManager,
        concurrency: int = DEFAULT_CONCURRENCY,
        aggregation_timeout: Optional[float] = None,
    ):
        """
        Initialize match service.

        :param data_manager: Cached Riot API fetcher
        :param concurrency: Maximum number of match details fetched at once
        :param aggregation_timeout: Overall timeout for one aggregation, in seconds
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.data_manager = data_manager
        self.concurrency = concurrency
        self.aggregation_timeout = aggregation_timeout
        self._fetch_slots = asyncio.Semaphore(concurrency)

    async def get_recent_match_ids(
        self, puuid: str, region: RiotRegion, count: int, start: int = 0
    ) -> List[str]:
        """Parse the cached match-ID list into at most ``count`` IDs."""
        raw_ids = await self.data_manager.get_recent_match_ids(
            puuid, region, max(count, 1), start
        )
        match_ids = [str(match_id) for match_id in require_list(raw_ids, "match ids")]
        return match_ids[:count]

    @service_error_handler("MatchService")
    async def get_recent_match_summaries(
        self, puuid: str, region: RiotRegion, count: int, start: int = 0
    ) -> List[MatchSummary]:
        """
        Fetch and summarize a player's most recent matches.

        :param puuid: Player PUUID (the summary subject)
        :param region: User-facing region
        :param count: Maximum number of matches
        :param start: Offset into the player's match history
        :returns: Summaries in the same order as the upstream match-ID list
        :raises MatchFetchError: If any single match fails; no partial list
        :raises TransportError: If the aggregation timeout expires
        """
        if count <= 0:
            return []

        aggregation = self._summarize(puuid, region, count, start)
        if self.aggregation_timeout is None:
            return await aggregation

        try:
            return await asyncio.wait_for(aggregation, timeout=self.aggregation_timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Match aggregation timed out after {self.aggregation_timeout}s"
            ) from e

    async def _summarize(
        self, puuid: str, region: RiotRegion, count: int, start: int
    ) -> List[MatchSummary]:
        match_ids = await self.get_recent_match_ids(puuid, region, count, start)

        logger.info(
            "Fetching match summaries",
            puuid=puuid,
            region=region.name,
            matches=len(match_ids),
            concurrency=self.concurrency,
        )

        tasks = [
            asyncio.ensure_future(self._summary_task(match_id, puuid, region))
            for match_id in match_ids
        ]
        try:
            # gather preserves input order regardless of completion order
            summaries = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        logger.info("Match summaries ready", puuid=puuid, matches=len(summaries))
        return list(summaries)

    async def _summary_task(
        self, match_id: str, puuid: str, region: RiotRegion
    ) -> MatchSummary:
        async with self._fetch_slots:
            try:
                raw = await self.data_manager.get_match_detail(match_id, region)
                return MatchNormalizer.summary_for(raw, puuid, match_id)
            except Exception as e:
                logger.warning(
                    "Match summary failed",
                    match_id=match_id,
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                )
                raise MatchFetchError(match_id, e) from e

    @staticmethod
    def extract_full_match_detail(raw: Any, match_id: str) -> MatchDetail:
        """Normalize an already-fetched raw match document."""
        return MatchNormalizer.detail_from(raw, match_id)

    @service_error_handler("MatchService")
    async def get_full_match_detail(
        self, match_id: str, region: RiotRegion
    ) -> MatchDetail:
        """Fetch (possibly from cache) and normalize one match."""
        raw = await self.data_manager.get_match_detail(match_id, region)
        return self.extract_full_match_detail(raw, match_id)
