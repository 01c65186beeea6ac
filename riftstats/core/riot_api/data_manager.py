"""
RiotDataManager: cache-first access to the Riot API.

Flow per query type:
1. Build the deterministic cache key
2. If cached and fresh, return the raw document
3. Otherwise fetch from the Riot API on the query's base URL family
4. Store the raw document with the query's TTL and return it

Errors are never cached. The cache holds raw documents only, so normalized
records can always be rebuilt from it.
"""

from typing import Any, Callable, Dict, Mapping, Optional

import structlog

from .cache import CacheKeys, TTLCache
from .client import RiotAPIClient
from .constants import RiotRegion
from .endpoints import QueryType, RiotAPIEndpoints

logger = structlog.get_logger(__name__)


def _account_key(region: RiotRegion, params: Mapping[str, Any]) -> str:
    return CacheKeys.account(params["game_name"], params["tag_line"], region)


def _match_ids_key(region: RiotRegion, params: Mapping[str, Any]) -> str:
    return CacheKeys.match_ids(
        params["puuid"], region, params.get("start", 0), params["count"]
    )


def _match_detail_key(region: RiotRegion, params: Mapping[str, Any]) -> str:
    return CacheKeys.match_detail(params["match_id"], region)


def _summoner_key(region: RiotRegion, params: Mapping[str, Any]) -> str:
    return CacheKeys.summoner(params["puuid"], region)


def _ranked_key(region: RiotRegion, params: Mapping[str, Any]) -> str:
    return CacheKeys.ranked(params["puuid"], region)


_KEY_BUILDERS: Dict[QueryType, Callable[[RiotRegion, Mapping[str, Any]], str]] = {
    QueryType.ACCOUNT: _account_key,
    QueryType.MATCH_IDS: _match_ids_key,
    QueryType.MATCH_DETAIL: _match_detail_key,
    QueryType.SUMMONER: _summoner_key,
    QueryType.RANKED: _ranked_key,
}

# Params that go into the query string rather than the path
_QUERY_PARAMS: Dict[QueryType, tuple] = {
    QueryType.MATCH_IDS: ("start", "count"),
}


class RiotDataManager:
    """
    Cached Riot API fetcher.

    Flow: Cache → Riot API (if miss) → Store raw document → Return
    """

    def __init__(
        self,
        api_client: RiotAPIClient,
        cache: TTLCache,
        endpoints: Optional[RiotAPIEndpoints] = None,
    ):
        """Initialize data manager with API client and an injected cache."""
        self.api_client = api_client
        self.cache = cache
        self.endpoints = endpoints or RiotAPIEndpoints()

    def cache_key(self, query_type: QueryType, region: RiotRegion, **params: Any) -> str:
        """Cache key for a logical query."""
        return _KEY_BUILDERS[query_type](region, params)

    async def fetch_cached(
        self, query_type: QueryType, region: RiotRegion, **params: Any
    ) -> Any:
        """
        Return the raw document for a query, from cache when fresh.

        Args:
            query_type: Which upstream query to run
            region: User-facing region, resolved to routing or platform
            **params: Identifiers for the query (puuid, match_id, ...)

        Returns:
            Raw decoded JSON document

        Raises:
            RiotAPIError: Any upstream failure, propagated unchanged
        """
        key = self.cache_key(query_type, region, **params)
        policy = self.endpoints.policy(query_type)
        base_url = self.endpoints.base_url_for(query_type, region)

        query_names = _QUERY_PARAMS.get(query_type, ())
        query_params = {name: params[name] for name in query_names if name in params}
        path_params = {k: v for k, v in params.items() if k not in query_names}

        async def fetch_upstream() -> Any:
            logger.debug(
                "Cache miss, fetching from Riot API",
                query_type=query_type.value,
                key=key,
            )
            return await self.api_client.fetch(
                base_url,
                policy.path,
                path_params=path_params,
                query_params=query_params or None,
            )

        return await self.cache.get_or_fetch(key, policy.ttl, fetch_upstream)

    # ===================
    # Named queries
    # ===================

    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: RiotRegion
    ) -> Any:
        """Account-v1 (routing): gameName#tagLine → account document."""
        return await self.fetch_cached(
            QueryType.ACCOUNT, region, game_name=game_name, tag_line=tag_line
        )

    async def get_recent_match_ids(
        self, puuid: str, region: RiotRegion, count: int, start: int = 0
    ) -> Any:
        """Match-v5 (routing): most recent match IDs for a player."""
        return await self.fetch_cached(
            QueryType.MATCH_IDS, region, puuid=puuid, start=start, count=count
        )

    async def get_match_detail(self, match_id: str, region: RiotRegion) -> Any:
        """Match-v5 (routing): raw match document."""
        return await self.fetch_cached(QueryType.MATCH_DETAIL, region, match_id=match_id)

    async def get_summoner_by_puuid(self, puuid: str, region: RiotRegion) -> Any:
        """Summoner-v4 (platform): profile icon, level, ..."""
        return await self.fetch_cached(QueryType.SUMMONER, region, puuid=puuid)

    async def get_ranked_entries_by_puuid(self, puuid: str, region: RiotRegion) -> Any:
        """League-v4 (platform): ranked entries for each queue."""
        return await self.fetch_cached(QueryType.RANKED, region, puuid=puuid)
