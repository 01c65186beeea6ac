"""Riot API endpoint definitions and routing information."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .constants import RiotRegion


class BaseFamily(str, Enum):
    """Which base URL an endpoint lives under."""

    ROUTING = "routing"
    PLATFORM = "platform"


class QueryType(str, Enum):
    """Logical upstream queries served through the cache."""

    ACCOUNT = "account"
    MATCH_IDS = "matchIds"
    MATCH_DETAIL = "matchDetail"
    SUMMONER = "summoner"
    RANKED = "ranked"


@dataclass(frozen=True)
class EndpointPolicy:
    """Path template, base family and cache TTL for one query type."""

    path: str
    family: BaseFamily
    ttl: float


MINUTE = 60
HOUR = 60 * MINUTE

# TTLs follow how quickly each resource changes upstream
ENDPOINT_POLICIES: Dict[QueryType, EndpointPolicy] = {
    QueryType.ACCOUNT: EndpointPolicy(
        "/riot/account/v1/accounts/by-riot-id/{game_name}/{tag_line}",
        BaseFamily.ROUTING,
        24 * HOUR,
    ),
    QueryType.MATCH_IDS: EndpointPolicy(
        "/lol/match/v5/matches/by-puuid/{puuid}/ids",
        BaseFamily.ROUTING,
        30,
    ),
    QueryType.MATCH_DETAIL: EndpointPolicy(
        "/lol/match/v5/matches/{match_id}",
        BaseFamily.ROUTING,
        10 * MINUTE,
    ),
    QueryType.SUMMONER: EndpointPolicy(
        "/lol/summoner/v4/summoners/by-puuid/{puuid}",
        BaseFamily.PLATFORM,
        30 * MINUTE,
    ),
    QueryType.RANKED: EndpointPolicy(
        "/lol/league/v4/entries/by-puuid/{puuid}",
        BaseFamily.PLATFORM,
        30 * MINUTE,
    ),
}


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(self, host_template: str = "https://{}.api.riotgames.com"):
        """
        Initialize endpoint configuration.

        Args:
            host_template: Base URL template, formatted with the routing or
                platform value
        """
        self.host_template = host_template

    def get_base_url(self, region: RiotRegion) -> str:
        """Get base URL for regional (routing) endpoints."""
        return self.host_template.format(region.routing.value)

    def get_platform_url(self, region: RiotRegion) -> str:
        """Get base URL for platform endpoints."""
        return self.host_template.format(region.platform.value)

    def base_url_for(self, query_type: QueryType, region: RiotRegion) -> str:
        """Resolve the base URL family a query type must use."""
        policy = ENDPOINT_POLICIES[query_type]
        if policy.family is BaseFamily.PLATFORM:
            return self.get_platform_url(region)
        return self.get_base_url(region)

    @staticmethod
    def policy(query_type: QueryType) -> EndpointPolicy:
        return ENDPOINT_POLICIES[query_type]
